"""Preferences manager for awssm.

Manages persistent user preferences stored in XDG Base Directory standard location:
~/.config/awssm/preferences.json
"""
import json
from pathlib import Path
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

def preferences_dir() -> Path:
    """XDG Base Directory standard location, resolved against the current home directory."""
    return Path.home() / ".config" / "awssm"


def preferences_file() -> Path:
    return preferences_dir() / "preferences.json"


def _load_preferences() -> Dict[str, Any]:
    """
    Load preferences from JSON file.

    Returns:
        Dictionary of preferences, or empty dict if file doesn't exist or is unreadable
    """
    path = preferences_file()
    if not path.exists():
        return {}

    try:
        with open(path, 'r') as f:
            preferences = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse preferences file {path}: {e}")
        return {}
    except OSError as e:
        logger.error(f"Failed to read preferences file {path}: {e}")
        return {}

    if not isinstance(preferences, dict):
        logger.error(f"Ignoring preferences file {path}: not a JSON object")
        return {}
    return preferences


def _save_preferences(preferences: Dict[str, Any]) -> None:
    """Save preferences to JSON file, creating its directory if needed."""
    path = preferences_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(preferences, f, indent=2)


def get_preference(key: str) -> Optional[str]:
    """Get preference value by key, or None when unset."""
    return _load_preferences().get(key)


def set_preference(key: str, value: str) -> None:
    """Set preference value."""
    preferences = _load_preferences()
    preferences[key] = value
    _save_preferences(preferences)
    logger.info(f"Preference '{key}' set to: {value}")


def clear_preference(key: str) -> None:
    """Remove preference by key. Clearing an unset key is a no-op."""
    preferences = _load_preferences()
    if key in preferences:
        del preferences[key]
        _save_preferences(preferences)
        logger.info(f"Preference '{key}' cleared")
    else:
        logger.debug(f"Preference '{key}' not found, nothing to clear")
