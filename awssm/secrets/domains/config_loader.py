"""Configuration loader for awssm."""
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
import yaml

from .errors import ConfigError
from .preferences import get_preference

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AWSSM_CONFIG"

# Keys allowed in the optional `aws` section
AWS_KEYS = ("cli_path", "profile", "region")


def default_config_path() -> Path:
    """Default config location, resolved against the current home directory."""
    return Path.home() / ".config" / "awssm" / "config.yml"


def locate_config_file() -> Tuple[Optional[Path], str]:
    """
    Locate the config file.

    Priority order:
    1. AWSSM_CONFIG environment variable
    2. User preference (stored in ~/.config/awssm/preferences.json)
    3. Default location: ~/.config/awssm/config.yml

    Returns:
        (path, source) where path is None when no config file exists and
        source is one of "environment", "preference", "default"

    Raises:
        ConfigError: If AWSSM_CONFIG points to a missing file
    """
    # 1. Explicit override
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        config_path = Path(env_path).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"{CONFIG_ENV_VAR} points to a missing file: {config_path}")
        logger.info(f"Using config from {CONFIG_ENV_VAR}: {config_path}")
        return config_path, "environment"

    # 2. Check user preference
    config_path_pref = get_preference("config_path")
    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.exists():
            logger.info(f"Using config from preference: {config_path}")
            return config_path, "preference"
        logger.warning(f"Config path from preference doesn't exist: {config_path}")

    # 3. Check default location
    default_config = default_config_path()
    if default_config.exists():
        logger.info(f"Using default config location: {default_config}")
        return default_config, "default"

    # The config file is optional
    return None, "default"


def _validate_config(config: Any, config_path: Path) -> Dict[str, Any]:
    """Check the parsed YAML document against the supported schema."""
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping")

    aws = config.get("aws")
    if aws is not None:
        if not isinstance(aws, dict):
            raise ConfigError(
                f"'aws' section in config at {config_path} must be a mapping\n"
                f"Required format:\n"
                f"aws:\n"
                f"  cli_path: aws\n"
                f"  profile: my-profile\n"
                f"  region: eu-west-1"
            )
        for key, value in aws.items():
            if key not in AWS_KEYS:
                raise ConfigError(
                    f"Unknown key 'aws.{key}' in config at {config_path}\n"
                    f"Supported keys: {', '.join(AWS_KEYS)}"
                )
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"'aws.{key}' in config at {config_path} must be a string")

    editor = config.get("editor")
    if editor is not None and not isinstance(editor, str):
        raise ConfigError(f"'editor' in config at {config_path} must be a string")

    return config


def load_config() -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    Returns:
        Dict containing configuration with optional keys:
        - aws: dict with cli_path, profile and region
        - editor: editor command used when VISUAL and EDITOR are unset
        An empty dict when no config file exists.

    Raises:
        ConfigError: If the config file is unreadable or invalid
    """
    # Get config path dynamically each time (not cached at module level)
    config_path, _ = locate_config_file()
    if config_path is None:
        logger.debug("No config file found, using defaults")
        return {}

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    config = _validate_config(config, config_path)
    logger.info(f"Configuration loaded successfully from {config_path}")
    return config
