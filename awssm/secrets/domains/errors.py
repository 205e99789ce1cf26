"""
awssm exception hierarchy.

Workflows raise these; only the CLI entrypoint turns them into an exit code.
"""


class AwsSmError(Exception):
    """Root exception for all awssm errors."""


# ── External tool ─────────────────────────────────────────────────────
class AwsCliNotFoundError(AwsSmError):
    """The aws executable could not be launched."""


class AwsCliError(AwsSmError):
    """The aws executable ran but exited with a non-zero status."""


class SecretParseError(AwsSmError):
    """Output of the aws executable was not valid UTF-8 or JSON."""


# ── Search & selection ────────────────────────────────────────────────
class NoMatchingSecretsError(AwsSmError):
    """A search returned no secrets."""


class SelectionError(AwsSmError):
    """Invalid interactive selection."""


# ── Local environment ─────────────────────────────────────────────────
class EditorError(AwsSmError):
    """The text editor could not be launched."""


class ConfigError(AwsSmError):
    """Configuration error exception."""
