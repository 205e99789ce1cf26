"""Input validation for CLI arguments."""
import re
import sys

MAX_SECRET_NAME_LENGTH = 512

# AWS Secrets Manager name alphabet
_SECRET_NAME_PATTERN = re.compile(r'^[A-Za-z0-9/_+=.@-]+$')


def validate_secret_name(name: str) -> None:
    """
    Validate a new secret name against AWS Secrets Manager requirements.

    AWS allows only ASCII letters, digits and /_+=.@- up to 512 characters.

    Args:
        name: Secret name to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print("Error: Secret name cannot be empty", file=sys.stderr)
        sys.exit(2)

    if len(name) > MAX_SECRET_NAME_LENGTH:
        print(f"Error: Secret name is longer than {MAX_SECRET_NAME_LENGTH} characters", file=sys.stderr)
        sys.exit(2)

    if not _SECRET_NAME_PATTERN.match(name):
        print(f"Error: Invalid secret name '{name}'", file=sys.stderr)
        print("\nAllowed characters: letters, numbers and / _ + = . @ -", file=sys.stderr)
        print("\nExamples of valid names:", file=sys.stderr)
        print("  ✓ prod/db-password", file=sys.stderr)
        print("  ✓ api_key+staging", file=sys.stderr)
        print("\nExamples of invalid names:", file=sys.stderr)
        print("  ✗ my secret (contains space)", file=sys.stderr)
        print("  ✗ token#1 (contains #)", file=sys.stderr)
        sys.exit(2)
