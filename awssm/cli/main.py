"""CLI entrypoint for awssm."""
import os
import sys
import argparse
import logging
from pathlib import Path

from awssm.secrets.domains.aws_cli import AwsSecretsCli, DEFAULT_CLI_PATH
from awssm.secrets.domains.editor import resolve_editor
from awssm.secrets.domains.errors import AwsSmError
from awssm.secrets.domains.prompts import TerminalPrompter

from .validators import validate_secret_name

VERSION = "0.1.0"

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def _load_config():
    from awssm.secrets.domains.config_loader import load_config
    return load_config()


def _build_client(args, config) -> AwsSecretsCli:
    """Create the aws CLI wrapper; command-line options override the config file."""
    aws = config.get("aws") or {}
    return AwsSecretsCli(
        cli_path=aws.get("cli_path") or DEFAULT_CLI_PATH,
        profile=getattr(args, "profile", None) or aws.get("profile"),
        region=getattr(args, "region", None) or aws.get("region"),
    )


def _editor(config) -> str:
    return resolve_editor(os.environ, config.get("editor"))


def cmd_version(args):
    """Show version information."""
    print(f"awssm {VERSION}")


def cmd_list(args):
    """List all secrets."""
    from awssm.secrets.workflows.secret_operations import list_secrets

    config = _load_config()
    list_secrets(_build_client(args, config))


def cmd_search(args):
    """List secrets whose name contains the query."""
    from awssm.secrets.workflows.secret_operations import search_secrets

    config = _load_config()
    search_secrets(_build_client(args, config), args.query)


def cmd_get_value(args):
    """Print the value of a secret."""
    from awssm.secrets.workflows.secret_operations import search_and_get_value

    config = _load_config()
    search_and_get_value(_build_client(args, config), args.query, TerminalPrompter())


def cmd_get_arn(args):
    """Print the ARN of a secret."""
    from awssm.secrets.workflows.secret_operations import get_secret_arn

    config = _load_config()
    get_secret_arn(_build_client(args, config), args.query, TerminalPrompter())


def cmd_describe(args):
    """Print the full details of a secret."""
    from awssm.secrets.workflows.secret_operations import describe_secret

    config = _load_config()
    describe_secret(_build_client(args, config), args.query, TerminalPrompter())


def cmd_create(args):
    """Create a secret, writing its value in the editor."""
    from awssm.secrets.workflows.secret_operations import create_secret

    validate_secret_name(args.name)
    config = _load_config()
    create_secret(_build_client(args, config), args.name, args.description, _editor(config))


def cmd_edit(args):
    """Edit the value or description of a secret in the editor."""
    from awssm.secrets.workflows.secret_operations import edit_secret

    config = _load_config()
    edit_secret(
        _build_client(args, config),
        args.query,
        TerminalPrompter(),
        _editor(config),
        edit_description=args.description,
    )


def cmd_delete(args):
    """Delete a secret after confirmation."""
    from awssm.secrets.workflows.secret_operations import delete_secret

    config = _load_config()
    delete_secret(_build_client(args, config), args.query, TerminalPrompter())


def cmd_config_set_path(args):
    """Set config file path preference."""
    from awssm.secrets.domains.preferences import set_preference

    config_path = Path(args.path).resolve()

    # Validate that the path exists
    if not config_path.exists():
        print(f"Error: Config file does not exist: {config_path}", file=sys.stderr)
        sys.exit(1)

    if not config_path.is_file():
        print(f"Error: Path is not a file: {config_path}", file=sys.stderr)
        sys.exit(1)

    set_preference("config_path", str(config_path))
    print(f"Config path set to: {config_path}")


def cmd_config_show(args):
    """Show current config file path."""
    from awssm.secrets.domains.config_loader import default_config_path, locate_config_file

    config_path, source = locate_config_file()
    if config_path is None:
        print(f"Config path: {default_config_path()}")
        print("Source: default (file not found, using built-in defaults)")
    else:
        print(f"Config path: {config_path}")
        print(f"Source: {source}")


def cmd_config_clear(args):
    """Clear config path preference."""
    from awssm.secrets.domains.config_loader import default_config_path
    from awssm.secrets.domains.preferences import clear_preference

    clear_preference("config_path")
    print(f"Config path preference cleared. Will use default: {default_config_path()}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``awssm`` CLI."""
    parser = argparse.ArgumentParser(
        prog="awssm",
        description="awssm - search, view and edit AWS Secrets Manager secrets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0 - Success (including when you abort an edit, create or delete)
  1 - Runtime error (aws CLI missing or failing, no matching secrets, invalid selection, etc.)
  2 - Usage error (invalid arguments, invalid secret name format, etc.)

Environment variables:
  VISUAL, EDITOR - Editor used by create and edit (default: vi)
  AWSSM_CONFIG   - Path to config file (overrides stored preference)

Configuration:
  Default location: ~/.config/awssm/config.yml
  Custom path: Set with 'awssm config set-path <path>'
  View current: Run 'awssm config show'
        """
    )
    parser.add_argument("--version", action="version", version=f"awssm {VERSION}")
    parser.add_argument("--debug", action="store_true", help="Log every aws command that is run")
    parser.add_argument("--profile", help="AWS profile passed to the aws CLI (overrides config file)")
    parser.add_argument("--region", help="AWS region passed to the aws CLI (overrides config file)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of awssm"
    )
    version_parser.set_defaults(func=cmd_version)

    # create command
    create_parser = subparsers.add_parser(
        "create",
        help="Create a secret",
        description="""
Create a new secret. Your editor opens on an empty temporary file; its
contents become the secret value. Delete the file in the editor to abort.
        """
    )
    create_parser.add_argument("name", help="Name of the new secret")
    create_parser.add_argument("--description", help="Description of the new secret")
    create_parser.set_defaults(func=cmd_create)

    # delete command
    delete_parser = subparsers.add_parser(
        "delete",
        help="Delete a secret",
        description="Delete a secret matching NAME after asking for confirmation"
    )
    delete_parser.add_argument("query", metavar="name", help="Part of the secret name")
    delete_parser.set_defaults(func=cmd_delete)

    # describe command
    describe_parser = subparsers.add_parser(
        "describe",
        help="Describe a secret",
        description="Print the full details of a secret matching NAME"
    )
    describe_parser.add_argument("query", metavar="name", help="Part of the secret name")
    describe_parser.set_defaults(func=cmd_describe)

    # edit command
    edit_parser = subparsers.add_parser(
        "edit",
        help="Edit a secret",
        description="""
Edit the value of a secret matching NAME in your editor. Nothing is sent
to AWS if the file is left unchanged.
        """
    )
    edit_parser.add_argument("query", metavar="name", help="Part of the secret name")
    edit_parser.add_argument(
        "--description",
        action="store_true",
        help="Edit the description instead of the value"
    )
    edit_parser.set_defaults(func=cmd_edit)

    # get-arn command
    get_arn_parser = subparsers.add_parser(
        "get-arn",
        help="Print the ARN of a secret",
        description="Print the ARN of a secret matching QUERY"
    )
    get_arn_parser.add_argument("query", help="Part of the secret name")
    get_arn_parser.set_defaults(func=cmd_get_arn)

    # get-value command
    get_value_parser = subparsers.add_parser(
        "get-value",
        aliases=["get", "g"],
        help="Print the value of a secret",
        description="""
Print the value of a secret matching QUERY. JSON values are pretty-printed
(and highlighted on a terminal); other values are printed unchanged.
        """
    )
    get_value_parser.add_argument("query", help="Part of the secret name")
    get_value_parser.set_defaults(func=cmd_get_value)

    # search command
    search_parser = subparsers.add_parser(
        "search",
        aliases=["s"],
        help="Search secrets by name",
        description="List secrets whose name contains QUERY (case-insensitive)"
    )
    search_parser.add_argument("query", help="Part of the secret name")
    search_parser.set_defaults(func=cmd_search)

    # list command
    list_parser = subparsers.add_parser(
        "list",
        aliases=["l"],
        help="List all secrets",
        description="List all secrets with their descriptions"
    )
    list_parser.set_defaults(func=cmd_list)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Manage awssm configuration"
    )
    config_parser.set_defaults(help_parser=config_parser)
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config set-path command
    config_set_path_parser = config_subparsers.add_parser(
        "set-path",
        help="Set config file path",
        description="""
Set the configuration file path preference.

This stores the absolute path to your config file in:
~/.config/awssm/preferences.json
        """
    )
    config_set_path_parser.add_argument("path", help="Path to config file")
    config_set_path_parser.set_defaults(func=cmd_config_set_path)

    # config show command
    config_show_parser = config_subparsers.add_parser(
        "show",
        help="Show current config path",
        description="""
Display the current configuration file path and its source.

Sources:
  - environment: Path from AWSSM_CONFIG
  - preference: Path set via 'config set-path'
  - default: Default XDG location (~/.config/awssm/config.yml)
        """
    )
    config_show_parser.set_defaults(func=cmd_config_show)

    # config clear command
    config_clear_parser = config_subparsers.add_parser(
        "clear",
        help="Clear config path preference",
        description="Remove the config path preference and fall back to the default location"
    )
    config_clear_parser.set_defaults(func=cmd_config_clear)

    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success, including user aborts
        1 - Runtime errors (aws CLI failures, no matching secrets, invalid selection, etc.)
        2 - Usage errors (invalid arguments, invalid secret name format, etc.)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # If no command provided, show help and exit with usage error code
    func = getattr(args, "func", None)
    if func is None:
        getattr(args, "help_parser", parser).print_help()
        sys.exit(2)

    try:
        func(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except AwsSmError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
