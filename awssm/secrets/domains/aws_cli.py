"""AWS CLI secretsmanager wrapper."""
import json
import logging
import shlex
import subprocess
from typing import Any, List, Optional, Sequence

from .errors import AwsCliError, AwsCliNotFoundError, SecretParseError

logger = logging.getLogger(__name__)

DEFAULT_CLI_PATH = "aws"


class AwsSecretsCli:
    """Runs `aws secretsmanager <subcommand>` and returns its output."""

    def __init__(self, cli_path: str = DEFAULT_CLI_PATH, profile: Optional[str] = None,
                 region: Optional[str] = None):
        self.cli_path = cli_path
        self.profile = profile
        self.region = region

    def build_command(self, subcommand: str, args: Sequence[str] = ()) -> List[str]:
        """
        Build the full argument vector for a secretsmanager subcommand.

        Args:
            subcommand: secretsmanager subcommand, e.g. "list-secrets"
            args: Additional arguments, passed through in order

        Returns:
            Argument vector suitable for subprocess
        """
        command = [self.cli_path, "secretsmanager", subcommand, *args, "--output", "json"]
        if self.profile:
            command.extend(["--profile", self.profile])
        if self.region:
            command.extend(["--region", self.region])
        return command

    def run(self, subcommand: str, args: Sequence[str] = ()) -> str:
        """
        Run a secretsmanager subcommand and return its standard output.

        Blocks until the aws process exits. There is no timeout and no retry.

        Raises:
            AwsCliNotFoundError: If the aws executable cannot be launched
            AwsCliError: If the aws executable exits with a non-zero status
            SecretParseError: If the output is not valid UTF-8
        """
        command = self.build_command(subcommand, args)
        logger.debug(f"Running: {shlex.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, check=False)
        except OSError as e:
            raise AwsCliNotFoundError(
                f"Failed to run aws command. Is the AWS CLI installed?\n{e}"
            ) from e

        try:
            stdout = result.stdout.decode("utf-8")
            stderr = result.stderr.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SecretParseError(f"Output of '{subcommand}' is not valid UTF-8: {e}") from e

        if result.returncode != 0:
            logger.debug(f"'{subcommand}' exited with status {result.returncode}")
            raise AwsCliError(f"Failed to run aws command.\n{stderr}")

        return stdout

    def run_json(self, subcommand: str, args: Sequence[str] = ()) -> Any:
        """Run a subcommand and parse its output as JSON."""
        output = self.run(subcommand, args)
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise SecretParseError(f"Failed to parse output of '{subcommand}' as JSON: {e}") from e
