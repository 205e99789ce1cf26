"""Workflows for searching, reading and changing secrets."""
import logging
import sys
from pathlib import Path
from typing import Optional, Protocol, Sequence

from rich.console import Console

from ..domains.aws_cli import AwsSecretsCli
from ..domains.editor import edit_file, scoped_temp_file
from ..domains.errors import NoMatchingSecretsError
from ..domains.models import Secret, SecretList
from ..domains.rendering import format_json, format_secret_value, render_table

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    """What workflows need from an interactive prompt."""

    def choose(self, title: str, labels: Sequence[str]) -> int: ...

    def ask(self, question: str) -> str: ...


def _notice(message: str) -> None:
    print(message, file=sys.stderr)


def _file_uri(path: Path) -> str:
    # The aws CLI reads parameter values prefixed with file:// from disk
    return f"file://{path}"


def search_all_secrets(client: AwsSecretsCli, query: str) -> SecretList:
    """
    Return the secrets whose name contains query, ignoring case.

    Raises:
        NoMatchingSecretsError: If nothing matches
    """
    secrets = SecretList.from_dict(client.run_json("list-secrets"))
    matches = secrets.filter_by_name(query)
    logger.debug(f"{len(matches)} of {len(secrets)} secrets match '{query}'")

    if not matches:
        raise NoMatchingSecretsError(f'There are no secrets matching "{query}"')
    return matches


def select_secret(client: AwsSecretsCli, query: str, prompter: Prompter) -> Secret:
    """
    Search for query and return a single secret.

    A single match is echoed to stderr and returned without prompting.
    Several matches are offered to the prompter in list order.
    """
    secrets = search_all_secrets(client, query)

    if len(secrets) == 1:
        _notice(secrets[0].name)
        return secrets[0]

    index = prompter.choose("Select secret", secrets.names)
    return secrets[index]


def get_secret_value(client: AwsSecretsCli, arn: str, colored: bool) -> str:
    """Fetch the value of the secret with the given ARN, pretty-printed if it is JSON."""
    output = client.run_json("get-secret-value", ["--secret-id", arn])
    secret = Secret.from_dict(output)
    return format_secret_value(secret.value, colored)


def list_secrets(client: AwsSecretsCli, console: Optional[Console] = None) -> None:
    """Print every secret as a table."""
    secrets = SecretList.from_dict(client.run_json("list-secrets"))
    render_table(secrets, console)


def search_secrets(client: AwsSecretsCli, query: str, console: Optional[Console] = None) -> None:
    """Print the secrets matching query as a table."""
    render_table(search_all_secrets(client, query), console)


def search_and_get_value(client: AwsSecretsCli, query: str, prompter: Prompter) -> None:
    """Print the value of a secret chosen by searching for query."""
    secret = select_secret(client, query, prompter)
    print(get_secret_value(client, secret.arn, colored=True))


def get_secret_arn(client: AwsSecretsCli, query: str, prompter: Prompter) -> None:
    """Print the ARN of a secret chosen by searching for query."""
    secret = select_secret(client, query, prompter)
    print(secret.arn)


def describe_secret(client: AwsSecretsCli, query: str, prompter: Prompter) -> None:
    """Print the full describe-secret response of a secret chosen by searching for query."""
    secret = select_secret(client, query, prompter)
    details = client.run_json("describe-secret", ["--secret-id", secret.arn])
    print(format_json(details, colored=True))


def create_secret(client: AwsSecretsCli, name: str, description: Optional[str], editor: str) -> bool:
    """
    Create a secret whose value is written in the user's editor.

    Returns:
        True if the secret was created, False if the user aborted by
        deleting the file
    """
    with scoped_temp_file(suffix=".json") as secret_file:
        edit_file(editor, secret_file)

        if not secret_file.exists():
            _notice("Aborting...")
            return False

        args = ["--name", name, "--secret-string", _file_uri(secret_file)]
        if description is not None:
            args.extend(["--description", description])
        client.run("create-secret", args)

    print(f"Created secret {name}")
    return True


def edit_secret(client: AwsSecretsCli, query: str, prompter: Prompter, editor: str,
                edit_description: bool = False) -> bool:
    """
    Edit the value (or the description) of a secret in the user's editor.

    Nothing is sent when the file comes back byte-for-byte unchanged.

    Returns:
        True if the secret was updated, False if nothing changed
    """
    secret = select_secret(client, query, prompter)

    if edit_description:
        original = secret.description or ""
        option, label = "--description", "Description"
    else:
        original = get_secret_value(client, secret.arn, colored=False)
        option, label = "--secret-string", "Secret"

    original_bytes = original.encode("utf-8")

    with scoped_temp_file(suffix=".json") as secret_file:
        secret_file.write_bytes(original_bytes)
        edit_file(editor, secret_file)

        if not secret_file.exists():
            _notice("Aborting...")
            return False

        if secret_file.read_bytes() == original_bytes:
            _notice(f"{label} not changed. Aborting...")
            return False

        client.run("update-secret", ["--secret-id", secret.arn, option, _file_uri(secret_file)])

    if edit_description:
        print(f"Updated secret description {secret.name}")
    else:
        print(f"Updated secret {secret.name}")
    return True


def is_confirmed(answer: str) -> bool:
    """True for "y" or any answer starting with "yes", ignoring case."""
    return answer == "y" or answer.lower().startswith("yes")


def delete_secret(client: AwsSecretsCli, query: str, prompter: Prompter) -> bool:
    """
    Delete a secret chosen by searching for query, after confirmation.

    Returns:
        True if the secret was deleted, False if the user declined
    """
    secret = select_secret(client, query, prompter)
    answer = prompter.ask(f"Are you sure you want to delete secret '{secret.name}' [y/N]? ")

    if not is_confirmed(answer):
        _notice("Aborting...")
        return False

    print(f"Deleting '{secret.name}'")
    client.run("delete-secret", ["--secret-id", secret.arn])
    return True
