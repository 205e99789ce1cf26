"""Shared fixtures: a recording aws CLI double, a scripted prompter and an isolated home."""
import json
from pathlib import Path

import pytest

from awssm.secrets.domains.aws_cli import AwsSecretsCli


SECRET_LIST = {
    "SecretList": [
        {"ARN": "arn:1", "Name": "db-pass", "Description": "prod db", "SecretString": "s3cr3t"},
        {"ARN": "arn:2", "Name": "DB-Replica", "Description": None},
        {"ARN": "arn:3", "Name": "api/token", "Description": "third party"},
    ]
}


class FakeAwsCli(AwsSecretsCli):
    """Records subcommands instead of running aws; answers from canned responses."""

    def __init__(self, responses=None, **kwargs):
        super().__init__(**kwargs)
        self.responses = responses or {}
        self.calls = []

    def run(self, subcommand, args=()):
        self.calls.append((subcommand, list(args)))
        response = self.responses.get(subcommand, "")
        if callable(response):
            response = response(list(args))
        if isinstance(response, str):
            return response
        return json.dumps(response)

    @property
    def subcommands(self):
        return [subcommand for subcommand, _ in self.calls]


class ScriptedPrompter:
    """Answers prompts from prepared lists."""

    def __init__(self, choices=(), answers=()):
        self.choices = list(choices)
        self.answers = list(answers)
        self.offered = []
        self.questions = []

    def choose(self, title, labels):
        self.offered.append(list(labels))
        choice = self.choices.pop(0)
        if isinstance(choice, Exception):
            raise choice
        return choice

    def ask(self, question):
        self.questions.append(question)
        return self.answers.pop(0)


@pytest.fixture
def secret_list():
    return json.loads(json.dumps(SECRET_LIST))


@pytest.fixture
def fake_cli(secret_list):
    return FakeAwsCli({"list-secrets": secret_list})


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to create a temporary home directory for testing."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    monkeypatch.delenv("AWSSM_CONFIG", raising=False)

    return fake_home


@pytest.fixture
def temp_config_dir(temp_home):
    """Fixture to create temporary config directory."""
    config_dir = temp_home / ".config" / "awssm"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
