import io
import json
import re

import pytest
from rich.console import Console

from awssm.secrets.domains.models import Secret
from awssm.secrets.domains.rendering import format_json, format_secret_value, render_table

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _render(secrets):
    buffer = io.StringIO()
    render_table(secrets, Console(file=buffer, width=100))
    return buffer.getvalue()


def _cells(output, name):
    row = next(line for line in output.splitlines() if name in line)
    return [cell.strip() for cell in row.split("│")[1:-1]]


class TestFormatSecretValue:
    def test_json_is_pretty_printed(self):
        rendered = format_secret_value('{"a":1}')
        assert json.loads(rendered) == {"a": 1}
        assert rendered == '{\n  "a": 1\n}'

    def test_plain_text_unchanged(self):
        assert format_secret_value("plain-text") == "plain-text"

    def test_plain_text_keeps_whitespace(self):
        assert format_secret_value("line one\n  line two\n") == "line one\n  line two\n"

    def test_missing_value(self):
        assert format_secret_value(None) == ""

    def test_colored_without_terminal_is_plain(self):
        assert format_secret_value('{"a":1}', colored=True) == '{\n  "a": 1\n}'

    def test_non_ascii_preserved(self):
        assert "café" in format_secret_value('{"name": "café"}')

    @pytest.mark.parametrize("value", ["NaN\n", " Infinity", "-Infinity  ", "1e400", '{"a": NaN}', "[1e400]"])
    def test_non_standard_numbers_returned_raw(self, value):
        assert format_secret_value(value) == value

    def test_finite_floats_pretty_printed(self):
        assert format_secret_value('{"ratio":1.5}') == '{\n  "ratio": 1.5\n}'


class TestFormatJson:
    def test_colored_on_terminal(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")
        monkeypatch.setenv("TERM", "xterm-256color")
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TTY_COMPATIBLE", raising=False)

        data = {"user": "admin", "port": 5432, "tls": True}
        rendered = format_json(data, colored=True)

        assert "\x1b[" in rendered
        assert json.loads(ANSI_ESCAPE.sub("", rendered)) == data


class TestRenderTable:
    def test_rows_and_headers(self):
        output = _render([
            Secret(arn="arn:1", name="db-pass", description="prod db"),
            Secret(arn="arn:3", name="api/token", description="third party"),
        ])
        assert _cells(output, "Name") == ["Name", "Description"]
        assert _cells(output, "db-pass") == ["db-pass", "prod db"]
        assert _cells(output, "api/token") == ["api/token", "third party"]

    def test_missing_description_is_empty(self):
        output = _render([Secret(arn="arn:2", name="DB-Replica", description=None)])
        assert _cells(output, "DB-Replica") == ["DB-Replica", ""]
        assert "None" not in output
        assert "null" not in output

    def test_blank_line_above_and_below(self):
        output = _render([Secret(arn="arn:1", name="db-pass")])
        assert output.startswith("\n")
        assert output.endswith("\n\n")

    def test_names_are_not_markup(self):
        output = _render([Secret(arn="arn:1", name="[bold]team[/bold]")])
        assert "[bold]team[/bold]" in output
