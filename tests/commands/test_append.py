"""Tests for the append CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from ipsetctl.cli import cli
from ipsetctl.infrastructure.memory import InMemoryIPSetStore

NAME = "test-ip-set"
CIDR = "192.0.2.44/32"


@pytest.mark.usefixtures("_isolated_cli")
class TestAppendCommand:
    def test_append_json(
        self, cli_runner: CliRunner, store: InMemoryIPSetStore, ip_set_id: str
    ) -> None:
        result = cli_runner.invoke(cli, ["--json", "append", ip_set_id, NAME, CIDR])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["op"] == "append"
        assert payload["data"]["addresses"] == [CIDR]
        assert store.get_ip_set(ip_set_id, NAME, "REGIONAL").addresses == (CIDR,)

    def test_append_twice_is_idempotent(
        self, cli_runner: CliRunner, store: InMemoryIPSetStore, ip_set_id: str
    ) -> None:
        cli_runner.invoke(cli, ["append", ip_set_id, NAME, CIDR])
        result = cli_runner.invoke(cli, ["append", ip_set_id, NAME, CIDR])
        assert result.exit_code == 0
        assert "OK: append" in result.stdout
        assert store.get_ip_set(ip_set_id, NAME, "REGIONAL").addresses == (CIDR,)

    def test_append_unknown_set(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "append", "missing", NAME, CIDR])
        assert result.exit_code == 1
        assert result.stdout == ""

    def test_append_human_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["append", "missing", NAME, CIDR])
        assert result.exit_code == 1
        assert "GET_FAILED" in result.output

    def test_append_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["append", "--help"])
        assert result.exit_code == 0
        assert "CIDR" in result.output

    def test_append_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["append", "--examples"])
        assert result.exit_code == 0
        assert "ipsetctl append" in result.output

    def test_missing_argument(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["append", "only-id"])
        assert result.exit_code == 2
