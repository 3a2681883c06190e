"""
metacatalog CLI tests

Each test runs against its own SQLite file under tmp_path.
"""

import json

import pytest
from typer.testing import CliRunner

from metacatalog.cli import app

runner = CliRunner()


@pytest.fixture
def cli(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    base = ["--database-url", f"sqlite:///{tmp_path / 'cli.db'}", "--table", "cli_md"]

    def invoke(*args):
        return runner.invoke(app, [*base, *args])

    return invoke


def test_help() -> None:
    r = runner.invoke(app, ["--help"])
    assert r.exit_code == 0
    assert "partition" in r.output
    assert "kv" in r.output
    assert "init" in r.output


def test_init(cli) -> None:
    r = cli("init")
    assert r.exit_code == 0
    assert "table cli_md: ok" in r.stdout


def test_partition_add_assigns_next_id(cli) -> None:
    assert cli("partition", "add", "train").stdout.strip() == "1\ttrain"
    assert cli("partition", "add", "eval", "--id", "10").stdout.strip() == "10\teval"
    assert cli("partition", "add", "test").stdout.strip() == "11\ttest"
    assert cli("partition", "max").stdout.strip() == "11"


def test_partition_add_duplicate_fails(cli) -> None:
    cli("partition", "add", "train")
    r = cli("partition", "add", "train")
    assert r.exit_code == 1


def test_partition_get_and_list(cli) -> None:
    cli("partition", "add", "b", "--id", "2")
    cli("partition", "add", "a", "--id", "1")

    r = cli("partition", "get", "b")
    assert r.exit_code == 0
    assert r.stdout.strip() == "2\tb"

    r = cli("partition", "list")
    assert r.stdout.splitlines() == ["1\ta", "2\tb"]


def test_partition_get_missing(cli) -> None:
    r = cli("partition", "get", "nope")
    assert r.exit_code == 1


def test_partition_remove(cli) -> None:
    cli("partition", "add", "tmp")
    assert cli("partition", "remove", "tmp").exit_code == 0
    assert cli("partition", "get", "tmp").exit_code == 1
    assert cli("partition", "remove", "tmp").exit_code == 0


def test_partition_max_empty(cli) -> None:
    assert cli("partition", "max").stdout.strip() == "0"


def test_kv_commands(cli) -> None:
    assert cli("kv", "set", "run", "owner", "r1", "alice").exit_code == 0
    assert cli("kv", "set", "run", "owner", "r2", "bob").exit_code == 0
    assert cli("kv", "set", "run", "owner", "r1", "carol").exit_code == 1

    r = cli("kv", "get", "run", "owner", "r1")
    assert r.stdout.strip() == "alice"

    r = cli("kv", "list", "run", "owner")
    assert json.loads(r.stdout) == {"r1": "alice", "r2": "bob"}

    r = cli("kv", "list", "run")
    assert json.loads(r.stdout) == [
        {"keytype": "owner", "key": "r1", "value": "alice"},
        {"keytype": "owner", "key": "r2", "value": "bob"},
    ]

    assert cli("kv", "delete", "run", "owner", "r1").exit_code == 0
    assert cli("kv", "get", "run", "owner", "r1").exit_code == 1


def test_partition_get_shows_in_help() -> None:
    r = runner.invoke(app, ["partition", "--help"])
    assert r.exit_code == 0
    assert "Print one partition by name" in r.output
