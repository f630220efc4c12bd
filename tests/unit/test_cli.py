"""Unit tests for liststore.cli.main: the Click application."""
from __future__ import annotations

import json
import re
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from liststore.cli.main import cli
from liststore.model.identity import Identity

_HEX = re.compile(r"[0-9a-f]{64}")
_BOARD = Identity.from_seed("board").hex()


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "store"


def _invoke(runner: CliRunner, data_dir: Path, *args: str):  # noqa: ANN202
    return runner.invoke(cli, ["--data-dir", str(data_dir), *args], env={})


def _init(runner: CliRunner, data_dir: Path) -> str:
    result = _invoke(runner, data_dir, "init", "--address", _BOARD)
    assert result.exit_code == 0, result.output
    return _BOARD


class TestInit:
    def test_creates_record_file(self, runner: CliRunner, data_dir: Path) -> None:
        result = _invoke(runner, data_dir, "init")
        assert result.exit_code == 0, result.output
        assert "Created" in result.output
        address = _HEX.search(result.output)
        assert address is not None
        assert (data_dir / f"{address.group(0)}.rec").stat().st_size == 10_000

    def test_explicit_address(self, runner: CliRunner, data_dir: Path) -> None:
        _init(runner, data_dir)
        assert (data_dir / f"{_BOARD}.rec").exists()

    def test_occupied_address(self, runner: CliRunner, data_dir: Path) -> None:
        _init(runner, data_dir)
        result = _invoke(runner, data_dir, "init", "--address", _BOARD)
        assert result.exit_code == 1
        assert "occupied" in result.output

    def test_bad_address(self, runner: CliRunner, data_dir: Path) -> None:
        result = _invoke(runner, data_dir, "init", "--address", "xyz")
        assert result.exit_code == 1
        assert "hex address" in result.output

    def test_capacity_from_config(
        self, runner: CliRunner, data_dir: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "liststore.yaml"
        config.write_text(f"capacity: 256\ndata_dir: {data_dir}\n", encoding="utf-8")
        result = runner.invoke(
            cli, ["--config", str(config), "init", "--address", _BOARD], env={}
        )
        assert result.exit_code == 0, result.output
        assert (data_dir / f"{_BOARD}.rec").stat().st_size == 256

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "liststore.yaml"
        config.write_text("capacity: 2\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(config), "init"], env={})
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_unknown_backend(self, runner: CliRunner, data_dir: Path) -> None:
        result = _invoke(runner, data_dir, "--backend", "cloud", "init")
        assert result.exit_code != 0


class TestAppendAndShow:
    def test_append_then_dump_json(
        self, runner: CliRunner, data_dir: Path, tmp_path: Path
    ) -> None:
        address = _init(runner, data_dir)
        assert _invoke(runner, data_dir, "append", address, "ipfs://abc", "--as", "alice").exit_code == 0
        assert _invoke(runner, data_dir, "append", address, "ipfs://def", "--as", "bob").exit_code == 0

        out = tmp_path / "record.json"
        result = _invoke(runner, data_dir, "dump", address, "-o", str(out))
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["total_items"] == 2
        assert data["items"] == [
            {"content": "ipfs://abc", "owner": Identity.from_seed("alice").hex()},
            {"content": "ipfs://def", "owner": Identity.from_seed("bob").hex()},
        ]

    def test_dump_yaml(self, runner: CliRunner, data_dir: Path, tmp_path: Path) -> None:
        address = _init(runner, data_dir)
        _invoke(runner, data_dir, "append", address, "ipfs://abc")
        out = tmp_path / "record.yaml"
        result = _invoke(runner, data_dir, "dump", address, "--format", "yaml", "-o", str(out))
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(out.read_text(encoding="utf-8"))
        assert data["items"][0]["owner"] == Identity.from_seed("operator").hex()

    def test_dump_to_stdout(self, runner: CliRunner, data_dir: Path) -> None:
        address = _init(runner, data_dir)
        result = _invoke(runner, data_dir, "dump", address)
        assert result.exit_code == 0, result.output
        assert "total_items" in result.output

    def test_empty_content_rejected(self, runner: CliRunner, data_dir: Path) -> None:
        address = _init(runner, data_dir)
        result = _invoke(runner, data_dir, "append", address, "")
        assert result.exit_code == 1
        assert "empty" in result.output

    def test_capacity_exceeded(
        self, runner: CliRunner, data_dir: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "small.yaml"
        config.write_text(f"capacity: 60\ndata_dir: {data_dir}\n", encoding="utf-8")
        base = ["--config", str(config)]
        assert runner.invoke(cli, [*base, "init", "--address", _BOARD], env={}).exit_code == 0
        assert runner.invoke(cli, [*base, "append", _BOARD, "short"], env={}).exit_code == 0
        result = runner.invoke(cli, [*base, "append", _BOARD, "again"], env={})
        assert result.exit_code == 1
        assert "CapacityExceeded" in result.output

    def test_append_to_missing_record(self, runner: CliRunner, data_dir: Path) -> None:
        result = _invoke(runner, data_dir, "append", _BOARD, "x")
        assert result.exit_code == 1
        assert "No record exists" in result.output

    def test_show_empty(self, runner: CliRunner, data_dir: Path) -> None:
        address = _init(runner, data_dir)
        result = _invoke(runner, data_dir, "show", address)
        assert result.exit_code == 0, result.output
        assert "empty" in result.output
        assert "8/10000 bytes used" in result.output

    def test_show_counts_items(self, runner: CliRunner, data_dir: Path) -> None:
        address = _init(runner, data_dir)
        _invoke(runner, data_dir, "append", address, "a")
        _invoke(runner, data_dir, "append", address, "b")
        result = _invoke(runner, data_dir, "show", address)
        assert result.exit_code == 0, result.output
        assert "2 item(s)" in result.output
        assert f"{8 + 2 * 37}/10000 bytes used" in result.output

    def test_show_corrupt_record(self, runner: CliRunner, data_dir: Path) -> None:
        address = _init(runner, data_dir)
        (data_dir / f"{address}.rec").write_bytes(b"\xff" * 10_000)
        result = _invoke(runner, data_dir, "show", address)
        assert result.exit_code == 1
        assert "Corrupt" in result.output


class TestListAndInfo:
    def test_list_empty(self, runner: CliRunner, data_dir: Path) -> None:
        result = _invoke(runner, data_dir, "list")
        assert result.exit_code == 0
        assert "No records" in result.output

    def test_list_records(self, runner: CliRunner, data_dir: Path) -> None:
        _init(runner, data_dir)
        result = _invoke(runner, data_dir, "list")
        assert result.exit_code == 0, result.output
        assert "Items" in result.output

    def test_backends(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["backends"])
        assert result.exit_code == 0
        assert "memory" in result.output
        assert "file" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "liststore" in result.output

    def test_verbose_flag(self, runner: CliRunner, data_dir: Path) -> None:
        result = _invoke(runner, data_dir, "--verbose", "init")
        assert result.exit_code == 0, result.output
