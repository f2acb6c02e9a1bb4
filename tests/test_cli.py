"""Tests for the CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sermonweaver.cli import app
from sermonweaver.models import Sermon
from sermonweaver.ordering import normalize_structure
from sermonweaver.store import JsonFileSermonRepository
from sermonweaver.store.file_store import load_sermon_file, write_sermon_file

runner = CliRunner()


@pytest.fixture()
def sermon_file(tmp_path: Path, sample_sermon: Sermon, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("SERMONWEAVER_LOG_LEVEL", "WARNING")
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "sermon.json"
    write_sermon_file(path, sample_sermon)
    return path


def test_cli_canonicalize(sermon_file: Path) -> None:
    """It should print the canonical structure."""

    result = runner.invoke(app, ["canonicalize", str(sermon_file)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "introduction": ["1"],
        "main": ["4", "2", "3"],
        "conclusion": ["7"],
        "ambiguous": ["5", "6"],
    }


def test_cli_canonicalize_write(sermon_file: Path) -> None:
    """It should write the canonical structure back to the file."""

    result = runner.invoke(app, ["canonicalize", str(sermon_file), "--write"])
    assert result.exit_code == 0, result.output
    stored = load_sermon_file(sermon_file)
    assert json.loads(sermon_file.read_text(encoding="utf-8"))["structure"]["ambiguous"] == ["5", "6"]
    assert stored.thoughts_by_section is None


def test_cli_order_section(sermon_file: Path) -> None:
    """It should print a section's thoughts in order."""

    result = runner.invoke(app, ["order", str(sermon_file), "--section", "main"])
    assert result.exit_code == 0, result.output
    assert [t["id"] for t in json.loads(result.stdout)] == ["4", "2", "3"]


def test_cli_order_raw_without_orphans(sermon_file: Path) -> None:
    """It should only show stored ids when projecting raw without orphans."""

    result = runner.invoke(app, ["order", str(sermon_file), "-s", "ambiguous", "--raw", "--no-orphans"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == []


def test_cli_move(sermon_file: Path) -> None:
    """It should print the new structure and the thought patch."""

    result = runner.invoke(app, ["move", str(sermon_file), "5", "main", "--outline-point", "p3"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["structure"]["main"] == ["4", "2", "3", "5"]
    assert payload["thought"]["outlinePointId"] == "p3"
    assert payload["thought"]["tags"] == ["main"]


def test_cli_move_unknown_thought(sermon_file: Path) -> None:
    """It should exit with an error for unknown thoughts."""

    result = runner.invoke(app, ["move", str(sermon_file), "missing", "main"])
    assert result.exit_code == 1


def test_cli_move_conflicting_options(sermon_file: Path) -> None:
    """It should reject --outline-point together with --clear-point."""

    result = runner.invoke(app, ["move", str(sermon_file), "5", "main", "-p", "p3", "--clear-point"])
    assert result.exit_code == 2


def test_cli_malformed_structure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """It should fail instead of treating bad structure JSON as empty."""

    monkeypatch.setenv("SERMONWEAVER_LOG_LEVEL", "WARNING")
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"thoughts": [], "structure": "{not json"}), encoding="utf-8")
    result = runner.invoke(app, ["canonicalize", str(path)])
    assert result.exit_code == 1


@pytest.fixture()
def store_dir(tmp_path: Path, sample_sermon: Sermon, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "sermons"
    monkeypatch.setenv("SERMONWEAVER_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("SERMONWEAVER_DATA_DIR", str(root))
    monkeypatch.delenv("SERMONWEAVER_ENV_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    JsonFileSermonRepository(root).save_sermon(sample_sermon)
    return root


def test_cli_order_from_store(store_dir: Path) -> None:
    """It should read the sermon by id from the configured data directory."""

    result = runner.invoke(app, ["order", "s1", "--store", "-s", "main"])
    assert result.exit_code == 0, result.output
    assert [t["id"] for t in json.loads(result.stdout)] == ["4", "2", "3"]


def test_cli_move_write_to_store(store_dir: Path) -> None:
    """It should persist the moved structure and thought through the repository."""

    result = runner.invoke(app, ["move", "s1", "5", "main", "--store", "-p", "p3", "--write"])
    assert result.exit_code == 0, result.output

    stored = JsonFileSermonRepository(store_dir).get_sermon("s1")
    assert normalize_structure(stored.raw_structure()).main == ["4", "2", "3", "5"]
    thought = stored.thoughts_by_id()["5"]
    assert thought.outline_point_id == "p3"
    assert thought.tags == ["main"]


def test_cli_canonicalize_write_to_store(store_dir: Path) -> None:
    """It should write the canonical structure back into the data directory."""

    result = runner.invoke(app, ["canonicalize", "s1", "--store", "--write"])
    assert result.exit_code == 0, result.output
    stored = json.loads((store_dir / "s1.json").read_text(encoding="utf-8"))
    assert stored["structure"]["ambiguous"] == ["5", "6"]


def test_cli_store_unknown_sermon(store_dir: Path) -> None:
    """It should reject ids missing from the data directory."""

    result = runner.invoke(app, ["order", "missing", "--store"])
    assert result.exit_code == 2
