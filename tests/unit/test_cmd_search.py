"""Unit tests for the index, search and random commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from media_search.cli import cli

DOCUMENTS = [
    {"type": "artist", "ref": "ar1", "artist": "Pink Floyd", "folder": "/var/music1"},
    {"type": "artist", "ref": "ar2", "artist": "Pink Martini", "folder": "/var/music2"},
    {"type": "album_id3", "ref": "aa1", "album": "The Wall", "artist": "Pink Floyd",
     "folderId": 10},
    {"type": "album_id3", "ref": "aa2", "album": "Sympathique", "artist": "Pink Martini",
     "folderId": 20},
    {"type": "song", "ref": "s1", "title": "Money", "artist": "Pink Floyd",
     "genre": "Classic Rock", "year": 1973, "folder": "/var/music1"},
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def loaded_index(runner: CliRunner, sample_config: Path, temp_dir: Path) -> Path:
    source = temp_dir / "docs.json"
    source.write_text(json.dumps(DOCUMENTS))
    result = runner.invoke(cli, ["--config", str(sample_config), "index", "load", str(source)])
    assert result.exit_code == 0, result.output
    return sample_config


def _invoke(runner: CliRunner, config: Path, *args: str):
    return runner.invoke(cli, ["--no-color", "--no-pager", "--config", str(config), *args])


class TestIndexCommands:
    def test_load_and_stats(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "index", "stats")
        assert result.exit_code == 0
        assert "album_id3" in result.output

    def test_load_rejects_invalid_json(
        self, runner: CliRunner, sample_config: Path, temp_dir: Path
    ) -> None:
        source = temp_dir / "bad.json"
        source.write_text("{not json")
        result = _invoke(runner, sample_config, "index", "load", str(source))
        assert result.exit_code == 1

    def test_load_rejects_invalid_document(
        self, runner: CliRunner, sample_config: Path, temp_dir: Path
    ) -> None:
        source = temp_dir / "docs.json"
        source.write_text(json.dumps([{"type": "song", "ref": "x", "folder": "/m"}]))
        result = _invoke(runner, sample_config, "index", "load", str(source))
        assert result.exit_code == 2

    def test_clear_type(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "index", "clear", "--type", "artist")
        assert result.exit_code == 0
        assert "Removed 2 documents" in result.output

    def test_quiet_suppresses_messages(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "--quiet", "index", "clear", "--type", "artist")
        assert result.exit_code == 0
        assert "Removed" not in result.output

    def test_load_rejects_numeric_title(
        self, runner: CliRunner, sample_config: Path, temp_dir: Path
    ) -> None:
        source = temp_dir / "docs.json"
        source.write_text(
            json.dumps(
                [{"type": "song", "ref": "s1", "title": 1999, "artist": "Prince",
                  "folder": "/var/music1"}]
            )
        )
        result = _invoke(runner, sample_config, "index", "load", str(source))
        assert result.exit_code == 2
        assert "title must be a string" in result.output

    @pytest.mark.parametrize("command", [("stats",), ("clear",), ("clear", "--type", "song")])
    def test_missing_index_is_not_created(
        self, runner: CliRunner, sample_config: Path, temp_dir: Path, command: tuple[str, ...]
    ) -> None:
        result = _invoke(runner, sample_config, "index", *command)
        assert result.exit_code == 2
        assert not (temp_dir / "index.db").exists()

        # A later search still reports the missing index
        result = _invoke(runner, sample_config, "search", "abc")
        assert result.exit_code == 2


class TestSearchCommand:
    def test_json_output(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(
            runner, loaded_index, "search", "--type", "artist", "--format", "json", "pink", "fl"
        )
        assert result.exit_code == 0, result.output
        assert [d["ref"] for d in json.loads(result.output)] == ["ar1"]

    def test_folder_restriction(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(
            runner,
            loaded_index,
            "search",
            "--type",
            "album_id3",
            "--folder",
            "20",
            "--format",
            "json",
            "pink",
        )
        assert result.exit_code == 0, result.output
        assert [d["ref"] for d in json.loads(result.output)] == ["aa2"]

    def test_unknown_folder(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "search", "--folder", "99", "pink")
        assert result.exit_code == 1

    def test_explain(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "search", "--type", "artist", "--explain", "pink")
        assert result.exit_code == 0
        assert "+(+(artist:pink*)) +(folder:/var/music1 folder:/var/music2)" in result.output

    def test_no_results(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "search", "zzz")
        assert result.exit_code == 0
        assert "No results" in result.output

    def test_table_output(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "search", "money")
        assert result.exit_code == 0
        assert "Money" in result.output

    def test_missing_index(self, runner: CliRunner, sample_config: Path) -> None:
        result = _invoke(runner, sample_config, "search", "pink")
        assert result.exit_code == 2
        assert "Index database not found" in result.output


class TestRandomCommands:
    def test_songs(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(
            runner, loaded_index, "random", "songs", "--genre", "Classic Rock", "--format", "json"
        )
        assert result.exit_code == 0, result.output
        assert [d["ref"] for d in json.loads(result.output)] == ["s1"]

    def test_songs_explain(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(runner, loaded_index, "random", "songs", "--to-year", "2000", "--explain")
        assert result.exit_code == 0
        assert "year:[-2147483648 TO 2000]" in result.output

    def test_albums_id3(self, runner: CliRunner, loaded_index: Path) -> None:
        result = _invoke(
            runner, loaded_index, "random", "albums", "--id3", "-F", "10", "--format", "json"
        )
        assert result.exit_code == 0, result.output
        assert [d["ref"] for d in json.loads(result.output)] == ["aa1"]
