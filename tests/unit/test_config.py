"""Unit tests for configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from media_search.config import Config, load_config, save_config
from media_search.exceptions import ConfigParseError, ConfigValidationError
from media_search.search.criteria import MusicFolder


def test_default_config() -> None:
    """Test that default config has sensible values."""
    config = Config()
    assert config.colored_output is True
    assert config.folders == []
    assert config.default_count == 20


def test_load_missing_config(temp_dir: Path) -> None:
    """Test loading when config file doesn't exist."""
    config, warnings = load_config(temp_dir / "nonexistent.toml")

    assert config is not None
    assert any("No config file" in w for w in warnings)
    assert any("No music folders" in w for w in warnings)


def test_load_valid_config(sample_config: Path, temp_dir: Path) -> None:
    """Test loading a valid config file."""
    config, _warnings = load_config(sample_config)

    assert config.index_db == temp_dir / "index.db"
    assert config.default_count == 5
    assert config.random_count == 3
    assert config.colored_output is False
    assert config.folders == [
        MusicFolder(id=10, path="/var/music1", name="music1"),
        MusicFolder(id=20, path="/var/music2"),
    ]
    assert config.get_folder(20) == MusicFolder(id=20, path="/var/music2")
    assert config.get_folder(99) is None


def test_load_invalid_toml(temp_dir: Path) -> None:
    """Test loading invalid TOML raises error."""
    config_path = temp_dir / "invalid.toml"
    config_path.write_text("this is not valid [ toml")

    with pytest.raises(ConfigParseError):
        load_config(config_path)


@pytest.mark.parametrize(
    ("content", "key"),
    [
        ('[display]\ncolored_output = "yes"\n', "display.colored_output"),
        ("[index]\ndatabase = 3\n", "index.database"),
        ('[search]\ndefault_count = "ten"\n', "search.default_count"),
        ("[search]\nrandom_count = 0\n", "search.random_count"),
        ('[[folders]]\nid = "a"\npath = "/m"\n', "folders[0].id"),
        ("[[folders]]\nid = 1\n", "folders[0].path"),
        (
            '[[folders]]\nid = 1\npath = "/a"\n\n[[folders]]\nid = 1\npath = "/b"\n',
            "folders.id",
        ),
    ],
)
def test_config_validation(temp_dir: Path, content: str, key: str) -> None:
    """Test that invalid values raise validation error."""
    config_path = temp_dir / "bad.toml"
    config_path.write_text(content)

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(config_path)
    assert exc_info.value.key == key


def test_config_path_expansion() -> None:
    """Test that paths are expanded."""
    config = Config(index_db=Path("~/index.db"))
    config.validate()

    assert "~" not in str(config.index_db)


def test_save_and_reload(temp_dir: Path) -> None:
    config = Config(
        index_db=temp_dir / "idx.db",
        folders=[MusicFolder(id=1, path="/m", name="Music"), MusicFolder(id=2, path="/p")],
        random_count=7,
    )
    target = temp_dir / "out" / "config.toml"
    save_config(config, target)

    data = tomllib.loads(target.read_text())
    assert data["folders"] == [{"id": 1, "path": "/m", "name": "Music"}, {"id": 2, "path": "/p"}]

    reloaded, _ = load_config(target)
    assert reloaded.folders == config.folders
    assert reloaded.random_count == 7
    assert reloaded.index_db == temp_dir / "idx.db"
