"""Configuration management for media-search."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from media_search.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from media_search.search.criteria import MusicFolder


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "media-search" / "config.toml"


def get_default_index_path() -> Path:
    """Get the default index database path."""
    return Path.home() / ".local" / "share" / "media-search" / "index.db"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        index_db: Path to the SQLite search index.
        folders: Music folders searches are scoped to.
        default_count: Page size for free-text searches.
        random_count: Number of items for random selections.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    index_db: Path = field(default_factory=get_default_index_path)
    folders: list[MusicFolder] = field(default_factory=list)
    default_count: int = 20
    random_count: int = 10
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        self.index_db = self.index_db.expanduser()

        seen: set[int] = set()
        for folder in self.folders:
            if folder.id in seen:
                raise ConfigValidationError("folders.id", folder.id, "duplicate folder id")
            seen.add(folder.id)

        if self.default_count <= 0:
            raise ConfigValidationError(
                "search.default_count", self.default_count, "must be positive"
            )
        if self.random_count <= 0:
            raise ConfigValidationError(
                "search.random_count", self.random_count, "must be positive"
            )

        # Warnings only - the index may be built later
        if not self.index_db.exists():
            warnings.append(f"Index database not found: {self.index_db}")

        if not self.folders:
            warnings.append("No music folders configured; searches will return no results")

        return warnings

    def get_folder(self, folder_id: int) -> MusicFolder | None:
        """Return the configured folder with *folder_id*, if any."""
        for folder in self.folders:
            if folder.id == folder_id:
                return folder
        return None


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: media-search init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_folder(index: int, entry: Any) -> MusicFolder:
    key = f"folders[{index}]"
    if not isinstance(entry, dict):
        raise ConfigValidationError(key, entry, "must be a table")

    folder_id = entry.get("id")
    if not isinstance(folder_id, int) or isinstance(folder_id, bool):
        raise ConfigValidationError(f"{key}.id", folder_id, "must be an integer")

    path = entry.get("path")
    if not isinstance(path, str) or not path:
        raise ConfigValidationError(f"{key}.path", path, "must be a non-empty string path")

    name = entry.get("name")
    if name is not None and not isinstance(name, str):
        raise ConfigValidationError(f"{key}.name", name, "must be a string")

    return MusicFolder(id=folder_id, path=path, name=name)


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [index] section
    index = data.get("index", {})
    if "database" in index:
        value = index["database"]
        if not isinstance(value, str):
            raise ConfigValidationError("index.database", value, "must be a string path")
        config.index_db = Path(value)

    # Parse [search] section
    search = data.get("search", {})
    for key in ("default_count", "random_count"):
        if key in search:
            value = search[key]
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigValidationError(f"search.{key}", value, "must be an integer")
            setattr(config, key, value)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    # Parse [[folders]] array
    folders = data.get("folders", [])
    if not isinstance(folders, list):
        raise ConfigValidationError("folders", folders, "must be an array of tables")
    config.folders = [_parse_folder(i, entry) for i, entry in enumerate(folders)]

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "index": {"database": str(config.index_db)},
        "search": {
            "default_count": config.default_count,
            "random_count": config.random_count,
        },
        "display": {"colored_output": config.colored_output},
    }

    if config.folders:
        folders: list[dict[str, Any]] = []
        for folder in config.folders:
            entry: dict[str, Any] = {"id": folder.id, "path": folder.path}
            if folder.name is not None:
                entry["name"] = folder.name
            folders.append(entry)
        data["folders"] = folders

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
