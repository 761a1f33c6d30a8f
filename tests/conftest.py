"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from media_search.index.models import IndexBase
from media_search.search.criteria import MusicFolder

if TYPE_CHECKING:
    from collections.abc import Generator

    from sqlalchemy.orm import Session

PATH1 = "/var/music1"
PATH2 = "/var/music2"
FID1 = 10
FID2 = 20


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def folder1() -> MusicFolder:
    return MusicFolder(id=FID1, path=PATH1, name="music1")


@pytest.fixture
def folder2() -> MusicFolder:
    return MusicFolder(id=FID2, path=PATH2, name="music2")


@pytest.fixture
def single_folders(folder1: MusicFolder) -> list[MusicFolder]:
    return [folder1]


@pytest.fixture
def multi_folders(folder1: MusicFolder, folder2: MusicFolder) -> list[MusicFolder]:
    return [folder1, folder2]


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file with two folders."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[index]
database = "{temp_dir / 'index.db'}"

[search]
default_count = 5
random_count = 3

[display]
colored_output = false

[[folders]]
id = {FID1}
path = "{PATH1}"
name = "music1"

[[folders]]
id = {FID2}
path = "{PATH2}"
""")
    return config_path


@pytest.fixture
def index_session() -> Generator[Session, None, None]:
    """In-memory index database session."""
    engine = create_engine("sqlite:///:memory:")
    IndexBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
