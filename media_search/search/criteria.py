"""Search request types: criteria, folders and media types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import PurePath

from media_search.exceptions import ValidationError


class MediaType(enum.Enum):
    """Kinds of media files held in a music folder."""

    MUSIC = "music"
    PODCAST = "podcast"
    AUDIOBOOK = "audiobook"
    VIDEO = "video"


@dataclass(frozen=True)
class MusicFolder:
    """A folder the requesting user is permitted to read.

    Attributes:
        id: Folder identity.
        path: Normalized absolute path of the folder.
        name: Optional display name.
    """

    id: int
    path: str
    name: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.path, PurePath):
            object.__setattr__(self, "path", str(self.path))


@dataclass
class SearchCriteria:
    """Free-text search request with paging."""

    query: str = ""
    offset: int = 0
    count: int = 20

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValidationError("offset", self.offset, "must not be negative")
        if self.count < 0:
            raise ValidationError("count", self.count, "must not be negative")


@dataclass
class RandomSearchCriteria:
    """Random song selection request.

    Year bounds are optional and passed through as given, even when
    ``from_year`` is greater than ``to_year``.
    """

    count: int
    genre: str | None = None
    from_year: int | None = None
    to_year: int | None = None
    folders: tuple[MusicFolder, ...] | list[MusicFolder] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValidationError("count", self.count, "must not be negative")
