"""Schema registry: searchable entity kinds, their fields, weights and scope."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType

from media_search.exceptions import UnknownIndexTypeError


class FieldNames:
    """Field names shared by the index writer and the query factory."""

    ID = "id"
    ARTIST = "artist"
    ALBUM = "album"
    TITLE = "title"
    GENRE = "genre"
    YEAR = "year"
    MEDIA_TYPE = "mediaType"
    FOLDER = "folder"
    FOLDER_ID = "folderId"


# Analyzed text fields. Every other field is matched as a raw key.
TOKENIZED_FIELDS: frozenset[str] = frozenset(
    {
        FieldNames.ARTIST,
        FieldNames.ALBUM,
        FieldNames.TITLE,
    }
)


class IndexType(enum.Enum):
    """Searchable entity kinds.

    The ``_ID3`` variants are built from tag data and scoped by numeric
    folder id instead of folder path.
    """

    ARTIST = "artist"
    ALBUM = "album"
    SONG = "song"
    ARTIST_ID3 = "artist_id3"
    ALBUM_ID3 = "album_id3"

    @classmethod
    def from_name(cls, name: str) -> IndexType:
        """Look up a variant by name, case-insensitively."""
        try:
            return cls[name.upper()]
        except (KeyError, AttributeError):
            raise UnknownIndexTypeError(name) from None


@dataclass(frozen=True)
class IndexSchema:
    """One registry row.

    Attributes:
        fields: Ordered ``(field name, boost weight)`` match targets.
        scope_field: Field restricting results to permitted folders.
    """

    fields: tuple[tuple[str, float], ...]
    scope_field: str


_SCHEMAS = MappingProxyType(
    {
        IndexType.ARTIST: IndexSchema(
            fields=((FieldNames.ARTIST, 1.0),),
            scope_field=FieldNames.FOLDER,
        ),
        IndexType.ALBUM: IndexSchema(
            fields=((FieldNames.ALBUM, 1.1), (FieldNames.ARTIST, 1.0)),
            scope_field=FieldNames.FOLDER,
        ),
        IndexType.SONG: IndexSchema(
            fields=((FieldNames.TITLE, 1.1), (FieldNames.ARTIST, 1.0)),
            scope_field=FieldNames.FOLDER,
        ),
        IndexType.ARTIST_ID3: IndexSchema(
            fields=((FieldNames.ARTIST, 1.0),),
            scope_field=FieldNames.FOLDER_ID,
        ),
        IndexType.ALBUM_ID3: IndexSchema(
            fields=((FieldNames.ALBUM, 1.1), (FieldNames.ARTIST, 1.0)),
            scope_field=FieldNames.FOLDER_ID,
        ),
    }
)


def schema_for(index_type: IndexType) -> IndexSchema:
    """Return the registry row for *index_type*.

    Raises:
        UnknownIndexTypeError: If *index_type* is not a registered variant.
    """
    try:
        return _SCHEMAS[index_type]
    except (KeyError, TypeError):
        raise UnknownIndexTypeError(index_type) from None


def fields_for(index_type: IndexType) -> tuple[tuple[str, float], ...]:
    """Ordered ``(field, weight)`` match targets for *index_type*."""
    return schema_for(index_type).fields


def scope_field_for(index_type: IndexType) -> str:
    """Folder scoping field (``folder`` or ``folderId``) for *index_type*."""
    return schema_for(index_type).scope_field
