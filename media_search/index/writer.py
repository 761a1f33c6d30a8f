"""Write documents into the search index.

Documents are validated against the schema registry so that every stored
document carries the fields its index type is searched and scoped by.
Tokenized fields are run through the same analyzer the query side uses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from media_search.exceptions import DocumentError
from media_search.index.models import FIELD_TO_ATTRIBUTE, IndexDocument, IndexTerm
from media_search.search.analyzer import analyze
from media_search.search.criteria import MediaType
from media_search.search.index_type import TOKENIZED_FIELDS, IndexType, schema_for

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

log = logging.getLogger(__name__)

# Record keys accepted by load_documents(), besides "type" and "ref".
_RECORD_KEYS: dict[str, str] = {
    **FIELD_TO_ATTRIBUTE,
    **{attr: attr for attr in FIELD_TO_ATTRIBUTE.values()},
}


def _coerce_int(ref: str, name: str, value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise DocumentError(ref, f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DocumentError(ref, f"{name} must be an integer, got {value!r}") from None


def _coerce_text(ref: str, name: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise DocumentError(ref, f"{name} must be a string, got {value!r}")


def _coerce_media_type(ref: str, value: MediaType | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, MediaType):
        return value.name
    try:
        return MediaType[str(value).upper()].name
    except KeyError:
        raise DocumentError(ref, f"unknown media type {value!r}") from None


def add_document(
    session: Session,
    index_type: IndexType,
    ref: str,
    *,
    artist: str | None = None,
    album: str | None = None,
    title: str | None = None,
    genre: str | None = None,
    media_type: MediaType | str | None = None,
    year: int | str | None = None,
    folder: str | None = None,
    folder_id: int | str | None = None,
) -> IndexDocument:
    """Add or replace a document.

    A document with the same index type and ref is replaced.

    Args:
        session: Index database session.
        index_type: Entity kind of the document.
        ref: External identifier, unique per index type.

    Returns:
        The stored document.

    Raises:
        UnknownIndexTypeError: If *index_type* is not registered.
        DocumentError: If a match or scope field of the schema is missing,
            or a field value has the wrong type.
    """
    schema = schema_for(index_type)
    ref = str(ref)

    if index_type is IndexType.SONG and media_type is None:
        media_type = MediaType.MUSIC

    values: dict[str, Any] = {
        "artist": _coerce_text(ref, "artist", artist),
        "album": _coerce_text(ref, "album", album),
        "title": _coerce_text(ref, "title", title),
        "genre": _coerce_text(ref, "genre", genre),
        "media_type": _coerce_media_type(ref, media_type),
        "year": _coerce_int(ref, "year", year),
        "folder": str(folder) if folder is not None else None,
        "folder_id": _coerce_int(ref, "folder_id", folder_id),
    }

    if values[FIELD_TO_ATTRIBUTE[schema.scope_field]] in (None, ""):
        raise DocumentError(ref, f"missing {schema.scope_field} for {index_type.name}")
    for field, _weight in schema.fields:
        if not values[FIELD_TO_ATTRIBUTE[field]]:
            raise DocumentError(ref, f"missing {field} for {index_type.name}")

    existing = (
        session.query(IndexDocument).filter_by(index_type=index_type.name, ref=ref).one_or_none()
    )
    if existing is not None:
        log.debug("Replacing %s document %s", index_type.name, ref)
        session.delete(existing)
        session.flush()

    document = IndexDocument(index_type=index_type.name, ref=ref, **values)
    for field in sorted(TOKENIZED_FIELDS):
        tokens = analyze(values[FIELD_TO_ATTRIBUTE[field]])
        document.terms.extend(
            IndexTerm(field=field, position=position, term=token)
            for position, token in enumerate(tokens)
        )

    session.add(document)
    session.flush()
    return document


def load_documents(session: Session, records: Iterable[Mapping[str, Any]]) -> int:
    """Add documents from plain records, e.g. parsed from JSON.

    Each record needs ``type`` (an index type name) and ``ref``; other keys
    are document fields by index field name (``folderId``) or attribute
    name (``folder_id``).

    Returns:
        Number of documents written.
    """
    count = 0
    for record in records:
        fields = dict(record)
        ref = fields.pop("ref", None)
        if ref is None:
            raise DocumentError(None, "missing ref")
        type_name = fields.pop("type", None)
        if not isinstance(type_name, str):
            raise DocumentError(ref, "missing type")
        index_type = IndexType.from_name(type_name)

        kwargs: dict[str, Any] = {}
        for key, value in fields.items():
            attr = _RECORD_KEYS.get(key)
            if attr is None:
                raise DocumentError(ref, f"unknown field {key!r}")
            kwargs[attr] = value

        add_document(session, index_type, ref, **kwargs)
        count += 1

    log.info("Indexed %d documents", count)
    return count


def clear_documents(session: Session, index_type: IndexType | None = None) -> int:
    """Remove documents (and their terms), optionally of one index type only.

    Returns:
        Number of documents removed.
    """
    doc_ids = select(IndexDocument.id)
    if index_type is not None:
        schema_for(index_type)
        doc_ids = doc_ids.where(IndexDocument.index_type == index_type.name)

    session.query(IndexTerm).filter(IndexTerm.doc_id.in_(doc_ids)).delete(
        synchronize_session=False
    )
    removed = (
        session.query(IndexDocument)
        .filter(IndexDocument.id.in_(doc_ids))
        .delete(synchronize_session=False)
    )
    session.expire_all()
    log.info("Removed %d documents from index", removed)
    return removed


def count_documents(session: Session) -> dict[str, int]:
    """Number of documents per index type name."""
    rows = (
        session.query(IndexDocument.index_type, func.count(IndexDocument.id))
        .group_by(IndexDocument.index_type)
        .all()
    )
    return {index_type: count for index_type, count in rows}
