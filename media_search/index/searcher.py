"""Execute query trees against the SQLite search index.

:func:`compile_query` translates a :mod:`~media_search.search.ast_nodes`
tree into a SQLAlchemy boolean expression over :class:`IndexDocument`.
Tokenized fields are matched through the ``terms`` table, every other
field by comparing the document column with the raw key.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlalchemy import and_, case, false, func, literal, or_, select, true

from media_search.exceptions import UnknownFieldError
from media_search.index.models import FIELD_TO_ATTRIBUTE, IndexDocument, IndexTerm
from media_search.search.ast_nodes import (
    And,
    FieldBoosted,
    FieldExact,
    FieldPrefix,
    Or,
    QueryNode,
    RangeInt,
)
from media_search.search.criteria import MusicFolder, RandomSearchCriteria, SearchCriteria
from media_search.search.index_type import TOKENIZED_FIELDS, FieldNames, IndexType, schema_for
from media_search.search.query import QueryFactory
from media_search.search.render import format_query

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from sqlalchemy.sql.elements import ColumnElement

log = logging.getLogger(__name__)

# Key fields compared as integers.
_INTEGER_FIELDS: frozenset[str] = frozenset({FieldNames.YEAR, FieldNames.FOLDER_ID})

_factory = QueryFactory()


@dataclass
class SearchResult:
    """One page of search hits."""

    offset: int
    total_hits: int
    documents: list[IndexDocument] = field(default_factory=list)


def _get_column(field_name: str):
    """Get the IndexDocument column for a key field."""
    attr = FIELD_TO_ATTRIBUTE.get(field_name)
    if attr is None:
        raise UnknownFieldError(field_name)
    return getattr(IndexDocument, attr)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _term_exists(field_name: str, condition) -> ColumnElement[bool]:
    return (
        select(IndexTerm.doc_id)
        .where(
            IndexTerm.doc_id == IndexDocument.id,
            IndexTerm.field == field_name,
            condition,
        )
        .exists()
    )


def _key_value(field_name: str, term: str) -> int | str | None:
    if field_name not in _INTEGER_FIELDS:
        return term
    try:
        return int(term)
    except ValueError:
        return None


def _build_leaf_clause(node: FieldExact | FieldBoosted | FieldPrefix) -> ColumnElement[bool]:
    """Build the SQL clause for a single field match."""
    if node.field in TOKENIZED_FIELDS:
        if isinstance(node, FieldPrefix):
            pattern = f"{_escape_like(node.term)}%"
            return _term_exists(node.field, IndexTerm.term.like(pattern, escape="\\"))
        return _term_exists(node.field, IndexTerm.term == node.term)

    col = _get_column(node.field)
    if isinstance(node, FieldPrefix):
        return col.like(f"{_escape_like(node.term)}%", escape="\\")
    value = _key_value(node.field, node.term)
    if value is None:
        # A non-numeric term can never equal an integer column.
        return false()
    return col == value


def compile_query(node: QueryNode) -> ColumnElement[bool]:
    """Translate a query tree into a SQLAlchemy filter expression.

    Raises:
        UnknownFieldError: If a node names a field the index does not hold.
    """
    if isinstance(node, And):
        if not node.children:
            return true()
        return and_(*(compile_query(child) for child in node.children))
    if isinstance(node, Or):
        if not node.children:
            return false()
        return or_(*(compile_query(child) for child in node.children))
    if isinstance(node, (FieldExact, FieldBoosted, FieldPrefix)):
        return _build_leaf_clause(node)
    if isinstance(node, RangeInt):
        return _get_column(node.field).between(node.low, node.high)
    raise TypeError(f"Not a query node: {node!r}")


def _scored_leaves(node: QueryNode) -> Iterator[tuple[QueryNode, float]]:
    """Yield tokenized-field match nodes with their boost weight."""
    if isinstance(node, (And, Or)):
        for child in node.children:
            yield from _scored_leaves(child)
    elif isinstance(node, (FieldExact, FieldBoosted, FieldPrefix)):
        if node.field in TOKENIZED_FIELDS:
            if isinstance(node, FieldBoosted):
                yield node, node.weight
            elif isinstance(node, FieldPrefix):
                yield node, node.boost
            else:
                yield node, 1.0


def score_expression(node: QueryNode) -> ColumnElement[float]:
    """Relevance: sum of the boost weights of all matching text nodes."""
    parts = [
        case((_build_leaf_clause(leaf), literal(weight)), else_=literal(0.0))
        for leaf, weight in _scored_leaves(node)
    ]
    if not parts:
        return literal(0.0)
    total = parts[0]
    for part in parts[1:]:
        total = total + part
    return total


def execute(
    session: Session,
    query: QueryNode,
    index_type: IndexType,
    *,
    offset: int = 0,
    count: int | None = None,
) -> SearchResult:
    """Run *query* against documents of *index_type*, ordered by relevance."""
    schema_for(index_type)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("execute %s: %s", index_type.name, format_query(query))

    criterion = and_(IndexDocument.index_type == index_type.name, compile_query(query))
    total_hits = session.query(func.count(IndexDocument.id)).filter(criterion).scalar() or 0

    select_query = (
        session.query(IndexDocument)
        .filter(criterion)
        .order_by(score_expression(query).desc(), IndexDocument.id)
        .offset(offset)
    )
    if count is not None:
        select_query = select_query.limit(count)

    return SearchResult(offset=offset, total_hits=total_hits, documents=select_query.all())


def _random(
    session: Session, query: QueryNode, index_type: IndexType, count: int
) -> list[IndexDocument]:
    if log.isEnabledFor(logging.DEBUG):
        log.debug("random %s: %s", index_type.name, format_query(query))
    return list(
        session.query(IndexDocument)
        .filter(IndexDocument.index_type == index_type.name, compile_query(query))
        .order_by(func.random())
        .limit(count)
        .all()
    )


def search(
    session: Session,
    criteria: SearchCriteria,
    folders: Sequence[MusicFolder],
    index_type: IndexType,
) -> SearchResult:
    """Free-text search of *index_type* documents within *folders*."""
    query = _factory.search(criteria, folders, index_type)
    return execute(session, query, index_type, offset=criteria.offset, count=criteria.count)


def search_by_name(
    session: Session,
    field_name: str,
    raw_query: str,
    index_type: IndexType,
    *,
    offset: int = 0,
    count: int | None = None,
) -> SearchResult:
    """Autocomplete lookup on one name field.

    Not folder scoped; only use it for canonical name fields.
    """
    query = _factory.search_by_name(field_name, raw_query)
    return execute(session, query, index_type, offset=offset, count=count)


def get_random_songs(session: Session, criteria: RandomSearchCriteria) -> list[IndexDocument]:
    """Up to ``criteria.count`` random music documents matching the criteria."""
    return _random(session, _factory.get_random_songs(criteria), IndexType.SONG, criteria.count)


def get_random_albums(
    session: Session, count: int, folders: Sequence[MusicFolder]
) -> list[IndexDocument]:
    """Up to *count* random album documents from *folders*."""
    return _random(session, _factory.get_random_albums(folders), IndexType.ALBUM, count)


def get_random_albums_id3(
    session: Session, count: int, folders: Sequence[MusicFolder]
) -> list[IndexDocument]:
    """Up to *count* random ID3 album documents from *folders*."""
    return _random(session, _factory.get_random_albums_id3(folders), IndexType.ALBUM_ID3, count)
