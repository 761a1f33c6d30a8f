"""Search query construction: analyzer, schema registry and query factory."""

from media_search.search.analyzer import Term, tokenize
from media_search.search.ast_nodes import (
    And,
    FieldBoosted,
    FieldExact,
    FieldPrefix,
    Or,
    QueryNode,
    RangeInt,
)
from media_search.search.criteria import (
    MediaType,
    MusicFolder,
    RandomSearchCriteria,
    SearchCriteria,
)
from media_search.search.index_type import (
    FieldNames,
    IndexType,
    fields_for,
    scope_field_for,
)
from media_search.search.query import QueryFactory
from media_search.search.render import format_query

__all__ = [
    "And",
    "FieldBoosted",
    "FieldExact",
    "FieldNames",
    "FieldPrefix",
    "IndexType",
    "MediaType",
    "MusicFolder",
    "Or",
    "QueryFactory",
    "QueryNode",
    "RandomSearchCriteria",
    "RangeInt",
    "SearchCriteria",
    "Term",
    "fields_for",
    "format_query",
    "scope_field_for",
    "tokenize",
]
