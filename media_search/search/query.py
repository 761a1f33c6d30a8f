"""Build query trees from search criteria and the caller's permitted folders.

Every entry point except :meth:`QueryFactory.search_by_name` ANDs its
clauses with a folder clause. The folder clause is an ``Or`` over the
given folders, so an empty folder list yields a query that matches
nothing rather than an unscoped one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

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
from media_search.search.index_type import FieldNames, IndexType, fields_for, scope_field_for
from media_search.search.render import format_query

log = logging.getLogger(__name__)

# Substituted for a missing year bound.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def _term_node(field: str, weight: float, term: Term) -> QueryNode:
    """Match node for one term on one field; the last term matches as a prefix."""
    if term.is_last:
        return FieldPrefix(field, term.text, boost=weight)
    if weight != 1.0:
        return FieldBoosted(field, term.text, weight)
    return FieldExact(field, term.text)


def _folder_clause(folders: Sequence[MusicFolder], scope_field: str) -> Or:
    """Or of one scope match per folder, in input order."""
    if scope_field == FieldNames.FOLDER_ID:
        return Or(tuple(FieldExact(scope_field, str(folder.id)) for folder in folders))
    return Or(tuple(FieldExact(scope_field, folder.path) for folder in folders))


class QueryFactory:
    """Turns search requests into :mod:`~media_search.search.ast_nodes` trees.

    Stateless; a single instance may be shared across threads.
    """

    def search(
        self,
        criteria: SearchCriteria,
        folders: Sequence[MusicFolder],
        index_type: IndexType,
    ) -> And:
        """Field-weighted free-text query scoped to *folders*.

        Each term must match at least one of the fields registered for
        *index_type*. A query without terms has an empty term clause and
        matches nothing.

        Raises:
            UnknownIndexTypeError: If *index_type* is not registered.
        """
        fields = fields_for(index_type)
        scope_field = scope_field_for(index_type)

        terms = tokenize(criteria.query)
        if terms:
            term_clause: QueryNode = And(
                tuple(
                    Or(tuple(_term_node(field, weight, term) for field, weight in fields))
                    for term in terms
                )
            )
        else:
            term_clause = Or()

        query = And((term_clause, _folder_clause(folders, scope_field)))
        if log.isEnabledFor(logging.DEBUG):
            log.debug("search %s: %s", index_type.name, format_query(query))
        return query

    def search_by_name(self, field_name: str, raw_query: str) -> And:
        """Autocomplete query on a single name field, without folder scoping."""
        terms = tokenize(raw_query)
        query = And(
            tuple(
                FieldPrefix(field_name, term.text)
                if term.is_last
                else FieldExact(field_name, term.text)
                for term in terms
            )
        )
        if log.isEnabledFor(logging.DEBUG):
            log.debug("search by name: %s", format_query(query))
        return query

    def get_random_songs(self, criteria: RandomSearchCriteria) -> And:
        """Filter for random music selection by genre, year range and folder."""
        clauses: list[QueryNode] = [FieldExact(FieldNames.MEDIA_TYPE, MediaType.MUSIC.name)]

        if criteria.genre is not None:
            # Genre is a raw key, not analyzed text.
            clauses.append(FieldExact(FieldNames.GENRE, criteria.genre))

        if criteria.from_year is not None or criteria.to_year is not None:
            low = INT_MIN if criteria.from_year is None else criteria.from_year
            high = INT_MAX if criteria.to_year is None else criteria.to_year
            clauses.append(RangeInt(FieldNames.YEAR, low, high))

        clauses.append(_folder_clause(criteria.folders, FieldNames.FOLDER))

        query = And(tuple(clauses))
        if log.isEnabledFor(logging.DEBUG):
            log.debug("random songs: %s", format_query(query))
        return query

    def get_random_albums(self, folders: Sequence[MusicFolder]) -> Or:
        """Folder clause for random album selection by folder path."""
        return _folder_clause(folders, FieldNames.FOLDER)

    def get_random_albums_id3(self, folders: Sequence[MusicFolder]) -> Or:
        """Folder clause for random album selection by folder id."""
        return _folder_clause(folders, FieldNames.FOLDER_ID)
