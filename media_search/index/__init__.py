"""SQLite-backed search index: storage, writer and searcher."""

from media_search.index.models import IndexBase, IndexDocument, IndexTerm
from media_search.index.session import delete_index, get_index_session

__all__ = [
    "IndexBase",
    "IndexDocument",
    "IndexTerm",
    "delete_index",
    "get_index_session",
]
