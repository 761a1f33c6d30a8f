"""Render query trees in the classic full-text query-syntax notation.

The rendered form is used for debug logging and ``--explain`` output::

    +(+(artist:abc) +(artist:def*)) +(folder:/var/music1)
"""

from __future__ import annotations

from media_search.search.ast_nodes import (
    And,
    FieldBoosted,
    FieldExact,
    FieldPrefix,
    Or,
    QueryNode,
    RangeInt,
)


def _format_weight(weight: float) -> str:
    return repr(float(weight))


def _render(node: QueryNode, *, root: bool) -> str:
    if isinstance(node, And):
        body = " ".join(f"+{_render(child, root=False)}" for child in node.children)
        return body if root else f"({body})"
    if isinstance(node, Or):
        body = " ".join(_render(child, root=False) for child in node.children)
        return f"({body})"
    if isinstance(node, FieldExact):
        return f"{node.field}:{node.term}"
    if isinstance(node, FieldBoosted):
        return f"({node.field}:{node.term})^{_format_weight(node.weight)}"
    if isinstance(node, FieldPrefix):
        text = f"{node.field}:{node.term}*"
        if node.boost != 1.0:
            return f"({text})^{_format_weight(node.boost)}"
        return text
    if isinstance(node, RangeInt):
        return f"{node.field}:[{node.low} TO {node.high}]"
    raise TypeError(f"Not a query node: {node!r}")


def format_query(node: QueryNode) -> str:
    """Return the textual form of *node*."""
    return _render(node, root=True)
