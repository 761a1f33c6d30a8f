"""Query tree nodes handed to the index backend."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class And:
    """All children must match. An empty ``And`` matches everything."""

    children: tuple[QueryNode, ...] = ()


@dataclass(frozen=True)
class Or:
    """At least one child must match. An empty ``Or`` matches nothing."""

    children: tuple[QueryNode, ...] = ()


@dataclass(frozen=True)
class FieldExact:
    """Exact match of ``term`` on ``field``."""

    field: str
    term: str


@dataclass(frozen=True)
class FieldBoosted:
    """Exact match of ``term`` on ``field`` with a scoring weight."""

    field: str
    term: str
    weight: float


@dataclass(frozen=True)
class FieldPrefix:
    """Match of any ``field`` value starting with ``term``.

    ``boost`` stays at 1.0 unless the field carries a weight.
    """

    field: str
    term: str
    boost: float = 1.0


@dataclass(frozen=True)
class RangeInt:
    """Inclusive integer range on ``field``."""

    field: str
    low: int
    high: int


QueryNode = And | Or | FieldExact | FieldBoosted | FieldPrefix | RangeInt
