"""Tokenize free-text search input into normalized terms."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

# Word characters only, matching the tokenizer used when documents are indexed.
_WORD_RE = re.compile(r"\w+")


@dataclass(frozen=True)
class Term:
    """A single normalized token.

    ``is_last`` is set only on the final token of a query, which is the one
    the user may still be typing.
    """

    text: str
    is_last: bool = False


def fold(value: str) -> str:
    """Strip diacritics and compatibility forms (``"Beyoncé"`` -> ``"Beyonce"``)."""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def analyze(raw: str | None) -> list[str]:
    """Split *raw* into lower-cased word tokens.

    Never raises: ``None``, empty or punctuation-only input yields ``[]``.
    """
    if not raw:
        return []
    tokens = (match.group(0).lower() for match in _WORD_RE.finditer(fold(raw)))
    return [token for token in tokens if token]


def tokenize(raw: str | None) -> list[Term]:
    """Tokenize a query string into terms, flagging the last one."""
    tokens = analyze(raw)
    last = len(tokens) - 1
    return [Term(text=token, is_last=i == last) for i, token in enumerate(tokens)]
