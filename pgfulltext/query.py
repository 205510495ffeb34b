"""Parsed query expression for a plain-text search term."""

from __future__ import annotations

from .expressions import PlainQuery
from .types import DEFAULT_DICTIONARY


def build_query(dictionary: str = DEFAULT_DICTIONARY) -> PlainQuery:
    """``plainto_tsquery('<dictionary>', ?)``; the term is always bound, never inlined."""
    return PlainQuery(dictionary=dictionary)
