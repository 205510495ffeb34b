"""Weighted document vector for a fulltext configuration."""

from __future__ import annotations

from .expressions import VectorUnion, WeightedVector
from .types import FulltextConfig


def build_vector(config: FulltextConfig) -> VectorUnion:
    """One ``setweight(to_tsvector(...))`` per column, in column spec order.

    Columns are wrapped in ``COALESCE(..., '')`` so a NULL column contributes
    nothing instead of nulling the whole document.
    """
    return VectorUnion(
        tuple(
            WeightedVector(column=spec.name, weight=spec.weight, dictionary=config.dictionary)
            for spec in config.column_specs
        )
    )
