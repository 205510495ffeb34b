"""RankBy builder for ``ORDER BY`` relevance expressions.

Usage::

    from pgfulltext.rank_by import RankBy

    rank = RankBy.cover_density(vector, query, normalisation=32)
    fragment = RankBy.compile(rank, term)
"""

from __future__ import annotations

from .expressions import CoverDensityRank, Expression, compile_expression
from .types import BindParameter, SqlFragment


class RankBy:
    """Static methods that produce ranking expressions."""

    @staticmethod
    def cover_density(vector: Expression, query: Expression, normalisation: int = 0) -> CoverDensityRank:
        """Cover density ranking: ``ts_rank_cd(vector, query, normalisation)``"""
        return CoverDensityRank(vector=vector, query=query, normalisation=normalisation)

    @staticmethod
    def compile(rank: Expression, term: BindParameter) -> SqlFragment:
        """Serialize ``rank`` with ``term`` bound to its query placeholder."""
        return compile_expression(rank, term)
