"""Assemble a complete fulltext search fragment.

Usage::

    from pgfulltext.columns import build_config
    from pgfulltext.search import FulltextSearch

    fts = FulltextSearch(build_config("articles", columns_info))
    fragment = fts.search("cats", normalisation={"rank"}, rows=10)
"""

from __future__ import annotations

import logging

from .expressions import Match, PlainQuery, VectorUnion
from .filters import Filter
from .normalisation import NormalisationRequest, encode_normalisation
from .query import build_query
from .rank_by import RankBy
from .types import BindParameter, FulltextConfig, SearchFragment, SearchOptions
from .vector import build_vector

logger = logging.getLogger(__name__)


class FulltextSearch:
    """Builds search fragments for one :class:`FulltextConfig`.

    The vector, query and match expressions depend only on the configuration
    and are built once here; instances are read-only and can be shared
    between threads. Rows with equal rank come back in whatever order the
    executor produces.
    """

    def __init__(self, config: FulltextConfig):
        self.config = config
        self.vector: VectorUnion = build_vector(config)
        self.query: PlainQuery = build_query(config.dictionary)
        self.match: Match = Filter.match(self.query, self.vector)
        logger.debug(
            "Built fulltext vector for %s over %s",
            config.entity,
            ", ".join(config.column_names),
        )

    def normalisation(self, request: NormalisationRequest | None) -> int:
        return encode_normalisation(request, self.config.normalisation_flags)

    def search(
        self,
        term: str,
        *,
        normalisation: NormalisationRequest | None = None,
        rows: int | None = None,
    ) -> SearchFragment:
        """Predicate, rank ordering and row cap for ``term``.

        ``rows`` must be a positive int to cap results; anything else leaves
        the result set uncapped.
        """
        return self.build(term, SearchOptions(normalisation=normalisation, rows=rows))

    def build(self, term: str, options: SearchOptions | None = None) -> SearchFragment:
        options = options or SearchOptions()
        bound = BindParameter(term)
        norm = self.normalisation(options.normalisation)
        rank = RankBy.cover_density(self.vector, self.query, norm)

        fragment = SearchFragment(
            predicate=Filter.compile(self.match, bound),
            order_by=RankBy.compile(rank, bound),
            normalisation=norm,
            limit=options.limit,
        )
        logger.debug(
            "Assembled fulltext search on %s (normalisation=%d, limit=%s)",
            self.config.entity,
            norm,
            fragment.limit,
        )
        return fragment
