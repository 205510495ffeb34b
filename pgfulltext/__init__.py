"""pgfulltext — weighted PostgreSQL fulltext search query construction."""

import logging

from .columns import build_config, resolve_column_specs
from .exceptions import ConfigurationError, PgFulltextError
from .filters import Filter
from .normalisation import NORMALISATION_FLAGS, encode_normalisation
from .rank_by import RankBy
from .search import FulltextSearch
from .searchable import AsyncSearchable, AsyncSearchableConfig, Searchable, SearchableConfig
from .types import (
    BindParameter,
    ColumnSpec,
    FulltextConfig,
    SearchFragment,
    SearchOptions,
    SqlFragment,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AsyncSearchable",
    "AsyncSearchableConfig",
    "Searchable",
    "SearchableConfig",
    "FulltextSearch",
    "PgFulltextError",
    "ConfigurationError",
    "Filter",
    "RankBy",
    "NORMALISATION_FLAGS",
    "encode_normalisation",
    "build_config",
    "resolve_column_specs",
    "BindParameter",
    "ColumnSpec",
    "FulltextConfig",
    "SearchFragment",
    "SearchOptions",
    "SqlFragment",
]
