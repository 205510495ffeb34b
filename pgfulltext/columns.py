"""Resolve weighted fulltext columns from schema metadata.

A column takes part in search when its attributes carry the weight tag::

    columns_info = {
        "id": {"data_type": "integer"},
        "title": {"data_type": "text", "pgfulltext": "A"},
        "body": {"data_type": "text", "pgfulltext": "B"},
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .exceptions import ConfigurationError
from .normalisation import NORMALISATION_FLAGS
from .types import DEFAULT_DICTIONARY, ColumnSpec, FulltextConfig, check_column_name, normalise_weight

logger = logging.getLogger(__name__)

WEIGHT_TAG = "pgfulltext"


def resolve_column_specs(
    columns_info: Mapping[str, Mapping[str, Any]],
    *,
    entity: str,
    tag: str = WEIGHT_TAG,
) -> tuple[ColumnSpec, ...]:
    """Columns declaring ``tag``, in ``columns_info`` order.

    Presence of the ``tag`` key decides inclusion, not its value: a column
    tagged ``None`` or ``False`` is searched at the default weight ``A``.
    """
    specs = []
    for name, attrs in columns_info.items():
        if not attrs or tag not in attrs:
            continue
        check_column_name(name, entity=entity)
        specs.append(ColumnSpec(name, normalise_weight(attrs[tag], column=name, entity=entity)))

    if not specs:
        raise ConfigurationError(f"No pgfulltext column spec found for '{entity}'", entity=entity)
    return tuple(specs)


def build_config(
    entity: str,
    columns_info: Mapping[str, Mapping[str, Any]],
    *,
    dictionary: str = DEFAULT_DICTIONARY,
    normalisation_flags: Mapping[str, int] = NORMALISATION_FLAGS,
    tag: str = WEIGHT_TAG,
) -> FulltextConfig:
    """Build a validated :class:`FulltextConfig` from column metadata."""
    config = FulltextConfig(
        entity=entity,
        column_specs=resolve_column_specs(columns_info, entity=entity, tag=tag),
        dictionary=dictionary,
        normalisation_flags=normalisation_flags,
    )
    logger.debug(
        "Resolved %d fulltext columns for %s (dictionary=%s)",
        len(config.column_specs),
        entity,
        dictionary,
    )
    return config
