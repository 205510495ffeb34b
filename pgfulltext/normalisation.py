"""Rank normalisation flags for ``ts_rank_cd``.

Usage::

    from pgfulltext.normalisation import encode_normalisation

    encode_normalisation({"rank", "log_length"})      # 33
    encode_normalisation({"rank": True, "length": False})  # 32
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

# Bit values as documented for PostgreSQL's ranking functions.
NORMALISATION_FLAGS: Mapping[str, int] = MappingProxyType(
    {
        "log_length": 1,
        "length": 2,
        "harmonic_distance": 4,
        "unique_words": 8,
        "log_unique_words": 16,
        "rank": 32,
    }
)

NormalisationRequest = Iterable[str] | Mapping[str, object]


def requested_flags(request: NormalisationRequest | None) -> list[str]:
    """Flag names switched on by ``request``, in request order."""
    if not request:
        return []
    if isinstance(request, Mapping):
        return [name for name, enabled in request.items() if enabled]
    if isinstance(request, str):
        return [request]
    return list(request)


def encode_normalisation(
    request: NormalisationRequest | None,
    flags: Mapping[str, int] = NORMALISATION_FLAGS,
) -> int:
    """OR together the bits of every requested flag found in ``flags``.

    Names missing from ``flags`` are ignored. No request means no
    normalisation (``0``).
    """
    value = 0
    for name in requested_flags(request):
        bit = flags.get(name)
        if bit is not None:
            value |= bit
    return value
