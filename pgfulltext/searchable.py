"""Fulltext search over record sets — sync and async."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Awaitable, Protocol, runtime_checkable

from .columns import WEIGHT_TAG, build_config
from .normalisation import NORMALISATION_FLAGS, NormalisationRequest
from .search import FulltextSearch
from .types import DEFAULT_DICTIONARY, ColumnSpec, FulltextConfig, SearchFragment


@runtime_checkable
class SearchableConfig(Protocol):
    """What a record set supplies to become fulltext searchable.

    ``execute`` receives the assembled fragment, ANDs it with any filters of
    its own, runs it and returns the rows.
    """

    entity: str

    def columns_info(self) -> Mapping[str, Mapping[str, Any]]: ...

    def execute(self, fragment: SearchFragment) -> Any: ...


@runtime_checkable
class AsyncSearchableConfig(Protocol):
    """Async variant of :class:`SearchableConfig`."""

    entity: str

    def columns_info(self) -> Mapping[str, Mapping[str, Any]]: ...

    def execute(self, fragment: SearchFragment) -> Awaitable[Any]: ...


def _build_search(
    source: SearchableConfig | AsyncSearchableConfig,
    dictionary: str,
    normalisation_flags: Mapping[str, int],
    column_specs: Iterable[ColumnSpec] | None,
    tag: str,
) -> FulltextSearch:
    """Shared configuration step for sync and async record sets."""
    if column_specs is not None:
        config = FulltextConfig(
            entity=source.entity,
            column_specs=tuple(column_specs),
            dictionary=dictionary,
            normalisation_flags=normalisation_flags,
        )
    else:
        config = build_config(
            source.entity,
            source.columns_info(),
            dictionary=dictionary,
            normalisation_flags=normalisation_flags,
            tag=tag,
        )
    return FulltextSearch(config)


class Searchable:
    """Fulltext search for a synchronous record set.

    The configuration is resolved when the wrapper is created, so a record
    set without weighted columns fails immediately with
    :class:`~pgfulltext.exceptions.ConfigurationError`.

    Usage::

        articles = Searchable(ArticleRecordSet(session))
        rows = articles.search("cats", normalisation={"rank": True}, rows=10)
    """

    def __init__(
        self,
        source: SearchableConfig,
        *,
        dictionary: str = DEFAULT_DICTIONARY,
        normalisation_flags: Mapping[str, int] = NORMALISATION_FLAGS,
        column_specs: Iterable[ColumnSpec] | None = None,
        tag: str = WEIGHT_TAG,
    ):
        self._source = source
        self._search = _build_search(source, dictionary, normalisation_flags, column_specs, tag)

    @property
    def config(self) -> FulltextConfig:
        return self._search.config

    def fragment(
        self,
        term: str,
        *,
        normalisation: NormalisationRequest | None = None,
        rows: int | None = None,
    ) -> SearchFragment:
        """Build the search fragment without executing it."""
        return self._search.search(term, normalisation=normalisation, rows=rows)

    def search(
        self,
        term: str,
        *,
        normalisation: NormalisationRequest | None = None,
        rows: int | None = None,
    ) -> Any:
        """Run a ranked fulltext search through the record set's executor."""
        fragment = self.fragment(term, normalisation=normalisation, rows=rows)
        return self._source.execute(fragment)


class AsyncSearchable:
    """Fulltext search for an async record set.

    Usage::

        articles = AsyncSearchable(AsyncArticleRecordSet(session))
        rows = await articles.search("cats", rows=10)
    """

    def __init__(
        self,
        source: AsyncSearchableConfig,
        *,
        dictionary: str = DEFAULT_DICTIONARY,
        normalisation_flags: Mapping[str, int] = NORMALISATION_FLAGS,
        column_specs: Iterable[ColumnSpec] | None = None,
        tag: str = WEIGHT_TAG,
    ):
        self._source = source
        self._search = _build_search(source, dictionary, normalisation_flags, column_specs, tag)

    @property
    def config(self) -> FulltextConfig:
        return self._search.config

    def fragment(
        self,
        term: str,
        *,
        normalisation: NormalisationRequest | None = None,
        rows: int | None = None,
    ) -> SearchFragment:
        """Build the search fragment without executing it."""
        return self._search.search(term, normalisation=normalisation, rows=rows)

    async def search(
        self,
        term: str,
        *,
        normalisation: NormalisationRequest | None = None,
        rows: int | None = None,
    ) -> Any:
        """Run a ranked fulltext search through the record set's executor."""
        fragment = self.fragment(term, normalisation=normalisation, rows=rows)
        return await self._source.execute(fragment)
