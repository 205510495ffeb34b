"""pgfulltext data model."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .exceptions import ConfigurationError
from .normalisation import NORMALISATION_FLAGS, NormalisationRequest

DEFAULT_DICTIONARY = "english"
DEFAULT_WEIGHT = "A"
WEIGHTS = ("A", "B", "C", "D")

_IDENT_PART = r'(?:[A-Za-z_][A-Za-z0-9_$]*|"(?:[^"]|"")+")'
_COLUMN_RE = re.compile(rf"{_IDENT_PART}(?:\.{_IDENT_PART})*")
_DICTIONARY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)?")


def normalise_weight(value: Any, *, column: str, entity: str | None = None) -> str:
    """Map a declared weight tag onto one of ``A``-``D``.

    Any falsy value, or ``True``, means the default weight.
    """
    if value is True or not value:
        return DEFAULT_WEIGHT
    if isinstance(value, str) and value.upper() in WEIGHTS:
        return value.upper()
    raise ConfigurationError(
        f"Invalid fulltext weight {value!r} for column '{column}'"
        + (f" of '{entity}'" if entity else "")
        + "; expected one of A, B, C, D",
        entity=entity,
    )


def check_column_name(name: Any, *, entity: str | None = None) -> str:
    where = f" of '{entity}'" if entity else ""
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"Empty fulltext column name{where}", entity=entity)
    if not _COLUMN_RE.fullmatch(name):
        raise ConfigurationError(
            f"Fulltext column {name!r}{where} is not a valid SQL identifier",
            entity=entity,
        )
    return name


@dataclass(frozen=True)
class ColumnSpec:
    """A searchable column and its ``setweight`` label."""

    name: str
    weight: str = DEFAULT_WEIGHT

    def __post_init__(self) -> None:
        check_column_name(self.name)
        object.__setattr__(self, "weight", normalise_weight(self.weight, column=self.name))

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "weight": self.weight}


@dataclass(frozen=True)
class FulltextConfig:
    """Search configuration for one searchable entity (table or record set).

    Validated on construction; an entity with nothing to search is rejected
    here rather than at query time.
    """

    entity: str
    column_specs: tuple[ColumnSpec, ...]
    dictionary: str = DEFAULT_DICTIONARY
    normalisation_flags: Mapping[str, int] = field(default_factory=lambda: NORMALISATION_FLAGS, hash=False)

    def __post_init__(self) -> None:
        specs = tuple(self.column_specs)
        object.__setattr__(self, "column_specs", specs)
        if not specs:
            raise ConfigurationError(
                f"No pgfulltext column spec found for '{self.entity}'",
                entity=self.entity,
            )
        seen: set[str] = set()
        for spec in specs:
            if spec.name in seen:
                raise ConfigurationError(
                    f"Duplicate fulltext column '{spec.name}' for '{self.entity}'",
                    entity=self.entity,
                )
            seen.add(spec.name)
        if not isinstance(self.dictionary, str) or not _DICTIONARY_RE.fullmatch(self.dictionary):
            raise ConfigurationError(
                f"Invalid text search dictionary {self.dictionary!r} for '{self.entity}'",
                entity=self.entity,
            )
        object.__setattr__(self, "normalisation_flags", self._checked_flags())

    def _checked_flags(self) -> Mapping[str, int]:
        flags = self.normalisation_flags
        if not isinstance(flags, Mapping):
            raise ConfigurationError(
                f"Normalisation flags for '{self.entity}' must be a mapping, got {flags!r}",
                entity=self.entity,
            )
        for name, bit in flags.items():
            if not isinstance(name, str) or isinstance(bit, bool) or not isinstance(bit, int) or bit < 0:
                raise ConfigurationError(
                    f"Invalid normalisation flag {name!r}={bit!r} for '{self.entity}'; "
                    "expected a name and a non-negative int",
                    entity=self.entity,
                )
        return MappingProxyType(dict(flags))

    @property
    def column_names(self) -> list[str]:
        return [spec.name for spec in self.column_specs]

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "entity": self.entity,
            "columns": [spec.to_dict() for spec in self.column_specs],
        }
        if self.dictionary != DEFAULT_DICTIONARY:
            d["dictionary"] = self.dictionary
        if dict(self.normalisation_flags) != dict(NORMALISATION_FLAGS):
            d["normalisation_flags"] = dict(self.normalisation_flags)
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FulltextConfig:
        entity = data["entity"]
        columns = data.get("columns") or []
        if isinstance(columns, Mapping):
            columns = [{"name": name, "weight": weight} for name, weight in columns.items()]
        specs = []
        for column in columns:
            name = check_column_name(column.get("name"), entity=entity)
            weight = normalise_weight(column.get("weight"), column=name, entity=entity)
            specs.append(ColumnSpec(name, weight))
        flags = data.get("normalisation_flags")
        return cls(
            entity=entity,
            column_specs=tuple(specs),
            dictionary=data.get("dictionary", DEFAULT_DICTIONARY),
            normalisation_flags=NORMALISATION_FLAGS if flags is None else dict(flags),
        )


@dataclass(frozen=True)
class SearchOptions:
    """Per-call search options."""

    normalisation: NormalisationRequest | None = None
    rows: int | None = None

    @property
    def limit(self) -> int | None:
        """Row cap to apply; non-positive or non-integer values mean none."""
        rows = self.rows
        if isinstance(rows, bool) or not isinstance(rows, int) or rows <= 0:
            return None
        return rows


@dataclass(frozen=True, eq=False)
class BindParameter:
    """The search term bound to every ``?`` of one search call.

    Compared by identity: one instance is one logical binding.
    """

    value: Any
    name: str = "ts_query"


@dataclass(frozen=True)
class SqlFragment:
    """Compiled SQL text and its bindings, in placeholder order."""

    sql: str
    params: tuple[BindParameter, ...] = ()

    @property
    def values(self) -> list[Any]:
        return [p.value for p in self.params]


@dataclass(frozen=True)
class SearchFragment:
    """Everything an executor needs to run one fulltext search."""

    predicate: SqlFragment
    order_by: SqlFragment
    normalisation: int
    limit: int | None = None
    descending: bool = True

    @property
    def bound_parameters(self) -> tuple[BindParameter, ...]:
        """Logically distinct bindings across predicate and ordering."""
        seen: list[BindParameter] = []
        for param in (*self.predicate.params, *self.order_by.params):
            if not any(param is s for s in seen):
                seen.append(param)
        return tuple(seen)

    @property
    def order_sql(self) -> str:
        return f"{self.order_by.sql} {'DESC' if self.descending else 'ASC'}"

    def positional_values(self) -> list[Any]:
        """Bind values for ``WHERE <predicate> ORDER BY <rank>`` in text order."""
        return self.predicate.values + self.order_by.values
