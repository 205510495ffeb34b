"""Typed SQL expression nodes for PostgreSQL text search.

Nodes are immutable and carry no per-call data. The search term only enters
at :func:`compile_expression`, where every :class:`TermPlaceholder` renders
as ``?`` and records the bound parameter.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import BindParameter, SqlFragment


def quote_literal(value: str) -> str:
    """Render a trusted configuration value as an SQL string constant."""
    return "'" + value.replace("'", "''") + "'"


class Expression:
    """Base class for SQL expression nodes."""

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class TermPlaceholder(Expression):
    """Positional placeholder for the caller's search term."""

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        if term is None:
            raise ValueError("expression references the search term but none was bound")
        params.append(term)
        return "?"


@dataclass(frozen=True)
class WeightedVector(Expression):
    """``setweight(to_tsvector(...))`` over one column, NULL-safe."""

    column: str
    weight: str
    dictionary: str

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        return (
            f"setweight(to_tsvector({quote_literal(self.dictionary)}, "
            f"COALESCE({self.column}, '')), {quote_literal(self.weight)})"
        )


@dataclass(frozen=True)
class VectorUnion(Expression):
    """Per-column vectors concatenated into one document, parenthesized."""

    parts: tuple[WeightedVector, ...]

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        inner = " || ' ' || ".join(p.render(params, term) for p in self.parts)
        return f"( {inner} )"


@dataclass(frozen=True)
class PlainQuery(Expression):
    """``plainto_tsquery`` over the bound term."""

    dictionary: str
    term: TermPlaceholder = TermPlaceholder()

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        return f"plainto_tsquery({quote_literal(self.dictionary)}, {self.term.render(params, term)})"


@dataclass(frozen=True)
class Match(Expression):
    """``query @@ vector``."""

    query: Expression
    vector: Expression

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        return f"{self.query.render(params, term)} @@ {self.vector.render(params, term)}"


@dataclass(frozen=True)
class CoverDensityRank(Expression):
    """``ts_rank_cd(vector, query, normalisation)``."""

    vector: Expression
    query: Expression
    normalisation: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.normalisation, bool) or not isinstance(self.normalisation, int):
            raise ValueError(f"normalisation must be an int, got {self.normalisation!r}")
        if self.normalisation < 0:
            raise ValueError(f"normalisation must be >= 0, got {self.normalisation}")

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        return (
            f"ts_rank_cd({self.vector.render(params, term)}, "
            f"{self.query.render(params, term)}, {self.normalisation})"
        )


@dataclass(frozen=True)
class And(Expression):
    """Logical AND of sub-expressions, each parenthesized."""

    operands: tuple[Expression, ...]

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        return " AND ".join(f"({o.render(params, term)})" for o in self.operands)


@dataclass(frozen=True)
class Raw(Expression):
    """Caller-supplied SQL with its own ``?`` bindings, passed through as-is."""

    sql: str
    params: tuple[BindParameter, ...] = ()

    def render(self, params: list[BindParameter], term: BindParameter | None) -> str:
        params.extend(self.params)
        return self.sql


def compile_expression(expr: Expression, term: BindParameter | None = None) -> SqlFragment:
    """Serialize ``expr`` to SQL text, binding ``term`` to each placeholder."""
    params: list[BindParameter] = []
    sql = expr.render(params, term)
    return SqlFragment(sql=sql, params=tuple(params))
