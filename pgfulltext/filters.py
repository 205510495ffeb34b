"""Filter builder for fulltext ``WHERE`` predicates.

Usage::

    from pgfulltext.filters import Filter

    where = Filter.and_(
        fragment.predicate,
        Filter.raw("published = ?", True),
    )
"""

from __future__ import annotations

from typing import Any

from .expressions import And, Expression, Match, Raw, compile_expression
from .types import BindParameter, SqlFragment


class Filter:
    """Static methods that produce ``WHERE`` predicates."""

    @staticmethod
    def match(query: Expression, vector: Expression) -> Match:
        """Fulltext match: ``query @@ vector``"""
        return Match(query=query, vector=vector)

    @staticmethod
    def compile(predicate: Expression, term: BindParameter) -> SqlFragment:
        """Serialize ``predicate`` with ``term`` bound to its query placeholder."""
        return compile_expression(predicate, term)

    @staticmethod
    def raw(sql: str, *values: Any, placeholders: int | None = None) -> SqlFragment:
        """Caller SQL with one positional value per placeholder.

        Placeholders are counted as ``?`` characters unless ``placeholders``
        is given. Pass it for SQL that uses the jsonb ``?``, ``?|`` or ``?&``
        operators, which would otherwise be miscounted.
        """
        expected = sql.count("?") if placeholders is None else placeholders
        if expected != len(values):
            raise ValueError(f"expected {expected} values for {sql!r}, got {len(values)}")
        return SqlFragment(sql=sql, params=tuple(BindParameter(v, name=f"p{i}") for i, v in enumerate(values)))

    @staticmethod
    def and_(*predicates: SqlFragment) -> SqlFragment:
        """All predicates must hold. Bindings keep their textual order."""
        if not predicates:
            raise ValueError("and_() needs at least one predicate")
        if len(predicates) == 1:
            return predicates[0]
        return compile_expression(And(tuple(Raw(p.sql, p.params) for p in predicates)))
