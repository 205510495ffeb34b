"""Tests for assembling fulltext search fragments."""

import logging

import pytest

from pgfulltext.columns import build_config
from pgfulltext.search import FulltextSearch
from pgfulltext.types import ColumnSpec, FulltextConfig, SearchOptions

COLUMNS_INFO = {
    "id": {"data_type": "integer"},
    "title": {"data_type": "text", "pgfulltext": "A"},
    "content": {"data_type": "text", "pgfulltext": "B"},
}

VECTOR_SQL = (
    "( setweight(to_tsvector('english', COALESCE(title, '')), 'A')"
    " || ' ' || "
    "setweight(to_tsvector('english', COALESCE(content, '')), 'B') )"
)
QUERY_SQL = "plainto_tsquery('english', ?)"


@pytest.fixture
def fts():
    return FulltextSearch(build_config("articles", COLUMNS_INFO))


class TestSearchDefaults:
    def test_predicate(self, fts):
        fragment = fts.search("cats")
        assert fragment.predicate.sql == f"{QUERY_SQL} @@ {VECTOR_SQL}"

    def test_order_by_rank_desc(self, fts):
        fragment = fts.search("cats")
        assert fragment.order_by.sql == f"ts_rank_cd({VECTOR_SQL}, {QUERY_SQL}, 0)"
        assert fragment.descending is True
        assert fragment.order_sql.endswith(" DESC")

    def test_no_normalisation_no_limit(self, fts):
        fragment = fts.search("cats")
        assert fragment.normalisation == 0
        assert fragment.limit is None

    def test_single_vector_over_configured_columns(self, fts):
        fragment = fts.search("cats")
        for sql in (fragment.predicate.sql, fragment.order_by.sql):
            assert sql.count(VECTOR_SQL) == 1
            assert sql.count("to_tsvector(") == 2
        assert "COALESCE(id" not in fragment.predicate.sql


class TestSearchBinding:
    def test_predicate_and_rank_share_one_binding(self, fts):
        fragment = fts.search("cats")
        assert fragment.predicate.params[0] is fragment.order_by.params[0]
        assert len(fragment.bound_parameters) == 1
        assert fragment.bound_parameters[0].value == "cats"
        assert fragment.bound_parameters[0].name == "ts_query"

    def test_positional_values(self, fts):
        fragment = fts.search("cats")
        text = f"{fragment.predicate.sql} {fragment.order_sql}"
        assert text.count("?") == len(fragment.positional_values()) == 2
        assert fragment.positional_values() == ["cats", "cats"]

    def test_hostile_term_stays_out_of_sql(self, fts):
        term = "'); DELETE FROM articles; --"
        fragment = fts.search(term)
        assert term not in fragment.predicate.sql
        assert term not in fragment.order_by.sql
        assert fragment.bound_parameters[0].value == term

    def test_empty_term_is_valid(self, fts):
        fragment = fts.search("")
        assert fragment.positional_values() == ["", ""]


class TestSearchOptions:
    def test_rows_limit(self, fts):
        assert fts.search("cats", rows=10).limit == 10

    @pytest.mark.parametrize("rows", [0, -1, None])
    def test_non_positive_rows_means_no_limit(self, fts, rows):
        assert fts.search("cats", rows=rows).limit is None

    def test_rank_normalisation(self, fts):
        fragment = fts.search("cats", normalisation={"rank": True})
        assert fragment.normalisation == 32
        assert fragment.order_by.sql.endswith(", 32)")

    def test_combined_normalisation(self, fts):
        fragment = fts.search("cats", normalisation={"rank": True, "log_length": True})
        assert fragment.normalisation == 33

    def test_unknown_normalisation_ignored(self, fts):
        fragment = fts.search("cats", normalisation={"nonsense": True})
        assert fragment.normalisation == 0

    def test_normalisation_does_not_touch_predicate(self, fts):
        plain = fts.search("cats")
        ranked = fts.search("cats", normalisation={"rank"})
        assert plain.predicate.sql == ranked.predicate.sql

    def test_build_with_options(self, fts):
        fragment = fts.build("cats", SearchOptions(normalisation={"length"}, rows=5))
        assert fragment.normalisation == 2
        assert fragment.limit == 5

    def test_custom_flag_table(self):
        config = build_config("articles", COLUMNS_INFO, normalisation_flags={"rank": 32})
        fragment = FulltextSearch(config).search("cats", normalisation={"rank", "length"})
        assert fragment.normalisation == 32


class TestSearchDeterminism:
    def test_repeat_calls_same_shape(self, fts):
        a = fts.search("cats", normalisation={"rank"}, rows=10)
        b = fts.search("cats", normalisation={"rank"}, rows=10)
        assert a.predicate.sql == b.predicate.sql
        assert a.order_by.sql == b.order_by.sql
        assert a.limit == b.limit
        assert a.normalisation == b.normalisation
        assert a.positional_values() == b.positional_values()

    def test_call_invariant_expressions_built_once(self, fts):
        vector = fts.vector
        fts.search("cats")
        fts.search("dogs")
        assert fts.vector is vector

    def test_dictionary_override(self):
        config = FulltextConfig(
            entity="articles",
            column_specs=(ColumnSpec("title"),),
            dictionary="english_nostop",
        )
        fragment = FulltextSearch(config).search("cats")
        assert fragment.predicate.sql == (
            "plainto_tsquery('english_nostop', ?) @@ "
            "( setweight(to_tsvector('english_nostop', COALESCE(title, '')), 'A') )"
        )


class TestSearchLogging:
    def test_term_not_logged(self, fts, caplog):
        with caplog.at_level(logging.DEBUG, logger="pgfulltext"):
            fts.search("secret-term", rows=3)
        assert "articles" in caplog.text
        assert "secret-term" not in caplog.text
