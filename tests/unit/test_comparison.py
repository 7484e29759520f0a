"""Tests for column comparison and naming helpers."""

from schemalint.schema.comparison import (
    describe_index,
    describe_key,
    is_prefix,
    is_same_or_strict_subset,
    is_unique_column_set,
    remove_quote_chars,
    visible_name,
)
from schemalint.schema.models import Identifier
from schemalint.types import IndexColumnOrder, KeyType
from tests.helpers import make_column, make_index, make_key, make_table


class TestIsPrefix:
    def test_leading_elements_match(self):
        assert is_prefix(["a"], ["a", "b"])
        assert is_prefix(["a", "b"], ["a", "b"])

    def test_order_matters(self):
        assert not is_prefix(["b"], ["a", "b"])

    def test_empty_prefix_never_matches(self):
        assert not is_prefix([], ["a"])

    def test_longer_prefix_does_not_match(self):
        assert not is_prefix(["a", "b"], ["a"])


class TestIsSameOrStrictSubset:
    def test_equal_sets(self):
        assert is_same_or_strict_subset({"a"}, {"a"})
        assert is_same_or_strict_subset(set(), set())

    def test_subset_either_direction(self):
        assert is_same_or_strict_subset({"a"}, {"a", "b"})
        assert is_same_or_strict_subset({"a", "b"}, {"a"})

    def test_overlapping_sets(self):
        assert not is_same_or_strict_subset({"a", "b"}, {"a", "c"})


class TestIsUniqueColumnSet:
    def test_matches_primary_key_in_any_order(self):
        a, b = make_column("a"), make_column("b")
        table = make_table("t", columns=[a, b], primary_key=make_key([a, b]))

        assert is_unique_column_set(table, ["b", "a"])
        assert not is_unique_column_set(table, ["a"])

    def test_matches_unique_key_and_unique_index(self):
        a, b, c = make_column("a"), make_column("b"), make_column("c")
        table = make_table(
            "t",
            columns=[a, b, c],
            unique_keys=[make_key([b], KeyType.UNIQUE)],
            indexes=[make_index("ix_c", [c], unique=True), make_index("ix_a", [a])],
        )

        assert is_unique_column_set(table, ["b"])
        assert is_unique_column_set(table, ["c"])
        assert not is_unique_column_set(table, ["a"])

    def test_empty_set_is_not_unique(self):
        assert not is_unique_column_set(make_table("t"), [])


class TestNames:
    def test_remove_quote_chars(self):
        assert remove_quote_chars('[dbo]."user`s"') == "dbo.users"

    def test_visible_name_uses_schema_and_local_name(self):
        name = Identifier.qualified("app", "[dbo]", "[users]")
        assert visible_name(name) == "dbo.users"

    def test_visible_name_without_schema(self):
        assert visible_name(Identifier('"users"')) == "users"


class TestDescribe:
    def test_named_key(self):
        key = make_key([make_column("id")], name="pk_users")
        assert describe_key(key, "primary key") == "primary key 'pk_users' (id)"

    def test_unnamed_key(self):
        key = make_key([make_column("a"), make_column("b")], KeyType.UNIQUE)
        assert describe_key(key, "unique key") == "unique key (a, b)"

    def test_index_marks_descending_columns(self):
        index = make_index(
            "ix", [make_column("a"), (make_column("b"), IndexColumnOrder.DESCENDING)]
        )
        assert describe_index(index) == "index 'ix' (a, b DESC)"
