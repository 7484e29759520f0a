"""Tests for relationship cardinality."""

from schemalint.schema.relationships import Cardinality, classify, render_relationships
from schemalint.types import KeyType
from tests.helpers import make_column, make_index, make_key, make_relationship, make_table


def _parent_and_child(**parent_kwargs):
    """A child table whose foreign key ``(a, b)`` references ``parent (a, b)``."""
    parent_a, parent_b = make_column("a"), make_column("b")
    child_a, child_b = make_column("a"), make_column("b")
    fk = make_relationship("child", [child_a, child_b], "parent", [parent_a, parent_b])
    parent = make_table("parent", columns=[parent_a, parent_b], child_keys=[fk], **parent_kwargs)
    child = make_table("child", columns=[child_a, child_b], parent_keys=[fk])
    return parent, child, fk, (parent_a, parent_b)


class TestClassify:
    def test_parent_unique_index_in_any_order_is_one_to_one(self):
        b, a = make_column("b"), make_column("a")
        parent, _, fk, _ = _parent_and_child(indexes=[make_index("ux_ba", [b, a], unique=True)])

        assert classify(parent, fk) is Cardinality.ONE_TO_ONE

    def test_parent_primary_key_is_one_to_one(self):
        a, b = make_column("a"), make_column("b")
        parent, _, fk, _ = _parent_and_child(primary_key=make_key([a, b]))

        assert classify(parent, fk) is Cardinality.ONE_TO_ONE

    def test_parent_unique_key_is_one_to_one(self):
        a, b = make_column("a"), make_column("b")
        parent, _, fk, _ = _parent_and_child(unique_keys=[make_key([b, a], KeyType.UNIQUE)])

        assert classify(parent, fk) is Cardinality.ONE_TO_ONE

    def test_parent_non_unique_index_is_one_to_many(self):
        a, b = make_column("a"), make_column("b")
        parent, _, fk, _ = _parent_and_child(indexes=[make_index("ix_ab", [a, b])])

        assert classify(parent, fk) is Cardinality.ONE_TO_MANY

    def test_partial_key_match_is_one_to_many(self):
        a = make_column("a")
        parent, _, fk, _ = _parent_and_child(primary_key=make_key([a]))

        assert classify(parent, fk) is Cardinality.ONE_TO_MANY

    def test_child_table_keys_are_not_consulted(self):
        a, b = make_column("a"), make_column("b")
        fk = make_relationship("child", [a, b], "parent", [make_column("x"), make_column("y")])
        child = make_table("child", columns=[a, b], primary_key=make_key([a, b]), parent_keys=[fk])
        parent = make_table("parent", columns=[make_column("x"), make_column("y")])

        lines = render_relationships(child, {child.name: child, parent.name: parent})

        assert lines == ["Ref: child.a > parent.x", "Ref: child.b > parent.y"]

    def test_unknown_parent_is_one_to_many(self):
        _, _, fk, _ = _parent_and_child()

        assert classify(None, fk) is Cardinality.ONE_TO_MANY


class TestRenderRelationships:
    def test_one_line_per_column_pair(self):
        parent, child, _, _ = _parent_and_child()
        tables_by_name = {parent.name: parent, child.name: child}

        assert render_relationships(child, tables_by_name) == [
            "Ref: child.a > parent.a",
            "Ref: child.b > parent.b",
        ]

    def test_unique_parent_index_renders_one_to_one(self):
        b, a = make_column("b"), make_column("a")
        parent, child, _, _ = _parent_and_child(indexes=[make_index("ux_ba", [b, a], unique=True)])

        assert render_relationships(child, {parent.name: parent}) == [
            "Ref: child.a - parent.a",
            "Ref: child.b - parent.b",
        ]

    def test_parent_missing_from_lookup(self):
        b, a = make_column("b"), make_column("a")
        _, child, _, _ = _parent_and_child(indexes=[make_index("ux_ba", [b, a], unique=True)])

        assert render_relationships(child, {})[0] == "Ref: child.a > parent.a"

    def test_table_without_foreign_keys(self):
        assert render_relationships(make_table("t"), {}) == []
