"""Tests for DBML exporter."""

from dataclasses import replace

import pytest

from schemalint.exceptions import InvalidInputError
from schemalint.schema.exporter import render_table, render_tables
from schemalint.schema.models import AutoIncrement, Identifier
from schemalint.types import DataType, IndexColumnOrder, KeyType
from tests.helpers import (
    make_column,
    make_index,
    make_key,
    make_relationship,
    make_table,
)


def _users_and_orders():
    users_id = replace(make_column("id"), auto_increment=AutoIncrement())
    email = make_column("email", "varchar(200)", DataType.STRING)
    nickname = make_column("nickname", "varchar(50)", DataType.STRING, nullable=True, default="'anon'")
    users = make_table(
        "users",
        columns=[users_id, email, nickname],
        primary_key=make_key([users_id]),
        unique_keys=[make_key([email], KeyType.UNIQUE)],
        indexes=[make_index("ix_users_email", [email], included=[nickname], unique=True)],
    )

    orders_id = make_column("id")
    user_id = make_column("user_id")
    note = make_column("note", "text", DataType.TEXT, nullable=True, default='say "hi"')
    fk = make_relationship("orders", [user_id], "users", [users_id])
    orders = make_table(
        "orders",
        columns=[orders_id, user_id, note],
        primary_key=make_key([orders_id]),
        indexes=[make_index(None, [user_id, (orders_id, IndexColumnOrder.DESCENDING)])],
        parent_keys=[fk],
    )
    return replace(users, child_keys=(fk,)), orders


EXPECTED_DBML = """\
Table users {
    id int [not null, increment, primary key]
    email varchar(200) [not null, unique key]
    nickname varchar(50) [null, default: "'anon'"]

    Indexes {
        email [name: 'ix_users_email', unique, note: 'include: nickname']
    }
}

Table orders {
    id int [not null, primary key]
    user_id int [not null]
    note text [null, default: "say \\"hi\\""]

    Indexes {
        (user_id, id)
    }
}

Ref: orders.user_id > users.id"""


class TestRenderTables:
    def test_full_output(self):
        assert render_tables(_users_and_orders()) == EXPECTED_DBML

    def test_rendering_is_repeatable(self):
        tables = _users_and_orders()
        assert render_tables(tables) == render_tables(tables)

    def test_no_tables_renders_empty(self):
        assert render_tables([]) == ""

    def test_none_rejected(self):
        with pytest.raises(InvalidInputError):
            render_tables(None)

    def test_relationship_section_omitted_without_foreign_keys(self):
        tables = [make_table("a", columns=[make_column("id")]), make_table("b")]

        output = render_tables(tables)

        assert "Ref:" not in output
        assert output == "Table a {\n    id int [not null]\n}\n\nTable b {\n}"

    def test_unique_parent_index_gives_one_to_one_marker(self):
        parent_a, parent_b = make_column("a"), make_column("b")
        child_a, child_b = make_column("a"), make_column("b")
        fk = make_relationship("child", [child_a, child_b], "parent", [parent_a, parent_b])
        parent = make_table(
            "parent",
            columns=[parent_a, parent_b],
            indexes=[make_index("ux_ba", [parent_b, parent_a], unique=True)],
            child_keys=[fk],
        )
        child = make_table("child", columns=[child_a, child_b], parent_keys=[fk])

        lines = render_tables([parent, child]).splitlines()

        assert lines[-2:] == ["Ref: child.a - parent.a", "Ref: child.b - parent.b"]

    def test_parent_outside_input_gives_one_to_many_marker(self):
        user_id = make_column("user_id")
        fk = make_relationship("profiles", [user_id], "users", [make_column("id")])
        profiles = make_table("profiles", columns=[user_id], primary_key=make_key([user_id]), parent_keys=[fk])

        assert render_tables([profiles]).endswith("Ref: profiles.user_id > users.id")


class TestRenderTable:
    def test_schema_qualified_name_without_quotes(self):
        table = make_table("[users]", schema="[dbo]")
        assert render_table(table)[0] == "Table dbo.users {"

    def test_multi_column_primary_key_not_marked_on_columns(self):
        a, b = make_column("a"), make_column("b")
        table = make_table("t", columns=[a, b], primary_key=make_key([a, b]))

        assert render_table(table)[1:3] == ["    a int [not null]", "    b int [not null]"]

    def test_index_without_columns_skipped(self):
        table = make_table("t", columns=[make_column("a")], indexes=[make_index("ix_empty", [])])

        assert render_table(table) == ["Table t {", "    a int [not null]", "}"]

    def test_unnamed_plain_index_has_no_options(self):
        a = make_column("a")
        table = make_table("t", columns=[a], indexes=[make_index(None, [a])])

        assert "        a" in render_table(table)

    def test_name_parts_other_than_schema_ignored(self):
        table = make_table("t")
        table = replace(table, name=Identifier.qualified("srv", "db", "dbo", "t"))

        assert render_table(table)[0] == "Table dbo.t {"
