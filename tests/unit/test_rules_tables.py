"""Tests for table rules."""

import pytest

from schemalint.lint.rules import DisabledObjectsRule, ForeignKeyMissingRule, OrphanedTableRule
from schemalint.lint.rules.tables import implied_table_name
from schemalint.schema.models import CheckConstraint, Trigger
from schemalint.types import KeyType, RuleLevel
from tests.helpers import (
    make_column,
    make_index,
    make_key,
    make_relationship,
    make_table,
    messages_of,
)


class TestDisabledObjectsRule:
    def test_every_disabled_object_reported_in_order(self):
        a, b = make_column("a"), make_column("b")
        fk = make_relationship("t", [b], "parent", [make_column("id")], name="fk_parent", enabled=False)
        table = make_table(
            "t",
            columns=[a, b],
            primary_key=make_key([a], name="pk_t", enabled=False),
            unique_keys=[make_key([b], KeyType.UNIQUE, name="uk_b", enabled=False)],
            parent_keys=[fk],
            indexes=[make_index("ix_b", [b], enabled=False), make_index("ix_a", [a])],
            checks=(CheckConstraint(name="ck_a", definition="a > 0", is_enabled=False),),
            triggers=(Trigger(name="tr_audit", definition="...", is_enabled=False),),
        )

        messages = messages_of(DisabledObjectsRule(RuleLevel.WARNING), [table])

        assert len(messages) == 6
        assert "primary key 'pk_t'" in messages[0].message
        assert "unique key 'uk_b'" in messages[1].message
        assert "foreign key 'fk_parent'" in messages[2].message
        assert "index 'ix_b'" in messages[3].message
        assert "check constraint 'ck_a'" in messages[4].message
        assert "trigger 'tr_audit'" in messages[5].message

    def test_enabled_objects_ignored(self):
        a = make_column("a")
        table = make_table("t", columns=[a], primary_key=make_key([a]), indexes=[make_index("ix", [a])])

        assert messages_of(DisabledObjectsRule(RuleLevel.WARNING), [table]) == []


class TestOrphanedTableRule:
    def test_unrelated_table_reported(self):
        messages = messages_of(OrphanedTableRule(RuleLevel.INFORMATION), [make_table("t")])
        assert [m.rule_id for m in messages] == ["SCHEMATIC0016"]

    def test_tables_on_either_end_of_a_relationship_ignored(self):
        fk = make_relationship("orders", [make_column("customer_id")], "customers", [make_column("id")])
        tables = [
            make_table("orders", parent_keys=[fk]),
            make_table("customers", child_keys=[fk]),
        ]

        assert messages_of(OrphanedTableRule(RuleLevel.INFORMATION), tables) == []


class TestImpliedTableName:
    @pytest.mark.parametrize(
        "column,expected",
        [
            ("customer_id", "customer"),
            ("CUSTOMER_ID", "CUSTOMER"),
            ("customerId", "customer"),
            ("id", "id"),
            ("_id", "_id"),
            ("valid", "valid"),
        ],
    )
    def test_suffix_removed(self, column, expected):
        assert implied_table_name(column) == expected


class TestForeignKeyMissingRule:
    def test_implied_relationship_reported(self):
        orders = make_table("orders", columns=[make_column("id"), make_column("customer_id")])
        customer = make_table("customer", columns=[make_column("id")])

        messages = messages_of(ForeignKeyMissingRule(RuleLevel.WARNING), [orders, customer])

        assert len(messages) == 1
        assert messages[0].rule_id == "SCHEMATIC0008"
        assert messages[0].target == orders.name
        assert "customer_id" in messages[0].message

    def test_table_names_matched_case_insensitively(self):
        orders = make_table("orders", columns=[make_column("CustomerId")])
        customer = make_table("Customer")

        assert len(messages_of(ForeignKeyMissingRule(RuleLevel.WARNING), [orders, customer])) == 1

    def test_column_with_foreign_key_ignored(self):
        customer_id = make_column("customer_id")
        fk = make_relationship("orders", [customer_id], "customer", [make_column("id")])
        orders = make_table("orders", columns=[customer_id], parent_keys=[fk])
        customer = make_table("customer", child_keys=[fk])

        assert messages_of(ForeignKeyMissingRule(RuleLevel.WARNING), [orders, customer]) == []

    def test_unknown_table_ignored(self):
        orders = make_table("orders", columns=[make_column("warehouse_id")])

        assert messages_of(ForeignKeyMissingRule(RuleLevel.WARNING), [orders]) == []

    def test_self_reference_ignored(self):
        node = make_table("node", columns=[make_column("id"), make_column("node_id")])

        assert messages_of(ForeignKeyMissingRule(RuleLevel.WARNING), [node]) == []
