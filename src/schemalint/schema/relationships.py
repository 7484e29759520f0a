"""Classify foreign key relationships as one-to-one or one-to-many."""

from collections.abc import Mapping
from enum import Enum
from typing import Optional

from schemalint.schema.comparison import (
    is_unique_column_set,
    key_column_names,
    remove_quote_chars,
    visible_name,
)
from schemalint.schema.models import Identifier, RelationalKey, Table


class Cardinality(Enum):
    """Relationship cardinality and its DBML operator."""

    ONE_TO_ONE = "-"
    ONE_TO_MANY = ">"

    @property
    def operator(self) -> str:
        return self.value


def is_child_key_unique(parent: Optional[Table], relational_key: RelationalKey) -> bool:
    """Whether the child key columns form a candidate key of the referenced table.

    Column order is ignored. Primary key, unique keys and unique indexes are
    considered. An unknown parent table never matches.
    """
    if parent is None:
        return False
    return is_unique_column_set(parent, key_column_names(relational_key.child_key))


def classify(parent: Optional[Table], relational_key: RelationalKey) -> Cardinality:
    if is_child_key_unique(parent, relational_key):
        return Cardinality.ONE_TO_ONE
    return Cardinality.ONE_TO_MANY


def render_relationships(table: Table, tables_by_name: Mapping[Identifier, Table]) -> list[str]:
    """One ``Ref:`` line per child/parent column pair of each foreign key on ``table``.

    ``tables_by_name`` is used to look up the referenced tables.
    """
    lines: list[str] = []
    child_table_name = visible_name(table.name)

    for relational_key in table.parent_keys:
        parent = tables_by_name.get(relational_key.parent_table)
        operator = classify(parent, relational_key).operator
        parent_table_name = visible_name(relational_key.parent_table)

        column_pairs = zip(relational_key.child_key.columns, relational_key.parent_key.columns)
        for child_column, parent_column in column_pairs:
            child_ref = f"{child_table_name}.{remove_quote_chars(child_column.name)}"
            parent_ref = f"{parent_table_name}.{remove_quote_chars(parent_column.name)}"
            lines.append(f"Ref: {child_ref} {operator} {parent_ref}")

    return lines
