"""Shared test helpers for schemalint tests."""

from typing import Optional

from schemalint.schema.models import (
    Column,
    ColumnType,
    Identifier,
    Index,
    IndexColumn,
    Key,
    RelationalKey,
    Table,
)
from schemalint.types import DataType, IndexColumnOrder, KeyType


def make_column(
    name: str,
    definition: str = "int",
    data_type: DataType = DataType.INTEGER,
    nullable: bool = False,
    default: Optional[str] = None,
) -> Column:
    """Create a Column with an integer type unless told otherwise."""
    return Column(
        name=name,
        type=ColumnType(definition=definition, data_type=data_type),
        is_nullable=nullable,
        default_value=default,
    )


def make_key(
    columns: list[Column],
    key_type: KeyType = KeyType.PRIMARY,
    name: Optional[str] = None,
    enabled: bool = True,
) -> Key:
    return Key(name=name, key_type=key_type, columns=tuple(columns), is_enabled=enabled)


def make_index(
    name: Optional[str],
    columns: list,
    included: Optional[list[Column]] = None,
    unique: bool = False,
    enabled: bool = True,
) -> Index:
    """Create an Index.

    Each entry of ``columns`` is a Column, or a ``(Column, IndexColumnOrder)`` pair.
    """
    index_columns = []
    for entry in columns:
        if isinstance(entry, tuple):
            column, order = entry
        else:
            column, order = entry, IndexColumnOrder.ASCENDING
        index_columns.append(IndexColumn(expression=column.name, order=order, column=column))
    return Index(
        name=name,
        columns=tuple(index_columns),
        included_columns=tuple(included or []),
        is_unique=unique,
        is_enabled=enabled,
    )


def make_table(
    name: str,
    columns: Optional[list[Column]] = None,
    primary_key: Optional[Key] = None,
    unique_keys: Optional[list[Key]] = None,
    indexes: Optional[list[Index]] = None,
    parent_keys: Optional[list[RelationalKey]] = None,
    child_keys: Optional[list[RelationalKey]] = None,
    schema: Optional[str] = None,
    **kwargs,
) -> Table:
    """Create a Table with sensible defaults."""
    return Table(
        name=Identifier(name, schema=schema),
        columns=tuple(columns or []),
        primary_key=primary_key,
        unique_keys=tuple(unique_keys or []),
        indexes=tuple(indexes or []),
        parent_keys=tuple(parent_keys or []),
        child_keys=tuple(child_keys or []),
        **kwargs,
    )


def make_relationship(
    child_table: str,
    child_columns: list[Column],
    parent_table: str,
    parent_columns: list[Column],
    name: Optional[str] = None,
    enabled: bool = True,
) -> RelationalKey:
    """Create a foreign key from ``child_table`` to ``parent_table``."""
    return RelationalKey(
        child_table=Identifier(child_table),
        child_key=make_key(child_columns, KeyType.FOREIGN, name=name, enabled=enabled),
        parent_table=Identifier(parent_table),
        parent_key=make_key(parent_columns, KeyType.PRIMARY),
    )


def messages_of(rule, tables: list[Table]) -> list:
    """Run a table rule and collect its messages."""
    return list(rule.analyse_tables(tables))
