"""Column-list comparison and name formatting shared by rules and the exporter."""

from collections.abc import Iterable, Sequence
from typing import Optional, TypeVar

from schemalint.schema.models import Identifier, Index, IndexColumn, Key, Table
from schemalint.types import IndexColumnOrder

T = TypeVar("T")

QUOTE_CHARS = frozenset("'\"[]`")


def key_column_names(key: Key) -> list[str]:
    """Names of a key's columns, in declared order."""
    return [c.name for c in key.columns]


def index_column_name(index_column: IndexColumn) -> str:
    """Name of the physical column behind an index column, else its expression."""
    if index_column.column is not None:
        return index_column.column.name
    return index_column.expression


def index_key_column_names(index: Index) -> list[str]:
    return [index_column_name(ic) for ic in index.columns]


def index_key_columns(index: Index) -> list[tuple[str, IndexColumnOrder]]:
    """Ordered (name, direction) pairs of an index's key columns."""
    return [(index_column_name(ic), ic.order) for ic in index.columns]


def included_column_names(index: Index) -> set[str]:
    return {c.name for c in index.included_columns}


def is_prefix(prefix: Sequence[T], values: Sequence[T]) -> bool:
    """Whether ``prefix`` matches the leading elements of ``values`` positionally.

    An empty prefix is never considered a match.
    """
    if not prefix or len(prefix) > len(values):
        return False
    return list(values[: len(prefix)]) == list(prefix)


def is_same_or_strict_subset(left: set[T], right: set[T]) -> bool:
    """True when the sets are equal or one is a strict subset of the other."""
    return left == right or left < right or right < left


def candidate_column_sets(table: Table) -> Iterable[set[str]]:
    """Column name sets that are unique within a table.

    Covers the primary key, every unique key and every unique index.
    """
    if table.primary_key is not None:
        yield set(key_column_names(table.primary_key))
    for unique_key in table.unique_keys:
        yield set(key_column_names(unique_key))
    for index in table.indexes:
        if index.is_unique:
            yield set(index_key_column_names(index))


def is_unique_column_set(table: Table, column_names: Iterable[str]) -> bool:
    """Whether the given columns, in any order, exactly form a candidate key of ``table``."""
    wanted = set(column_names)
    if not wanted:
        return False
    return any(candidate == wanted for candidate in candidate_column_sets(table))


def remove_quote_chars(text: str) -> str:
    return "".join(ch for ch in text if ch not in QUOTE_CHARS)


def visible_name(identifier: Identifier) -> str:
    """Render an identifier as ``schema.name``, or ``name`` when it has no schema.

    Quote characters are removed.
    """
    if identifier.schema is not None:
        name = f"{identifier.schema}.{identifier.local_name}"
    else:
        name = identifier.local_name
    return remove_quote_chars(name)


def describe_columns(names: Iterable[str]) -> str:
    return "(" + ", ".join(names) + ")"


def describe_key(key: Key, kind: str) -> str:
    """Human readable key description, e.g. ``primary key pk_users (id)``."""
    return _describe_named(kind, key.name, describe_columns(key_column_names(key)))


def describe_index(index: Index) -> str:
    names = [
        name if order == IndexColumnOrder.ASCENDING else f"{name} DESC"
        for name, order in index_key_columns(index)
    ]
    return _describe_named("index", index.name, describe_columns(names))


def _describe_named(kind: str, name: Optional[str], columns: str) -> str:
    if name:
        return f"{kind} '{name}' {columns}"
    return f"{kind} {columns}"
