"""Export schema models to DBML text."""

from collections.abc import Iterable
from typing import Optional

from schemalint.exceptions import InvalidInputError
from schemalint.schema.comparison import (
    index_key_column_names,
    key_column_names,
    remove_quote_chars,
    visible_name,
)
from schemalint.schema.models import Column, Index, Key, Table
from schemalint.schema.relationships import render_relationships

INDENT = "    "


def render_tables(tables: Iterable[Table]) -> str:
    """Render tables, their indexes and their relationships as DBML.

    Returns an empty string when no tables are given. The output depends only
    on the input, so rendering the same tables twice gives identical text.

    Raises:
        InvalidInputError: If tables is None.
    """
    if tables is None:
        raise InvalidInputError("tables")

    tables = list(tables)
    if not tables:
        return ""

    lines: list[str] = []
    for i, table in enumerate(tables):
        if i > 0:
            lines.append("")
        lines.extend(render_table(table))

    if any(table.parent_keys for table in tables):
        lines.append("")
        tables_by_name = {table.name: table for table in tables}
        for table in tables:
            lines.extend(render_relationships(table, tables_by_name))

    return "\n".join(lines).rstrip()


def render_table(table: Table) -> list[str]:
    """Render one ``Table`` block."""
    lines = [f"Table {visible_name(table.name)} {{"]

    for column in table.columns:
        lines.append(_render_column_line(table, column))

    index_lines = [
        line for line in (_render_index_line(index) for index in table.indexes) if line
    ]
    if index_lines:
        lines.append("")
        lines.append(f"{INDENT}Indexes {{")
        lines.extend(index_lines)
        lines.append(f"{INDENT}}}")

    lines.append("}")
    return lines


def _render_column_line(table: Table, column: Column) -> str:
    options = ["null" if column.is_nullable else "not null"]

    if column.auto_increment is not None:
        options.append("increment")

    primary_keys = [table.primary_key] if table.primary_key is not None else []
    if _is_single_column_key(primary_keys, column):
        options.append("primary key")
    elif _is_single_column_key(table.unique_keys, column):
        options.append("unique key")

    if column.default_value is not None:
        escaped = column.default_value.replace('"', '\\"')
        options.append(f'default: "{escaped}"')

    name = remove_quote_chars(column.name)
    type_definition = remove_quote_chars(column.type.definition)
    return f"{INDENT}{name} {type_definition} [{', '.join(options)}]"


def _render_index_line(index: Index) -> Optional[str]:
    """Render an index entry, or None for an index without key columns."""
    names = [remove_quote_chars(name) for name in index_key_column_names(index)]
    if not names:
        return None

    columns = names[0] if len(names) == 1 else "(" + ", ".join(names) + ")"

    options = []
    if index.name:
        options.append(f"name: '{remove_quote_chars(index.name)}'")
    if index.is_unique:
        options.append("unique")
    included = [remove_quote_chars(c.name) for c in index.included_columns]
    if included:
        options.append(f"note: 'include: {', '.join(included)}'")

    line = f"{INDENT}{INDENT}{columns}"
    if options:
        line += f" [{', '.join(options)}]"
    return line


def _is_single_column_key(keys: Iterable[Key], column: Column) -> bool:
    return any(key_column_names(key) == [column.name] for key in keys)
