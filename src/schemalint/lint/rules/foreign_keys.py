"""Rules about foreign key constraints."""

from collections.abc import Iterable, Iterator, Mapping, Sequence

from schemalint.lint.base import Rule, RuleMessage, TableRule
from schemalint.schema.comparison import describe_key, key_column_names
from schemalint.schema.models import Column, Identifier, RelationalKey, Table


def _normalized_type(column: Column) -> str:
    return " ".join(column.type.definition.lower().split())


def mismatched_columns(relational_key: RelationalKey) -> list[tuple[Column, Column]]:
    """Child and parent column pairs whose declared types differ."""
    return [
        (child, parent)
        for child, parent in zip(relational_key.child_key.columns, relational_key.parent_key.columns)
        if child.type.data_type != parent.type.data_type
        or _normalized_type(child) != _normalized_type(parent)
    ]


class ForeignKeyColumnTypeMismatchRule(Rule, TableRule):
    """Foreign key columns should have the same type as the columns they reference."""

    rule_id = "SCHEMATIC0005"
    title = "Foreign key column type does not match the referenced column type."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        for relational_key in table.parent_keys:
            pairs = mismatched_columns(relational_key)
            if not pairs:
                continue

            details = ", ".join(
                f"'{child.name}' ({child.type.definition}) references "
                f"'{parent.name}' ({parent.type.definition})"
                for child, parent in pairs
            )
            yield self.build_message(
                f"The table {table.name} has a {describe_key(relational_key.child_key, 'foreign key')} "
                f"to {relational_key.parent_table} whose column types do not match: {details}. "
                "Consider using the same types on both sides of the relationship.",
                table.name,
            )


class ForeignKeyIsPrimaryKeyRule(Rule, TableRule):
    """A foreign key from a table to the very same columns of that table is redundant."""

    rule_id = "SCHEMATIC0007"
    title = "Foreign key references its own columns."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        for relational_key in table.parent_keys:
            if relational_key.parent_table != relational_key.child_table:
                continue
            if key_column_names(relational_key.child_key) != key_column_names(relational_key.parent_key):
                continue

            yield self.build_message(
                f"The table {table.name} has a "
                f"{describe_key(relational_key.child_key, 'foreign key')} "
                "that references the same columns it is declared on. "
                "Consider removing the foreign key.",
                table.name,
            )


def find_cycles(graph: Mapping[Identifier, Sequence[Identifier]]) -> list[list[Identifier]]:
    """Find every elementary cycle of a directed graph.

    Each cycle is returned once, starting and ending at its earliest node in
    the graph's iteration order. Edges to nodes outside the graph are ignored.
    """
    position = {node: i for i, node in enumerate(graph)}
    cycles: list[list[Identifier]] = []

    def walk(start: Identifier, path: list[Identifier]) -> None:
        for target in graph[path[-1]]:
            if target == start:
                cycles.append(path + [start])
            elif position.get(target, -1) > position[start] and target not in path:
                walk(start, path + [target])

    for node in graph:
        walk(node, [node])
    return cycles


class ForeignKeyRelationshipCycleRule(Rule, TableRule):
    """Report chains of foreign keys that lead back to the table they start from.

    A foreign key from a table to itself is a common way to model a hierarchy
    and is not reported.
    """

    rule_id = "SCHEMATIC0009"
    title = "Foreign key relationships form a cycle."

    def analyse_table_collection(self, tables: Iterable[Table]) -> Iterator[RuleMessage]:
        graph = {
            table.name: list(
                dict.fromkeys(
                    key.parent_table for key in table.parent_keys if key.parent_table != table.name
                )
            )
            for table in tables
        }
        for cycle in find_cycles(graph):
            path = " -> ".join(str(name) for name in cycle)
            yield self.build_message(
                f"The table {cycle[0]} is part of a cycle of foreign key relationships: {path}. "
                "Consider removing one of the relationships.",
                cycle[0],
            )

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        # a cycle needs at least two tables
        return iter(())
