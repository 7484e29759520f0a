"""Rules about indexes."""

from collections.abc import Iterator

from schemalint.lint.base import Rule, RuleMessage, TableRule
from schemalint.schema.comparison import (
    describe_columns,
    describe_index,
    describe_key,
    included_column_names,
    index_key_column_names,
    index_key_columns,
    is_prefix,
    is_same_or_strict_subset,
    key_column_names,
)
from schemalint.schema.models import Index, Table


def index_covers_columns(index: Index, column_names: list[str]) -> bool:
    """Whether an index can be used to look up rows by the given ordered columns.

    Either the columns are a leading prefix of the index key, or the index key
    is a leading prefix of the columns and the remaining columns are all
    included (non-key) columns of the index.
    """
    if not column_names:
        return False

    key_names = index_key_column_names(index)
    if is_prefix(column_names, key_names):
        return True
    if not is_prefix(key_names, column_names):
        return False

    remaining = column_names[len(key_names) :]
    return set(remaining) <= included_column_names(index)


def is_redundant_pair(index: Index, other: Index) -> bool:
    """Whether one index makes the other unnecessary.

    Key columns are compared by name and direction in declared order; one key
    must be a prefix of (or equal to) the other. Included columns are compared
    as sets, which must be equal or in a strict subset relationship.
    """
    index_keys = index_key_columns(index)
    other_keys = index_key_columns(other)
    if not (is_prefix(index_keys, other_keys) or is_prefix(other_keys, index_keys)):
        return False

    return is_same_or_strict_subset(included_column_names(index), included_column_names(other))


class ForeignKeyIndexRule(Rule, TableRule):
    """Foreign keys should be backed by an index on the child table."""

    rule_id = "SCHEMATIC0006"
    title = "Indexes missing on foreign key."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        for relational_key in table.parent_keys:
            fk_columns = key_column_names(relational_key.child_key)
            if not fk_columns:
                continue

            if any(index_covers_columns(index, fk_columns) for index in table.indexes):
                continue

            fk_description = describe_key(relational_key.child_key, "foreign key")
            yield self.build_message(
                f"The table {table.name} has a {fk_description} which is missing an index. "
                "Consider adding an index that starts with the foreign key columns.",
                table.name,
            )


class NoIndexesPresentOnTableRule(Rule, TableRule):
    rule_id = "SCHEMATIC0011"
    title = "No indexes present on table."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        if table.primary_key is None and not table.unique_keys and not table.indexes:
            yield self.build_message(
                f"The table {table.name} does not have any indexes present, "
                "requiring any filtering on the table to scan every row.",
                table.name,
            )


class RedundantIndexesRule(Rule, TableRule):
    """Detect indexes that duplicate, or are a prefix of, another index on the same table.

    Each pair of indexes is reported at most once; the message names the index
    with fewer key columns as the redundant one.
    """

    rule_id = "SCHEMATIC0019"
    title = "Redundant indexes on a table."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        indexes = list(table.indexes)
        for i, index in enumerate(indexes):
            for other in indexes[i + 1 :]:
                if not is_redundant_pair(index, other):
                    continue

                redundant, covering = index, other
                if len(other.columns) < len(index.columns):
                    redundant, covering = other, index

                yield self.build_message(
                    f"The table {table.name} has an {describe_index(redundant)} which may be "
                    f"redundant, as its key columns are a prefix of the {describe_index(covering)}.",
                    table.name,
                )


class UniqueIndexWithNullableColumnsRule(Rule, TableRule):
    """Unique indexes over nullable columns treat NULL inconsistently across vendors."""

    rule_id = "SCHEMATIC0022"
    title = "Unique index contains nullable columns."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        for index in table.indexes:
            if not index.is_unique:
                continue

            nullable_columns = [
                ic.column.name
                for ic in index.columns
                if ic.column is not None and ic.column.is_nullable
            ]
            if not nullable_columns:
                continue

            yield self.build_message(
                f"The table {table.name} has a unique {describe_index(index)} which contains "
                f"nullable columns {describe_columns(nullable_columns)}. "
                "Consider making the columns non-nullable.",
                table.name,
            )
