"""Rules about primary and unique keys."""

from collections.abc import Iterator

from schemalint.lint.base import Rule, RuleMessage, TableRule
from schemalint.schema.models import Table
from schemalint.types import DataType


class CandidateKeyMissingRule(Rule, TableRule):
    """A table should have a primary key or at least one unique key."""

    rule_id = "SCHEMATIC0001"
    title = "No candidate (primary or unique) key present."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        if table.primary_key is None and not table.unique_keys:
            yield self.build_message(
                f"The table {table.name} has no candidate (primary or unique) keys. "
                "Consider adding one to ensure records are unique.",
                table.name,
            )


class NoSurrogatePrimaryKeyRule(Rule, TableRule):
    """Multi-column primary keys make relationships to the table harder to express."""

    rule_id = "SCHEMATIC0013"
    title = "Table contains a non-surrogate primary key."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        if table.primary_key is not None and len(table.primary_key.columns) > 1:
            yield self.build_message(
                f"The table {table.name} has a multi-column primary key. "
                "Consider introducing a surrogate primary key.",
                table.name,
            )


class PrimaryKeyColumnNotFirstColumnRule(Rule, TableRule):
    rule_id = "SCHEMATIC0017"
    title = "Primary key is not the first column in the table."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        primary_key = table.primary_key
        if primary_key is None or len(primary_key.columns) != 1 or not table.columns:
            return

        pk_column = primary_key.columns[0]
        if table.columns[0].name != pk_column.name:
            yield self.build_message(
                f"The table {table.name} has a primary key whose column '{pk_column.name}' "
                "is not the first column in the table.",
                table.name,
            )


class PrimaryKeyNotIntegerRule(Rule, TableRule):
    """Primary keys should be a single integer column.

    Multi-column keys are always reported, whatever their column types.
    """

    rule_id = "SCHEMATIC0018"
    title = "Table contains a primary key that is not a single integer column."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        primary_key = table.primary_key
        if primary_key is None or not primary_key.columns:
            return

        if len(primary_key.columns) > 1:
            yield self.build_message(
                f"The table {table.name} has a multi-column primary key. "
                "Consider introducing a single-column integer primary key.",
                table.name,
            )
            return

        column = primary_key.columns[0]
        if column.type.data_type != DataType.INTEGER:
            yield self.build_message(
                f"The table {table.name} has a primary key column '{column.name}' "
                f"of type {column.type.definition}, which is not an integer type.",
                table.name,
            )
