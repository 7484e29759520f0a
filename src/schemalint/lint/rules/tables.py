"""Rules about tables as a whole and their relationships."""

from collections.abc import Iterable, Iterator
from typing import Optional

from schemalint.lint.base import Rule, RuleMessage, TableRule
from schemalint.schema.comparison import describe_index, describe_key
from schemalint.schema.models import Identifier, Table


class DisabledObjectsRule(Rule, TableRule):
    """Report disabled keys, indexes, checks and triggers, one message each."""

    rule_id = "SCHEMATIC0004"
    title = "Disabled constraint, index or trigger present on a table."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        if table.primary_key is not None and not table.primary_key.is_enabled:
            yield self._disabled(table, describe_key(table.primary_key, "primary key"))

        for unique_key in table.unique_keys:
            if not unique_key.is_enabled:
                yield self._disabled(table, describe_key(unique_key, "unique key"))

        for relational_key in table.parent_keys:
            if not relational_key.child_key.is_enabled:
                yield self._disabled(table, describe_key(relational_key.child_key, "foreign key"))

        for index in table.indexes:
            if not index.is_enabled:
                yield self._disabled(table, describe_index(index))

        for check in table.checks:
            if not check.is_enabled:
                description = f"check constraint '{check.name}'" if check.name else "check constraint"
                yield self._disabled(table, description)

        for trigger in table.triggers:
            if not trigger.is_enabled:
                yield self._disabled(table, f"trigger '{trigger.name}'")

    def _disabled(self, table: Table, description: str) -> RuleMessage:
        return self.build_message(
            f"The table {table.name} contains a disabled {description}. "
            "Consider enabling or removing it.",
            table.name,
        )


class OrphanedTableRule(Rule, TableRule):
    rule_id = "SCHEMATIC0016"
    title = "Table is not related to any other table."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        if not table.parent_keys and not table.child_keys:
            yield self.build_message(
                f"The table {table.name} is not related to any other table. "
                "Consider adding relations or removing the table.",
                table.name,
            )


def implied_table_name(column_name: str) -> str:
    """Strip an ``_id`` (any case) or ``Id`` suffix from a column name."""
    if len(column_name) > 3 and column_name.lower().endswith("_id"):
        return column_name[:-3]
    if len(column_name) > 2 and column_name.endswith("Id"):
        return column_name[:-2]
    return column_name


class ForeignKeyMissingRule(Rule, TableRule):
    """Find columns whose name implies a relationship with no foreign key behind it.

    A column ``customer_id`` (or ``customerId``) implies a relationship to a
    table named ``customer`` when such a table is among the analysed tables.
    """

    rule_id = "SCHEMATIC0008"
    title = "Column name implies a relationship missing a foreign key constraint."

    def analyse_table_collection(self, tables: Iterable[Table]) -> Iterator[RuleMessage]:
        tables = list(tables)
        table_names = [t.name for t in tables]
        for table in tables:
            yield from self._analyse_table(table, table_names)

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        # only the table itself is known here, so nothing can be implied
        return iter(())

    def _analyse_table(
        self, table: Table, table_names: list[Identifier]
    ) -> Iterator[RuleMessage]:
        fk_column_names = {
            column.name
            for relational_key in table.parent_keys
            for column in relational_key.child_key.columns
        }

        for column in table.columns:
            if column.name in fk_column_names:
                continue

            target = self._find_implied_table(table, column.name, table_names)
            if target is None:
                continue

            yield self.build_message(
                f"The table {table.name} has a column {column.name} implying a relationship "
                f"to {target} which is missing a foreign key constraint.",
                table.name,
            )

    @staticmethod
    def _find_implied_table(
        table: Table, column_name: str, table_names: list[Identifier]
    ) -> Optional[Identifier]:
        implied = implied_table_name(column_name).lower()
        if implied == column_name.lower() or implied == table.name.local_name.lower():
            return None
        for name in table_names:
            if name.local_name.lower() == implied:
                return name
        return None
