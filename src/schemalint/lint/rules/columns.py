"""Rules about table columns."""

from collections.abc import Iterator
from typing import Any

from schemalint.exceptions import InvalidRuleConfigurationError
from schemalint.lint.base import Rule, RuleMessage, TableRule
from schemalint.schema.models import Table

DEFAULT_COLUMN_LIMIT = 100


def is_null_default_value(default_value: str) -> bool:
    """Whether a default expression is the NULL literal, e.g. ``null`` or ``((NULL))``."""
    value = default_value.strip()
    while value.startswith("(") and value.endswith(")"):
        value = value[1:-1].strip()
    return value.lower() == "null"


class ColumnWithNullDefaultValueRule(Rule, TableRule):
    """A NULL default is the same as having no default at all."""

    rule_id = "SCHEMATIC0002"
    title = "Null default values assigned to column."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        for column in table.columns:
            if column.default_value is not None and is_null_default_value(column.default_value):
                yield self.build_message(
                    f"The table {table.name} has a column '{column.name}' whose default value "
                    "is null. Consider removing the default value on the column.",
                    table.name,
                )


class TooManyColumnsRule(Rule, TableRule):
    """Report tables with more columns than a configured limit.

    Args:
        level: Severity of the messages.
        column_limit: Maximum number of columns before a table is reported.

    Raises:
        InvalidRuleConfigurationError: If level is invalid or column_limit is not positive.
    """

    rule_id = "SCHEMATIC0021"
    title = "Too many columns present on the table."

    def __init__(self, level: Any, column_limit: int = DEFAULT_COLUMN_LIMIT):
        super().__init__(level)
        if isinstance(column_limit, bool) or not isinstance(column_limit, int):
            raise InvalidRuleConfigurationError(
                f"The column limit must be an integer, got {column_limit!r}"
            )
        if column_limit <= 0:
            raise InvalidRuleConfigurationError(
                f"The column limit must be a positive number, got {column_limit}"
            )
        self.column_limit = column_limit

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        column_count = len(table.columns)
        if column_count > self.column_limit:
            yield self.build_message(
                f"The table {table.name} has too many columns. It has {column_count} columns, "
                f"more than the limit of {self.column_limit}. Consider splitting the table.",
                table.name,
            )


class NoNonNullableColumnsPresentRule(Rule, TableRule):
    rule_id = "SCHEMATIC0012"
    title = "No not-null columns present on the table."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        if table.columns and all(column.is_nullable for column in table.columns):
            yield self.build_message(
                f"The table {table.name} has no not-null columns. "
                "Consider adding a not-null constraint to the columns that require a value.",
                table.name,
            )


class OnlyOneColumnPresentRule(Rule, TableRule):
    """A table holding a single column rarely describes anything on its own.

    Tables without any columns are left to other rules.
    """

    rule_id = "SCHEMATIC0015"
    title = "Only one column present on the table."

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        if len(table.columns) == 1:
            yield self.build_message(
                f"The table {table.name} has only one column, '{table.columns[0].name}'. "
                "Consider adding columns or folding it into a related table.",
                table.name,
            )
