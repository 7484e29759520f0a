"""Rules about object and column names."""

from collections.abc import Iterable, Iterator
from typing import Any

from schemalint.exceptions import InvalidInputError
from schemalint.lint.base import (
    Rule,
    RoutineRule,
    RuleMessage,
    SequenceRule,
    SynonymRule,
    TableRule,
    ViewRule,
)
from schemalint.schema.models import Column, Identifier, Routine, Sequence, Synonym, Table, View


class _NameRule(Rule, TableRule, ViewRule, SequenceRule, SynonymRule, RoutineRule):
    """Shared traversal: check every object name, and column names of tables and views."""

    def is_problem_name(self, name: str) -> bool:
        raise NotImplementedError

    def object_message(self, kind: str, name: Identifier) -> str:
        raise NotImplementedError

    def column_message(self, kind: str, name: Identifier, column_name: str) -> str:
        raise NotImplementedError

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        return self._analyse_with_columns("table", table.name, table.columns)

    def analyse_view(self, view: View) -> Iterator[RuleMessage]:
        return self._analyse_with_columns("view", view.name, view.columns)

    def analyse_sequence(self, sequence: Sequence) -> Iterator[RuleMessage]:
        return self._analyse_name("sequence", sequence.name)

    def analyse_synonym(self, synonym: Synonym) -> Iterator[RuleMessage]:
        return self._analyse_name("synonym", synonym.name)

    def analyse_routine(self, routine: Routine) -> Iterator[RuleMessage]:
        return self._analyse_name("routine", routine.name)

    def _analyse_name(self, kind: str, name: Identifier) -> Iterator[RuleMessage]:
        if self.is_problem_name(name.local_name):
            yield self.build_message(self.object_message(kind, name), name)

    def _analyse_with_columns(
        self, kind: str, name: Identifier, columns: Iterable[Column]
    ) -> Iterator[RuleMessage]:
        yield from self._analyse_name(kind, name)
        for column in columns:
            if self.is_problem_name(column.name):
                yield self.build_message(self.column_message(kind, name, column.name), name)


class ReservedKeywordNameRule(_NameRule):
    """Report names that are reserved keywords of the database dialect.

    Args:
        reserved_keywords: Keywords of the dialect, matched case-sensitively.
        level: Severity of the messages.
    """

    rule_id = "SCHEMATIC0020"
    title = "Object name is a reserved keyword."

    def __init__(self, reserved_keywords: Iterable[str], level: Any):
        super().__init__(level)
        if reserved_keywords is None:
            raise InvalidInputError("reserved_keywords")
        self.reserved_keywords = frozenset(reserved_keywords)

    def is_problem_name(self, name: str) -> bool:
        return name in self.reserved_keywords

    def object_message(self, kind: str, name: Identifier) -> str:
        return (
            f"The {kind} '{name}' is also a database keyword and may require quoting to be "
            "used. Consider renaming to a non-keyword name."
        )

    def column_message(self, kind: str, name: Identifier, column_name: str) -> str:
        return (
            f"The {kind} '{name}' contains a column '{column_name}' which is also a database "
            "keyword and may require quoting to be used. Consider renaming to a non-keyword name."
        )


class WhitespaceNameRule(_NameRule):
    rule_id = "SCHEMATIC0023"
    title = "Whitespace present in object name."

    def is_problem_name(self, name: str) -> bool:
        return name != name.strip()

    def object_message(self, kind: str, name: Identifier) -> str:
        return (
            f"The {kind} '{name}' contains whitespace and requires quoting to be used. "
            "Consider renaming to remove any whitespace."
        )

    def column_message(self, kind: str, name: Identifier, column_name: str) -> str:
        return (
            f"The {kind} '{name}' contains a column '{column_name}' which contains whitespace "
            "and requires quoting to be used. Consider renaming to remove any whitespace."
        )
