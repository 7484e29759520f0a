"""Rule contract and diagnostic messages.

A rule analyses one or more kinds of schema objects. Each kind has its own
mixin (``TableRule``, ``ViewRule`` ...) providing a collection-level entry point
that validates its argument eagerly and then lazily yields messages for each
object, so callers can stop after the first message.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from schemalint.exceptions import InvalidInputError, InvalidRuleConfigurationError
from schemalint.schema.models import Identifier, Routine, Sequence, Synonym, Table, View
from schemalint.types import ObjectKind, RuleId, RuleLevel


@dataclass(frozen=True)
class RuleMessage:
    """A single diagnostic produced by a rule."""

    rule_id: RuleId
    title: str
    level: RuleLevel
    message: str
    target: Optional[Identifier] = None

    def __str__(self) -> str:
        target = f" {self.target}" if self.target is not None else ""
        return f"[{self.level.name}] {self.rule_id}{target}: {self.message}"


class Rule:
    """Base class for all rules.

    Subclasses set ``rule_id``, a stable identifier such as ``SCHEMATIC0001``,
    and ``title``, a short description of the problem the rule detects.

    Args:
        level: Severity attached to every message. Anything that does not
            convert to a ``RuleLevel`` is rejected.

    Raises:
        InvalidRuleConfigurationError: If level is not a valid rule level.
    """

    rule_id: ClassVar[RuleId]
    title: ClassVar[str]

    def __init__(self, level: Any):
        try:
            self.level = RuleLevel.parse(level)
        except ValueError as e:
            raise InvalidRuleConfigurationError(str(e)) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level.name})"

    @property
    def supported_kinds(self) -> frozenset[ObjectKind]:
        return frozenset(
            kind for kind, (mixin, _) in _KIND_ENTRY_POINTS.items() if isinstance(self, mixin)
        )

    def evaluate(self, kind: ObjectKind, objects: Iterable[Any]) -> Iterator[RuleMessage]:
        """Analyse objects of the given kind. Kinds the rule does not handle yield nothing.

        Raises:
            InvalidInputError: If objects is None or kind is not an object kind.
        """
        if objects is None:
            raise InvalidInputError("objects")
        try:
            kind = ObjectKind(kind)
        except ValueError:
            raise InvalidInputError("kind", f"Unknown object kind: {kind!r}") from None

        mixin, entry_point = _KIND_ENTRY_POINTS[kind]
        if not isinstance(self, mixin):
            return iter(())
        return getattr(self, entry_point)(objects)

    def build_message(self, message: str, target: Optional[Identifier] = None) -> RuleMessage:
        return RuleMessage(
            rule_id=self.rule_id,
            title=self.title,
            level=self.level,
            message=message,
            target=target,
        )


def _analyse_each(objects: Iterable[Any], analyse) -> Iterator[RuleMessage]:
    for obj in objects:
        yield from analyse(obj)


class TableRule:
    """Mixin for rules that analyse tables."""

    def analyse_tables(self, tables: Iterable[Table]) -> Iterator[RuleMessage]:
        """Lazily analyse each table.

        Raises:
            InvalidInputError: If tables is None.
        """
        if tables is None:
            raise InvalidInputError("tables")
        return self.analyse_table_collection(tables)

    def analyse_table_collection(self, tables: Iterable[Table]) -> Iterator[RuleMessage]:
        """Analyse an already validated collection. Override for cross-table rules."""
        return _analyse_each(tables, self.analyse_table)

    def analyse_table(self, table: Table) -> Iterator[RuleMessage]:
        raise NotImplementedError


class ViewRule:
    """Mixin for rules that analyse views."""

    def analyse_views(self, views: Iterable[View]) -> Iterator[RuleMessage]:
        if views is None:
            raise InvalidInputError("views")
        return _analyse_each(views, self.analyse_view)

    def analyse_view(self, view: View) -> Iterator[RuleMessage]:
        raise NotImplementedError


class SequenceRule:
    """Mixin for rules that analyse sequences."""

    def analyse_sequences(self, sequences: Iterable[Sequence]) -> Iterator[RuleMessage]:
        if sequences is None:
            raise InvalidInputError("sequences")
        return _analyse_each(sequences, self.analyse_sequence)

    def analyse_sequence(self, sequence: Sequence) -> Iterator[RuleMessage]:
        raise NotImplementedError


class SynonymRule:
    """Mixin for rules that analyse synonyms."""

    def analyse_synonyms(self, synonyms: Iterable[Synonym]) -> Iterator[RuleMessage]:
        if synonyms is None:
            raise InvalidInputError("synonyms")
        return _analyse_each(synonyms, self.analyse_synonym)

    def analyse_synonym(self, synonym: Synonym) -> Iterator[RuleMessage]:
        raise NotImplementedError


class RoutineRule:
    """Mixin for rules that analyse routines."""

    def analyse_routines(self, routines: Iterable[Routine]) -> Iterator[RuleMessage]:
        if routines is None:
            raise InvalidInputError("routines")
        return _analyse_each(routines, self.analyse_routine)

    def analyse_routine(self, routine: Routine) -> Iterator[RuleMessage]:
        raise NotImplementedError


_KIND_ENTRY_POINTS: dict[ObjectKind, tuple[type, str]] = {
    ObjectKind.TABLE: (TableRule, "analyse_tables"),
    ObjectKind.VIEW: (ViewRule, "analyse_views"),
    ObjectKind.SEQUENCE: (SequenceRule, "analyse_sequences"),
    ObjectKind.SYNONYM: (SynonymRule, "analyse_synonyms"),
    ObjectKind.ROUTINE: (RoutineRule, "analyse_routines"),
}
