"""Apply a fixed set of rules to schema objects."""

import logging
import threading
from collections import Counter
from collections.abc import Iterable, Iterator
from typing import Any, Optional

from schemalint.exceptions import InvalidInputError
from schemalint.lint.base import Rule, RuleMessage
from schemalint.schema.models import Database, Routine, Sequence, Synonym, Table, View
from schemalint.types import ObjectKind, RuleLevel

logger = logging.getLogger(__name__)


class SchemaLinter:
    """Run rules over schema objects and chain their messages.

    Every entry point checks its argument straight away and returns a lazy
    iterator. Messages come out rule by rule, in the order the rules were given.

    Args:
        rules: Rules to apply.
        cancel_event: When set, iteration stops before the next message.
    """

    def __init__(self, rules: Iterable[Rule], cancel_event: Optional[threading.Event] = None):
        if rules is None:
            raise InvalidInputError("rules")
        self.rules = list(rules)
        self.cancel_event = cancel_event

    def analyse_database(self, database: Database) -> Iterator[RuleMessage]:
        """Analyse every table, view, sequence, synonym and routine of a snapshot."""
        if database is None:
            raise InvalidInputError("database")
        return self._analyse_database(database)

    def _analyse_database(self, database: Database) -> Iterator[RuleMessage]:
        yield from self._run(ObjectKind.TABLE, database.tables)
        yield from self._run(ObjectKind.VIEW, database.views)
        yield from self._run(ObjectKind.SEQUENCE, database.sequences)
        yield from self._run(ObjectKind.SYNONYM, database.synonyms)
        yield from self._run(ObjectKind.ROUTINE, database.routines)

    def analyse_tables(self, tables: Iterable[Table]) -> Iterator[RuleMessage]:
        return self._analyse(ObjectKind.TABLE, tables, "tables")

    def analyse_views(self, views: Iterable[View]) -> Iterator[RuleMessage]:
        return self._analyse(ObjectKind.VIEW, views, "views")

    def analyse_sequences(self, sequences: Iterable[Sequence]) -> Iterator[RuleMessage]:
        return self._analyse(ObjectKind.SEQUENCE, sequences, "sequences")

    def analyse_synonyms(self, synonyms: Iterable[Synonym]) -> Iterator[RuleMessage]:
        return self._analyse(ObjectKind.SYNONYM, synonyms, "synonyms")

    def analyse_routines(self, routines: Iterable[Routine]) -> Iterator[RuleMessage]:
        return self._analyse(ObjectKind.ROUTINE, routines, "routines")

    def _analyse(self, kind: ObjectKind, objects: Iterable[Any], argument: str) -> Iterator[RuleMessage]:
        if objects is None:
            raise InvalidInputError(argument)
        return self._run(kind, objects)

    def _run(self, kind: ObjectKind, objects: Iterable[Any]) -> Iterator[RuleMessage]:
        # every rule walks the objects again
        objects = list(objects)
        for rule in self.rules:
            if kind not in rule.supported_kinds:
                continue
            logger.debug(f"Running {rule.rule_id} over {len(objects)} {kind.value}(s)")
            for message in rule.evaluate(kind, objects):
                if self._cancelled():
                    logger.debug("Analysis cancelled")
                    return
                yield message

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


def summarize(messages: Iterable[RuleMessage]) -> dict[RuleLevel, int]:
    """Count messages per level. Every level is present in the result."""
    counts = Counter(message.level for message in messages)
    return {level: counts.get(level, 0) for level in RuleLevel}
