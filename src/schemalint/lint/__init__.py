"""Rule evaluation."""

from schemalint.lint.base import (
    RoutineRule,
    Rule,
    RuleMessage,
    SequenceRule,
    SynonymRule,
    TableRule,
    ViewRule,
)
from schemalint.lint.catalog import RULE_NAMES, build_rules
from schemalint.lint.linter import SchemaLinter, summarize

__all__ = [
    "RULE_NAMES",
    "RoutineRule",
    "Rule",
    "RuleMessage",
    "SchemaLinter",
    "SequenceRule",
    "SynonymRule",
    "TableRule",
    "ViewRule",
    "build_rules",
    "summarize",
]
