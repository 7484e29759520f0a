"""Build the configured set of rules."""

from collections.abc import Iterable

from schemalint.config import Config
from schemalint.exceptions import ConfigError
from schemalint.lint.base import Rule
from schemalint.lint.rules import (
    CandidateKeyMissingRule,
    ColumnWithNullDefaultValueRule,
    DisabledObjectsRule,
    ForeignKeyColumnTypeMismatchRule,
    ForeignKeyIndexRule,
    ForeignKeyIsPrimaryKeyRule,
    ForeignKeyMissingRule,
    ForeignKeyRelationshipCycleRule,
    NoIndexesPresentOnTableRule,
    NoNonNullableColumnsPresentRule,
    NoSurrogatePrimaryKeyRule,
    OnlyOneColumnPresentRule,
    OrphanedTableRule,
    PrimaryKeyColumnNotFirstColumnRule,
    PrimaryKeyNotIntegerRule,
    RedundantIndexesRule,
    ReservedKeywordNameRule,
    TooManyColumnsRule,
    UniqueIndexWithNullableColumnsRule,
    WhitespaceNameRule,
)
from schemalint.types import RuleId

RULE_TYPES: dict[str, type[Rule]] = {
    "candidate_key_missing": CandidateKeyMissingRule,
    "column_with_null_default_value": ColumnWithNullDefaultValueRule,
    "disabled_objects": DisabledObjectsRule,
    "foreign_key_column_type_mismatch": ForeignKeyColumnTypeMismatchRule,
    "foreign_key_index": ForeignKeyIndexRule,
    "foreign_key_is_primary_key": ForeignKeyIsPrimaryKeyRule,
    "foreign_key_missing": ForeignKeyMissingRule,
    "foreign_key_relationship_cycle": ForeignKeyRelationshipCycleRule,
    "no_indexes_present_on_table": NoIndexesPresentOnTableRule,
    "no_non_nullable_columns_present": NoNonNullableColumnsPresentRule,
    "no_surrogate_primary_key": NoSurrogatePrimaryKeyRule,
    "only_one_column_present": OnlyOneColumnPresentRule,
    "orphaned_table": OrphanedTableRule,
    "primary_key_column_not_first_column": PrimaryKeyColumnNotFirstColumnRule,
    "primary_key_not_integer": PrimaryKeyNotIntegerRule,
    "redundant_indexes": RedundantIndexesRule,
    "reserved_keyword_name": ReservedKeywordNameRule,
    "too_many_columns": TooManyColumnsRule,
    "unique_index_with_nullable_columns": UniqueIndexWithNullableColumnsRule,
    "whitespace_name": WhitespaceNameRule,
}

RULE_NAMES: dict[str, RuleId] = {name: rule_type.rule_id for name, rule_type in RULE_TYPES.items()}


def resolve_rule_name(name: str) -> str:
    """Accept a snake-case rule name or a rule id and return the rule name.

    Raises:
        ConfigError: If the name matches no rule.
    """
    if name in RULE_NAMES:
        return name
    for rule_name, rule_id in RULE_NAMES.items():
        if rule_id == name.upper():
            return rule_name
    raise ConfigError(f"Unknown rule '{name}'. Known rules: {', '.join(sorted(RULE_NAMES))}")


def build_rules(config: Config, reserved_keywords: Iterable[str] = ()) -> list[Rule]:
    """Build every enabled rule at its configured level, ordered by rule id.

    Raises:
        ConfigError: If the configuration names an unknown rule.
    """
    rule_levels = {resolve_rule_name(name): level for name, level in config.rule_levels.items()}
    disabled = {resolve_rule_name(name) for name in config.disabled_rules}

    rules: list[Rule] = []
    for name in sorted(RULE_TYPES, key=RULE_NAMES.__getitem__):
        if name in disabled:
            continue
        level = rule_levels.get(name, config.default_level)
        rule_type = RULE_TYPES[name]
        if rule_type is ReservedKeywordNameRule:
            rules.append(ReservedKeywordNameRule(reserved_keywords, level))
        elif rule_type is TooManyColumnsRule:
            rules.append(TooManyColumnsRule(level, column_limit=config.max_columns))
        else:
            rules.append(rule_type(level))
    return rules
