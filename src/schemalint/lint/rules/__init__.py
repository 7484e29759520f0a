"""The rule catalog."""

from schemalint.lint.rules.columns import (
    ColumnWithNullDefaultValueRule,
    NoNonNullableColumnsPresentRule,
    OnlyOneColumnPresentRule,
    TooManyColumnsRule,
)
from schemalint.lint.rules.foreign_keys import (
    ForeignKeyColumnTypeMismatchRule,
    ForeignKeyIsPrimaryKeyRule,
    ForeignKeyRelationshipCycleRule,
)
from schemalint.lint.rules.indexes import (
    ForeignKeyIndexRule,
    NoIndexesPresentOnTableRule,
    RedundantIndexesRule,
    UniqueIndexWithNullableColumnsRule,
)
from schemalint.lint.rules.keys import (
    CandidateKeyMissingRule,
    NoSurrogatePrimaryKeyRule,
    PrimaryKeyColumnNotFirstColumnRule,
    PrimaryKeyNotIntegerRule,
)
from schemalint.lint.rules.names import ReservedKeywordNameRule, WhitespaceNameRule
from schemalint.lint.rules.tables import (
    DisabledObjectsRule,
    ForeignKeyMissingRule,
    OrphanedTableRule,
)

__all__ = [
    "CandidateKeyMissingRule",
    "ColumnWithNullDefaultValueRule",
    "DisabledObjectsRule",
    "ForeignKeyColumnTypeMismatchRule",
    "ForeignKeyIndexRule",
    "ForeignKeyIsPrimaryKeyRule",
    "ForeignKeyMissingRule",
    "ForeignKeyRelationshipCycleRule",
    "NoIndexesPresentOnTableRule",
    "NoNonNullableColumnsPresentRule",
    "NoSurrogatePrimaryKeyRule",
    "OnlyOneColumnPresentRule",
    "OrphanedTableRule",
    "PrimaryKeyColumnNotFirstColumnRule",
    "PrimaryKeyNotIntegerRule",
    "RedundantIndexesRule",
    "ReservedKeywordNameRule",
    "TooManyColumnsRule",
    "UniqueIndexWithNullableColumnsRule",
    "WhitespaceNameRule",
]
