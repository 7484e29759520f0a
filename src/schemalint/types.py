"""Core type definitions for schemalint."""

from enum import Enum, Flag, IntEnum, auto
from typing import TypeAlias

ColumnName: TypeAlias = str
RuleId: TypeAlias = str

__all__ = [
    "ColumnName",
    "RuleId",
    "RuleLevel",
    "ObjectKind",
    "KeyType",
    "IndexColumnOrder",
    "ReferentialAction",
    "TriggerTiming",
    "TriggerEvent",
    "DataType",
]


class RuleLevel(IntEnum):
    """Severity of a rule message. Ordered, so levels can be compared."""

    INFORMATION = 1
    WARNING = 2
    ERROR = 3

    @classmethod
    def parse(cls, value: "str | int | RuleLevel") -> "RuleLevel":
        """Convert a level, its integer value or its name (case-insensitive).

        Raises:
            ValueError: If the value does not name a level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "INFO":
                name = "INFORMATION"
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"Unknown rule level: {value!r}") from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Unknown rule level: {value!r}")
        return cls(value)


class ObjectKind(Enum):
    """Kinds of schema objects that rules can analyse."""

    TABLE = "table"
    VIEW = "view"
    SEQUENCE = "sequence"
    SYNONYM = "synonym"
    ROUTINE = "routine"


class KeyType(Enum):
    PRIMARY = "primary"
    UNIQUE = "unique"
    FOREIGN = "foreign"


class IndexColumnOrder(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class ReferentialAction(Enum):
    """Action taken on child rows when a parent row is updated or deleted."""

    NO_ACTION = "no action"
    RESTRICT = "restrict"
    CASCADE = "cascade"
    SET_NULL = "set null"
    SET_DEFAULT = "set default"


class TriggerTiming(Enum):
    BEFORE = "before"
    AFTER = "after"
    INSTEAD_OF = "instead of"


class TriggerEvent(Flag):
    """Events a trigger fires on. Members combine with ``|``."""

    NONE = 0
    INSERT = auto()
    UPDATE = auto()
    DELETE = auto()


class DataType(Enum):
    """Broad classification of a column's physical type."""

    INTEGER = "integer"
    NUMERIC = "numeric"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    INTERVAL = "interval"
    STRING = "string"
    UNICODE = "unicode"
    TEXT = "text"
    UNICODE_TEXT = "unicode_text"
    BINARY = "binary"
    LARGE_BINARY = "large_binary"
    UNKNOWN = "unknown"
