"""Schema representation classes.

Every class here is an immutable snapshot produced by a schema provider.
Optional attributes are ``None`` when the database does not define them.
"""

from dataclasses import dataclass, field
from typing import Optional

from schemalint.types import (
    DataType,
    IndexColumnOrder,
    KeyType,
    ReferentialAction,
    TriggerEvent,
    TriggerTiming,
)


@dataclass(frozen=True)
class Identifier:
    """A qualified object name.

    Only ``local_name`` is required. A more specific part may only be set when
    the parts below it are set, e.g. ``database`` requires ``schema``.
    """

    local_name: str
    schema: Optional[str] = None
    database: Optional[str] = None
    server: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.local_name or not self.local_name.strip():
            raise ValueError("An identifier requires a local name")
        if self.server is not None and (self.database is None or self.schema is None):
            raise ValueError("A server name was provided, but other components are missing")
        if self.database is not None and self.schema is None:
            raise ValueError("A database name was provided, but other components are missing")

    @classmethod
    def qualified(cls, *parts: Optional[str]) -> "Identifier":
        """Build an identifier from up to four parts: server, database, schema, local name.

        Blank leading parts are skipped, so ``qualified(None, "dbo", "users")``
        yields ``dbo.users``.
        """
        if not 1 <= len(parts) <= 4:
            raise ValueError(f"Expected between 1 and 4 name parts, got {len(parts)}")
        padded = [None] * (4 - len(parts)) + list(parts)
        server, database, schema, local_name = (
            p if p is not None and p.strip() else None for p in padded
        )
        if local_name is None:
            raise ValueError("An identifier requires a local name")
        return cls(local_name=local_name, schema=schema, database=database, server=server)

    @property
    def parts(self) -> tuple[str, ...]:
        """Present name parts, least specific first."""
        return tuple(
            p for p in (self.server, self.database, self.schema, self.local_name) if p is not None
        )

    def __str__(self) -> str:
        return ".".join(self.parts)


@dataclass(frozen=True)
class ColumnType:
    """Declared type of a column and its broad classification."""

    definition: str
    data_type: DataType = DataType.UNKNOWN


@dataclass(frozen=True)
class AutoIncrement:
    initial_value: int = 1
    increment: int = 1


@dataclass(frozen=True)
class Column:
    """Column definition."""

    name: str
    type: ColumnType
    is_nullable: bool = True
    default_value: Optional[str] = None
    auto_increment: Optional[AutoIncrement] = None
    computed_definition: Optional[str] = None

    @property
    def is_computed(self) -> bool:
        return self.computed_definition is not None


@dataclass(frozen=True)
class Key:
    """Primary, unique or foreign key. Column order is the declared order."""

    name: Optional[str]
    key_type: KeyType
    columns: tuple[Column, ...] = ()
    is_enabled: bool = True


@dataclass(frozen=True)
class RelationalKey:
    """A foreign key relationship between a child key and the parent key it references.

    Child and parent key columns correspond positionally.
    """

    child_table: Identifier
    child_key: Key
    parent_table: Identifier
    parent_key: Key
    update_action: ReferentialAction = ReferentialAction.NO_ACTION
    delete_action: ReferentialAction = ReferentialAction.NO_ACTION


@dataclass(frozen=True)
class IndexColumn:
    """A key column of an index.

    ``column`` is set when the expression refers directly to a table column.
    """

    expression: str
    order: IndexColumnOrder = IndexColumnOrder.ASCENDING
    column: Optional[Column] = None


@dataclass(frozen=True)
class Index:
    """Index definition. Included columns are non-key columns and carry no order."""

    name: Optional[str]
    columns: tuple[IndexColumn, ...] = ()
    included_columns: tuple[Column, ...] = ()
    is_unique: bool = False
    is_enabled: bool = True
    filter_definition: Optional[str] = None


@dataclass(frozen=True)
class CheckConstraint:
    name: Optional[str]
    definition: str
    is_enabled: bool = True


@dataclass(frozen=True)
class Trigger:
    name: str
    definition: str
    timing: TriggerTiming = TriggerTiming.AFTER
    events: TriggerEvent = TriggerEvent.NONE
    is_enabled: bool = True


@dataclass(frozen=True)
class Table:
    """Table definition.

    ``parent_keys`` are the foreign keys declared on this table, ``child_keys``
    the foreign keys in other tables that reference this one.
    """

    name: Identifier
    columns: tuple[Column, ...] = ()
    primary_key: Optional[Key] = None
    unique_keys: tuple[Key, ...] = ()
    parent_keys: tuple[RelationalKey, ...] = ()
    child_keys: tuple[RelationalKey, ...] = ()
    indexes: tuple[Index, ...] = ()
    checks: tuple[CheckConstraint, ...] = ()
    triggers: tuple[Trigger, ...] = ()

    def get_column(self, name: str) -> Optional[Column]:
        """Get a column by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None


@dataclass(frozen=True)
class View:
    name: Identifier
    definition: str = ""
    columns: tuple[Column, ...] = ()
    is_materialized: bool = False


@dataclass(frozen=True)
class Sequence:
    name: Identifier
    start: int = 1
    increment: int = 1
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    cycle: bool = False
    cache: int = 0


@dataclass(frozen=True)
class Synonym:
    name: Identifier
    target: Identifier


@dataclass(frozen=True)
class Routine:
    name: Identifier
    definition: str = ""


@dataclass(frozen=True)
class Database:
    """A complete snapshot handed over by a schema provider."""

    tables: tuple[Table, ...] = ()
    views: tuple[View, ...] = ()
    sequences: tuple[Sequence, ...] = ()
    synonyms: tuple[Synonym, ...] = ()
    routines: tuple[Routine, ...] = ()
    reserved_keywords: frozenset[str] = field(default_factory=frozenset)

    def get_table(self, name: Identifier) -> Optional[Table]:
        """Get a table by name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def table_names(self) -> set[Identifier]:
        """Get all table names."""
        return {t.name for t in self.tables}
