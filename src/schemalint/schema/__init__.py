"""Schema model, snapshot loading and export."""

from schemalint.schema.exporter import render_tables
from schemalint.schema.loader import load_database
from schemalint.schema.models import (
    AutoIncrement,
    CheckConstraint,
    Column,
    ColumnType,
    Database,
    Identifier,
    Index,
    IndexColumn,
    Key,
    RelationalKey,
    Routine,
    Sequence,
    Synonym,
    Table,
    Trigger,
    View,
)
from schemalint.schema.relationships import Cardinality, classify

__all__ = [
    "AutoIncrement",
    "Cardinality",
    "CheckConstraint",
    "Column",
    "ColumnType",
    "Database",
    "Identifier",
    "Index",
    "IndexColumn",
    "Key",
    "RelationalKey",
    "Routine",
    "Sequence",
    "Synonym",
    "Table",
    "Trigger",
    "View",
    "classify",
    "load_database",
    "render_tables",
]
