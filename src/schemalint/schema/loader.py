"""Load schema snapshots from YAML files.

A snapshot describes tables, views, sequences, synonyms and routines along with
the dialect's reserved keywords. Foreign keys are declared on the child table
and resolved against the referenced table, so both ends of every relationship
are populated.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from schemalint.exceptions import SchemaLoadError
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
from schemalint.types import (
    DataType,
    IndexColumnOrder,
    KeyType,
    ReferentialAction,
    TriggerEvent,
    TriggerTiming,
)

logger = logging.getLogger(__name__)

VALID_TOP_LEVEL_FIELDS = {
    "reserved_keywords",
    "tables",
    "views",
    "sequences",
    "synonyms",
    "routines",
}

VALID_TABLE_FIELDS = {
    "table",
    "schema",
    "columns",
    "primary_key",
    "unique_keys",
    "foreign_keys",
    "indexes",
    "checks",
    "triggers",
}

VALID_COLUMN_FIELDS = {
    "name",
    "type",
    "data_type",
    "nullable",
    "default",
    "autoincrement",
    "computed",
}

VALID_KEY_FIELDS = {"name", "columns", "enabled"}

VALID_FOREIGN_KEY_FIELDS = {
    "name",
    "columns",
    "references",
    "on_update",
    "on_delete",
    "enabled",
}

VALID_INDEX_FIELDS = {"name", "columns", "include", "unique", "enabled", "filter"}

# SQLite-style affinity names, checked in order against the lowercased type.
TYPE_AFFINITIES: list[tuple[str, DataType]] = [
    ("interval", DataType.INTERVAL),
    ("point", DataType.UNKNOWN),
    ("int", DataType.INTEGER),
    ("serial", DataType.INTEGER),
    ("bool", DataType.BOOLEAN),
    ("bit", DataType.BOOLEAN),
    ("decimal", DataType.NUMERIC),
    ("numeric", DataType.NUMERIC),
    ("money", DataType.NUMERIC),
    ("double", DataType.FLOAT),
    ("float", DataType.FLOAT),
    ("real", DataType.FLOAT),
    ("datetime", DataType.DATETIME),
    ("timestamp", DataType.DATETIME),
    ("date", DataType.DATE),
    ("time", DataType.TIME),
    ("nchar", DataType.UNICODE),
    ("nvarchar", DataType.UNICODE),
    ("ntext", DataType.UNICODE_TEXT),
    ("clob", DataType.TEXT),
    ("text", DataType.TEXT),
    ("char", DataType.STRING),
    ("string", DataType.STRING),
    ("uuid", DataType.STRING),
    ("blob", DataType.LARGE_BINARY),
    ("bytea", DataType.LARGE_BINARY),
    ("binary", DataType.BINARY),
]


def classify_type(definition: str) -> DataType:
    """Classify a declared column type, e.g. ``varchar(50)`` -> ``STRING``."""
    name = re.sub(r"\(.*\)", "", definition).strip().lower()
    if not name:
        return DataType.UNKNOWN
    for fragment, data_type in TYPE_AFFINITIES:
        if fragment in name:
            return data_type
    return DataType.UNKNOWN


@dataclass
class _ForeignKeySpec:
    """A foreign key as declared, before the referenced table is resolved."""

    name: Optional[str]
    columns: list[str]
    parent_table: Identifier
    parent_columns: list[str]
    update_action: ReferentialAction
    delete_action: ReferentialAction
    is_enabled: bool


def load_database(schema_path: Path) -> Database:
    """Load a snapshot from a YAML file, or from every ``*.yaml`` file in a directory.

    Raises:
        SchemaLoadError: If the path does not exist or the snapshot is invalid.
    """
    if schema_path.is_file():
        documents = [_read_yaml(schema_path)]
    elif schema_path.is_dir():
        documents = [_read_yaml(p) for p in sorted(schema_path.glob("*.yaml"))]
    else:
        raise SchemaLoadError(f"Schema path does not exist: {schema_path}")

    merged: dict[str, list] = {name: [] for name in VALID_TOP_LEVEL_FIELDS}
    for data in documents:
        unknown_fields = set(data.keys()) - VALID_TOP_LEVEL_FIELDS
        if unknown_fields:
            raise SchemaLoadError(
                f"Unknown field(s) in schema snapshot: {', '.join(sorted(unknown_fields))}"
            )
        for name in VALID_TOP_LEVEL_FIELDS:
            merged[name].extend(data.get(name) or [])

    return parse_database(merged)


def _read_yaml(file_path: Path) -> dict:
    logger.debug(f"Reading schema snapshot {file_path}")
    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in {file_path}: {e}") from e
    if data is None:
        raise SchemaLoadError(f"Empty YAML file: {file_path}")
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Schema snapshot {file_path} must contain a mapping")
    return data


def parse_database(data: dict[str, Any]) -> Database:
    """Build a snapshot from already parsed YAML data."""
    parsed: dict[Identifier, tuple[Table, list[_ForeignKeySpec]]] = {}
    for table_data in data.get("tables") or []:
        table, foreign_keys = _parse_table(table_data)
        if table.name in parsed:
            raise SchemaLoadError(f"Duplicate table name '{table.name}'")
        parsed[table.name] = (table, foreign_keys)

    tables = _link_foreign_keys(parsed)

    views = [_parse_view(v) for v in data.get("views") or []]
    sequences = [_parse_sequence(s) for s in data.get("sequences") or []]
    synonyms = [_parse_synonym(s) for s in data.get("synonyms") or []]
    routines = [_parse_routine(r) for r in data.get("routines") or []]

    keywords = data.get("reserved_keywords") or []
    if not all(isinstance(k, str) for k in keywords):
        raise SchemaLoadError("'reserved_keywords' must be a list of strings")

    logger.debug(
        f"Loaded {len(tables)} tables, {len(views)} views, {len(sequences)} sequences, "
        f"{len(synonyms)} synonyms, {len(routines)} routines"
    )
    return Database(
        tables=tuple(tables),
        views=tuple(views),
        sequences=tuple(sequences),
        synonyms=tuple(synonyms),
        routines=tuple(routines),
        reserved_keywords=frozenset(keywords),
    )


def _parse_name(data: dict, field: str, kind: str) -> Identifier:
    name = data.get(field)
    if not name or not str(name).strip():
        raise SchemaLoadError(f"{kind.capitalize()} definition missing '{field}' field")
    return _make_identifier(str(name), data.get("schema"))


def _make_identifier(local_name: str, schema: Any = None) -> Identifier:
    """Build an identifier, treating a blank schema as absent."""
    if schema is not None and not str(schema).strip():
        schema = None
    try:
        return Identifier(local_name=local_name, schema=str(schema) if schema is not None else None)
    except ValueError as e:
        raise SchemaLoadError(f"Invalid name '{local_name}': {e}") from e


def _parse_int(value: Any, field: str, owner: str) -> int:
    message = f"{owner} has a non-integer '{field}': {value!r}"
    if isinstance(value, bool):
        raise SchemaLoadError(message)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SchemaLoadError(message) from e


def _parse_optional_int(value: Any, field: str, owner: str) -> Optional[int]:
    if value is None:
        return None
    return _parse_int(value, field, owner)


def _check_fields(data: Any, valid: set[str], kind: str) -> None:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"{kind.capitalize()} definition must be a mapping, got {data!r}")
    unknown_fields = set(data.keys()) - valid
    if unknown_fields:
        raise SchemaLoadError(
            f"Unknown field(s) in {kind} definition: {', '.join(sorted(unknown_fields))}"
        )


def _parse_table(data: dict) -> tuple[Table, list[_ForeignKeySpec]]:
    """Parse a table without its relationships, which are linked afterwards."""
    _check_fields(data, VALID_TABLE_FIELDS, "table")
    name = _parse_name(data, "table", "table")

    columns = [_parse_column(col) for col in data.get("columns") or []]
    seen: set[str] = set()
    for column in columns:
        if column.name in seen:
            raise SchemaLoadError(f"Duplicate column name '{column.name}' in table '{name}'")
        seen.add(column.name)
    by_name = {c.name: c for c in columns}

    primary_key = None
    if pk_data := data.get("primary_key"):
        primary_key = _parse_key(pk_data, KeyType.PRIMARY, by_name, name)

    unique_keys = [
        _parse_key(uk_data, KeyType.UNIQUE, by_name, name)
        for uk_data in data.get("unique_keys") or []
    ]
    indexes = [_parse_index(ix_data, by_name, name) for ix_data in data.get("indexes") or []]
    checks = [_parse_check(c) for c in data.get("checks") or []]
    triggers = [_parse_trigger(t) for t in data.get("triggers") or []]
    foreign_keys = [
        _parse_foreign_key(fk_data, by_name, name) for fk_data in data.get("foreign_keys") or []
    ]

    table = Table(
        name=name,
        columns=tuple(columns),
        primary_key=primary_key,
        unique_keys=tuple(unique_keys),
        indexes=tuple(indexes),
        checks=tuple(checks),
        triggers=tuple(triggers),
    )
    return table, foreign_keys


def _parse_column(data: dict) -> Column:
    _check_fields(data, VALID_COLUMN_FIELDS, "column")

    name = data.get("name")
    if not name:
        raise SchemaLoadError("Column definition missing 'name' field")

    col_type = data.get("type")
    if not col_type:
        raise SchemaLoadError(f"Column '{name}' missing 'type' field")

    if data_type_name := data.get("data_type"):
        try:
            data_type = DataType(str(data_type_name).lower())
        except ValueError:
            raise SchemaLoadError(
                f"Column '{name}' has unknown data_type '{data_type_name}'"
            ) from None
    else:
        data_type = classify_type(str(col_type))

    auto_increment = None
    autoincrement = data.get("autoincrement")
    if autoincrement is True:
        auto_increment = AutoIncrement()
    elif isinstance(autoincrement, dict):
        auto_increment = AutoIncrement(
            initial_value=_parse_int(autoincrement.get("initial", 1), "initial", f"Column '{name}'"),
            increment=_parse_int(autoincrement.get("increment", 1), "increment", f"Column '{name}'"),
        )

    default = data.get("default")
    return Column(
        name=str(name),
        type=ColumnType(definition=str(col_type), data_type=data_type),
        is_nullable=data.get("nullable", True),
        default_value=str(default) if default is not None else None,
        auto_increment=auto_increment,
        computed_definition=data.get("computed"),
    )


def _resolve_columns(names: Any, by_name: dict[str, Column], table: Identifier, owner: str) -> list[Column]:
    if isinstance(names, str):
        names = [names]
    if not names:
        raise SchemaLoadError(f"{owner.capitalize()} on table '{table}' has no columns")
    columns = []
    for column_name in names:
        column = by_name.get(column_name)
        if column is None:
            raise SchemaLoadError(
                f"{owner.capitalize()} on table '{table}' references unknown column '{column_name}'"
            )
        columns.append(column)
    return columns


def _parse_key(data: Any, key_type: KeyType, by_name: dict[str, Column], table: Identifier) -> Key:
    if isinstance(data, (list, str)):
        data = {"columns": data}
    _check_fields(data, VALID_KEY_FIELDS, f"{key_type.value} key")
    columns = _resolve_columns(data.get("columns"), by_name, table, f"{key_type.value} key")
    return Key(
        name=data.get("name"),
        key_type=key_type,
        columns=tuple(columns),
        is_enabled=data.get("enabled", True),
    )


def _parse_action(value: Optional[str], table: Identifier) -> ReferentialAction:
    if value is None:
        return ReferentialAction.NO_ACTION
    try:
        return ReferentialAction(str(value).lower().replace("_", " "))
    except ValueError:
        raise SchemaLoadError(
            f"Foreign key on table '{table}' has unknown referential action '{value}'"
        ) from None


def _parse_foreign_key(data: dict, by_name: dict[str, Column], table: Identifier) -> _ForeignKeySpec:
    _check_fields(data, VALID_FOREIGN_KEY_FIELDS, "foreign key")
    columns = _resolve_columns(data.get("columns"), by_name, table, "foreign key")

    references = data.get("references")
    if not isinstance(references, dict) or not references.get("table"):
        raise SchemaLoadError(f"Foreign key on table '{table}' missing 'references.table'")

    parent_table = _make_identifier(str(references["table"]), references.get("schema"))
    parent_columns = references.get("columns") or []
    if isinstance(parent_columns, str):
        parent_columns = [parent_columns]

    return _ForeignKeySpec(
        name=data.get("name"),
        columns=[c.name for c in columns],
        parent_table=parent_table,
        parent_columns=list(parent_columns),
        update_action=_parse_action(data.get("on_update"), table),
        delete_action=_parse_action(data.get("on_delete"), table),
        is_enabled=data.get("enabled", True),
    )


def _parse_index(data: dict, by_name: dict[str, Column], table: Identifier) -> Index:
    _check_fields(data, VALID_INDEX_FIELDS, "index")

    raw_columns = data.get("columns") or []
    if isinstance(raw_columns, str):
        raw_columns = [raw_columns]

    index_columns = []
    for raw in raw_columns:
        expression, order = _parse_index_column(raw)
        index_columns.append(
            IndexColumn(expression=expression, order=order, column=by_name.get(expression))
        )

    included = data.get("include") or []
    included_columns = _resolve_columns(included, by_name, table, "index") if included else []

    return Index(
        name=data.get("name"),
        columns=tuple(index_columns),
        included_columns=tuple(included_columns),
        is_unique=data.get("unique", False),
        is_enabled=data.get("enabled", True),
        filter_definition=data.get("filter"),
    )


def _parse_index_column(raw: Any) -> tuple[str, IndexColumnOrder]:
    """Parse ``"name"``, ``"name desc"`` or ``{expression: ..., order: ...}``."""
    if isinstance(raw, dict):
        expression = str(raw.get("expression", ""))
        order_text = str(raw.get("order", "asc"))
    else:
        text = str(raw).strip()
        match = re.match(r"^(.*?)\s+(asc|desc)$", text, re.IGNORECASE)
        if match:
            expression, order_text = match.group(1), match.group(2)
        else:
            expression, order_text = text, "asc"

    if not expression.strip():
        raise SchemaLoadError(f"Index column definition missing expression: {raw!r}")
    try:
        order = IndexColumnOrder(order_text.strip().lower())
    except ValueError:
        raise SchemaLoadError(f"Unknown index column order '{order_text}'") from None
    return expression.strip(), order


def _parse_check(data: dict) -> CheckConstraint:
    if not isinstance(data, dict) or not data.get("definition"):
        raise SchemaLoadError(f"Check constraint missing 'definition': {data!r}")
    return CheckConstraint(
        name=data.get("name"),
        definition=data["definition"],
        is_enabled=data.get("enabled", True),
    )


def _parse_trigger(data: dict) -> Trigger:
    if not isinstance(data, dict) or not data.get("name"):
        raise SchemaLoadError(f"Trigger definition missing 'name': {data!r}")

    try:
        timing = TriggerTiming(str(data.get("timing", "after")).lower().replace("_", " "))
    except ValueError:
        raise SchemaLoadError(f"Trigger '{data['name']}' has unknown timing") from None

    events = TriggerEvent.NONE
    raw_events = data.get("events") or []
    if isinstance(raw_events, str):
        raw_events = [raw_events]
    for event in raw_events:
        try:
            events |= TriggerEvent[str(event).upper()]
        except KeyError:
            raise SchemaLoadError(
                f"Trigger '{data['name']}' has unknown event '{event}'"
            ) from None

    return Trigger(
        name=data["name"],
        definition=data.get("definition", ""),
        timing=timing,
        events=events,
        is_enabled=data.get("enabled", True),
    )


def _parse_view(data: dict) -> View:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"View definition must be a mapping, got {data!r}")
    return View(
        name=_parse_name(data, "name", "view"),
        definition=data.get("definition", ""),
        columns=tuple(_parse_column(col) for col in data.get("columns") or []),
        is_materialized=data.get("materialized", False),
    )


def _parse_sequence(data: dict) -> Sequence:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Sequence definition must be a mapping, got {data!r}")
    name = _parse_name(data, "name", "sequence")
    owner = f"Sequence '{name}'"
    return Sequence(
        name=name,
        start=_parse_int(data.get("start", 1), "start", owner),
        increment=_parse_int(data.get("increment", 1), "increment", owner),
        min_value=_parse_optional_int(data.get("min_value"), "min_value", owner),
        max_value=_parse_optional_int(data.get("max_value"), "max_value", owner),
        cycle=data.get("cycle", False),
        cache=_parse_int(data.get("cache", 0), "cache", owner),
    )


def _parse_synonym(data: dict) -> Synonym:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Synonym definition must be a mapping, got {data!r}")
    target = data.get("target")
    if not target:
        raise SchemaLoadError(f"Synonym '{data.get('name')}' missing 'target' field")
    name = _parse_name(data, "name", "synonym")
    try:
        target_name = Identifier.qualified(*str(target).split("."))
    except ValueError as e:
        raise SchemaLoadError(f"Synonym '{name}' has an invalid target '{target}': {e}") from e
    return Synonym(name=name, target=target_name)


def _parse_routine(data: dict) -> Routine:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Routine definition must be a mapping, got {data!r}")
    return Routine(
        name=_parse_name(data, "name", "routine"),
        definition=data.get("definition", ""),
    )


def _link_foreign_keys(
    parsed: dict[Identifier, tuple[Table, list[_ForeignKeySpec]]],
) -> list[Table]:
    """Resolve declared foreign keys and attach them to both tables."""
    parent_keys: dict[Identifier, list[RelationalKey]] = {name: [] for name in parsed}
    child_keys: dict[Identifier, list[RelationalKey]] = {name: [] for name in parsed}

    for child_name, (child_table, foreign_keys) in parsed.items():
        for spec in foreign_keys:
            if spec.parent_table not in parsed:
                raise SchemaLoadError(
                    f"Foreign key on table '{child_name}' references unknown table '{spec.parent_table}'"
                )
            parent_table, _ = parsed[spec.parent_table]
            relational_key = RelationalKey(
                child_table=child_name,
                child_key=Key(
                    name=spec.name,
                    key_type=KeyType.FOREIGN,
                    columns=tuple(child_table.get_column(c) for c in spec.columns),
                    is_enabled=spec.is_enabled,
                ),
                parent_table=parent_table.name,
                parent_key=_find_parent_key(parent_table, spec),
                update_action=spec.update_action,
                delete_action=spec.delete_action,
            )
            parent_keys[child_name].append(relational_key)
            child_keys[parent_table.name].append(relational_key)

    return [
        Table(
            name=table.name,
            columns=table.columns,
            primary_key=table.primary_key,
            unique_keys=table.unique_keys,
            parent_keys=tuple(parent_keys[name]),
            child_keys=tuple(child_keys[name]),
            indexes=table.indexes,
            checks=table.checks,
            triggers=table.triggers,
        )
        for name, (table, _) in parsed.items()
    ]


def _find_parent_key(parent: Table, spec: _ForeignKeySpec) -> Key:
    """Find the candidate key of the parent table that a foreign key references.

    Without explicit columns the primary key is used.
    """
    candidates = ([parent.primary_key] if parent.primary_key is not None else []) + list(
        parent.unique_keys
    )

    if not spec.parent_columns:
        if parent.primary_key is None:
            raise SchemaLoadError(
                f"Foreign key to '{parent.name}' has no columns and the table has no primary key"
            )
        key = parent.primary_key
    else:
        key = next(
            (k for k in candidates if [c.name for c in k.columns] == spec.parent_columns),
            None,
        )
        if key is None:
            raise SchemaLoadError(
                f"Foreign key to '{parent.name}' references columns "
                f"({', '.join(spec.parent_columns)}) which are not a primary or unique key"
            )

    if len(key.columns) != len(spec.columns):
        raise SchemaLoadError(
            f"Foreign key to '{parent.name}' has {len(spec.columns)} columns "
            f"but the referenced key has {len(key.columns)}"
        )
    return key
