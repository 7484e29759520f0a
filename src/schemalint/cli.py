"""Command-line interface for schemalint."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from schemalint.config import Config
from schemalint.exceptions import ConfigError, SchemaLoadError
from schemalint.lint.catalog import build_rules
from schemalint.lint.linter import SchemaLinter, summarize
from schemalint.schema.exporter import render_tables
from schemalint.schema.loader import load_database

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="schemalint",
        description="Lint and export relational database schema snapshots",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint_parser = subparsers.add_parser("lint", help="Run schema rules")
    lint_parser.add_argument("--schema-path", type=Path, help="Snapshot file or directory")
    lint_parser.add_argument("--config", type=Path, help="YAML config file")
    lint_parser.add_argument(
        "--level",
        help="Default level for rules without an explicit level (information, warning, error)",
    )
    lint_parser.add_argument(
        "--fail-on",
        help="Exit with status 1 when a message reaches this level (default: error)",
    )

    export_parser = subparsers.add_parser("export", help="Export schema as DBML")
    export_parser.add_argument("--schema-path", type=Path, help="Snapshot file or directory")
    export_parser.add_argument("--config", type=Path, help="YAML config file")
    export_parser.add_argument(
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.command == "lint":
        return cmd_lint(args)
    elif args.command == "export":
        return cmd_export(args)
    else:
        print(f"Command '{args.command}' not yet implemented", file=sys.stderr)
        return 1


def cmd_lint(args: argparse.Namespace) -> int:
    """Lint a schema snapshot and print every message."""
    try:
        config = Config.from_env(
            config_file=args.config,
            schema_path=args.schema_path,
            default_level=args.level,
            fail_on=args.fail_on,
        )
        database = load_database(config.schema_path)
        rules = build_rules(config, database.reserved_keywords)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except SchemaLoadError as e:
        print(f"Schema load error: {e}", file=sys.stderr)
        return 1

    logger.debug(f"Running {len(rules)} rules against {config.schema_path}")
    linter = SchemaLinter(rules)
    messages = list(linter.analyse_database(database))

    for message in messages:
        print(str(message))

    counts = summarize(messages)
    summary = ", ".join(f"{count} {level.name.lower()}" for level, count in counts.items())
    print(f"Found {len(messages)} messages ({summary})")

    if any(message.level >= config.fail_on for message in messages):
        return 1
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Render a schema snapshot as DBML."""
    try:
        config = Config.from_env(config_file=args.config, schema_path=args.schema_path)
        database = load_database(config.schema_path)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except SchemaLoadError as e:
        print(f"Schema load error: {e}", file=sys.stderr)
        return 1

    dbml = render_tables(database.tables)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(dbml + "\n" if dbml else "")
        logger.info(f"Wrote {len(database.tables)} tables to {args.output}")
    else:
        print(dbml)

    return 0


if __name__ == "__main__":
    sys.exit(main())
