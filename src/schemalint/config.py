"""Configuration management for schemalint."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from schemalint.exceptions import ConfigError
from schemalint.types import RuleLevel

VALID_CONFIG_FIELDS = {"schema_path", "level", "fail_on", "max_columns", "rules"}

DISABLED = "off"


def parse_level(value: Any, source: str) -> RuleLevel:
    try:
        return RuleLevel.parse(value)
    except ValueError:
        valid = ", ".join(level.name.lower() for level in RuleLevel)
        raise ConfigError(f"Invalid level {value!r} for {source}. Expected one of: {valid}") from None


def parse_max_columns(value: Any, source: str) -> int:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid column limit {value!r} for {source}") from None
    if limit <= 0:
        raise ConfigError(f"Column limit for {source} must be positive, got {limit}")
    return limit


def load_config_file(path: Path) -> dict[str, Any]:
    """Load settings from a YAML config file.

    Returns a dict with any of: schema_path, default_level, fail_on,
    max_columns, rule_levels, disabled_rules.

    Raises:
        ConfigError: If the file is missing, malformed or has invalid values.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    unknown_fields = set(data.keys()) - VALID_CONFIG_FIELDS
    if unknown_fields:
        raise ConfigError(
            f"Unknown field(s) in config file: {', '.join(sorted(unknown_fields))}"
        )

    result: dict[str, Any] = {}
    if "schema_path" in data:
        result["schema_path"] = Path(data["schema_path"])
    if "level" in data:
        result["default_level"] = parse_level(data["level"], "level")
    if "fail_on" in data:
        result["fail_on"] = parse_level(data["fail_on"], "fail_on")
    if "max_columns" in data:
        result["max_columns"] = parse_max_columns(data["max_columns"], "max_columns")

    rules = data.get("rules") or {}
    if not isinstance(rules, dict):
        raise ConfigError("'rules' must be a mapping of rule name to level")

    rule_levels: dict[str, RuleLevel] = {}
    disabled: list[str] = []
    for name, value in rules.items():
        # YAML reads a bare `off` as False
        if value is False or (isinstance(value, str) and value.strip().lower() == DISABLED):
            disabled.append(name)
        else:
            rule_levels[name] = parse_level(value, f"rule '{name}'")
    if rules:
        result["rule_levels"] = rule_levels
        result["disabled_rules"] = tuple(disabled)

    return result


@dataclass
class Config:
    """Configuration for schemalint."""

    schema_path: Path = Path("schema.yaml")
    default_level: RuleLevel = RuleLevel.WARNING
    fail_on: RuleLevel = RuleLevel.ERROR
    max_columns: int = 100
    rule_levels: dict[str, RuleLevel] = field(default_factory=dict)
    disabled_rules: tuple[str, ...] = ()

    @classmethod
    def from_env(
        cls,
        *,
        config_file: Optional[Path] = None,
        schema_path: Optional[Path] = None,
        default_level: Optional[str] = None,
        fail_on: Optional[str] = None,
        max_columns: Optional[int] = None,
    ) -> "Config":
        """Load configuration from a config file, env vars, with CLI overrides.

        Priority (highest to lowest):
        1. Explicit parameters (CLI args)
        2. Environment variables
        3. Config file
        4. Defaults
        """
        file_cfg: dict[str, Any] = {}
        config_path = config_file or _env_path("SCHEMALINT_CONFIG")
        if config_path is not None:
            file_cfg = load_config_file(config_path)

        def resolve(explicit, env_key, cfg_key):
            if explicit is not None:
                return explicit
            env_val = os.environ.get(env_key)
            if env_val is not None:
                return env_val
            return file_cfg.get(cfg_key)

        defaults = cls()

        resolved_path = resolve(schema_path, "SCHEMALINT_SCHEMA_PATH", "schema_path")
        resolved_level = resolve(default_level, "SCHEMALINT_LEVEL", "default_level")
        resolved_fail_on = resolve(fail_on, "SCHEMALINT_FAIL_ON", "fail_on")
        resolved_max = resolve(max_columns, "SCHEMALINT_MAX_COLUMNS", "max_columns")

        disabled = list(file_cfg.get("disabled_rules", ()))
        env_disabled = os.environ.get("SCHEMALINT_DISABLED_RULES")
        if env_disabled:
            disabled.extend(name.strip() for name in env_disabled.split(",") if name.strip())

        return cls(
            schema_path=Path(resolved_path) if resolved_path is not None else defaults.schema_path,
            default_level=parse_level(resolved_level, "level")
            if resolved_level is not None
            else defaults.default_level,
            fail_on=parse_level(resolved_fail_on, "fail_on")
            if resolved_fail_on is not None
            else defaults.fail_on,
            max_columns=parse_max_columns(resolved_max, "max_columns")
            if resolved_max is not None
            else defaults.max_columns,
            rule_levels=dict(file_cfg.get("rule_levels", {})),
            disabled_rules=tuple(dict.fromkeys(disabled)),
        )


def _env_path(key: str) -> Optional[Path]:
    value = os.environ.get(key)
    return Path(value) if value else None
