from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load the optional YAML config (database fallback values and option defaults)
- Validate it against the schema shipped next to this module
- Apply defaults when the file or a key is absent
"""

SCHEMA_PATH = Path(__file__).with_name("schema.json")
DEFAULT_CONFIG_PATH = Path("config/find_uos.yml")

DEFAULT_SCHEMA = "sierra_view"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection fallback values.

    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None
    sslmode: str | None = None
    schema: str = DEFAULT_SCHEMA


@dataclass(frozen=True)
class OptionDefaults:
    skip: int = 1
    column: int = 1
    result_column: int = 0


@dataclass(frozen=True)
class FinderConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    defaults: OptionDefaults = field(default_factory=OptionDefaults)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails validation (unknown keys, wrong types).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path | None = None) -> FinderConfig:
    """Load the config file at ``path``.

    With no explicit path the default location is used if it exists, and
    built-in defaults otherwise. An explicit path that does not exist is an
    error.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return FinderConfig()
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        raise ConfigError(f"config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    db_raw = data.get("database", {})
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
        sslmode=db_raw.get("sslmode"),
        schema=db_raw.get("schema", DEFAULT_SCHEMA),
    )
    defaults_raw = data.get("defaults", {})
    defaults = OptionDefaults(
        skip=defaults_raw.get("skip", 1),
        column=defaults_raw.get("column", 1),
        result_column=defaults_raw.get("result_column", 0),
    )
    return FinderConfig(database=db, defaults=defaults)
