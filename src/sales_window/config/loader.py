from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_EXTENSIONS,
    DEFAULT_LABELS,
    DEFAULT_QUERY_FORMATS,
    DEFAULT_TRANSACTION_FORMATS,
    HeaderLabels,
    ReportConfig,
)

"""Config loader.

Responsibilities:
- Load a YAML config (default ``config/report.yml``)
- Validate it against the packaged JSON schema (no unknown keys)
- Fill every omitted key from the built-in defaults

Path resolution for the CLI: ``--config`` > ``$SALES_WINDOW_CONFIG`` > default path.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/report.yml")
CONFIG_ENV_VAR = "SALES_WINDOW_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data violates it
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


def resolve_config_path(explicit: str | Path | None = None) -> tuple[Path, bool]:
    """Return ``(path, required)``.

    ``required`` is True when the path was chosen explicitly (argument or env var);
    only an explicitly chosen file must exist.
    """
    if explicit:
        return Path(explicit), True
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path) -> ReportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    headers_raw = data.get("headers", {})
    headers = HeaderLabels(
        date=headers_raw.get("date", DEFAULT_LABELS.date),
        time=headers_raw.get("time", DEFAULT_LABELS.time),
        amount=headers_raw.get("amount", DEFAULT_LABELS.amount),
    )
    return ReportConfig(
        headers=headers,
        allowed_extensions=tuple(data.get("allowed_extensions", DEFAULT_EXTENSIONS)),
        query_formats=tuple(data.get("query_formats", DEFAULT_QUERY_FORMATS)),
        transaction_formats=tuple(data.get("transaction_formats", DEFAULT_TRANSACTION_FORMATS)),
    )
