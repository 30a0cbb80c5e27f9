"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Reads an optional YAML settings file, applies ``LEDGER_*`` environment
overrides on top, validates every value and returns a frozen
``LedgerSettings``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or invalid values  -> ``ValueError`` with the offending key.
"""

from __future__ import annotations

import logging
import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping

import yaml

from ledger_config.schema import LedgerSettings

ENV_PREFIX = "LEDGER_"

_ENV_KEYS = {
    "DATABASE_URL": "database_url",
    "ECHO_SQL": "echo_sql",
    "DEPOSIT_LIMIT_RATIO": "deposit_limit_ratio",
    "BEST_CLIENTS_LIMIT": "best_clients_default_limit",
    "LOG_LEVEL": "log_level",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{key}: expected a boolean, got {value!r}")


def _parse_ratio(key: str, value: Any) -> Decimal:
    try:
        ratio = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{key}: expected a decimal, got {value!r}") from None
    if not ratio.is_finite() or ratio < 0 or ratio > 1:
        raise ValueError(f"{key}: must be between 0 and 1, got {value!r}")
    return ratio


def _parse_positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key}: expected a positive integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValueError(f"{key}: expected a positive integer, got {value!r}") from None
    if number < 1:
        raise ValueError(f"{key}: expected a positive integer, got {value!r}")
    return number


def _parse_log_level(key: str, value: Any) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{key}: unknown log level {value!r}")
    return level


def parse_settings(raw: Mapping[str, Any]) -> LedgerSettings:
    """Validate a flat mapping of setting names to raw values."""
    known = set(LedgerSettings.__dataclass_fields__)
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

    values: dict[str, Any] = {}
    if "database_url" in raw:
        url = str(raw["database_url"]).strip()
        if not url:
            raise ValueError("database_url: must not be empty")
        values["database_url"] = url
    if "echo_sql" in raw:
        values["echo_sql"] = _parse_bool("echo_sql", raw["echo_sql"])
    if "deposit_limit_ratio" in raw:
        values["deposit_limit_ratio"] = _parse_ratio(
            "deposit_limit_ratio", raw["deposit_limit_ratio"]
        )
    if "best_clients_default_limit" in raw:
        values["best_clients_default_limit"] = _parse_positive_int(
            "best_clients_default_limit", raw["best_clients_default_limit"]
        )
    if "log_level" in raw:
        values["log_level"] = _parse_log_level("log_level", raw["log_level"])
    return LedgerSettings(**values)


def env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect ``LEDGER_*`` variables as setting-name -> raw string."""
    return {
        field: environ[ENV_PREFIX + suffix]
        for suffix, field in _ENV_KEYS.items()
        if ENV_PREFIX + suffix in environ
    }


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LedgerSettings:
    """
    Build settings from an optional YAML file plus environment overrides.

    Environment wins over the file; the file wins over defaults.
    """
    raw: dict[str, Any] = load_yaml_file(path) if path is not None else {}
    raw.update(env_overrides(os.environ if environ is None else environ))
    return parse_settings(raw)
