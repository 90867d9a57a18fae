"""
Configuration Loader (``settlement_config.loader``).

Responsibility
--------------
Loads a settlement policy YAML file and parses it into a frozen
``SettlementConfig``.  Runtime callers go through
``settlement_config.get_active_config()``.

Invariants enforced
-------------------
* Unknown keys and malformed values raise ``ConfigurationError``; no
  silent defaults for values that are present but wrong.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``ConfigurationError`` (wrapping ``yaml.YAMLError``).
"""

from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any

import yaml

from settlement_config.schema import SettlementConfig
from settlement_engines.timestamps import compose_instant, parse_utc_offset
from settlement_kernel.domain.currency import CurrencyRegistry
from settlement_kernel.exceptions import ConfigurationError, InvalidTimestampError

_ALLOWED_KEYS = frozenset({
    "utc_offset",
    "default_check_in_time",
    "default_check_out_time",
    "currency",
    "strict_timestamps",
})

_TIME_KEYS = ("default_check_in_time", "default_check_out_time")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        ConfigurationError: if the file is not valid YAML or not a mapping.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(str(path), f"invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top level must be a mapping")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _as_time_text(source: str, key: str, value: Any) -> str:
    # YAML 1.1 reads unquoted 14:00 as the sexagesimal integer 840 and
    # 14:00:00 as 50400; values below one day of minutes are HH:MM
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 24 * 60:
            value = f"{value // 60:02d}:{value % 60:02d}"
        else:
            value = f"{value // 3600:02d}:{value % 3600 // 60:02d}:{value % 60:02d}"
    if not isinstance(value, str):
        raise ConfigurationError(source, f"{key} must be a time string, got {value!r}")
    try:
        compose_instant("2000-01-01", value)
    except InvalidTimestampError as e:
        raise ConfigurationError(source, f"{key}: {e.reason}") from e
    return value


def parse_settlement_config(data: dict[str, Any], source: str = "<dict>") -> SettlementConfig:
    """
    Validate a raw mapping and build a ``SettlementConfig``.

    Keys that are absent take the dataclass defaults.
    """
    unknown = sorted(set(data) - _ALLOWED_KEYS)
    if unknown:
        raise ConfigurationError(source, f"unknown keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}

    if "utc_offset" in data:
        offset = str(data["utc_offset"])
        try:
            parse_utc_offset(offset)
        except ValueError as e:
            raise ConfigurationError(source, str(e)) from e
        values["utc_offset"] = offset

    for key in _TIME_KEYS:
        if key in data:
            values[key] = _as_time_text(source, key, data[key])

    if "currency" in data:
        currency = str(data["currency"]).upper().strip()
        if not re.fullmatch(r"[A-Z]{3}", currency) or not CurrencyRegistry.is_valid(currency):
            raise ConfigurationError(source, f"unsupported currency {data['currency']!r}")
        values["currency"] = currency

    if "strict_timestamps" in data:
        strict = data["strict_timestamps"]
        if not isinstance(strict, bool):
            raise ConfigurationError(source, "strict_timestamps must be true or false")
        values["strict_timestamps"] = strict

    return SettlementConfig(checksum=compute_checksum(data), **values)


def load_settlement_config(path: Path) -> SettlementConfig:
    """Load and validate a settlement policy file."""
    return parse_settlement_config(load_yaml_file(path), source=str(path))
