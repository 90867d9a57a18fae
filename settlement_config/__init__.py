"""
settlement_config -- single public entrypoint for settlement configuration.

Responsibility:
    Provides the ONLY way to obtain settlement policy at runtime through
    ``get_active_config()``.  YAML loading is internal to this package.

Architecture position:
    Configuration -- sits above ``settlement_kernel``/``settlement_engines``
    and below ``settlement_services``.  Engines MUST NEVER import from
    ``settlement_config``; ``SettlementConfig.to_policy()`` is the bridge.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ConfigurationError`` -- malformed YAML, unknown keys, bad values.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``SETTLEMENT_CONFIG_TRACE`` log entry with the source path and checksum,
    tying every revenue statement to the policy that produced it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from settlement_config.loader import load_settlement_config
from settlement_config.schema import SettlementConfig

_logger = logging.getLogger("settlement.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | None = None) -> SettlementConfig:
    """
    Load the settlement policy.

    Args:
        config_path: Override path to a policy YAML file. Defaults to the
            packaged ``defaults.yaml``.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    config = load_settlement_config(path)

    _logger.info(
        "SETTLEMENT_CONFIG_TRACE",
        extra={
            "trace_type": "SETTLEMENT_CONFIG_TRACE",
            "config_path": str(path),
            "checksum": config.checksum,
            "utc_offset": config.utc_offset,
            "currency": config.currency,
            "strict_timestamps": config.strict_timestamps,
        },
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SettlementConfig",
    "get_active_config",
]
