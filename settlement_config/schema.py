"""
Settlement configuration schema (``settlement_config.schema``).

Frozen dataclass describing the settlement policy of one market, and the
bridge that turns it into the engine's ``SettlementPolicy``.
"""

from __future__ import annotations

from dataclasses import dataclass

from settlement_engines.boundaries import SettlementPolicy
from settlement_engines.timestamps import parse_utc_offset


@dataclass(frozen=True)
class SettlementConfig:
    """Settlement policy for a single-market deployment."""

    utc_offset: str = "+07:00"
    default_check_in_time: str = "14:00"
    default_check_out_time: str = "12:00"
    currency: str = "VND"
    strict_timestamps: bool = True
    checksum: str = ""

    def to_policy(self) -> SettlementPolicy:
        """Engine-facing view of this configuration."""
        return SettlementPolicy(
            utc_offset=parse_utc_offset(self.utc_offset),
            default_check_in_time=self.default_check_in_time,
            default_check_out_time=self.default_check_out_time,
            strict_timestamps=self.strict_timestamps,
        )
