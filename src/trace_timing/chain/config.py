"""
Chain Configuration Specification

This file defines the timing parameters of a slot-based chain and the
presets for the networks the exporter serves.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator
from typing_extensions import Final

from trace_timing.types import NANOS_PER_MILLISECOND, NANOS_PER_SECOND, StrictBaseModel, Uint64

# --- Time Parameters ---

SECONDS_PER_SLOT: Final = Uint64(12)
"""The slot duration of the Ethereum beacon chain networks, in seconds."""

MAINNET_GENESIS_TIME: Final = Uint64(1606824023)
"""Mainnet genesis: 2020-12-01 12:00:23 UTC."""

HOODI_GENESIS_TIME: Final = Uint64(1742213400)
"""Hoodi testnet genesis: 2025-03-17 12:10:00 UTC."""


class ChainConfig(StrictBaseModel):
    """
    Timing parameters of one deployment of a slot-based chain.

    Slot ``n`` of the chain starts at ``genesis_time + n * slot_duration``.

    Field names use UPPERCASE aliases to match the cross-client YAML
    convention. Files may give the cadence either as ``SLOT_DURATION_MS`` or
    as the older ``SECONDS_PER_SLOT``.
    """

    name: str = Field(min_length=1)
    """Canonical network name, e.g. ``mainnet``."""

    genesis_time: Uint64 = Field(alias="GENESIS_TIME")
    """Unix timestamp (seconds since 1970-01-01 UTC) when slot 0 begins."""

    slot_duration_ms: Uint64 = Field(alias="SLOT_DURATION_MS")
    """Duration of every slot of this chain, in milliseconds."""

    @model_validator(mode="before")
    @classmethod
    def accept_seconds_per_slot(cls, data: Any) -> Any:
        """Translate ``SECONDS_PER_SLOT`` into ``SLOT_DURATION_MS``."""
        if not isinstance(data, dict) or "SECONDS_PER_SLOT" not in data:
            return data

        data = dict(data)
        seconds = data.pop("SECONDS_PER_SLOT")
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise ValueError(f"SECONDS_PER_SLOT must be an integer, got {type(seconds).__name__}")

        millis = seconds * 1000
        declared = data.get("SLOT_DURATION_MS", data.get("slot_duration_ms"))
        if declared is not None and declared != millis:
            raise ValueError(
                f"SECONDS_PER_SLOT ({seconds}) disagrees with SLOT_DURATION_MS ({declared})"
            )
        data["SLOT_DURATION_MS"] = millis
        data.pop("slot_duration_ms", None)
        return data

    @field_validator("slot_duration_ms")
    @classmethod
    def check_positive_duration(cls, v: Uint64) -> Uint64:
        """A zero-length slot would make every conversion undefined."""
        if v == 0:
            raise ValueError("slot duration must be positive")
        return v

    @property
    def genesis_time_ns(self) -> int:
        """Genesis instant in nanoseconds since the Unix epoch."""
        return int(self.genesis_time) * NANOS_PER_SECOND

    @property
    def slot_duration_ns(self) -> int:
        """Slot duration in nanoseconds, the clock's smallest time unit."""
        return int(self.slot_duration_ms) * NANOS_PER_MILLISECOND


# The Mainnet Chain Configuration.
MAINNET_CONFIG: Final = ChainConfig(
    name="mainnet",
    genesis_time=MAINNET_GENESIS_TIME,
    slot_duration_ms=Uint64(SECONDS_PER_SLOT * 1000),
)

# The Hoodi Testnet Chain Configuration.
HOODI_CONFIG: Final = ChainConfig(
    name="hoodi",
    genesis_time=HOODI_GENESIS_TIME,
    slot_duration_ms=Uint64(SECONDS_PER_SLOT * 1000),
)
