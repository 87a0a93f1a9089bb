"""
Shared pytest fixtures for trace_timing tests.

Provides clocks pinned to known instants and builders for trace records
whose message times are given as offsets into a slot.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from trace_timing.chain import MAINNET_CONFIG, Slot, SlotClock
from trace_timing.exporter import TraceRecord
from trace_timing.types import NANOS_PER_MILLISECOND, format_rfc3339

TARGET_SLOT = Slot(13119734)
"""Slot used by the report fixtures."""


@pytest.fixture
def mainnet_clock() -> SlotClock:
    """Mainnet clock whose wall time sits 5 seconds into TARGET_SLOT."""
    start = MAINNET_CONFIG.genesis_time_ns + int(TARGET_SLOT) * MAINNET_CONFIG.slot_duration_ns
    return SlotClock(chain=MAINNET_CONFIG, time_fn=lambda: start + 5_000 * NANOS_PER_MILLISECOND)


@pytest.fixture
def slot_time(mainnet_clock: SlotClock) -> Callable[[int], str]:
    """RFC 3339 time `offset_ms` milliseconds after TARGET_SLOT starts."""

    def _at(offset_ms: int) -> str:
        start = mainnet_clock.slot_start_time(TARGET_SLOT)
        return format_rfc3339(start + offset_ms * NANOS_PER_MILLISECOND)

    return _at


@pytest.fixture
def record_factory(slot_time: Callable[[int], str]) -> Callable[..., TraceRecord]:
    """
    Factory for trace records in the exporter's wire shape.

    Message times are millisecond offsets into TARGET_SLOT; a string is used
    verbatim, which lets tests inject malformed timestamps.
    """

    def _time(value: int | str) -> str:
        return value if isinstance(value, str) else slot_time(value)

    def _create(
        pre: list[int | str] | None = None,
        rounds: list[dict[str, Any]] | None = None,
        post: list[int | str] | None = None,
        validator: str = "0xabc",
        role: str = "PROPOSER",
    ) -> TraceRecord:
        consensus = []
        for step in rounds or []:
            round_number = len(consensus) + 1
            proposal = step.get("proposal")
            consensus.append(
                {
                    "proposal": None
                    if proposal is None
                    else {"round": round_number, "leader": 1, "time": _time(proposal)},
                    "prepares": [
                        {"round": round_number, "signer": i + 1, "time": _time(t)}
                        for i, t in enumerate(step.get("prepares", []))
                    ],
                    "commits": [
                        {"round": round_number, "signer": i + 1, "time": _time(t)}
                        for i, t in enumerate(step.get("commits", []))
                    ],
                    "roundChanges": [
                        {"round": round_number, "signer": i + 1, "time": _time(t)}
                        for i, t in enumerate(step.get("round_changes", []))
                    ],
                }
            )
        return TraceRecord.model_validate(
            {
                "slot": str(TARGET_SLOT),
                "role": role,
                "validator": validator,
                "committeeID": "c0ffee",
                "consensus": consensus,
                "decideds": None,
                "pre": [{"signer": i + 1, "time": _time(t)} for i, t in enumerate(pre or [])],
                "post": [{"signer": i + 1, "time": _time(t)} for i, t in enumerate(post or [])],
                "proposalData": "",
            }
        )

    return _create
