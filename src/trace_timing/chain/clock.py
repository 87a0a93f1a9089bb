"""
Slot Clock
==========

Time-to-slot conversion for slot-based chains.

The slot clock bridges wall-clock time to the discrete slot-based time model
used by consensus. Report offsets are only meaningful if every message is
measured against the same slot boundary.

All instants are integer nanoseconds since the Unix epoch and all durations
are signed integer nanoseconds.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from time import time_ns

from trace_timing.types import MAX_INT64

from .config import ChainConfig
from .exceptions import SlotOutOfRangeError, TimeBeforeGenesisError
from .slot import Slot


@dataclass(frozen=True, slots=True)
class SlotClock:
    """
    Converts between slots and wall-clock instants for one chain.

    The conversions are pure functions of the chain configuration and their
    arguments; only `current_slot` reads the time source.
    """

    chain: ChainConfig
    """Genesis time and slot duration of the chain."""

    time_fn: Callable[[], int] = time_ns
    """Time source in nanoseconds (injectable for testing)."""

    @property
    def max_slot(self) -> Slot:
        """Largest slot whose offset from genesis fits in a signed 64-bit count."""
        return Slot(MAX_INT64 // self.chain.slot_duration_ns)

    def slot_start_time(self, slot: int) -> int:
        """
        Get the instant at which `slot` begins.

        The slot offset ``slot * slot_duration`` is bounded to a signed 64-bit
        nanosecond count. Both bounds are checked before multiplying.

        Raises:
            SlotOutOfRangeError: If `slot` exceeds the signed 64-bit maximum,
                or if its offset from genesis would overflow.
        """
        if slot < 0 or slot > MAX_INT64:
            raise SlotOutOfRangeError(slot, MAX_INT64)

        max_slot = self.max_slot
        if slot > max_slot:
            raise SlotOutOfRangeError(slot, max_slot)

        return self.chain.genesis_time_ns + int(slot) * self.chain.slot_duration_ns

    def estimated_slot_at_time(self, timestamp_ns: int) -> Slot:
        """
        Get the slot whose window contains `timestamp_ns`.

        Raises:
            TimeBeforeGenesisError: If `timestamp_ns` precedes genesis.
        """
        genesis_ns = self.chain.genesis_time_ns
        if timestamp_ns < genesis_ns:
            raise TimeBeforeGenesisError(timestamp_ns, genesis_ns)
        return Slot((timestamp_ns - genesis_ns) // self.chain.slot_duration_ns)

    def time_into_slot(self, target_slot: int, timestamp_ns: int) -> int:
        """
        Signed nanoseconds from the start of `target_slot` to `timestamp_ns`.

        Negative when the timestamp precedes the slot. Errors from
        `slot_start_time` propagate unchanged.
        """
        return timestamp_ns - self.slot_start_time(target_slot)

    def current_slot(self) -> Slot:
        """
        Get the slot at the current wall-clock time.

        Raises:
            TimeBeforeGenesisError: If the chain has not started yet.
        """
        return self.estimated_slot_at_time(self.time_fn())
