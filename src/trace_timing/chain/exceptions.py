"""Exception hierarchy for slot and chain conversions."""

from __future__ import annotations

from collections.abc import Iterable

from trace_timing.types import format_rfc3339


def _describe_instant(timestamp_ns: int) -> str:
    """RFC 3339 form of an instant, or raw nanoseconds outside the calendar range."""
    try:
        return format_rfc3339(timestamp_ns)
    except OverflowError:
        return f"{timestamp_ns}ns since the Unix epoch"


class ChainError(Exception):
    """
    Base exception for all chain clock errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class SlotOutOfRangeError(ChainError):
    """
    Raised when a slot cannot be converted to a time offset without overflow.

    Attributes:
        slot: The rejected slot number.
        max_slot: The largest slot accepted by the check that failed.
    """

    def __init__(self, slot: int, max_slot: int) -> None:
        self.slot = slot
        self.max_slot = max_slot

        if slot < 0:
            msg = f"slot number {slot} cannot be negative"
        else:
            msg = f"slot number {slot} cannot exceed max allowed slot number of {max_slot}"
        super().__init__(msg)


class TimeBeforeGenesisError(ChainError):
    """
    Raised when a timestamp precedes genesis and therefore has no slot.

    Attributes:
        timestamp_ns: The rejected instant, in nanoseconds since the Unix epoch.
        genesis_time_ns: The chain's genesis instant, in nanoseconds.
    """

    def __init__(self, timestamp_ns: int, genesis_time_ns: int) -> None:
        self.timestamp_ns = timestamp_ns
        self.genesis_time_ns = genesis_time_ns

        super().__init__(
            f"time {_describe_instant(timestamp_ns)} is before "
            f"genesis time {_describe_instant(genesis_time_ns)}"
        )


class UnknownChainError(ChainError):
    """
    Raised when a chain name is not present in the registry.

    Attributes:
        name: The requested name.
        known: The names the registry does hold.
    """

    def __init__(self, name: str, known: Iterable[str] = ()) -> None:
        self.name = name
        self.known = tuple(known)

        msg = f"unknown blockchain: {name!r}"
        if self.known:
            msg = f"{msg} (known: {', '.join(self.known)})"
        super().__init__(msg)
