"""
Slot timing report.

For every message in a trace record the report prints how far into the
target slot it was observed, in whole milliseconds. Negative offsets mean the
message arrived before the slot started.

Report order per record:

1. Pre-consensus messages
2. Each consensus round, ascending: proposal, prepares, commits, round changes
3. Post-consensus messages
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO

from trace_timing.chain import ChainError, Slot, SlotClock
from trace_timing.exporter import TraceRecord
from trace_timing.types import TimestampParseError, parse_rfc3339, to_milliseconds

logger = logging.getLogger(__name__)

ROUND_KINDS = ("proposal", "prepare", "commit", "round-change")
"""Message kinds within a round, in report order."""


class OnError(Enum):
    """What to do with a record whose timestamps cannot be converted."""

    ABORT = "abort"
    """Stop the report at the first error."""

    SKIP = "skip"
    """Drop the offending record and continue."""


@dataclass(frozen=True, slots=True)
class MessageOffset:
    """When one message was observed, relative to the target slot start."""

    phase: str
    """One of "pre", "consensus" or "post"."""

    kind: str
    """Message kind: "pre", "post", or one of `ROUND_KINDS`."""

    round: int | None
    """1-based consensus round, None outside consensus."""

    signer: int
    """Operator that signed the message (the leader for proposals)."""

    offset_ns: int
    """Signed nanoseconds since the target slot started."""

    @property
    def offset_ms(self) -> int:
        """Offset in whole milliseconds, truncated toward zero."""
        return to_milliseconds(self.offset_ns)


def iter_message_offsets(
    record: TraceRecord,
    clock: SlotClock,
    target_slot: int,
) -> Iterator[MessageOffset]:
    """
    Yield the offset of every message in `record`, in report order.

    Raises:
        TimestampParseError: If a message time is not RFC 3339.
        ChainError: If the target slot cannot be converted.
    """

    def offset(time: str) -> int:
        return clock.time_into_slot(target_slot, parse_rfc3339(time))

    for msg in record.pre:
        yield MessageOffset("pre", "pre", None, msg.signer, offset(msg.time))

    for round_number, step in enumerate(record.consensus, start=1):
        # (kind, signer, time) in report order.
        messages: list[tuple[str, int, str]] = []
        if step.proposal is not None:
            messages.append(("proposal", step.proposal.leader, step.proposal.time))
        messages += [("prepare", m.signer, m.time) for m in step.prepares]
        messages += [("commit", m.signer, m.time) for m in step.commits]
        messages += [("round-change", m.signer, m.time) for m in step.round_changes]

        for kind, signer, time in messages:
            yield MessageOffset("consensus", kind, round_number, signer, offset(time))

    for msg in record.post:
        yield MessageOffset("post", "post", None, msg.signer, offset(msg.time))


@dataclass(slots=True)
class ReportRenderer:
    """
    Prints per-message slot offsets for trace records.

    Every record is converted in full before anything is written, so a
    skipped record leaves no partial output behind.
    """

    clock: SlotClock
    """Clock of the chain the traces belong to."""

    target_slot: Slot
    """Slot every offset is measured against."""

    out: TextIO = field(default_factory=lambda: sys.stdout)
    """Stream the report is written to."""

    on_error: OnError = OnError.ABORT
    """Policy for records that fail to convert."""

    indent: str = "  "

    def format_record(self, record: TraceRecord) -> list[str]:
        """
        Build the report lines for one record.

        Raises:
            TimestampParseError: If a message time is not RFC 3339.
            ChainError: If the target slot cannot be converted.
        """
        offsets = list(iter_message_offsets(record, self.clock, self.target_slot))
        indent = self.indent

        def entries(phase: str, kind: str, round_number: int | None, depth: int) -> list[str]:
            return [
                f"{indent * depth}{o.offset_ms} ms"
                for o in offsets
                if o.phase == phase and o.kind == kind and o.round == round_number
            ]

        lines = [
            f"Slot {record.slot} | Validator {record.validator} | "
            f"Role {record.role} | Committee {record.committee_id}",
            "Pre:",
            *entries("pre", "pre", None, 1),
            "",
            "Consensus:",
        ]
        for round_number in range(1, len(record.consensus) + 1):
            lines.append(f"----------[round={round_number}]----------")
            for kind in ROUND_KINDS:
                lines.append(f"{indent}{kind}:")
                lines.extend(entries("consensus", kind, round_number, 2))
        lines.extend(
            [
                "----------------------------",
                "",
                "Post:",
                *entries("post", "post", None, 1),
            ]
        )
        return lines

    def render(self, records: Iterable[TraceRecord]) -> int:
        """
        Write the report for `records`.

        Returns:
            The number of records written.

        Raises:
            TimestampParseError, ChainError: Under `OnError.ABORT`, the first
                conversion error.
        """
        written = 0
        skipped = 0
        for record in records:
            try:
                lines = self.format_record(record)
            except (TimestampParseError, ChainError) as e:
                if self.on_error is OnError.ABORT:
                    raise
                skipped += 1
                logger.warning(
                    "Skipping %s trace of validator %s at slot %s: %s",
                    record.role,
                    record.validator,
                    record.slot,
                    e,
                )
                continue

            for line in lines:
                print(line, file=self.out)
            print(file=self.out)
            written += 1

        if skipped:
            logger.warning("Skipped %d of %d trace records", skipped, written + skipped)
        return written
