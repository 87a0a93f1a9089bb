"""
Wire models for the validator trace exporter.

Trace records describe every protocol message a validator's operators
exchanged for one duty:

- pre-consensus partial signatures
- one consensus step per QBFT round (proposal, prepares, commits, round changes)
- post-consensus partial signatures

Timestamps stay as the exporter's RFC 3339 strings; they are parsed when a
report is rendered so one bad value does not reject the whole response.
Justification payloads have no fixed shape and are kept opaque.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from trace_timing.chain import Slot
from trace_timing.types import CamelModel, StrictBaseModel


def _null_as_empty(v: Any) -> Any:
    """The exporter encodes empty lists as JSON null."""
    return [] if v is None else v


class TraceRequest(StrictBaseModel):
    """Body of a validator trace query. The slot range is inclusive."""

    from_slot: Slot = Field(alias="from")
    to_slot: Slot = Field(alias="to")
    roles: list[str]


class PrePostMessage(CamelModel):
    """A pre- or post-consensus partial signature message."""

    ssv_root: str = ""
    signer: int
    time: str


class Proposal(CamelModel):
    """The leader's proposal for a round."""

    round: int
    ssv_root: str = ""
    leader: int
    round_change_justifications: Any = None
    prepare_justifications: Any = None
    time: str


class Prepare(CamelModel):
    """A prepare vote for a round's proposal."""

    round: int
    ssv_root: str = ""
    signer: int
    time: str


class Commit(CamelModel):
    """A commit vote for a round's proposal."""

    round: int
    ssv_root: str = ""
    signer: int
    time: str


class RoundChange(CamelModel):
    """A request to move to the next round."""

    round: int
    ssv_root: str = ""
    signer: int
    time: str
    prepared_round: int = 0
    prepare_messages: Any = None


class ConsensusStep(CamelModel):
    """Messages observed for one consensus round, in arrival order."""

    proposal: Proposal | None = None
    prepares: list[Prepare] = Field(default_factory=list)
    commits: list[Commit] = Field(default_factory=list)
    round_changes: list[RoundChange] = Field(default_factory=list)

    @field_validator("prepares", "commits", "round_changes", mode="before")
    @classmethod
    def null_lists_as_empty(cls, v: Any) -> Any:
        """Treat JSON null as an empty list."""
        return _null_as_empty(v)


class TraceRecord(CamelModel):
    """All messages observed for one validator, role and committee within a slot."""

    slot: Slot
    role: str
    validator: str
    committee_id: str = Field(default="", alias="committeeID")
    consensus: list[ConsensusStep] = Field(default_factory=list)
    decideds: Any = None
    pre: list[PrePostMessage] = Field(default_factory=list)
    post: list[PrePostMessage] = Field(default_factory=list)
    proposal_data: str = ""

    @field_validator("consensus", "pre", "post", mode="before")
    @classmethod
    def null_lists_as_empty(cls, v: Any) -> Any:
        """Treat JSON null as an empty list."""
        return _null_as_empty(v)

    @field_validator("slot", mode="before")
    @classmethod
    def parse_slot(cls, v: Any) -> Any:
        """The exporter sends slots as decimal strings."""
        if isinstance(v, str):
            if not (v.isascii() and v.isdigit()):
                raise ValueError(f"slot must be a decimal number, got {v!r}")
            return int(v)
        return v


class TraceResponse(CamelModel):
    """Response envelope of a validator trace query."""

    data: list[TraceRecord] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def null_data_as_empty(cls, v: Any) -> Any:
        """Treat JSON null as no records."""
        return _null_as_empty(v)
