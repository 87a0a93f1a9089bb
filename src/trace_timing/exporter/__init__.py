"""Client and wire models for the validator trace exporter."""

from .client import DEFAULT_TIMEOUT, ExporterClient, TraceFetchError
from .models import (
    Commit,
    ConsensusStep,
    Prepare,
    PrePostMessage,
    Proposal,
    RoundChange,
    TraceRecord,
    TraceRequest,
    TraceResponse,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "ExporterClient",
    "TraceFetchError",
    "Commit",
    "ConsensusStep",
    "Prepare",
    "PrePostMessage",
    "Proposal",
    "RoundChange",
    "TraceRecord",
    "TraceRequest",
    "TraceResponse",
]
