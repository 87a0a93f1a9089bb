"""
Validator trace client for the node exporter.

The exporter records every protocol message the operators of a validator
exchanged while performing a duty, and serves them per slot range and role.

One query is one request/response exchange:

- No retries: a failed query fails the run
- No partial results: a body that does not match the models is rejected whole
- A fixed timeout bounds the wait
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from trace_timing.chain import Slot

from .models import TraceRequest, TraceResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
"""HTTP request timeout in seconds."""

VALIDATOR_TRACES_ENDPOINT = "/v1/exporter/traces/validator"
"""API endpoint for validator duty traces."""

ERROR_BODY_LIMIT = 4096
"""Bytes of an error response body kept for the error message."""


class TraceFetchError(Exception):
    """
    Error while fetching validator traces.

    Raised when the request fails, the exporter answers with a non-success
    status, or the body does not match the expected shape.
    Callers should treat this as fatal for the run.
    """


@dataclass(frozen=True, slots=True)
class ExporterClient:
    """Client for the exporter's trace API."""

    base_url: str
    """Base URL of the exporter (e.g., "http://localhost:8080")."""

    timeout: float = DEFAULT_TIMEOUT
    """Request timeout in seconds."""

    transport: httpx.AsyncBaseTransport | None = None
    """Optional transport override (injectable for testing)."""

    async def fetch_validator_traces(
        self,
        from_slot: int,
        to_slot: int,
        roles: Sequence[str],
    ) -> TraceResponse:
        """
        Fetch trace records for an inclusive slot range and role filter.

        Args:
            from_slot: First slot of the range.
            to_slot: Last slot of the range (inclusive).
            roles: Duty roles to include (e.g., "PROPOSER").

        Returns:
            The decoded response.

        Raises:
            ValueError: If the range is empty.
            TraceFetchError: If the request fails or the response is invalid.
        """
        if from_slot > to_slot:
            raise ValueError(f"from_slot {from_slot} is after to_slot {to_slot}")

        payload = TraceRequest(from_slot=Slot(from_slot), to_slot=Slot(to_slot), roles=list(roles))
        full_url = f"{self.base_url.rstrip('/')}{VALIDATOR_TRACES_ENDPOINT}"

        logger.info(
            "Fetching %s traces for slots %d..%d from %s",
            ",".join(roles),
            from_slot,
            to_slot,
            full_url,
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(full_url, json=payload.model_dump(by_alias=True))
                response.raise_for_status()
                body = response.json()

        except httpx.RequestError as exc:
            raise TraceFetchError(
                f"Network error while connecting to {full_url}: {exc}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise TraceFetchError(
                f"unexpected status {exc.response.status_code}: "
                f"{exc.response.text[:ERROR_BODY_LIMIT]}"
            ) from exc
        except ValueError as exc:
            # Covers json.JSONDecodeError.
            raise TraceFetchError(f"decode response: {exc}") from exc

        try:
            traces = TraceResponse.model_validate(body)
        except ValidationError as exc:
            raise TraceFetchError(f"decode response: {exc}") from exc

        logger.info("Received %d trace records", len(traces.data))
        return traces
