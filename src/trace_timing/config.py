"""
Global configuration for the trace timing tool.

Defaults come from the environment so the tool can be pointed at an exporter
once per shell. Command line flags override them.
"""

import os

TRACE_TIMING_NETWORK = os.environ.get("TRACE_TIMING_NETWORK", "mainnet")
"""Network whose clock the report uses. Defaults to 'mainnet'."""

TRACE_TIMING_EXPORTER_URL: str | None = os.environ.get("TRACE_TIMING_EXPORTER_URL") or None
"""Base URL of the trace exporter. No default: it must be configured."""

TRACE_TIMING_ROLES: list[str] = [
    role.strip().upper()
    for role in os.environ.get("TRACE_TIMING_ROLES", "PROPOSER").split(",")
    if role.strip()
]
"""Duty roles queried when none are given on the command line."""

if not TRACE_TIMING_ROLES:
    raise ValueError(
        "Invalid TRACE_TIMING_ROLES environment variable: expected a comma-separated "
        "list of roles, e.g. 'PROPOSER,ATTESTER'"
    )
