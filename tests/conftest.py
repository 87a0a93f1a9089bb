"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

# Tests pass every setting explicitly; ignore the operator's shell defaults.
for _name in ("TRACE_TIMING_NETWORK", "TRACE_TIMING_EXPORTER_URL", "TRACE_TIMING_ROLES"):
    os.environ.pop(_name, None)

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
