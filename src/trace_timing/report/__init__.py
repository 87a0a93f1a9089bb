"""Slot timing report for validator traces."""

from .renderer import MessageOffset, OnError, ReportRenderer, iter_message_offsets

__all__ = [
    "MessageOffset",
    "OnError",
    "ReportRenderer",
    "iter_message_offsets",
]
