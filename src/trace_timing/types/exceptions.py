"""Exceptions raised while decoding primitive values."""

from __future__ import annotations


class TimestampParseError(ValueError):
    """
    Raised when a string is not a valid RFC 3339 timestamp.

    Attributes:
        text: The rejected input (truncated for display).
        detail: Description of what went wrong.
    """

    def __init__(self, text: str, detail: str) -> None:
        self.text = text
        self.detail = detail

        text_repr = repr(text)
        if len(text_repr) > 50:
            text_repr = text_repr[:47] + "..."
        self.message = f"Invalid RFC 3339 timestamp {text_repr}: {detail}"
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"
