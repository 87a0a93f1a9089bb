"""Tests for RFC 3339 timestamp parsing and millisecond truncation."""

import pytest

from trace_timing.types import (
    NANOS_PER_SECOND,
    TimestampParseError,
    format_rfc3339,
    parse_rfc3339,
    to_milliseconds,
)

MAINNET_GENESIS_NS = 1606824023 * NANOS_PER_SECOND
"""2020-12-01T12:00:23Z in nanoseconds."""


class TestParseRfc3339:
    """Tests for parse_rfc3339()."""

    def test_utc_without_fraction(self) -> None:
        """Whole seconds in UTC."""
        assert parse_rfc3339("2020-12-01T12:00:23Z") == MAINNET_GENESIS_NS

    def test_epoch(self) -> None:
        """The Unix epoch is zero."""
        assert parse_rfc3339("1970-01-01T00:00:00Z") == 0

    def test_nanosecond_fraction(self) -> None:
        """All nine fractional digits are kept."""
        assert parse_rfc3339("2020-12-01T12:00:23.123456789Z") == MAINNET_GENESIS_NS + 123456789

    def test_short_fraction_is_scaled(self) -> None:
        """A fraction of .25 is 250 milliseconds."""
        assert parse_rfc3339("2020-12-01T12:00:23.25Z") == MAINNET_GENESIS_NS + 250_000_000

    def test_excess_fraction_digits_truncated(self) -> None:
        """Digits beyond nanoseconds are dropped, not rounded."""
        assert parse_rfc3339("2020-12-01T12:00:23.0000000019Z") == MAINNET_GENESIS_NS + 1

    def test_positive_offset(self) -> None:
        """A +02:00 offset is two hours ahead of UTC."""
        assert parse_rfc3339("2020-12-01T14:00:23+02:00") == MAINNET_GENESIS_NS

    def test_negative_offset(self) -> None:
        """A -05:30 offset is five and a half hours behind UTC."""
        assert parse_rfc3339("2020-12-01T06:30:23.5-05:30") == MAINNET_GENESIS_NS + 500_000_000

    def test_lowercase_separators(self) -> None:
        """RFC 3339 allows lowercase t and z."""
        assert parse_rfc3339("2020-12-01t12:00:23z") == MAINNET_GENESIS_NS

    def test_before_epoch(self) -> None:
        """Instants before 1970 are negative."""
        assert parse_rfc3339("1969-12-31T23:59:59.5Z") == -500_000_000

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "not a time",
            "2020-12-01",
            "2020-12-01T12:00:23",
            "2020-12-01 12:00:23Z",
            "2020-12-01T12:00:23.Z",
            "2020-12-01T12:00Z",
            " 2020-12-01T12:00:23Z",
            "2020-12-01T12:00:23Z ",
            "2020-12-01T12:00:23+0200",
            "２０２０-１２-０１T１２:００:２３Z",
            "2020-12-01T12:00:23.١٢Z",
            "2020-12-01T12:00:23+٠١:00",
        ],
    )
    def test_rejects_malformed(self, text: str) -> None:
        """Strings not shaped like RFC 3339 are rejected."""
        with pytest.raises(TimestampParseError):
            parse_rfc3339(text)

    @pytest.mark.parametrize(
        "text",
        [
            "2020-13-01T12:00:23Z",
            "2020-02-30T12:00:23Z",
            "2020-12-01T24:00:00Z",
            "2020-12-01T12:60:00Z",
            "2020-12-01T12:00:60Z",
            "2020-12-01T12:00:23+24:00",
            "2020-12-01T12:00:23+01:60",
        ],
    )
    def test_rejects_out_of_range_fields(self, text: str) -> None:
        """Well-shaped strings with impossible field values are rejected."""
        with pytest.raises(TimestampParseError):
            parse_rfc3339(text)

    def test_error_is_value_error(self) -> None:
        """Callers catching ValueError also see parse failures."""
        with pytest.raises(ValueError, match="Invalid RFC 3339 timestamp"):
            parse_rfc3339("yesterday")

    def test_error_truncates_long_input(self) -> None:
        """The message does not echo arbitrarily long input."""
        with pytest.raises(TimestampParseError) as exc_info:
            parse_rfc3339("x" * 500)
        assert len(exc_info.value.message) < 200
        assert exc_info.value.text == "x" * 500


class TestFormatRfc3339:
    """Tests for format_rfc3339()."""

    def test_formats_utc_with_nanoseconds(self) -> None:
        """Output is UTC with a nine digit fraction."""
        assert format_rfc3339(MAINNET_GENESIS_NS + 7) == "2020-12-01T12:00:23.000000007Z"

    def test_parse_accepts_formatted_output(self) -> None:
        """Formatted instants parse back to the same value."""
        ts = MAINNET_GENESIS_NS + 987654321
        assert parse_rfc3339(format_rfc3339(ts)) == ts


class TestToMilliseconds:
    """Tests for to_milliseconds()."""

    @pytest.mark.parametrize(
        "duration_ns, expected",
        [
            (0, 0),
            (250_000_000, 250),
            (999_999, 0),
            (1_999_999, 1),
            (-999_999, 0),
            (-1_999_999, -1),
            (-50_000_000, -50),
        ],
    )
    def test_truncates_toward_zero(self, duration_ns: int, expected: int) -> None:
        """Partial milliseconds are dropped in both directions."""
        assert to_milliseconds(duration_ns) == expected
