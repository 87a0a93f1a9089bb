"""
Validator trace timing CLI entry point.

Fetch consensus traces for a slot from the exporter and print, for every
protocol message, how many milliseconds into the target slot it was seen.

Usage::

    python -m trace_timing --exporter-url http://localhost:8080 --slot 13119734
    python -m trace_timing --exporter-url http://localhost:8080 --network hoodi --role ATTESTER
    python -m trace_timing --slot 100 --chains-file chains.yaml --network devnet

Options:
    --network        Network whose clock is used (default: $TRACE_TIMING_NETWORK or mainnet)
    --chains-file    YAML file with additional networks
    --exporter-url   Base URL of the exporter (default: $TRACE_TIMING_EXPORTER_URL)
    --slot           Target slot offsets are measured against (default: current slot)
    --from-slot      First slot to fetch (default: target slot)
    --to-slot        Last slot to fetch, inclusive (default: target slot)
    --role           Duty role to fetch, can be repeated (default: PROPOSER)
    --timeout        Request timeout in seconds (default: 15)
    --skip-invalid   Skip records with unparseable timestamps instead of aborting
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import yaml
from pydantic import ValidationError

from trace_timing import config
from trace_timing.chain import (
    DEFAULT_REGISTRY,
    ChainConfig,
    ChainError,
    Slot,
    SlotClock,
    lookup_chain,
)
from trace_timing.exporter import DEFAULT_TIMEOUT, ExporterClient, TraceFetchError
from trace_timing.report import OnError, ReportRenderer
from trace_timing.types import TimestampParseError, format_rfc3339

logger = logging.getLogger(__name__)


def resolve_chain(network: str, chains_file: Path | None = None) -> ChainConfig:
    """
    Resolve the network to report on.

    Networks from `chains_file` are added to the built-in registry; a name
    already registered is rejected rather than overridden.

    Raises:
        UnknownChainError: If `network` is not registered.
        ValueError: If `chains_file` redefines a registered network.
    """
    registry = DEFAULT_REGISTRY
    if chains_file is not None:
        registry = registry.with_yaml_file(chains_file)
        logger.debug("Loaded networks from %s: %s", chains_file, ", ".join(registry.names))
    return lookup_chain(network, registry)


async def run_report(
    chain: ChainConfig,
    exporter_url: str,
    roles: Sequence[str],
    target_slot: Slot | None = None,
    from_slot: Slot | None = None,
    to_slot: Slot | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    on_error: OnError = OnError.ABORT,
    out: TextIO | None = None,
    clock: SlotClock | None = None,
) -> int:
    """
    Fetch traces and print the slot timing report.

    Args:
        chain: Chain whose clock measures the offsets.
        exporter_url: Base URL of the trace exporter.
        roles: Duty roles to fetch.
        target_slot: Slot offsets are measured against. Defaults to the current slot.
        from_slot: First slot to fetch. Defaults to the target slot.
        to_slot: Last slot to fetch, inclusive. Defaults to the target slot.
        timeout: Request timeout in seconds.
        on_error: Policy for records that fail to convert.
        out: Stream the report is written to. Defaults to stdout.
        clock: Clock override (for testing). Defaults to a wall clock for `chain`.

    Returns:
        The number of records written.
    """
    clock = clock or SlotClock(chain=chain)

    if target_slot is None:
        target_slot = clock.current_slot()
        logger.info("No slot given, using current slot %d", target_slot)

    # Validate the target before any network traffic.
    slot_start = clock.slot_start_time(target_slot)
    logger.info(
        "Target slot %d on %s starts at %s",
        target_slot,
        chain.name,
        format_rfc3339(slot_start),
    )

    client = ExporterClient(base_url=exporter_url, timeout=timeout)
    traces = await client.fetch_validator_traces(
        from_slot if from_slot is not None else target_slot,
        to_slot if to_slot is not None else target_slot,
        roles,
    )

    renderer = ReportRenderer(
        clock=clock,
        target_slot=target_slot,
        out=out or sys.stdout,
        on_error=on_error,
    )
    return renderer.render(traces.data)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure stderr logging with optional colors. The report itself goes to stdout."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def _slot_arg(value: str) -> Slot:
    """Parse a slot number from the command line."""
    try:
        return Slot(int(value))
    except (ValueError, OverflowError) as e:
        raise argparse.ArgumentTypeError(f"invalid slot {value!r}: {e}") from e


def _positive_float(value: str) -> float:
    """Parse a strictly positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid timeout {value!r}") from e
    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive, got {value!r}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="trace-timing",
        description="Validator consensus trace timing report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--network",
        default=config.TRACE_TIMING_NETWORK,
        help=f"Network whose clock is used (default: {config.TRACE_TIMING_NETWORK})",
    )
    parser.add_argument(
        "--chains-file",
        type=Path,
        default=None,
        help="YAML file with additional networks",
    )
    parser.add_argument(
        "--exporter-url",
        default=config.TRACE_TIMING_EXPORTER_URL,
        help="Base URL of the trace exporter (default: $TRACE_TIMING_EXPORTER_URL)",
    )
    parser.add_argument(
        "--slot",
        type=_slot_arg,
        default=None,
        help="Target slot offsets are measured against (default: current slot)",
    )
    parser.add_argument(
        "--from-slot",
        type=_slot_arg,
        default=None,
        help="First slot to fetch (default: target slot)",
    )
    parser.add_argument(
        "--to-slot",
        type=_slot_arg,
        default=None,
        help="Last slot to fetch, inclusive (default: target slot)",
    )
    parser.add_argument(
        "--role",
        action="append",
        default=None,
        dest="roles",
        type=str.upper,
        help=(
            "Duty role to fetch, can be repeated "
            f"(default: {','.join(config.TRACE_TIMING_ROLES)})"
        ),
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip records that fail to convert instead of aborting the report",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.exporter_url:
        parser.error("--exporter-url is required (or set TRACE_TIMING_EXPORTER_URL)")

    setup_logging(args.verbose, args.no_color)

    try:
        chain = resolve_chain(args.network, args.chains_file)
        written = asyncio.run(
            run_report(
                chain,
                args.exporter_url,
                args.roles or config.TRACE_TIMING_ROLES,
                target_slot=args.slot,
                from_slot=args.from_slot,
                to_slot=args.to_slot,
                timeout=args.timeout,
                on_error=OnError.SKIP if args.skip_invalid else OnError.ABORT,
            )
        )
    except (ChainError, TraceFetchError, TimestampParseError) as e:
        logger.error("%s", e)
        return 1
    except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
        logger.error("Invalid input: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130

    logger.info("Reported %d trace records", written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
