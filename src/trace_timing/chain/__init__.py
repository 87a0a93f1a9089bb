"""Specifications for chain timing and slot/time conversion."""

from .clock import SlotClock
from .config import HOODI_CONFIG, MAINNET_CONFIG, ChainConfig
from .exceptions import ChainError, SlotOutOfRangeError, TimeBeforeGenesisError, UnknownChainError
from .registry import DEFAULT_REGISTRY, ChainRegistry, lookup_chain
from .slot import Slot

__all__ = [
    "ChainConfig",
    "ChainRegistry",
    "DEFAULT_REGISTRY",
    "HOODI_CONFIG",
    "MAINNET_CONFIG",
    "Slot",
    "SlotClock",
    "lookup_chain",
    # Exceptions
    "ChainError",
    "SlotOutOfRangeError",
    "TimeBeforeGenesisError",
    "UnknownChainError",
]
