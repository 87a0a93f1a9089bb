"""
Chain Registry
==============

Explicit name-to-configuration table for the networks the tool can report on.

Names are matched exactly and case-sensitively: ``"Mainnet"`` is not
``"mainnet"``. Additional networks are loaded from YAML rather than added to
conversion logic:

    networks:
      devnet:
        GENESIS_TIME: 1700000000
        SLOT_DURATION_MS: 4000
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from typing_extensions import Final

from trace_timing.types import StrictBaseModel

from .config import HOODI_CONFIG, MAINNET_CONFIG, ChainConfig
from .exceptions import UnknownChainError


class _NetworksFile(StrictBaseModel):
    """Top-level shape of a chains YAML file."""

    networks: dict[str, dict[str, Any]]


@dataclass(frozen=True, slots=True)
class ChainRegistry:
    """An immutable table of chain configurations keyed by name."""

    chains: Mapping[str, ChainConfig]
    """Configurations by canonical name."""

    @classmethod
    def of(cls, *chains: ChainConfig) -> ChainRegistry:
        """
        Build a registry from configurations.

        Raises:
            ValueError: If two configurations share a name.
        """
        table: dict[str, ChainConfig] = {}
        for chain in chains:
            if chain.name in table:
                raise ValueError(f"duplicate chain name: {chain.name!r}")
            table[chain.name] = chain
        return cls(chains=MappingProxyType(table))

    def lookup(self, name: str) -> ChainConfig:
        """
        Resolve a configuration by its canonical name.

        Raises:
            UnknownChainError: If no chain is registered under `name`.
        """
        try:
            return self.chains[name]
        except KeyError:
            raise UnknownChainError(name, self.names) from None

    @property
    def names(self) -> list[str]:
        """Registered names in sorted order."""
        return sorted(self.chains)

    def with_chains(self, *chains: ChainConfig) -> ChainRegistry:
        """Return a new registry that also holds `chains`."""
        return ChainRegistry.of(*self.chains.values(), *chains)

    def __contains__(self, name: object) -> bool:
        return name in self.chains

    def __iter__(self) -> Iterator[ChainConfig]:
        return iter(self.chains.values())

    def __len__(self) -> int:
        return len(self.chains)

    @staticmethod
    def load_yaml(content: str) -> list[ChainConfig]:
        """
        Parse chain configurations from a YAML string.

        Raises:
            yaml.YAMLError: If the content is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
            ValueError: If an entry carries its own `name` key.
        """
        document = _NetworksFile.model_validate(yaml.safe_load(content))

        chains = []
        for name, entry in document.networks.items():
            # The mapping key is the network name.
            if "name" in entry:
                raise ValueError(f"network {name!r} must not set 'name'; it is the mapping key")
            chains.append(ChainConfig.model_validate({**entry, "name": name}))
        return chains

    def with_yaml(self, content: str) -> ChainRegistry:
        """Return a new registry extended with the networks in a YAML string."""
        return self.with_chains(*self.load_yaml(content))

    def with_yaml_file(self, path: Path | str) -> ChainRegistry:
        """
        Return a new registry extended with the networks in a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            return self.with_yaml(f.read())


DEFAULT_REGISTRY: Final = ChainRegistry.of(MAINNET_CONFIG, HOODI_CONFIG)
"""The networks served by the exporter."""


def lookup_chain(name: str, registry: ChainRegistry = DEFAULT_REGISTRY) -> ChainConfig:
    """
    Resolve a chain configuration by name.

    Raises:
        UnknownChainError: For any name not in `registry`.
    """
    return registry.lookup(name)
