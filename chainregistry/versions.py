"""Standard contract release versions and their deployed addresses."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path
from typing import Any

from chainregistry.types import Address


class Semver(StrEnum):
    V130 = "op-contracts/v1.3.0"
    V140 = "op-contracts/v1.4.0"
    V160 = "op-contracts/v1.6.0"
    V170 = "op-contracts/v1.7.0-beta.1+l2-contracts"
    V180 = "op-contracts/v1.8.0-rc.4"


_VALID_SEMVERS = frozenset(Semver)


def is_valid_contract_semver(s: str) -> bool:
    return s in _VALID_SEMVERS


def _table(value: Any, key: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{key}: expected a table, got {type(value).__name__}")
    return value


def _address(value: Any, key: str) -> Address:
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected an address string, got {type(value).__name__}")
    return Address.from_text(value)


@dataclass(frozen=True, slots=True)
class ContractData:
    """Version and address information for a contract."""

    version: str = ""
    address: Address | None = None
    implementation_address: Address | None = None

    @classmethod
    def _load(cls, value: Any, key: str) -> ContractData:
        table = _table(value, key)
        kwargs: dict[str, Any] = {}
        if "version" in table:
            version = table["version"]
            if not isinstance(version, str):
                raise ValueError(f"{key}.version: expected a string, got {type(version).__name__}")
            kwargs["version"] = version
        for name in ("address", "implementation_address"):
            if name in table:
                kwargs[name] = _address(table[name], f"{key}.{name}")
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class VersionConfig:
    """All contracts for one release version."""

    optimism_portal: ContractData | None = None
    system_config: ContractData | None = None
    anchor_state_registry: ContractData | None = None
    delayed_weth: ContractData | None = None
    dispute_game_factory: ContractData | None = None
    fault_dispute_game: ContractData | None = None
    permissioned_dispute_game: ContractData | None = None
    mips: ContractData | None = None
    preimage_oracle: ContractData | None = None
    l1_cross_domain_messenger: ContractData | None = None
    l1_erc721_bridge: ContractData | None = None
    l1_standard_bridge: ContractData | None = None
    l2_output_oracle: ContractData | None = None
    optimism_mintable_erc20_factory: ContractData | None = None
    op_contracts_manager: ContractData | None = None
    superchain_config: ContractData | None = None
    protocol_versions: ContractData | None = None

    @classmethod
    def from_dict(cls, data: dict) -> VersionConfig:
        table = _table(data, "version config")
        return cls(**{
            f.name: ContractData._load(table[f.name], f.name)
            for f in fields(cls)
            if f.name in table
        })


Versions = dict[str, VersionConfig]


def _versions(data: dict) -> Versions:
    return {tag: VersionConfig.from_dict(_table(value, tag)) for tag, value in data.items()}


def parse_versions(text: str) -> Versions:
    """Parse a versions file into a mapping from release tag to its contracts."""
    return _versions(tomllib.loads(text))


def load_versions(path: str | Path) -> Versions:
    with open(path, "rb") as f:
        return _versions(tomllib.load(f))