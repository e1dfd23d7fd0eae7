"""Standard role holders for a superchain."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from chainregistry.types import Address

_KEYS = {
    "guardian": "guardian",
    "challenger": "challenger",
    "l1_proxy_admin_owner": "l1ProxyAdminOwner",
    "l2_proxy_admin_owner": "l2ProxyAdminOwner",
    "protocol_versions_owner": "protocolVersionsOwner",
}


@dataclass(frozen=True, slots=True)
class RolesConfig:
    guardian: Address = field(default_factory=Address)
    challenger: Address = field(default_factory=Address)
    l1_proxy_admin_owner: Address = field(default_factory=Address)
    l2_proxy_admin_owner: Address = field(default_factory=Address)
    protocol_versions_owner: Address = field(default_factory=Address)

    @classmethod
    def from_dict(cls, data: dict) -> RolesConfig:
        """Build from a decoded TOML document; missing roles are the zero address."""
        if not isinstance(data, dict):
            raise ValueError(f"roles config: expected a table, got {type(data).__name__}")
        for key in _KEYS.values():
            if key in data and not isinstance(data[key], str):
                raise ValueError(f"{key}: expected an address string")
        return cls(**{name: Address.from_text(data[key]) for name, key in _KEYS.items() if key in data})


def parse_roles_config(text: str) -> RolesConfig:
    return RolesConfig.from_dict(tomllib.loads(text))


def load_roles_config(path: str | Path) -> RolesConfig:
    return parse_roles_config(Path(path).read_text(encoding="utf-8"))