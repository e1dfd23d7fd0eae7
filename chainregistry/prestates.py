"""Standard fault-proof absolute prestates."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chainregistry.types import Hash


def _expect(value: Any, kind: type, key: str) -> Any:
    if not isinstance(value, kind):
        raise ValueError(f"{key}: expected {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class Prestate:
    type: str = ""
    hash: Hash = field(default_factory=Hash)


@dataclass
class Prestates:
    latest_rc: str = ""
    latest_stable: str = ""
    prestates: dict[str, list[Prestate]] = field(default_factory=dict)

    def stable_prestate(self) -> Prestate:
        """The first prestate listed under the latest stable release."""
        return self.prestates[self.latest_stable][0]

    @classmethod
    def from_dict(cls, data: dict) -> Prestates:
        table = _expect(data, dict, "prestates document")
        releases = {}
        for name, entries in _expect(table.get("prestates", {}), dict, "prestates").items():
            releases[name] = [
                Prestate(
                    type=_expect(item.get("type", ""), str, "type"),
                    hash=Hash.from_text(_expect(item.get("hash", ""), str, "hash")),
                )
                for item in (_expect(e, dict, name) for e in _expect(entries, list, name))
            ]
        return cls(
            latest_rc=_expect(table.get("latest_rc", ""), str, "latest_rc"),
            latest_stable=_expect(table.get("latest_stable", ""), str, "latest_stable"),
            prestates=releases,
        )


def parse_prestates(text: str) -> Prestates:
    """Parse a standard prestates file, requiring both latest releases to be listed."""
    prestates = Prestates.from_dict(tomllib.loads(text))
    if prestates.latest_rc not in prestates.prestates:
        raise ValueError("latest RC prestate not found in standard prestates")
    if prestates.latest_stable not in prestates.prestates:
        raise ValueError("latest stable prestate not found in standard prestates")
    return prestates


def load_prestates(path: str | Path) -> Prestates:
    return parse_prestates(Path(path).read_text(encoding="utf-8"))