"""Fixed-size byte values used in registry configuration: addresses and hashes."""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from typing import ClassVar


def _text(text: str | bytes | bytearray) -> str:
    return bytes(text).decode("latin-1") if isinstance(text, (bytes, bytearray)) else text


def _unhex(text: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {exc}") from exc


class _FixedBytes:
    __slots__ = ()
    SIZE: ClassVar[int]
    data: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        if len(raw) != self.SIZE:
            raise ValueError(f"{type(self).__name__} must be {self.SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "data", raw)

    def __str__(self) -> str:
        return "0x" + self.data.hex()

    def __bytes__(self) -> bytes:
        return self.data


@dataclass(frozen=True, slots=True)
class Address(_FixedBytes):
    """A 20-byte account address."""

    data: bytes = bytes(20)
    SIZE: ClassVar[int] = 20

    @classmethod
    def from_text(cls, text: str | bytes) -> Address:
        """Parse a 0x-prefixed, 40 hex digit address."""
        s = _text(text)
        if len(s) != 42:
            raise ValueError(f"invalid address length: {len(s)}")
        if not s.startswith("0x"):
            raise ValueError(f"invalid address prefix: {s}")
        return cls(_unhex(s[2:]))

    def to_text(self) -> str:
        """Return the 0x-prefixed lower-case hex form."""
        return "0x" + self.data.hex()


@dataclass(frozen=True, slots=True)
class Hash(_FixedBytes):
    """A 32-byte hash."""

    data: bytes = bytes(32)
    SIZE: ClassVar[int] = 32

    @classmethod
    def from_text(cls, text: str | bytes) -> Hash:
        """Parse a 0x-prefixed 32-byte hex hash; empty text gives the zero hash."""
        s = _text(text)
        if not s:
            return cls()
        if not s.startswith("0x"):
            raise ValueError("hex string must have 0x prefix")
        raw = _unhex(s[2:])
        if len(raw) != cls.SIZE:
            raise ValueError(f"invalid hash length: got {len(raw)}, want {cls.SIZE}")
        return cls(raw)

    def to_text(self) -> str:
        """Return the 0x-prefixed lower-case hex form."""
        return "0x" + self.data.hex()