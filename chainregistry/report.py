"""Reports on a chain deployment and differences between genesis allocations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from chainregistry.types import Address, Hash

_MASK64 = (1 << 64) - 1


def _rol(value: int, shift: int) -> int:
    shift %= 64
    return ((value << shift) | (value >> (64 - shift))) & _MASK64


def _permute(lanes: list[list[int]]) -> None:
    r = 1
    for _ in range(24):
        c = [lanes[x][0] ^ lanes[x][1] ^ lanes[x][2] ^ lanes[x][3] ^ lanes[x][4] for x in range(5)]
        d = [c[(x + 4) % 5] ^ _rol(c[(x + 1) % 5], 1) for x in range(5)]
        lanes[:] = [[lanes[x][y] ^ d[x] for y in range(5)] for x in range(5)]
        x, y = 1, 0
        current = lanes[x][y]
        for t in range(24):
            x, y = y, (2 * x + 3 * y) % 5
            current, lanes[x][y] = lanes[x][y], _rol(current, (t + 1) * (t + 2) // 2)
        for y in range(5):
            row = [lanes[x][y] for x in range(5)]
            for x in range(5):
                lanes[x][y] = row[x] ^ (~row[(x + 1) % 5] & row[(x + 2) % 5])
        for j in range(7):
            r = ((r << 1) ^ ((r >> 7) * 0x71)) % 256
            if r & 2:
                lanes[0][0] ^= 1 << ((1 << j) - 1)


def _keccak256(data: bytes) -> bytes:
    rate = 136
    padded = bytearray(data) + b"\x01" + bytes(-(len(data) + 1) % rate)
    padded[-1] |= 0x80
    lanes = [[0] * 5 for _ in range(5)]
    for offset in range(0, len(padded), rate):
        for i in range(rate // 8):
            start = offset + 8 * i
            lanes[i % 5][i // 5] ^= int.from_bytes(padded[start:start + 8], "little")
        _permute(lanes)
    return b"".join(lanes[i % 5][i // 5].to_bytes(8, "little") for i in range(4))


def _checksum(address: Address) -> str:
    """Mixed-case checksummed hex form of an address."""
    hex_addr = address.data.hex()
    digest = _keccak256(hex_addr.encode("ascii")).hex()
    return "0x" + "".join(ch.upper() if int(n, 16) >= 8 else ch for ch, n in zip(hex_addr, digest))


def _balance(balance: int | None) -> str:
    return "<nil>" if balance is None else str(balance)


@dataclass
class Account:
    """A genesis allocation entry."""

    code: bytes = b""
    balance: int = 0
    nonce: int = 0
    storage: dict[Hash, Hash] = field(default_factory=dict)


@dataclass(frozen=True)
class StorageDiff:
    key: Hash = field(default_factory=Hash)
    added: bool = False
    removed: bool = False
    old_value: Hash = field(default_factory=Hash)
    new_value: Hash = field(default_factory=Hash)


@dataclass
class AccountDiff:
    address: Address = field(default_factory=Address)
    added: bool = False
    removed: bool = False
    code_changed: bool = False
    balance_changed: bool = False
    nonce_changed: bool = False
    old_code: bytes = b""
    old_balance: int | None = None
    old_nonce: int = 0
    new_code: bytes = b""
    new_balance: int | None = None
    new_nonce: int = 0
    storage_changes: list[StorageDiff] = field(default_factory=list)

    def as_markdown(self) -> str:
        """Render the change as diff-style lines."""
        if self.added or self.removed:
            return self._full_diff()
        lines = [_checksum(self.address)]
        if self.code_changed:
            lines += [f"-code:0x{self.old_code.hex()}", f"+code:0x{self.new_code.hex()}"]
        if self.balance_changed:
            lines += [f"-balance:{_balance(self.old_balance)}", f"+balance:{_balance(self.new_balance)}"]
        if self.nonce_changed:
            lines += [f"-nonce:{self.old_nonce}", f"+nonce:{self.new_nonce}"]
        if self.storage_changes:
            lines.append("storage:")
        for diff in self.storage_changes:
            key = diff.key.to_text()
            if not diff.added:
                lines.append(f"-  {key}:{diff.old_value.to_text()}")
            if not diff.removed:
                lines.append(f"+  {key}:{diff.new_value.to_text()}")
        return "\n".join(lines) + "\n"

    def _full_diff(self) -> str:
        if self.added:
            prefix, code, balance, nonce = "+", self.new_code, self.new_balance, self.new_nonce
        else:
            prefix, code, balance, nonce = "-", self.old_code, self.old_balance, self.old_nonce
        lines = [
            f"{prefix}{_checksum(self.address)}",
            f"{prefix}code:0x{code.hex()}",
            f"{prefix}balance:{_balance(balance)}",
            f"{prefix}nonce:{nonce}",
        ]
        if self.storage_changes:
            lines.append(f"{prefix}storage:")
        for diff in self.storage_changes:
            value = diff.old_value if self.removed else diff.new_value
            lines.append(f"{prefix}  {diff.key.to_text()}:{value.to_text()}")
        return "\n".join(lines) + "\n"


@dataclass
class L1SemversReport:
    system_config: str = ""
    permissioned_dispute_game: str = ""
    optimism_portal: str = ""
    anchor_state_registry: str = ""
    delayed_weth_permissioned_dispute_game: str = ""
    dispute_game_factory: str = ""
    l1_cross_domain_messenger: str = ""
    l1_standard_bridge: str = ""
    l1_erc721_bridge: str = ""
    optimism_mintable_erc20_factory: str = ""


@dataclass
class L1OwnershipReport:
    guardian: Address = field(default_factory=Address)
    challenger: Address = field(default_factory=Address)
    proxy_admin_owner: Address = field(default_factory=Address)


@dataclass
class L1FDGReport:
    game_type: int = 0
    absolute_prestate: Hash = field(default_factory=Hash)
    max_game_depth: int = 0
    split_depth: int = 0
    max_clock_duration: int = 0
    clock_extension: int = 0


@dataclass
class L1ProofsReport:
    permissioned: L1FDGReport = field(default_factory=L1FDGReport)
    permissionless: L1FDGReport | None = None


@dataclass
class L1SystemConfigReport:
    gas_limit: int = 0
    scalar: int | None = None
    overhead: int | None = None
    base_fee_scalar: int = 0
    blob_base_fee_scalar: int = 0
    eip1559_denominator: int = 0
    eip1559_elasticity: int = 0
    is_gas_paying_token: bool = False
    gas_paying_token: Address = field(default_factory=Address)
    gas_paying_token_decimals: int = 0
    gas_paying_token_name: str = ""
    gas_paying_token_symbol: str = ""


@dataclass
class L1Report:
    release: str = ""
    deployment_chain_id: int = 0
    deployment_tx_hash: Hash = field(default_factory=Hash)
    semvers: L1SemversReport = field(default_factory=L1SemversReport)
    ownership: L1OwnershipReport = field(default_factory=L1OwnershipReport)
    proofs: L1ProofsReport = field(default_factory=L1ProofsReport)
    system_config: L1SystemConfigReport = field(default_factory=L1SystemConfigReport)


@dataclass
class L2Report:
    release: str = ""
    chain_id: Hash = field(default_factory=Hash)
    provided_genesis_hash: Hash = field(default_factory=Hash)
    standard_genesis_hash: Hash = field(default_factory=Hash)
    account_diffs: list[AccountDiff] = field(default_factory=list)


@dataclass
class Report:
    l1: L1Report | None = None
    l1_err: Exception | None = None
    l2: L2Report | None = None
    l2_err: Exception | None = None
    generated_at: datetime | None = None


def _storage_diff(a: dict[Hash, Hash], b: dict[Hash, Hash]) -> list[StorageDiff]:
    out = [
        StorageDiff(key=key, removed=True, old_value=old) if key not in b
        else StorageDiff(key=key, old_value=old, new_value=b[key])
        for key, old in a.items()
        if key not in b or b[key] != old
    ]
    out += [StorageDiff(key=key, added=True, new_value=new) for key, new in b.items() if key not in a]
    return sorted(out, key=lambda diff: diff.key.data)


def diff_allocs(a: dict[Address, Account], b: dict[Address, Account]) -> list[AccountDiff]:
    """Differences going from allocation ``a`` to allocation ``b``; unchanged accounts are omitted."""
    out: list[AccountDiff] = []
    for address, acc_a in a.items():
        acc_b = b.get(address)
        if acc_b is None:
            out.append(AccountDiff(
                address=address, removed=True,
                code_changed=True, balance_changed=True, nonce_changed=True,
                old_code=bytes(acc_a.code), old_balance=acc_a.balance, old_nonce=acc_a.nonce,
                storage_changes=_storage_diff(acc_a.storage, {}),
            ))
            continue
        code = bytes(acc_a.code) != bytes(acc_b.code)
        balance = acc_a.balance != acc_b.balance
        nonce = acc_a.nonce != acc_b.nonce
        storage = _storage_diff(acc_a.storage, acc_b.storage)
        if code or balance or nonce or storage:
            out.append(AccountDiff(
                address=address, code_changed=code, balance_changed=balance, nonce_changed=nonce,
                old_code=bytes(acc_a.code) if code else b"",
                new_code=bytes(acc_b.code) if code else b"",
                old_balance=acc_a.balance if balance else None,
                new_balance=acc_b.balance if balance else None,
                old_nonce=acc_a.nonce if nonce else 0,
                new_nonce=acc_b.nonce if nonce else 0,
                storage_changes=storage,
            ))
    out += [
        AccountDiff(
            address=address, added=True,
            code_changed=True, balance_changed=True, nonce_changed=True,
            new_code=bytes(acc_b.code), new_balance=acc_b.balance, new_nonce=acc_b.nonce,
            storage_changes=_storage_diff({}, acc_b.storage),
        )
        for address, acc_b in b.items()
        if address not in a
    ]
    return out