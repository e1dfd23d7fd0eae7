"""Standard configuration parameter bounds for chains."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Range:
    """An inclusive integer range."""

    low: int = 0
    high: int = 0

    def within_range(self, v: int) -> bool:
        return self.low <= v <= self.high


def _int(value: Any, key: str, bits: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key}: expected an integer, got {type(value).__name__}")
    if bits is not None and not 0 <= value < 1 << bits:
        raise ValueError(f"{key}: {value} out of range for uint{bits}")
    return value


def _load(cls: type, value: Any, key: str) -> Any:
    if not isinstance(value, dict):
        raise ValueError(f"{key}: expected a table, got {type(value).__name__}")
    kwargs = {}
    for f in fields(cls):
        name = f.metadata.get("key", f.name)
        if name not in value:
            continue
        item = value[name]
        if f.type is int:
            kwargs[f.name] = _int(item, name, f.metadata.get("bits"))
        elif f.type is str:
            if not isinstance(item, str):
                raise ValueError(f"{name}: expected a string, got {type(item).__name__}")
            kwargs[f.name] = item
        elif f.type is Range:
            if not isinstance(item, list) or len(item) != 2:
                raise ValueError(f"{name}: expected an array of length 2")
            kwargs[f.name] = Range(_int(item[0], name), _int(item[1], name))
        else:
            kwargs[f.name] = _load(f.type, item, name)
    return cls(**kwargs)


def _sub(factory: type, **metadata: Any) -> Any:
    return field(default_factory=factory, metadata=metadata)


def _uint(bits: int) -> Any:
    return field(default=0, metadata={"bits": bits})


@dataclass(frozen=True)
class RollupConfigParams:
    seq_window_size: Range = _sub(Range)
    block_time: Range = _sub(Range)


@dataclass(frozen=True)
class OptimismPortal2Params:
    proof_maturity_delay_seconds: Range = _sub(Range)
    dispute_game_finality_delay_seconds: Range = _sub(Range)
    respected_game_type: int = 0


@dataclass(frozen=True)
class ResourceConfigParams:
    max_resource_limit: int = 0
    elasticity_multiplier: int = 0
    base_fee_max_change_denominator: int = 0
    minimum_base_fee: int = 0
    system_tx_max_gas: int = 0
    maximum_base_fee: str = ""


@dataclass(frozen=True)
class PreEcotoneGasPriceOracleParams:
    decimals: Range = _sub(Range)
    overhead: Range = _sub(Range)
    scalar: Range = _sub(Range)


@dataclass(frozen=True)
class EcotoneGasPriceOracleParams:
    decimals: Range = _sub(Range)
    blob_base_fee_scalar: Range = _sub(Range)
    base_fee_scalar: Range = _sub(Range)


@dataclass(frozen=True)
class GasPriceOracleParams:
    pre_ecotone: PreEcotoneGasPriceOracleParams = _sub(PreEcotoneGasPriceOracleParams, key="pre-ecotone")
    ecotone: EcotoneGasPriceOracleParams = _sub(EcotoneGasPriceOracleParams)


@dataclass(frozen=True)
class SystemConfigParams:
    gas_limit: Range = _sub(Range)
    operator_fee_scalar: Range = _sub(Range)
    operator_fee_constant: Range = _sub(Range)


@dataclass(frozen=True)
class FDGParams:
    """Fault dispute game parameters."""

    game_type: int = _uint(32)
    max_game_depth: int = _uint(64)
    split_depth: int = _uint(64)
    max_clock_duration: int = _uint(64)
    clock_extension: int = _uint(64)


@dataclass(frozen=True)
class ProofsParams:
    permissioned: FDGParams = _sub(FDGParams)
    permissionless: FDGParams = _sub(FDGParams)


@dataclass(frozen=True)
class ConfigParams:
    """The full set of standard configuration parameters for a superchain."""

    rollup_config: RollupConfigParams = _sub(RollupConfigParams)
    optimism_portal_2: OptimismPortal2Params = _sub(OptimismPortal2Params)
    resource_config: ResourceConfigParams = _sub(ResourceConfigParams)
    gas_price_oracle: GasPriceOracleParams = _sub(GasPriceOracleParams)
    system_config: SystemConfigParams = _sub(SystemConfigParams)
    proofs: ProofsParams = _sub(ProofsParams)

    @classmethod
    def from_dict(cls, data: dict) -> "ConfigParams":
        """Build from a decoded TOML document; missing keys keep their zero values."""
        return _load(cls, data, "config params")


def parse_config_params(text: str) -> ConfigParams:
    return ConfigParams.from_dict(tomllib.loads(text))


def load_config_params(path: str | Path) -> ConfigParams:
    return parse_config_params(Path(path).read_text(encoding="utf-8"))