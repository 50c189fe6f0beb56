"""
Runtime configuration for a stableswap pair.

Defaults live in `stableswap/kernels/dex/stableswap_pair_v1.yaml`; hosts may
load their own document with `load_pair_config(path)`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from ..errors import ValidationError
from ..kernels.python.uint import U8_MAX, require_int

BPS_DENOM = 10_000
GLOBAL_FEE_BPS = 30
DEFAULT_SLIPPAGE = Fraction(5, 1000)
MAX_ALLOWED_SLIPPAGE = Fraction(1, 2)
LP_TOKEN_PRECISION = 6
TWAP_PRECISION = 6

_KNOWN_KEYS = frozenset(
    {"fee_bps", "default_max_spread", "max_allowed_spread", "lp_token_precision", "twap_precision"}
)


def _default_config_path() -> Path:
    # stableswap/core/params.py -> stableswap/ -> kernels/dex/stableswap_pair_v1.yaml
    return Path(__file__).resolve().parents[1] / "kernels" / "dex" / "stableswap_pair_v1.yaml"


def as_fraction(name: str, value: Union[Fraction, int, str]) -> Fraction:
    """Parse a ratio given as a Fraction, an int or a decimal / rational string."""
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a ratio, got bool")
    if isinstance(value, float):
        raise TypeError(f"{name} must not be a float (use a decimal string)")
    try:
        return Fraction(value)
    except (TypeError, ValueError, ZeroDivisionError) as exc:
        raise ValidationError(f"invalid {name}: {value!r}") from exc


@dataclass(frozen=True)
class PairConfig:
    """Runtime config for pair operations."""

    fee_bps: int = GLOBAL_FEE_BPS
    default_max_spread: Fraction = field(default=DEFAULT_SLIPPAGE)
    max_allowed_spread: Fraction = field(default=MAX_ALLOWED_SLIPPAGE)
    lp_token_precision: int = LP_TOKEN_PRECISION
    twap_precision: int = TWAP_PRECISION

    def __post_init__(self) -> None:
        for name in ("fee_bps", "lp_token_precision", "twap_precision"):
            require_int(name, getattr(self, name))
        if not (0 <= self.fee_bps < BPS_DENOM):
            raise ValidationError(f"fee_bps must be in [0, {BPS_DENOM}): {self.fee_bps}")
        for name in ("lp_token_precision", "twap_precision"):
            v = getattr(self, name)
            if not (0 <= v <= U8_MAX):
                raise ValidationError(f"{name} must be in [0, {U8_MAX}]: {v}")
        for name in ("default_max_spread", "max_allowed_spread"):
            v = getattr(self, name)
            if not isinstance(v, Fraction):
                raise TypeError(f"{name} must be a Fraction")
            if not (0 <= v <= 1):
                raise ValidationError(f"{name} must be in [0, 1]: {v}")
        if self.default_max_spread > self.max_allowed_spread:
            raise ValidationError("default_max_spread must not exceed max_allowed_spread")


def pair_config_from_mapping(obj: Mapping[str, Any]) -> PairConfig:
    if not isinstance(obj, Mapping):
        raise ValidationError("pair config must be a mapping")
    unknown = set(obj) - _KNOWN_KEYS
    if unknown:
        raise ValidationError(f"unknown pair config keys: {sorted(unknown)}")

    kwargs: dict[str, Any] = {}
    for name in ("fee_bps", "lp_token_precision", "twap_precision"):
        if name in obj:
            v = obj[name]
            if not isinstance(v, int) or isinstance(v, bool):
                raise ValidationError(f"{name} must be an int")
            kwargs[name] = v
    for name in ("default_max_spread", "max_allowed_spread"):
        if name in obj:
            if isinstance(obj[name], float):
                raise ValidationError(f"{name} must be a quoted decimal string, got float {obj[name]!r}")
            kwargs[name] = as_fraction(name, obj[name])
    return PairConfig(**kwargs)


def load_pair_config(path: Optional[Path] = None) -> PairConfig:
    """Load a PairConfig from a YAML document (defaults to the packaged one)."""
    if path is None:
        return default_pair_config()
    return _load_yaml_config(Path(path))


def _load_yaml_config(path: Path) -> PairConfig:
    obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    if obj is None:
        obj = {}
    return pair_config_from_mapping(obj)


@lru_cache(maxsize=1)
def default_pair_config() -> PairConfig:
    return _load_yaml_config(_default_config_path())
