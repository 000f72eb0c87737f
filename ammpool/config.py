"""
Protocol constants for the pool validators.

Defaults are the deployed values. A deployment may pin its own values in a YAML
file; the validators themselves only ever see an explicit `ProtocolConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from .state.assets import AssetClass, PolicyId
from .state.canonical import hex_to_bytes


MAX_SHARES = 2**63 - 1
BURNED_SHARES = 1000
RESERVE_FLOOR = 2_000_000
MARKER_TOKEN_NAME = b"POOL"

_BYTES_FIELDS = ("marker_token_name", "base_policy_id", "base_asset_name")
_INT_FIELDS = ("max_shares", "burned_shares", "reserve_floor")


@dataclass(frozen=True)
class ProtocolConfig:
    """Constants shared by the spend and issuance paths."""

    max_shares: int = MAX_SHARES
    burned_shares: int = BURNED_SHARES
    reserve_floor: int = RESERVE_FLOOR
    marker_token_name: bytes = MARKER_TOKEN_NAME
    base_policy_id: PolicyId = b""
    base_asset_name: bytes = b""

    def __post_init__(self) -> None:
        for name in _INT_FIELDS:
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        for name in _BYTES_FIELDS:
            if not isinstance(getattr(self, name), bytes):
                raise TypeError(f"{name} must be bytes")
        if self.max_shares <= 0:
            raise ValueError("max_shares must be positive")
        if not (0 <= self.burned_shares < self.max_shares):
            raise ValueError("burned_shares must be in [0, max_shares)")
        if self.reserve_floor < 0:
            raise ValueError("reserve_floor must be non-negative")

    @property
    def base_asset(self) -> AssetClass:
        return AssetClass(self.base_policy_id, self.base_asset_name)

    def marker_asset(self, pool_identity: PolicyId) -> AssetClass:
        return AssetClass(pool_identity, self.marker_token_name)


DEFAULT_CONFIG = ProtocolConfig()


def protocol_config_from_mapping(obj: Mapping[str, Any]) -> ProtocolConfig:
    """
    Build a ProtocolConfig from a plain mapping.

    Integer fields are ints; byte fields are hex strings. Unknown keys are
    rejected so a typo cannot silently fall back to a default.
    """
    if not isinstance(obj, Mapping):
        raise ValueError("protocol config must be a mapping")
    if any(not isinstance(k, str) for k in obj):
        raise ValueError("protocol config keys must be strings")
    known = {f.name for f in fields(ProtocolConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown protocol config keys: {unknown}")

    kwargs: dict[str, Any] = {}
    for name in _INT_FIELDS:
        if name in obj:
            v = obj[name]
            if not isinstance(v, int) or isinstance(v, bool):
                raise ValueError(f"{name} must be an int")
            kwargs[name] = v
    for name in _BYTES_FIELDS:
        if name in obj:
            v = obj[name]
            if v is None:
                v = ""
            if not isinstance(v, str):
                # Unquoted YAML like `00` arrives as an int.
                raise ValueError(f"{name} must be a quoted hex string")
            kwargs[name] = hex_to_bytes(v, name=name)
    try:
        return ProtocolConfig(**kwargs)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc


def load_protocol_config(path: Path | str) -> ProtocolConfig:
    """Load a ProtocolConfig from a YAML file (top-level mapping)."""
    text = Path(path).read_text(encoding="utf-8")
    obj = yaml.safe_load(text)
    if obj is None:
        return DEFAULT_CONFIG
    return protocol_config_from_mapping(obj)
