from __future__ import annotations

import pytest

from ammpool.config import (
    DEFAULT_CONFIG,
    MAX_SHARES,
    ProtocolConfig,
    load_protocol_config,
    protocol_config_from_mapping,
)
from ammpool.state.assets import AssetClass


def test_defaults() -> None:
    assert DEFAULT_CONFIG.max_shares == MAX_SHARES == 2**63 - 1
    assert DEFAULT_CONFIG.burned_shares == 1000
    assert DEFAULT_CONFIG.reserve_floor == 2_000_000
    assert DEFAULT_CONFIG.base_asset == AssetClass(b"", b"")
    assert DEFAULT_CONFIG.marker_asset(b"\x01") == AssetClass(b"\x01", b"POOL")


def test_load_yaml_overrides(tmp_path) -> None:
    path = tmp_path / "protocol.yaml"
    path.write_text(
        "burned_shares: 10\n"
        "reserve_floor: 0\n"
        'marker_token_name: "4d4b"\n'
        'base_policy_id: "0xabcd"\n',
        encoding="utf-8",
    )
    cfg = load_protocol_config(path)
    assert cfg == ProtocolConfig(
        burned_shares=10,
        reserve_floor=0,
        marker_token_name=b"MK",
        base_policy_id=b"\xab\xcd",
    )


def test_empty_yaml_means_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_protocol_config(path) == DEFAULT_CONFIG


@pytest.mark.parametrize(
    "obj,match",
    [
        ({"reserve_flor": 1}, "unknown protocol config keys"),
        ({"burned_shares": "10"}, "must be an int"),
        ({"base_policy_id": 0}, "quoted hex string"),
        ({"burned_shares": MAX_SHARES}, "burned_shares"),
        ({"reserve_floor": -1}, "reserve_floor"),
        ({"marker_token_name": "zz"}, "valid hex"),
    ],
)
def test_bad_config_values_are_rejected(obj, match) -> None:
    with pytest.raises(ValueError, match=match):
        protocol_config_from_mapping(obj)


def test_yaml_list_is_not_a_config(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_protocol_config(path)


def test_mixed_key_types_are_a_value_error(tmp_path) -> None:
    path = tmp_path / "mixed.yaml"
    path.write_text("1: 2\nbogus: 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="keys must be strings"):
        load_protocol_config(path)
