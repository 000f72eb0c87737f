from __future__ import annotations

import pytest

from ammpool.state.assets import AssetClass
from ammpool.state.canonical import encode_svarint
from ammpool.state.ledger import TxOutRef, decode_tx_out_ref, encode_tx_out_ref
from ammpool.state.pool_record import PoolRecord, decode_pool_record, encode_pool_record

A = AssetClass(b"", b"")
B = AssetClass(bytes.fromhex("22" * 28), b"TOKEN")


def _record(**overrides) -> PoolRecord:
    fields = dict(a_asset=A, b_asset=B, swap_fee_points=3, fee_basis=1000, shares_asset_name=b"\x42" * 32)
    fields.update(overrides)
    return PoolRecord(**fields)


def test_pool_record_layout_is_stable() -> None:
    encoded = encode_pool_record(_record())
    assert encoded == (
        b"\x00"
        + b"\x00"
        + b"\x00"
        + b"\x1c" + bytes.fromhex("22" * 28)
        + b"\x05TOKEN"
        + b"\x06"
        + b"\xd0\x0f"
        + b"\x20" + b"\x42" * 32
    )
    assert decode_pool_record(encoded) == _record()


def test_negative_fee_survives_decoding_and_is_flagged_by_the_range_check() -> None:
    record = decode_pool_record(_record(swap_fee_points=-1).to_bytes())
    assert record.swap_fee_points == -1
    assert not record.fee_in_range()


def test_fee_range_bounds() -> None:
    assert _record(swap_fee_points=0).fee_in_range()
    assert _record(swap_fee_points=1000).fee_in_range()
    assert not _record(swap_fee_points=1001).fee_in_range()


def test_assets_sorted_requires_strict_order() -> None:
    assert _record().assets_sorted()
    assert not _record(a_asset=B, b_asset=A).assets_sorted()
    assert not _record(b_asset=A).assets_sorted()


def test_base_asset_pool_detection() -> None:
    assert _record().is_base_asset_pool(b"")
    other = AssetClass(bytes.fromhex("11" * 28), b"ALPHA")
    assert not _record(a_asset=other).is_base_asset_pool(b"")


def test_share_asset_lives_under_pool_identity() -> None:
    identity = bytes.fromhex("a1" * 28)
    assert _record().share_asset(identity) == AssetClass(identity, b"\x42" * 32)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda data: b"\x01" + data[1:],  # unknown constructor tag
        lambda data: data[:-1],  # truncated
        lambda data: data + b"\x00",  # trailing byte
        lambda data: b"",
    ],
)
def test_decode_rejects_malformed_records(mutate) -> None:
    with pytest.raises(ValueError):
        decode_pool_record(mutate(_record().to_bytes()))


def test_decode_rejects_non_minimal_fee_varint() -> None:
    head = b"\x00\x00\x00\x1c" + bytes.fromhex("22" * 28) + b"\x05TOKEN"
    good = head + encode_svarint(3) + encode_svarint(1000) + b"\x00"
    assert decode_pool_record(good).shares_asset_name == b""
    padded = head + b"\x86\x00" + encode_svarint(1000) + b"\x00"
    with pytest.raises(ValueError, match="non-minimal"):
        decode_pool_record(padded)


def test_record_constructor_type_checks() -> None:
    with pytest.raises(TypeError):
        _record(fee_basis=True)
    with pytest.raises(TypeError):
        _record(a_asset=(b"", b""))


def test_tx_out_ref_encoding_requires_full_tx_id() -> None:
    ref = TxOutRef(tx_id=b"\x07" * 32, index=300)
    assert decode_tx_out_ref(encode_tx_out_ref(ref)) == ref
    with pytest.raises(ValueError):
        decode_tx_out_ref(encode_tx_out_ref(TxOutRef(tx_id=b"\x07" * 31, index=0)))
