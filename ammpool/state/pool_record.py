"""
Pool record: the persistent payload carried by a pool state object.

The binary layout produced by `encode_pool_record` is part of the
compatibility surface. Every successor state object re-carries it verbatim,
so field order and types must never change.
"""

from __future__ import annotations

from dataclasses import dataclass

from .assets import AssetClass, AssetName, PolicyId
from .canonical import CanonicalReader, encode_bytes, encode_svarint


POOL_RECORD_CONSTR_TAG = 0


@dataclass(frozen=True)
class PoolRecord:
    """
    Immutable pool configuration.

    Attributes:
        a_asset: First traded asset (must sort strictly before b_asset)
        b_asset: Second traded asset
        swap_fee_points: Fee numerator
        fee_basis: Fee denominator (fee = swap_fee_points / fee_basis)
        shares_asset_name: Name of the share asset, issued under the pool's own identity

    Ordering and fee bounds are *checked* invariants (see `assets_sorted` and
    `fee_in_range`), not construction-time errors, so a forged record can
    still be decoded and then rejected by name.
    """

    a_asset: AssetClass
    b_asset: AssetClass
    swap_fee_points: int
    fee_basis: int
    shares_asset_name: AssetName

    def __post_init__(self) -> None:
        for name in ("a_asset", "b_asset"):
            if not isinstance(getattr(self, name), AssetClass):
                raise TypeError(f"{name} must be an AssetClass")
        for name in ("swap_fee_points", "fee_basis"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if not isinstance(self.shares_asset_name, bytes):
            raise TypeError("shares_asset_name must be bytes")

    def assets_sorted(self) -> bool:
        """A and B are distinct and stored in canonical order."""
        return self.a_asset < self.b_asset

    def fee_in_range(self) -> bool:
        return 0 <= self.swap_fee_points <= self.fee_basis

    def share_asset(self, pool_identity: PolicyId) -> AssetClass:
        return AssetClass(pool_identity, self.shares_asset_name)

    def is_base_asset_pool(self, base_policy_id: PolicyId) -> bool:
        return self.a_asset.policy_id == base_policy_id

    def to_bytes(self) -> bytes:
        return encode_pool_record(self)


def encode_pool_record(record: PoolRecord) -> bytes:
    """Encode a PoolRecord in its canonical binary layout."""
    return b"".join(
        (
            bytes([POOL_RECORD_CONSTR_TAG]),
            encode_bytes(record.a_asset.policy_id),
            encode_bytes(record.a_asset.name),
            encode_bytes(record.b_asset.policy_id),
            encode_bytes(record.b_asset.name),
            encode_svarint(record.swap_fee_points),
            encode_svarint(record.fee_basis),
            encode_bytes(record.shares_asset_name),
        )
    )


def decode_pool_record(data: bytes) -> PoolRecord:
    """
    Decode a PoolRecord.

    Raises:
        ValueError: unknown constructor tag, truncated data, non-canonical
            varints or trailing bytes
        TypeError: `data` is not bytes
    """
    reader = CanonicalReader(data)
    tag = reader.read_byte()
    if tag != POOL_RECORD_CONSTR_TAG:
        raise ValueError(f"unknown pool record constructor tag: {tag}")
    a_policy = reader.read_bytes()
    a_name = reader.read_bytes()
    b_policy = reader.read_bytes()
    b_name = reader.read_bytes()
    swap_fee_points = reader.read_svarint()
    fee_basis = reader.read_svarint()
    shares_asset_name = reader.read_bytes()
    reader.finish()
    return PoolRecord(
        a_asset=AssetClass(a_policy, a_name),
        b_asset=AssetClass(b_policy, b_name),
        swap_fee_points=swap_fee_points,
        fee_basis=fee_basis,
        shares_asset_name=shares_asset_name,
    )
