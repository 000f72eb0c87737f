"""
Asset classes and asset bundles held by pool state objects.

Implements AssetBundle[AssetClass] -> Amount, plus the slot-count rule that
pins down exactly which asset classes a pool state object may hold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple


# Type aliases
PolicyId = bytes  # issuer identity (script hash); b"" for the base asset
AssetName = bytes
Amount = int  # arbitrary precision integer


@dataclass(frozen=True, order=True)
class AssetClass:
    """
    (issuer-id, asset-name) pair.

    Ordering is lexicographic on `policy_id`, then on `name`. This is the
    canonical order a pool's asset pair must be stored in.
    """

    policy_id: PolicyId
    name: AssetName

    def __post_init__(self) -> None:
        if not isinstance(self.policy_id, bytes):
            raise TypeError("policy_id must be bytes")
        if not isinstance(self.name, bytes):
            raise TypeError("name must be bytes")

    def __repr__(self) -> str:
        return f"AssetClass({self.policy_id.hex() or '-'}.{self.name.hex() or '-'})"


class AssetBundle:
    """
    Sparse mapping AssetClass -> quantity.

    Notes:
    - Zero quantities are omitted, so "absent" and "present at zero" are the same.
    - Plain bundles (state-object values) reject negative quantities; signed
      bundles describe mint/burn deltas and accept them.
    - Do not rely on dict iteration order; `items()` yields in canonical order.
    """

    def __init__(
        self,
        entries: Optional[Mapping[AssetClass, Amount]] = None,
        *,
        signed: bool = False,
    ) -> None:
        self._signed = signed
        self._entries: Dict[AssetClass, Amount] = {}
        for asset, amount in (entries or {}).items():
            self._put(asset, amount)

    @classmethod
    def from_triples(
        cls,
        triples: Iterable[Tuple[PolicyId, AssetName, Amount]],
        *,
        signed: bool = False,
    ) -> "AssetBundle":
        """Build a bundle from (policy_id, name, amount) triples, summing duplicates."""
        bundle = cls(signed=signed)
        for policy_id, name, amount in triples:
            asset = AssetClass(policy_id, name)
            bundle._put(asset, bundle.get(asset) + amount)
        return bundle

    def _put(self, asset: AssetClass, amount: Amount) -> None:
        if not isinstance(asset, AssetClass):
            raise TypeError(f"bundle keys must be AssetClass, got {type(asset)}")
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError(f"quantity of {asset!r} must be an int")
        if amount < 0 and not self._signed:
            raise ValueError(f"quantity cannot be negative: {asset!r} = {amount}")
        if amount == 0:
            self._entries.pop(asset, None)
        else:
            self._entries[asset] = amount

    @property
    def signed(self) -> bool:
        return self._signed

    def get(self, asset: AssetClass) -> Amount:
        """Quantity of `asset`; 0 if absent."""
        return self._entries.get(asset, 0)

    def quantity_of(self, policy_id: PolicyId, name: AssetName) -> Amount:
        return self._entries.get(AssetClass(policy_id, name), 0)

    def tokens_under(self, policy_id: PolicyId) -> Dict[AssetName, Amount]:
        """All (name -> quantity) entries issued under `policy_id`."""
        return {
            asset.name: amount
            for asset, amount in self.items()
            if asset.policy_id == policy_id
        }

    def distinct_asset_class_count(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[Tuple[AssetClass, Amount]]:
        for asset in sorted(self._entries):
            yield asset, self._entries[asset]

    def to_dict(self) -> Dict[AssetClass, Amount]:
        return dict(self._entries)

    def __contains__(self, asset: object) -> bool:
        return asset in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssetBundle):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        kind = "signed " if self._signed else ""
        return f"AssetBundle({kind}{len(self._entries)} classes)"


def quantity_of(bundle: AssetBundle, policy_id: PolicyId, name: AssetName) -> Amount:
    """Quantity of (policy_id, name) in `bundle`; 0 when absent, never negative for plain bundles."""
    return bundle.quantity_of(policy_id, name)


def distinct_asset_class_count(bundle: AssetBundle) -> int:
    """Number of asset classes with a nonzero quantity."""
    return bundle.distinct_asset_class_count()


def expected_slot_count(is_base_asset_pool: bool, share_quantity: Amount) -> int:
    """
    Exact number of asset classes a pool state object must hold.

    Slots: base asset, A, B, share counter, marker. When A is the base asset the
    first two coincide. When the share counter is at zero its slot disappears.
    """
    count = 4 if is_base_asset_pool else 5
    if share_quantity == 0:
        count -= 1
    return count
