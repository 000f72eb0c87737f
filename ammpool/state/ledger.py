"""
Transaction view supplied by the surrounding ledger.

These types only describe what the validators are allowed to see: consumed
state objects, produced state objects and the mint/burn deltas. Nothing here
talks to a real ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .assets import AssetBundle, PolicyId
from .canonical import CanonicalReader, encode_bytes, encode_uvarint


TX_ID_BYTES = 32


@dataclass(frozen=True)
class Address:
    """Payment credential (script hash or key hash) plus optional staking part."""

    payment_credential: bytes
    stake_credential: Optional[bytes] = None

    def belongs_to(self, identity: PolicyId) -> bool:
        return self.payment_credential == identity


@dataclass(frozen=True, order=True)
class TxOutRef:
    """Reference to a specific output of a prior transaction."""

    tx_id: bytes
    index: int

    def __post_init__(self) -> None:
        if not isinstance(self.tx_id, bytes):
            raise TypeError("tx_id must be bytes")
        if not isinstance(self.index, int) or isinstance(self.index, bool) or self.index < 0:
            raise ValueError(f"index must be a non-negative int: {self.index!r}")

    def __repr__(self) -> str:
        return f"TxOutRef({self.tx_id.hex()[:16]}...#{self.index})"


@dataclass(frozen=True)
class NoDatum:
    pass


@dataclass(frozen=True)
class DatumHash:
    """Deferred payload: only its hash is on the output."""

    datum_hash: bytes


@dataclass(frozen=True)
class InlineDatum:
    """Eagerly-available payload carried on the output itself."""

    data: bytes


Datum = Union[NoDatum, DatumHash, InlineDatum]


@dataclass(frozen=True)
class TxOut:
    address: Address
    value: AssetBundle
    datum: Datum = NoDatum()


@dataclass(frozen=True)
class TxInInfo:
    out_ref: TxOutRef
    resolved: TxOut


@dataclass(frozen=True)
class TransactionInfo:
    inputs: Tuple[TxInInfo, ...] = ()
    outputs: Tuple[TxOut, ...] = ()
    mint: AssetBundle = field(default_factory=lambda: AssetBundle(signed=True))

    def find_input(self, out_ref: TxOutRef) -> Optional[TxInInfo]:
        for tx_in in self.inputs:
            if tx_in.out_ref == out_ref:
                return tx_in
        return None

    def inputs_at(self, identity: PolicyId) -> Tuple[TxInInfo, ...]:
        return tuple(i for i in self.inputs if i.resolved.address.belongs_to(identity))

    def outputs_at(self, identity: PolicyId) -> Tuple[TxOut, ...]:
        return tuple(o for o in self.outputs if o.address.belongs_to(identity))

    def consumes(self, out_ref: TxOutRef) -> bool:
        return self.find_input(out_ref) is not None


def encode_tx_out_ref(ref: TxOutRef) -> bytes:
    return encode_bytes(ref.tx_id) + encode_uvarint(ref.index)


def decode_tx_out_ref(data: bytes) -> TxOutRef:
    reader = CanonicalReader(data)
    tx_id = reader.read_bytes(max_len=TX_ID_BYTES)
    if len(tx_id) != TX_ID_BYTES:
        raise ValueError(f"tx_id must be {TX_ID_BYTES} bytes, got {len(tx_id)}")
    index = reader.read_uvarint()
    reader.finish()
    return TxOutRef(tx_id=tx_id, index=index)
