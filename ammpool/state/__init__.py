"""
State model for the pool validators
"""

from .assets import AssetBundle, AssetClass
from .ledger import (
    Address,
    DatumHash,
    InlineDatum,
    NoDatum,
    TransactionInfo,
    TxInInfo,
    TxOut,
    TxOutRef,
)
from .pool_record import PoolRecord

__all__ = [
    "AssetBundle",
    "AssetClass",
    "Address",
    "DatumHash",
    "InlineDatum",
    "NoDatum",
    "TransactionInfo",
    "TxInInfo",
    "TxOut",
    "TxOutRef",
    "PoolRecord",
]
