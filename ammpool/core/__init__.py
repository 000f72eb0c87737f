"""
Pool validators: spend path, issuance path and the action rules they share.

Public API:
- `validate_spend(prior_record, redeemer, own_ref, tx) -> Verdict`
- `validate_issuance(redeemer, pool_identity, tx) -> Verdict`
- `*_or_raise` variants raise a `PoolRejected` subclass instead
"""

from .actions import PoolReserves, evaluate_action, reserves_from_bundle
from .errors import (
    EconomicViolation,
    MalformedInputError,
    PoolRejected,
    ProvenanceViolation,
    StructuralViolation,
)
from .issuance import (
    derive_shares_asset_name,
    encode_issuance_redeemer,
    is_valid_issuance,
    validate_issuance,
    validate_issuance_or_raise,
)
from .redeemers import (
    ActionKind,
    AddLiquidity,
    Donate,
    PoolRedeemer,
    Swap,
    SwapDirection,
    WithdrawLiquidity,
    decode_redeemer,
    encode_redeemer,
)
from .spend import is_valid_spend, validate_spend, validate_spend_or_raise
from .types import RejectionKind, Verdict, Violation

__all__ = [
    "PoolReserves",
    "evaluate_action",
    "reserves_from_bundle",
    "EconomicViolation",
    "MalformedInputError",
    "PoolRejected",
    "ProvenanceViolation",
    "StructuralViolation",
    "derive_shares_asset_name",
    "encode_issuance_redeemer",
    "is_valid_issuance",
    "validate_issuance",
    "validate_issuance_or_raise",
    "ActionKind",
    "AddLiquidity",
    "Donate",
    "PoolRedeemer",
    "Swap",
    "SwapDirection",
    "WithdrawLiquidity",
    "decode_redeemer",
    "encode_redeemer",
    "is_valid_spend",
    "validate_spend",
    "validate_spend_or_raise",
    "RejectionKind",
    "Verdict",
    "Violation",
]
