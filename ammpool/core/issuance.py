"""
Pool issuance validator (mint path).

``validate_issuance()`` runs once per pool, in the transaction that creates
it. It checks the new state object, the initial share issuance and the
accompanying mint under the pool's own identity. The share-asset name is
derived from a consumed seed output, so two pools can never share one.
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..kernels.python.pool_math_v1 import is_floor_sqrt
from ..state.assets import PolicyId, distinct_asset_class_count, expected_slot_count
from ..state.canonical import sha256_bytes
from ..state.ledger import InlineDatum, TransactionInfo, TxOutRef, decode_tx_out_ref, encode_tx_out_ref
from ..state.pool_record import decode_pool_record
from . import violations as v
from .actions import reserves_from_bundle
from .errors import raise_for_verdict
from .types import Verdict

logger = logging.getLogger(__name__)

MAX_SEED_INDEX = 0xFF


def derive_shares_asset_name(seed: TxOutRef) -> bytes:
    """
    `sha256(seed.tx_id || seed.index as one byte)`.

    Raises:
        ValueError: if the index does not fit in one byte
    """
    if not (0 <= seed.index <= MAX_SEED_INDEX):
        raise ValueError(f"seed index must fit in one byte: {seed.index}")
    return sha256_bytes(seed.tx_id + bytes([seed.index]))


def encode_issuance_redeemer(seed: TxOutRef) -> bytes:
    return encode_tx_out_ref(seed)


def _reject(names: list[str], *, pool_identity: PolicyId) -> Verdict:
    logger.debug(f"issuance under {pool_identity.hex()} rejected: {', '.join(names)}")
    return Verdict.reject(v.to_violations(names))


def validate_issuance(
    redeemer: bytes,
    pool_identity: PolicyId,
    tx: TransactionInfo,
    *,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> Verdict:
    """
    Decide whether `tx` legitimately creates a new pool under `pool_identity`.

    Args:
        redeemer: encoded seed reference (see `encode_issuance_redeemer`)
        pool_identity: the pool validator's own identity (issuer-id of its tokens)
        tx: the full transaction view
        config: protocol constants
    """
    try:
        seed = decode_tx_out_ref(redeemer)
    except (TypeError, ValueError):
        return _reject([v.REDEEMER_WELL_FORMED], pool_identity=pool_identity)
    if seed.index > MAX_SEED_INDEX:
        return _reject([v.SEED_INDEX_ONE_BYTE], pool_identity=pool_identity)

    pool_outputs = tx.outputs_at(pool_identity)
    if len(pool_outputs) != 1:
        return _reject([v.SINGLE_POOL_OUTPUT], pool_identity=pool_identity)
    pool_output = pool_outputs[0]
    if not isinstance(pool_output.datum, InlineDatum):
        return _reject([v.OUTPUT_RECORD_INLINE], pool_identity=pool_identity)
    try:
        record = decode_pool_record(pool_output.datum.data)
    except (TypeError, ValueError):
        return _reject([v.OUTPUT_RECORD_WELL_FORMED], pool_identity=pool_identity)

    derived_name = derive_shares_asset_name(seed)
    share = record.share_asset(pool_identity)
    marker = config.marker_asset(pool_identity)
    is_base_asset_pool = record.is_base_asset_pool(config.base_policy_id)

    value = pool_output.value
    reserves = reserves_from_bundle(value, record, pool_identity, config)
    circulating = config.max_shares - reserves.shares
    minted = tx.mint.tokens_under(pool_identity)

    checks: list[v.Check] = [
        (v.FEE_IN_RANGE, record.fee_in_range()),
        (v.ASSETS_SORTED, record.assets_sorted()),
        # Trading another pool's shares is allowed; trading this pool's own tokens is not.
        (v.A_NOT_OWN_SHARE, record.a_asset != share),
        (v.B_NOT_OWN_SHARE, record.b_asset != share),
        (v.A_NOT_OWN_MARKER, record.a_asset != marker),
        (v.B_NOT_OWN_MARKER, record.b_asset != marker),
        (v.INITIAL_A_POSITIVE, reserves.a > 0),
        (v.INITIAL_B_POSITIVE, reserves.b > 0),
        (v.INITIAL_BASE_FLOOR, reserves.base >= config.reserve_floor),
        (v.INITIAL_SHARES_FLOOR_SQRT, is_floor_sqrt(circulating, reserves.a * reserves.b)),
        (v.INITIAL_SHARES_ABOVE_BURNED, circulating - config.burned_shares > 0),
        (v.SHARE_COUNTER_IN_RANGE, 0 <= reserves.shares <= config.max_shares),
        (
            v.ASSET_SLOT_COUNT,
            distinct_asset_class_count(value) == expected_slot_count(is_base_asset_pool, reserves.shares),
        ),
        (v.NEW_POOL_MARKER, value.get(marker) == 1),
        (v.MINT_TWO_CLASSES, len(minted) == 2),
        (v.MINT_MARKER_SINGLE, minted.get(config.marker_token_name) == 1),
        (v.MINT_SHARE_QUANTITY, minted.get(record.shares_asset_name) == config.max_shares - config.burned_shares),
        (v.SHARE_NAME_DERIVED, derived_name == record.shares_asset_name),
        (v.SEED_CONSUMED, tx.consumes(seed)),
    ]
    names = v.failed(checks)
    if names:
        return _reject(names, pool_identity=pool_identity)
    logger.debug(f"issuance under {pool_identity.hex()} accepted: share asset {derived_name.hex()}")
    return Verdict.accept()


def is_valid_issuance(
    redeemer: bytes,
    pool_identity: PolicyId,
    tx: TransactionInfo,
    *,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> bool:
    """Boolean boundary: accept or reject, nothing else."""
    return validate_issuance(redeemer, pool_identity, tx, config=config).accepted


def validate_issuance_or_raise(
    redeemer: bytes,
    pool_identity: PolicyId,
    tx: TransactionInfo,
    *,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> Verdict:
    """Like ``validate_issuance()`` but raises a ``PoolRejected`` subclass on rejection."""
    return raise_for_verdict(validate_issuance(redeemer, pool_identity, tx, config=config))
