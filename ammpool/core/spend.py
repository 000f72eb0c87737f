"""
State transition validator (spend path).

``validate_spend()`` is invoked once per transaction that consumes a pool
state object. It:

1. Decodes the redeemer and the prior pool record.
2. Finds the single pool input and the single pool output.
3. Checks identity continuity: address, authenticity marker, exact asset
   slots and an unchanged record.
4. Delegates the economic rules to ``actions.evaluate_action()``.

The result is a ``Verdict``; the ledger boundary only reads ``accepted``.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..state.assets import distinct_asset_class_count, expected_slot_count
from ..state.ledger import InlineDatum, TransactionInfo, TxOutRef
from ..state.pool_record import PoolRecord, decode_pool_record
from . import violations as v
from .actions import ActionContext, evaluate_action, reserves_from_bundle
from .errors import raise_for_verdict
from .redeemers import PoolRedeemer, decode_redeemer
from .types import Verdict

logger = logging.getLogger(__name__)


def _reject(names: list[str], *, own_ref: TxOutRef) -> Verdict:
    logger.debug(f"spend of {own_ref!r} rejected: {', '.join(names)}")
    return Verdict.reject(v.to_violations(names))


def validate_spend(
    prior_record: Optional[bytes],
    redeemer: bytes,
    own_ref: TxOutRef,
    tx: TransactionInfo,
    *,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> Verdict:
    """
    Decide whether `tx` may consume the pool state object at `own_ref`.

    Args:
        prior_record: encoded PoolRecord carried by the consumed state object, or None
        redeemer: encoded spend redeemer
        own_ref: reference of the state object being spent
        tx: the full transaction view
        config: protocol constants

    Returns:
        Verdict (accepted, or rejected with the names of every failed invariant
        that could be evaluated)
    """
    early: list[str] = []

    action: Optional[PoolRedeemer] = None
    try:
        action = decode_redeemer(redeemer)
    except (TypeError, ValueError):
        early.append(v.REDEEMER_WELL_FORMED)

    record: Optional[PoolRecord] = None
    if prior_record is None:
        early.append(v.PRIOR_RECORD_PRESENT)
    else:
        try:
            record = decode_pool_record(prior_record)
        except (TypeError, ValueError):
            early.append(v.PRIOR_RECORD_WELL_FORMED)

    own_input = tx.find_input(own_ref)
    if own_input is None:
        early.append(v.OWN_INPUT_PRESENT)

    if early or action is None or record is None or own_input is None:
        return _reject(early, own_ref=own_ref)

    pool_identity = own_input.resolved.address.payment_credential

    pool_inputs = tx.inputs_at(pool_identity)
    if len(pool_inputs) != 1:
        return _reject([v.SINGLE_POOL_INPUT], own_ref=own_ref)
    pool_input = pool_inputs[0].resolved

    pool_outputs = tx.outputs_at(pool_identity)
    if len(pool_outputs) != 1:
        return _reject([v.SINGLE_POOL_OUTPUT], own_ref=own_ref)
    pool_output = pool_outputs[0]

    if not isinstance(pool_output.datum, InlineDatum):
        return _reject([v.OUTPUT_RECORD_INLINE], own_ref=own_ref)
    try:
        post_record = decode_pool_record(pool_output.datum.data)
    except (TypeError, ValueError):
        return _reject([v.OUTPUT_RECORD_WELL_FORMED], own_ref=own_ref)

    pre_value = pool_input.value
    post_value = pool_output.value
    marker = config.marker_asset(pool_identity)
    share = record.share_asset(pool_identity)
    is_base_asset_pool = record.is_base_asset_pool(config.base_policy_id)

    pre = reserves_from_bundle(pre_value, record, pool_identity, config)
    post = reserves_from_bundle(post_value, record, pool_identity, config)

    structural: list[v.Check] = [
        (v.POOL_ADDRESS_UNCHANGED, pool_output.address == pool_input.address),
        (v.MARKER_BEFORE, pre_value.get(marker) == 1),
        (v.MARKER_AFTER, post_value.get(marker) == 1),
        (
            v.ASSET_SLOT_COUNT,
            distinct_asset_class_count(post_value)
            == expected_slot_count(is_base_asset_pool, post_value.get(share)),
        ),
        (v.RECORD_UNCHANGED, post_record == record),
        (
            v.SHARE_COUNTER_IN_RANGE,
            0 <= pre.shares <= config.max_shares and 0 <= post.shares <= config.max_shares,
        ),
    ]
    names = v.failed(structural)

    ctx = ActionContext(record=record, is_base_asset_pool=is_base_asset_pool, config=config)
    names.extend(evaluate_action(action, pre, post, ctx))

    if names:
        return _reject(names, own_ref=own_ref)
    logger.debug(f"spend of {own_ref!r} accepted: {action.kind.name}")
    return Verdict.accept()


def is_valid_spend(
    prior_record: Optional[bytes],
    redeemer: bytes,
    own_ref: TxOutRef,
    tx: TransactionInfo,
    *,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> bool:
    """Boolean boundary: accept or reject, nothing else."""
    return validate_spend(prior_record, redeemer, own_ref, tx, config=config).accepted


def validate_spend_or_raise(
    prior_record: Optional[bytes],
    redeemer: bytes,
    own_ref: TxOutRef,
    tx: TransactionInfo,
    *,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> Verdict:
    """Like ``validate_spend()`` but raises a ``PoolRejected`` subclass on rejection."""
    return raise_for_verdict(validate_spend(prior_record, redeemer, own_ref, tx, config=config))
