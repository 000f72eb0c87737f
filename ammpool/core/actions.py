"""
Action invariant evaluator.

Given a pool's reserves before and after a transaction and the action the
transaction claims to perform, compute the expected reserve and share deltas
and compare them with what the successor state object actually holds.

Reserves are read through `reserves_from_bundle`: on a pool whose A asset is
the base asset, the reserve floor is subtracted before any arithmetic, so the
floor is never counted as tradable liquidity.

Every rule is a named predicate. `evaluate_action()` returns the names of the
predicates that fail (empty = the transition is economically valid). Kernel
math is only invoked after its denominators have been checked, so this module
never raises on hostile input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..config import ProtocolConfig
from ..kernels.python.pool_math_v1 import (
    amounts_for_withdrawal,
    compute_swap_fee,
    shares_for_deposit,
    swap_quote,
)
from ..state.assets import AssetBundle, PolicyId
from ..state.pool_record import PoolRecord
from . import violations as v
from .redeemers import (
    ActionKind,
    AddLiquidity,
    PoolRedeemer,
    Swap,
    SwapDirection,
    WithdrawLiquidity,
)


@dataclass(frozen=True)
class PoolReserves:
    """
    Reserves of one pool state object, in arithmetic form.

    Attributes:
        a: tradable A reserve (floor already subtracted on base-asset pools)
        b: B reserve
        shares: share counter (MAX_SHARES - circulating)
        base: raw base-asset amount held by the state object
    """

    a: int
    b: int
    shares: int
    base: int


@dataclass(frozen=True)
class ActionContext:
    """Everything an action rule needs besides the reserves."""

    record: PoolRecord
    is_base_asset_pool: bool
    config: ProtocolConfig


def reserves_from_bundle(
    bundle: AssetBundle,
    record: PoolRecord,
    pool_identity: PolicyId,
    config: ProtocolConfig,
) -> PoolReserves:
    base = bundle.get(config.base_asset)
    if record.is_base_asset_pool(config.base_policy_id):
        a = base - config.reserve_floor
    else:
        a = bundle.get(record.a_asset)
    return PoolReserves(
        a=a,
        b=bundle.get(record.b_asset),
        shares=bundle.get(record.share_asset(pool_identity)),
        base=base,
    )


def _a_covers(post: PoolReserves, required_a: int, ctx: ActionContext) -> bool:
    floor = ctx.config.reserve_floor
    if ctx.is_base_asset_pool:
        return post.base >= floor + required_a
    return post.a >= required_a and post.base >= floor


def _floor_kept(post: PoolReserves, ctx: ActionContext) -> v.Check:
    return (v.BASE_FLOOR_KEPT, post.base >= ctx.config.reserve_floor)


def check_swap(redeemer: Swap, pre: PoolReserves, post: PoolReserves, ctx: ActionContext) -> list[str]:
    record = ctx.record
    provided = redeemer.provided
    if redeemer.direction is SwapDirection.A_TO_B:
        reserve_in, reserve_out = pre.a, pre.b
    else:
        reserve_in, reserve_out = pre.b, pre.a

    checks: list[v.Check] = [
        (v.SWAP_PROVIDED_POSITIVE, provided > 0),
        (v.SHARES_UNCHANGED, post.shares == pre.shares),
    ]
    if provided <= 0:
        return v.failed(checks)
    checks.append((v.SWAP_FEE_BASIS_POSITIVE, record.fee_basis > 0))
    if record.fee_basis <= 0:
        return v.failed(checks)

    fee = compute_swap_fee(provided=provided, fee_points=record.swap_fee_points, fee_basis=record.fee_basis)
    denominator_ok = reserve_in + provided - fee > 0
    checks.append((v.SWAP_DENOMINATOR_POSITIVE, denominator_ok))
    if not denominator_ok:
        return v.failed(checks)

    quote = swap_quote(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        provided=provided,
        fee_points=record.swap_fee_points,
        fee_basis=record.fee_basis,
    )
    if redeemer.direction is SwapDirection.A_TO_B:
        new_a, new_b = quote.new_reserve_in, quote.new_reserve_out
    else:
        new_a, new_b = quote.new_reserve_out, quote.new_reserve_in

    checks.extend(
        [
            (v.SWAP_RECEIVED_POSITIVE, quote.received > 0),
            (v.SWAP_A_COVERED, _a_covers(post, new_a, ctx)),
            (v.SWAP_B_COVERED, post.b >= new_b),
        ]
    )
    return v.failed(checks)


def check_add_liquidity(
    redeemer: AddLiquidity, pre: PoolReserves, post: PoolReserves, ctx: ActionContext
) -> list[str]:
    a_added, b_added = redeemer.a_added, redeemer.b_added
    circulating = ctx.config.max_shares - pre.shares

    checks: list[v.Check] = [
        (v.ADD_A_POSITIVE, a_added > 0),
        (v.ADD_B_POSITIVE, b_added > 0),
        (v.ADD_RESERVES_POSITIVE, pre.a > 0 and pre.b > 0),
        (v.ADD_A_EXACT, post.a == pre.a + a_added),
        (v.ADD_B_EXACT, post.b == pre.b + b_added),
        _floor_kept(post, ctx),
    ]
    if pre.a > 0 and pre.b > 0:
        earned = shares_for_deposit(
            reserve_a=pre.a,
            reserve_b=pre.b,
            a_added=a_added,
            b_added=b_added,
            circulating=circulating,
        )
        checks.append((v.ADD_EARNED_POSITIVE, earned > 0))
        checks.append((v.ADD_SHARES_EXACT, post.shares == pre.shares - earned))
    return v.failed(checks)


def check_withdraw_liquidity(
    redeemer: WithdrawLiquidity, pre: PoolReserves, post: PoolReserves, ctx: ActionContext
) -> list[str]:
    shares_returned = redeemer.shares_returned
    circulating = ctx.config.max_shares - pre.shares

    checks: list[v.Check] = [
        (v.WITHDRAW_SHARES_POSITIVE, shares_returned > 0),
        (v.WITHDRAW_CIRCULATING_POSITIVE, circulating > 0),
        (v.WITHDRAW_SHARES_EXACT, post.shares == pre.shares + shares_returned),
        _floor_kept(post, ctx),
    ]
    if circulating > 0:
        a_removed, b_removed = amounts_for_withdrawal(
            reserve_a=pre.a,
            reserve_b=pre.b,
            shares_returned=shares_returned,
            circulating=circulating,
        )
        checks.extend(
            [
                (v.WITHDRAW_A_POSITIVE, a_removed > 0),
                (v.WITHDRAW_B_POSITIVE, b_removed > 0),
                (v.WITHDRAW_A_EXACT, post.a == pre.a - a_removed),
                (v.WITHDRAW_B_EXACT, post.b == pre.b - b_removed),
            ]
        )
    return v.failed(checks)


def check_donate(redeemer: PoolRedeemer, pre: PoolReserves, post: PoolReserves, ctx: ActionContext) -> list[str]:
    return v.failed(
        [
            (v.DONATE_BASE_NOT_DECREASED, post.base >= pre.base),
            (v.DONATE_A_NOT_DECREASED, post.a >= pre.a),
            (v.DONATE_B_NOT_DECREASED, post.b >= pre.b),
            (v.SHARES_UNCHANGED, post.shares == pre.shares),
        ]
    )


ActionRule = Callable[[PoolRedeemer, PoolReserves, PoolReserves, ActionContext], list[str]]

_DISPATCH: dict[ActionKind, ActionRule] = {
    ActionKind.SWAP: check_swap,  # type: ignore[dict-item]
    ActionKind.ADD_LIQUIDITY: check_add_liquidity,  # type: ignore[dict-item]
    ActionKind.WITHDRAW_LIQUIDITY: check_withdraw_liquidity,  # type: ignore[dict-item]
    ActionKind.DONATE: check_donate,
}


def evaluate_action(
    redeemer: PoolRedeemer,
    pre: PoolReserves,
    post: PoolReserves,
    ctx: ActionContext,
) -> list[str]:
    """Return the names of violated action invariants (empty = valid)."""
    if pre.a < 0 or pre.b < 0:
        return [v.PRE_RESERVES_NON_NEGATIVE]
    return _DISPATCH[redeemer.kind](redeemer, pre, post, ctx)
