"""
Quoting helpers for integrators.

These compute the *minimum* successor reserves a transaction must produce for
the validators to accept it, using the same kernel the validators use. They
raise ValueError where the validator would reject.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..kernels.python.pool_math_v1 import (
    SwapQuote,
    amounts_for_withdrawal,
    initial_circulating,
    shares_for_deposit,
    swap_quote,
)
from ..state.pool_record import PoolRecord
from .actions import PoolReserves
from .redeemers import AddLiquidity, Donate, PoolRedeemer, Swap, SwapDirection, WithdrawLiquidity


@dataclass(frozen=True)
class IssuanceQuote:
    circulating: int
    share_counter: int
    creator_shares: int


def quote_swap(record: PoolRecord, pre: PoolReserves, direction: SwapDirection, provided: int) -> SwapQuote:
    if provided <= 0:
        raise ValueError(f"provided must be positive: {provided}")
    reserve_in, reserve_out = (pre.a, pre.b) if direction is SwapDirection.A_TO_B else (pre.b, pre.a)
    quote = swap_quote(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        provided=provided,
        fee_points=record.swap_fee_points,
        fee_basis=record.fee_basis,
    )
    if quote.received <= 0:
        raise ValueError("swap too small: nothing received")
    return quote


def quote_add_liquidity(
    pre: PoolReserves, a_added: int, b_added: int, *, config: ProtocolConfig = DEFAULT_CONFIG
) -> int:
    """Shares earned by depositing (a_added, b_added)."""
    if a_added <= 0 or b_added <= 0:
        raise ValueError(f"deposit amounts must be positive: ({a_added}, {b_added})")
    earned = shares_for_deposit(
        reserve_a=pre.a,
        reserve_b=pre.b,
        a_added=a_added,
        b_added=b_added,
        circulating=config.max_shares - pre.shares,
    )
    if earned <= 0:
        raise ValueError("deposit too small: no shares earned")
    return earned


def quote_withdraw(
    pre: PoolReserves, shares_returned: int, *, config: ProtocolConfig = DEFAULT_CONFIG
) -> tuple[int, int]:
    """(a_removed, b_removed) released for `shares_returned`."""
    if shares_returned <= 0:
        raise ValueError(f"shares_returned must be positive: {shares_returned}")
    a_removed, b_removed = amounts_for_withdrawal(
        reserve_a=pre.a,
        reserve_b=pre.b,
        shares_returned=shares_returned,
        circulating=config.max_shares - pre.shares,
    )
    if a_removed <= 0 or b_removed <= 0:
        raise ValueError("withdrawal too small: a side rounds to zero")
    return a_removed, b_removed


def quote_issuance(reserve_a: int, reserve_b: int, *, config: ProtocolConfig = DEFAULT_CONFIG) -> IssuanceQuote:
    """
    Initial share figures for a new pool.

    `reserve_a` is the tradable A reserve, i.e. already excluding the floor on
    base-asset pools.
    """
    circulating = initial_circulating(reserve_a=reserve_a, reserve_b=reserve_b)
    if circulating <= config.burned_shares:
        raise ValueError("insufficient initial liquidity: sqrt(a*b) <= burned shares")
    return IssuanceQuote(
        circulating=circulating,
        share_counter=config.max_shares - circulating,
        creator_shares=circulating - config.burned_shares,
    )


def successor_reserves(
    redeemer: PoolRedeemer,
    record: PoolRecord,
    pre: PoolReserves,
    *,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> PoolReserves:
    """
    Minimal successor reserves for `redeemer`.

    For Swap the result is the tightest state the validator accepts; any
    extra on either side is a donation. `base` is recomputed for base-asset
    pools and carried over otherwise.
    """
    is_base_asset_pool = record.is_base_asset_pool(config.base_policy_id)

    if isinstance(redeemer, Swap):
        quote = quote_swap(record, pre, redeemer.direction, redeemer.provided)
        if redeemer.direction is SwapDirection.A_TO_B:
            a, b = quote.new_reserve_in, quote.new_reserve_out
        else:
            a, b = quote.new_reserve_out, quote.new_reserve_in
        shares = pre.shares
    elif isinstance(redeemer, AddLiquidity):
        earned = quote_add_liquidity(pre, redeemer.a_added, redeemer.b_added, config=config)
        a, b = pre.a + redeemer.a_added, pre.b + redeemer.b_added
        shares = pre.shares - earned
    elif isinstance(redeemer, WithdrawLiquidity):
        a_removed, b_removed = quote_withdraw(pre, redeemer.shares_returned, config=config)
        a, b = pre.a - a_removed, pre.b - b_removed
        shares = pre.shares + redeemer.shares_returned
    elif isinstance(redeemer, Donate):
        return pre
    else:
        raise TypeError(f"unsupported redeemer: {type(redeemer).__name__}")

    base = a + config.reserve_floor if is_base_asset_pool else pre.base
    return PoolReserves(a=a, b=b, shares=shares, base=base)
