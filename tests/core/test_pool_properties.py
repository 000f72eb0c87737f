"""Property tests for the action rules.

Uses Hypothesis to fuzz reserves and amounts and checks that the quoted
successor is accepted, that rounding always favours the pool, and that the
value of one share never decreases.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from ammpool.config import DEFAULT_CONFIG, RESERVE_FLOOR
from ammpool.core.actions import ActionContext, PoolReserves, evaluate_action
from ammpool.core.quotes import successor_reserves
from ammpool.core.redeemers import AddLiquidity, Swap, SwapDirection, WithdrawLiquidity
from ammpool.kernels.python.pool_math_v1 import compute_swap_fee
from ammpool.state.assets import AssetClass
from ammpool.state.pool_record import PoolRecord

RECORD = PoolRecord(
    a_asset=AssetClass(b"\x11" * 28, b"ALPHA"),
    b_asset=AssetClass(b"\x22" * 28, b"TOKEN"),
    swap_fee_points=3,
    fee_basis=1000,
    shares_asset_name=b"\x42" * 32,
)
CTX = ActionContext(record=RECORD, is_base_asset_pool=False, config=DEFAULT_CONFIG)

reserve = st.integers(min_value=1_000, max_value=10**15)
amount = st.integers(min_value=1, max_value=10**12)
circulating = st.integers(min_value=1_001, max_value=10**12)


def _pre(a: int, b: int, circ: int) -> PoolReserves:
    return PoolReserves(a=a, b=b, shares=DEFAULT_CONFIG.max_shares - circ, base=RESERVE_FLOOR)


def _try_successor(redeemer, pre: PoolReserves) -> PoolReserves:
    try:
        return successor_reserves(redeemer, RECORD, pre)
    except ValueError:
        assume(False)
        raise


@settings(max_examples=200, deadline=None)
@given(a=reserve, b=reserve, circ=circulating, provided=amount, a_to_b=st.booleans())
def test_swap_successor_is_accepted_and_product_never_shrinks(a, b, circ, provided, a_to_b) -> None:
    pre = _pre(a, b, circ)
    direction = SwapDirection.A_TO_B if a_to_b else SwapDirection.B_TO_A
    redeemer = Swap(direction, provided)
    post = _try_successor(redeemer, pre)

    assert evaluate_action(redeemer, pre, post, CTX) == []
    assert post.a * post.b >= pre.a * pre.b


@settings(max_examples=200, deadline=None)
@given(a=reserve, b=reserve, circ=circulating, provided=amount)
def test_swap_output_rounds_against_the_trader(a, b, circ, provided) -> None:
    pre = _pre(a, b, circ)
    post = _try_successor(Swap(SwapDirection.A_TO_B, provided), pre)
    received = pre.b - post.b
    fee = compute_swap_fee(provided=provided, fee_points=RECORD.swap_fee_points, fee_basis=RECORD.fee_basis)
    effective = provided - fee
    # received <= b * effective / (a + effective), compared without division.
    assert received * (pre.a + effective) <= pre.b * effective

    # One unit less on the output side is always rejected.
    short = PoolReserves(a=post.a, b=post.b - 1, shares=post.shares, base=post.base)
    assert evaluate_action(Swap(SwapDirection.A_TO_B, provided), pre, short, CTX) != []


@settings(max_examples=200, deadline=None)
@given(a=reserve, b=reserve, circ=circulating, a_added=amount, b_added=amount)
def test_deposit_never_dilutes_existing_shares(a, b, circ, a_added, b_added) -> None:
    pre = _pre(a, b, circ)
    redeemer = AddLiquidity(a_added, b_added)
    post = _try_successor(redeemer, pre)
    post_circ = DEFAULT_CONFIG.max_shares - post.shares

    assert evaluate_action(redeemer, pre, post, CTX) == []
    assert post_circ > circ
    assert post.a * circ >= pre.a * post_circ
    assert post.b * circ >= pre.b * post_circ


@settings(max_examples=200, deadline=None)
@given(a=reserve, b=reserve, circ=circulating, data=st.data())
def test_withdrawal_never_releases_more_than_the_pro_rata_share(a, b, circ, data) -> None:
    returned = data.draw(st.integers(min_value=1, max_value=circ - 1))
    pre = _pre(a, b, circ)
    redeemer = WithdrawLiquidity(returned)
    post = _try_successor(redeemer, pre)
    post_circ = DEFAULT_CONFIG.max_shares - post.shares

    assert evaluate_action(redeemer, pre, post, CTX) == []
    assert post.shares > pre.shares
    assert (pre.a - post.a) * circ <= returned * pre.a
    assert (pre.b - post.b) * circ <= returned * pre.b
    assert post.a * circ >= pre.a * post_circ
    assert post.b * circ >= pre.b * post_circ
