"""
Pool math kernel (v1 semantics).

Integer-only formulas shared by the spend and issuance validators:
- Swap fee is charged on the provided amount with ceil rounding.
- The post-swap opposite reserve is rounded *up*, so the trader never receives
  more than the constant-product curve allows.
- Share issuance and redemption round *down*.

Every function raises ValueError on inputs outside its domain; callers that
must not raise check the documented preconditions first.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def ceil_div(numerator: int, denominator: int) -> int:
    """
    Integer division rounded toward positive infinity.

    Defined for any sign of `numerator`; `denominator` must be positive.
    """
    _require_int("numerator", numerator)
    _require_int("denominator", denominator)
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    return -((-numerator) // denominator)


@dataclass(frozen=True)
class SwapQuote:
    fee: int
    provided: int
    new_reserve_in: int
    new_reserve_out: int
    received: int


def compute_swap_fee(*, provided: int, fee_points: int, fee_basis: int) -> int:
    """`fee = ceil(provided * fee_points / fee_basis)`."""
    _require_int("provided", provided)
    _require_int("fee_points", fee_points)
    _require_int("fee_basis", fee_basis)
    if fee_basis <= 0:
        raise ValueError("fee_basis must be positive")
    return ceil_div(provided * fee_points, fee_basis)


def swap_quote(
    *,
    reserve_in: int,
    reserve_out: int,
    provided: int,
    fee_points: int,
    fee_basis: int,
) -> SwapQuote:
    """
    Minimum post-swap reserves for a swap that provides `provided` units.

        fee             = ceil(provided * fee_points / fee_basis)
        new_reserve_in  = reserve_in + provided          (fee stays in pool)
        new_reserve_out = ceil(reserve_in * reserve_out / (reserve_in + provided - fee))
        received        = reserve_out - new_reserve_out

    Raises ValueError when the effective denominator is not positive.
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("provided", provided),
    ):
        _require_int(name, v)

    fee = compute_swap_fee(provided=provided, fee_points=fee_points, fee_basis=fee_basis)
    denominator = reserve_in + provided - fee
    if denominator <= 0:
        raise ValueError("effective input reserve must be positive")

    new_reserve_out = ceil_div(reserve_in * reserve_out, denominator)
    return SwapQuote(
        fee=fee,
        provided=provided,
        new_reserve_in=reserve_in + provided,
        new_reserve_out=new_reserve_out,
        received=reserve_out - new_reserve_out,
    )


def shares_for_deposit(
    *,
    reserve_a: int,
    reserve_b: int,
    a_added: int,
    b_added: int,
    circulating: int,
) -> int:
    """
    Shares earned by a deposit.

        earned = min(floor(a_added * circulating / reserve_a),
                     floor(b_added * circulating / reserve_b))

    Taking the minimum makes the excess on the lopsided side a plain donation.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("a_added", a_added),
        ("b_added", b_added),
        ("circulating", circulating),
    ):
        _require_int(name, v)
    if reserve_a <= 0 or reserve_b <= 0:
        raise ValueError("cannot price a deposit against an empty reserve")

    earned_from_a = (a_added * circulating) // reserve_a
    earned_from_b = (b_added * circulating) // reserve_b
    return min(earned_from_a, earned_from_b)


def amounts_for_withdrawal(
    *,
    reserve_a: int,
    reserve_b: int,
    shares_returned: int,
    circulating: int,
) -> tuple[int, int]:
    """
    Reserves released for `shares_returned` shares.

        a_removed = floor(shares_returned * reserve_a / circulating)
        b_removed = floor(shares_returned * reserve_b / circulating)
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("shares_returned", shares_returned),
        ("circulating", circulating),
    ):
        _require_int(name, v)
    if circulating <= 0:
        raise ValueError("circulating supply must be positive")

    a_removed = (shares_returned * reserve_a) // circulating
    b_removed = (shares_returned * reserve_b) // circulating
    return a_removed, b_removed


def initial_circulating(*, reserve_a: int, reserve_b: int) -> int:
    """Geometric-mean issuance: `floor(sqrt(reserve_a * reserve_b))`."""
    _require_int("reserve_a", reserve_a)
    _require_int("reserve_b", reserve_b)
    if reserve_a <= 0 or reserve_b <= 0:
        raise ValueError("initial reserves must be positive")
    return math.isqrt(reserve_a * reserve_b)


def is_floor_sqrt(root: int, product: int) -> bool:
    """True iff `root == floor(sqrt(product))`, checked without computing the root."""
    _require_int("root", root)
    _require_int("product", product)
    if root < 0 or product < 0:
        return False
    return root * root <= product < (root + 1) * (root + 1)
