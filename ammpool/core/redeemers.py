"""
Spend redeemers: the action a transaction asks the pool to perform.

Wire format (one constructor tag byte, then the payload):

    0 Swap               direction byte (0 = A->B, 1 = B->A), svarint provided
    1 AddLiquidity       svarint a_added, svarint b_added
    2 WithdrawLiquidity  svarint shares_returned
    3 Donate             (empty)

Amounts are signed on the wire so that non-positive values reach the
economic checks and are rejected there by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Union

from ..state.canonical import CanonicalReader, encode_svarint


@unique
class ActionKind(Enum):
    SWAP = 0
    ADD_LIQUIDITY = 1
    WITHDRAW_LIQUIDITY = 2
    DONATE = 3


@unique
class SwapDirection(Enum):
    A_TO_B = 0
    B_TO_A = 1


@dataclass(frozen=True)
class Swap:
    direction: SwapDirection
    provided: int

    kind = ActionKind.SWAP


@dataclass(frozen=True)
class AddLiquidity:
    a_added: int
    b_added: int

    kind = ActionKind.ADD_LIQUIDITY


@dataclass(frozen=True)
class WithdrawLiquidity:
    shares_returned: int

    kind = ActionKind.WITHDRAW_LIQUIDITY


@dataclass(frozen=True)
class Donate:
    kind = ActionKind.DONATE


PoolRedeemer = Union[Swap, AddLiquidity, WithdrawLiquidity, Donate]


def encode_redeemer(redeemer: PoolRedeemer) -> bytes:
    tag = bytes([redeemer.kind.value])
    if isinstance(redeemer, Swap):
        return tag + bytes([redeemer.direction.value]) + encode_svarint(redeemer.provided)
    if isinstance(redeemer, AddLiquidity):
        return tag + encode_svarint(redeemer.a_added) + encode_svarint(redeemer.b_added)
    if isinstance(redeemer, WithdrawLiquidity):
        return tag + encode_svarint(redeemer.shares_returned)
    if isinstance(redeemer, Donate):
        return tag
    raise TypeError(f"unsupported redeemer: {type(redeemer).__name__}")


def decode_redeemer(data: bytes) -> PoolRedeemer:
    """
    Decode a spend redeemer.

    Raises:
        ValueError: unknown tag or direction, truncated data, trailing bytes
    """
    reader = CanonicalReader(data)
    try:
        kind = ActionKind(reader.read_byte())
    except ValueError as exc:
        raise ValueError(f"unknown redeemer: {exc}") from exc

    redeemer: PoolRedeemer
    if kind is ActionKind.SWAP:
        try:
            direction = SwapDirection(reader.read_byte())
        except ValueError as exc:
            raise ValueError(f"unknown swap direction: {exc}") from exc
        redeemer = Swap(direction=direction, provided=reader.read_svarint())
    elif kind is ActionKind.ADD_LIQUIDITY:
        a_added = reader.read_svarint()
        b_added = reader.read_svarint()
        redeemer = AddLiquidity(a_added=a_added, b_added=b_added)
    elif kind is ActionKind.WITHDRAW_LIQUIDITY:
        redeemer = WithdrawLiquidity(shares_returned=reader.read_svarint())
    else:
        redeemer = Donate()
    reader.finish()
    return redeemer
