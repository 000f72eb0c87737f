"""Named invariants checked by the validators.

Each constant is the name of a predicate that must hold; a violation carries
the name of the predicate that did not. `VIOLATION_KINDS` maps every name to
its rejection category.
"""

from __future__ import annotations

from typing import Iterable

from .types import RejectionKind, Violation

# -- Malformed input ---------------------------------------------------------

REDEEMER_WELL_FORMED = "redeemer_well_formed"
PRIOR_RECORD_PRESENT = "prior_record_present"
PRIOR_RECORD_WELL_FORMED = "prior_record_well_formed"
OUTPUT_RECORD_INLINE = "output_record_inline"
OUTPUT_RECORD_WELL_FORMED = "output_record_well_formed"
SEED_INDEX_ONE_BYTE = "seed_index_one_byte"

# -- Structural --------------------------------------------------------------

OWN_INPUT_PRESENT = "own_input_present"
SINGLE_POOL_INPUT = "single_pool_input"
SINGLE_POOL_OUTPUT = "single_pool_output"
POOL_ADDRESS_UNCHANGED = "pool_address_unchanged"
MARKER_BEFORE = "marker_before"
MARKER_AFTER = "marker_after"
ASSET_SLOT_COUNT = "asset_slot_count"
RECORD_UNCHANGED = "record_unchanged"
SHARE_COUNTER_IN_RANGE = "share_counter_in_range"
ASSETS_SORTED = "assets_sorted"
A_NOT_OWN_SHARE = "a_not_own_share"
B_NOT_OWN_SHARE = "b_not_own_share"
A_NOT_OWN_MARKER = "a_not_own_marker"
B_NOT_OWN_MARKER = "b_not_own_marker"
NEW_POOL_MARKER = "new_pool_marker"

# -- Economic ----------------------------------------------------------------

PRE_RESERVES_NON_NEGATIVE = "pre_reserves_non_negative"
BASE_FLOOR_KEPT = "base_floor_kept"
SHARES_UNCHANGED = "shares_unchanged"

SWAP_PROVIDED_POSITIVE = "swap_provided_positive"
SWAP_FEE_BASIS_POSITIVE = "swap_fee_basis_positive"
SWAP_DENOMINATOR_POSITIVE = "swap_denominator_positive"
SWAP_RECEIVED_POSITIVE = "swap_received_positive"
SWAP_A_COVERED = "swap_a_covered"
SWAP_B_COVERED = "swap_b_covered"

ADD_A_POSITIVE = "add_a_positive"
ADD_B_POSITIVE = "add_b_positive"
ADD_RESERVES_POSITIVE = "add_reserves_positive"
ADD_EARNED_POSITIVE = "add_earned_positive"
ADD_A_EXACT = "add_a_exact"
ADD_B_EXACT = "add_b_exact"
ADD_SHARES_EXACT = "add_shares_exact"

WITHDRAW_SHARES_POSITIVE = "withdraw_shares_positive"
WITHDRAW_CIRCULATING_POSITIVE = "withdraw_circulating_positive"
WITHDRAW_A_POSITIVE = "withdraw_a_positive"
WITHDRAW_B_POSITIVE = "withdraw_b_positive"
WITHDRAW_A_EXACT = "withdraw_a_exact"
WITHDRAW_B_EXACT = "withdraw_b_exact"
WITHDRAW_SHARES_EXACT = "withdraw_shares_exact"

DONATE_BASE_NOT_DECREASED = "donate_base_not_decreased"
DONATE_A_NOT_DECREASED = "donate_a_not_decreased"
DONATE_B_NOT_DECREASED = "donate_b_not_decreased"

FEE_IN_RANGE = "fee_in_range"
INITIAL_A_POSITIVE = "initial_a_positive"
INITIAL_B_POSITIVE = "initial_b_positive"
INITIAL_BASE_FLOOR = "initial_base_floor"
INITIAL_SHARES_FLOOR_SQRT = "initial_shares_floor_sqrt"
INITIAL_SHARES_ABOVE_BURNED = "initial_shares_above_burned"

# -- Provenance --------------------------------------------------------------

MINT_TWO_CLASSES = "mint_two_classes"
MINT_MARKER_SINGLE = "mint_marker_single"
MINT_SHARE_QUANTITY = "mint_share_quantity"
SHARE_NAME_DERIVED = "share_name_derived"
SEED_CONSUMED = "seed_consumed"


_BY_KIND: dict[RejectionKind, tuple[str, ...]] = {
    RejectionKind.MALFORMED: (
        REDEEMER_WELL_FORMED,
        PRIOR_RECORD_PRESENT,
        PRIOR_RECORD_WELL_FORMED,
        OUTPUT_RECORD_INLINE,
        OUTPUT_RECORD_WELL_FORMED,
        SEED_INDEX_ONE_BYTE,
    ),
    RejectionKind.STRUCTURAL: (
        OWN_INPUT_PRESENT,
        SINGLE_POOL_INPUT,
        SINGLE_POOL_OUTPUT,
        POOL_ADDRESS_UNCHANGED,
        MARKER_BEFORE,
        MARKER_AFTER,
        ASSET_SLOT_COUNT,
        RECORD_UNCHANGED,
        SHARE_COUNTER_IN_RANGE,
        ASSETS_SORTED,
        A_NOT_OWN_SHARE,
        B_NOT_OWN_SHARE,
        A_NOT_OWN_MARKER,
        B_NOT_OWN_MARKER,
        NEW_POOL_MARKER,
    ),
    RejectionKind.ECONOMIC: (
        PRE_RESERVES_NON_NEGATIVE,
        BASE_FLOOR_KEPT,
        SHARES_UNCHANGED,
        SWAP_PROVIDED_POSITIVE,
        SWAP_FEE_BASIS_POSITIVE,
        SWAP_DENOMINATOR_POSITIVE,
        SWAP_RECEIVED_POSITIVE,
        SWAP_A_COVERED,
        SWAP_B_COVERED,
        ADD_A_POSITIVE,
        ADD_B_POSITIVE,
        ADD_RESERVES_POSITIVE,
        ADD_EARNED_POSITIVE,
        ADD_A_EXACT,
        ADD_B_EXACT,
        ADD_SHARES_EXACT,
        WITHDRAW_SHARES_POSITIVE,
        WITHDRAW_CIRCULATING_POSITIVE,
        WITHDRAW_A_POSITIVE,
        WITHDRAW_B_POSITIVE,
        WITHDRAW_A_EXACT,
        WITHDRAW_B_EXACT,
        WITHDRAW_SHARES_EXACT,
        DONATE_BASE_NOT_DECREASED,
        DONATE_A_NOT_DECREASED,
        DONATE_B_NOT_DECREASED,
        FEE_IN_RANGE,
        INITIAL_A_POSITIVE,
        INITIAL_B_POSITIVE,
        INITIAL_BASE_FLOOR,
        INITIAL_SHARES_FLOOR_SQRT,
        INITIAL_SHARES_ABOVE_BURNED,
    ),
    RejectionKind.PROVENANCE: (
        MINT_TWO_CLASSES,
        MINT_MARKER_SINGLE,
        MINT_SHARE_QUANTITY,
        SHARE_NAME_DERIVED,
        SEED_CONSUMED,
    ),
}

VIOLATION_KINDS: dict[str, RejectionKind] = {
    name: kind for kind, names in _BY_KIND.items() for name in names
}

# A check is (invariant name, holds?). Lists of checks are folded with AND.
Check = tuple[str, bool]


def failed(checks: Iterable[Check]) -> list[str]:
    """Names of the checks that do not hold, in evaluation order."""
    return [name for name, ok in checks if not ok]


def to_violations(names: Iterable[str]) -> list[Violation]:
    return [Violation(name=name, kind=VIOLATION_KINDS[name]) for name in names]
