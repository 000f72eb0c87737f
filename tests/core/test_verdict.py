from __future__ import annotations

import pytest

from ammpool.core import violations as v
from ammpool.core.errors import EconomicViolation, StructuralViolation, raise_for_verdict
from ammpool.core.types import RejectionKind, Verdict


def test_every_invariant_name_has_exactly_one_kind() -> None:
    names = [value for key, value in vars(v).items() if key.isupper() and isinstance(value, str)]
    assert len(names) == len(set(names))
    assert set(names) == set(v.VIOLATION_KINDS)


def test_failed_keeps_evaluation_order() -> None:
    checks = [("b", False), ("a", True), ("c", False)]
    assert v.failed(checks) == ["b", "c"]


def test_verdict_accept_and_reject() -> None:
    assert Verdict.accept().accepted
    assert Verdict.accept().first_kind is None
    with pytest.raises(ValueError):
        Verdict.reject([])

    verdict = Verdict.reject(v.to_violations([v.MARKER_AFTER, v.SWAP_B_COVERED]))
    assert not verdict
    assert verdict.names == (v.MARKER_AFTER, v.SWAP_B_COVERED)
    assert verdict.first_kind is RejectionKind.STRUCTURAL
    assert str(verdict.violations[1]) == "economic:swap_b_covered"


def test_raise_for_verdict_picks_the_first_kind() -> None:
    assert raise_for_verdict(Verdict.accept()).accepted
    with pytest.raises(StructuralViolation):
        raise_for_verdict(Verdict.reject(v.to_violations([v.ASSET_SLOT_COUNT, v.BASE_FLOOR_KEPT])))
    with pytest.raises(EconomicViolation) as excinfo:
        raise_for_verdict(Verdict.reject(v.to_violations([v.BASE_FLOOR_KEPT])))
    assert excinfo.value.kind is RejectionKind.ECONOMIC
