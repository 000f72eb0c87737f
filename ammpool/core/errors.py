"""Exception types for the pool validators.

Used by the ``*_or_raise()`` wrappers in ``spend.py`` and ``issuance.py`` for
callers that prefer exceptions over ``Verdict`` inspection. The validators
themselves never raise on hostile input.
"""

from __future__ import annotations

from .types import RejectionKind, Verdict


class PoolRejected(Exception):
    """Raised when a transaction is rejected. Carries the full verdict."""

    kind: RejectionKind | None = None

    def __init__(self, verdict: Verdict) -> None:
        self.verdict = verdict
        self.violations = list(verdict.names)
        super().__init__(f"rejected: {', '.join(str(v) for v in verdict.violations)}")


class MalformedInputError(PoolRejected):
    """A redeemer or pool record did not decode into the expected shape."""

    kind = RejectionKind.MALFORMED


class StructuralViolation(PoolRejected):
    """Wrong number of pool inputs/outputs, missing marker, stray assets, mutated record."""

    kind = RejectionKind.STRUCTURAL


class EconomicViolation(PoolRejected):
    """An arithmetic invariant of the pool does not hold."""

    kind = RejectionKind.ECONOMIC


class ProvenanceViolation(PoolRejected):
    """Seed not consumed, minted quantities wrong, or share name not derived from the seed."""

    kind = RejectionKind.PROVENANCE


_BY_KIND: dict[RejectionKind, type[PoolRejected]] = {
    RejectionKind.MALFORMED: MalformedInputError,
    RejectionKind.STRUCTURAL: StructuralViolation,
    RejectionKind.ECONOMIC: EconomicViolation,
    RejectionKind.PROVENANCE: ProvenanceViolation,
}


def raise_for_verdict(verdict: Verdict) -> Verdict:
    """Return `verdict` if accepted, else raise the exception matching its first violation."""
    if verdict.accepted:
        return verdict
    kind = verdict.first_kind
    assert kind is not None
    raise _BY_KIND[kind](verdict)
