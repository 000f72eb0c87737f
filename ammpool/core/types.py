"""Result types shared by the spend and issuance validators.

A `Verdict` is accepted iff it carries no violations. Production callers only
look at `accepted`; tests and tooling read the violation names to learn which
conjunct failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Iterable


@unique
class RejectionKind(Enum):
    """The four ways a transaction can be rejected. All surface identically to the ledger."""
    MALFORMED = "malformed"
    STRUCTURAL = "structural"
    ECONOMIC = "economic"
    PROVENANCE = "provenance"


@dataclass(frozen=True)
class Violation:
    name: str
    kind: RejectionKind

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.name}"


@dataclass(frozen=True)
class Verdict:
    """Outcome of one validator evaluation."""

    violations: tuple[Violation, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.violations

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(v.name for v in self.violations)

    @property
    def first_kind(self) -> RejectionKind | None:
        if not self.violations:
            return None
        return self.violations[0].kind

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def accept(cls) -> "Verdict":
        return cls()

    @classmethod
    def reject(cls, violations: Iterable[Violation]) -> "Verdict":
        out = tuple(violations)
        if not out:
            raise ValueError("a rejection needs at least one violation")
        return cls(violations=out)
