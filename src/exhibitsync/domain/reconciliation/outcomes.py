"""Per-record reconciliation outcomes and their aggregate counts.

Outcomes are kept as tagged records while a run is in progress and summed into
plain counts at the boundary, so callers that only need totals never see
document data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class Outcome(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERRORED = "errored"


class Reason(StrEnum):
    """Why a record ended up skipped or errored."""

    NO_DATE_CHANGE = "no date change"
    DATES_CHANGED = "dates changed"
    UNKNOWN_VENUE = "unknown venue"
    MISSING_MUSEUM_ID = "missing museum id"
    MALFORMED_DOCUMENT = "malformed document"
    INVALID_DATE = "invalid date"
    TRANSACTION_FAILED = "transaction failed"


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconcileOutcome:
    """Outcome for one incoming record."""

    title: str
    outcome: Outcome
    document_id: str | None = None
    reason: Reason | None = None


@dataclass(slots=True)
class ReconcileSummary:
    """Aggregate counts for one reconciliation run."""

    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated + self.skipped + self.errors

    def add(self, outcome: ReconcileOutcome) -> None:
        match outcome.outcome:
            case Outcome.CREATED:
                self.created += 1
            case Outcome.UPDATED:
                self.updated += 1
            case Outcome.SKIPPED:
                self.skipped += 1
            case Outcome.ERRORED:
                self.errors += 1

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[ReconcileOutcome]) -> ReconcileSummary:
        summary = cls()
        for outcome in outcomes:
            summary.add(outcome)
        return summary


@dataclass(slots=True)
class ReconcileReport:
    """All outcomes of a run, in input order per group."""

    outcomes: list[ReconcileOutcome] = field(default_factory=list["ReconcileOutcome"])
    groups: int = 0

    def extend(self, outcomes: Iterable[ReconcileOutcome]) -> None:
        self.outcomes.extend(outcomes)

    def summary(self) -> ReconcileSummary:
        return ReconcileSummary.from_outcomes(self.outcomes)
