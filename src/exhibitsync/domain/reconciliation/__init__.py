"""Reconciliation of scraped exhibitions against the exhibition store.

Flow per run:
1) resolve each record's venue and derive its document identity (no I/O)
2) per group, read every stored document inside one unit of work
3) decide created / updated / skipped per record and stage the writes
4) commit the group; a failed commit errors the whole group
5) sum tagged outcomes into counts
"""

from __future__ import annotations

from .batch import ExhibitionReconciler, UnitOfWorkFactory, reconcile
from .engine import PreparedRecord, ReconciliationEngine, prepare_record
from .outcomes import Outcome, Reason, ReconcileOutcome, ReconcileReport, ReconcileSummary
from .policy import ORIGIN_OPTIONAL_FIELDS, optional_fields_for

__all__ = [
    "ORIGIN_OPTIONAL_FIELDS",
    "ExhibitionReconciler",
    "Outcome",
    "PreparedRecord",
    "Reason",
    "ReconcileOutcome",
    "ReconcileReport",
    "ReconcileSummary",
    "ReconciliationEngine",
    "UnitOfWorkFactory",
    "optional_fields_for",
    "prepare_record",
    "reconcile",
]
