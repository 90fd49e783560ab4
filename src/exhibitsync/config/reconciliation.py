"""Reconciliation defaults."""

from __future__ import annotations

from dataclasses import dataclass

# hard ceiling on operations per store transaction
TRANSACTION_OPERATION_LIMIT = 500
# a group may spend at most this share of the ceiling
TRANSACTION_BUDGET_SHARE = 0.5
# one read plus at most one write per record; 40% of the ceiling
DEFAULT_GROUP_SIZE = 100
EXHIBITION_TIMEZONE = "Asia/Tokyo"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    group_size: int = DEFAULT_GROUP_SIZE
    transaction_operation_limit: int = TRANSACTION_OPERATION_LIMIT

    @property
    def max_group_size(self) -> int:
        return int(self.transaction_operation_limit * TRANSACTION_BUDGET_SHARE) // 2

    def __post_init__(self) -> None:
        if self.group_size < 1:
            raise ValueError("Group size must be positive")
        if self.group_size > self.max_group_size:
            raise ValueError(
                f"Group size {self.group_size} exceeds {self.max_group_size}, the safe share "
                f"of the transaction limit of {self.transaction_operation_limit} operations"
            )


def get_reconciliation_config(*, group_size: int | None = None) -> ReconciliationConfig:
    if group_size is None:
        return ReconciliationConfig()
    return ReconciliationConfig(group_size=group_size)
