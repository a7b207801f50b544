"""Result models — engine output contracts."""

from rou_lease.models.results import (
    Account,
    CalculationResult,
    HistoryEntry,
    JournalLine,
    LeaseSummary,
    ScheduleEntry,
)

__all__ = [
    "Account",
    "CalculationResult",
    "HistoryEntry",
    "JournalLine",
    "LeaseSummary",
    "ScheduleEntry",
]
