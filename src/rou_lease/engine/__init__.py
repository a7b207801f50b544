"""Engine — lease valuation, amortization, classification and journal logic."""

from rou_lease.engine.present_value import present_value, period_count, monthly_rate
from rou_lease.engine.schedule import generate_schedule, project_schedule
from rou_lease.engine.classifier import (
    initial_current_portion,
    initial_non_current_portion,
    current_portion_as_of,
)
from rou_lease.engine.journal import generate_journal, journal_totals, transactions
from rou_lease.engine.validation import validate
from rou_lease.engine.orchestrator import run_calculation

__all__ = [
    "present_value",
    "period_count",
    "monthly_rate",
    "generate_schedule",
    "project_schedule",
    "initial_current_portion",
    "initial_non_current_portion",
    "current_portion_as_of",
    "generate_journal",
    "journal_totals",
    "transactions",
    "validate",
    "run_calculation",
]
