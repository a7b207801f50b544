"""Headline summary — formatted strings for the export sink and UI."""

from __future__ import annotations

from rou_lease.config.contract import LeaseContract
from rou_lease.models.results import LeaseSummary, ScheduleEntry


def format_amount(amount: int, currency_label: str = "") -> str:
    """``1234567`` → ``"1,234,567"`` (plus the label, if any)."""
    text = f"{amount:,}"
    return f"{text} {currency_label}" if currency_label else text


def build_summary(
    contract: LeaseContract,
    schedule: list[ScheduleEntry],
    currency_label: str = "",
) -> LeaseSummary:
    """Summarize a calculated lease.

    Duration counts the scheduled periods, so a terminated lease reports
    the months actually run.
    """
    total_payments = sum(e.payment for e in schedule)
    total_interest = sum(e.interest for e in schedule)
    initial_liability = schedule[0].opening_balance if schedule else 0

    return LeaseSummary(
        start_date=contract.start_date.isoformat(),
        end_date=contract.end_date.isoformat(),
        duration=f"{len(schedule)} months",
        monthly_payment=format_amount(contract.monthly_payment, currency_label),
        annual_rate=f"{contract.annual_rate_pct}%",
        initial_liability=format_amount(initial_liability, currency_label),
        total_payments=format_amount(total_payments, currency_label),
        total_interest=format_amount(total_interest, currency_label),
    )
