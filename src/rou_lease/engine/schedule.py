"""Lease amortization schedule — liability and depreciation, month by month.

The schedule is a fold over period indices.  Each step receives the
carried state (opening liability, depreciation booked so far) and
returns one ``ScheduleEntry`` plus the state for the next period:

  interest     = round(opening × r)           interest on the opening balance
  principal    = payment − interest
  closing      = max(0, opening − principal)
  depreciation = round(PV / n)                straight line

The natural last period carries two plugs so rounding never leaks:
  depreciation = PV − depreciation booked so far
  principal    = opening balance  (interest = payment − principal)
which make Σ depreciation = PV and the final closing balance exactly 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import takewhile

from rou_lease.config.contract import LeaseContract
from rou_lease.engine.dates import add_months
from rou_lease.engine.present_value import monthly_rate, period_count, present_value
from rou_lease.engine.rounding import round_currency
from rou_lease.models.results import ScheduleEntry


@dataclass(frozen=True)
class _Terms:
    """Per-contract constants shared by every fold step."""

    contract: LeaseContract
    periods: int
    rate: float
    present_value: int
    base_depreciation: int


@dataclass(frozen=True)
class _Carry:
    """State threaded from one period to the next."""

    balance: int
    cumulative_depreciation: int


def _terms(contract: LeaseContract) -> _Terms:
    n = period_count(contract.start_date, contract.end_date)
    pv = present_value(
        contract.monthly_payment, contract.start_date,
        contract.end_date, contract.annual_rate_pct,
    )
    return _Terms(
        contract=contract,
        periods=n,
        rate=monthly_rate(contract.annual_rate_pct),
        present_value=pv,
        base_depreciation=round_currency(pv / n),
    )


def _step(terms: _Terms, carry: _Carry, index: int) -> tuple[ScheduleEntry, _Carry]:
    """Compute period ``index`` (0-based) from the carried state."""
    payment = terms.contract.monthly_payment
    opening = carry.balance

    if index == terms.periods - 1:
        principal = opening
        interest = payment - principal
        depreciation = terms.present_value - carry.cumulative_depreciation
    else:
        interest = round_currency(opening * terms.rate)
        principal = payment - interest
        depreciation = terms.base_depreciation

    closing = max(0, opening - principal)

    entry = ScheduleEntry(
        period=index + 1,
        payment_date=add_months(terms.contract.start_date, index),
        payment=payment,
        interest=interest,
        principal=principal,
        opening_balance=opening,
        closing_balance=closing,
        depreciation=depreciation,
    )
    return entry, _Carry(
        balance=closing,
        cumulative_depreciation=carry.cumulative_depreciation + depreciation,
    )


def project_schedule(contract: LeaseContract) -> list[ScheduleEntry]:
    """Full-term schedule, ignoring any termination date.

    Used directly to measure the carrying amounts still outstanding at an
    early termination.
    """
    terms = _terms(contract)
    carry = _Carry(balance=terms.present_value, cumulative_depreciation=0)

    entries: list[ScheduleEntry] = []
    for index in range(terms.periods):
        entry, carry = _step(terms, carry, index)
        entries.append(entry)
    return entries


def generate_schedule(contract: LeaseContract) -> list[ScheduleEntry]:
    """Month-by-month amortization schedule for a validated contract.

    Periods whose payment date falls strictly after the termination date
    are not generated.  Returns an empty list only when the termination
    date precedes the first payment date.
    """
    entries = project_schedule(contract)
    if contract.termination_date is None:
        return entries

    termination = contract.termination_date
    return list(takewhile(lambda e: e.payment_date <= termination, entries))
