"""Present value of the lease payments (ordinary annuity).

Key formulas:
  n  = months_between(start, end) + 1
  r  = annual_rate_pct / 100 / 12          (simple division)
  PV = payment × (1 − (1 + r)^−n) / r      (payment × n when r = 0)
"""

from __future__ import annotations

from datetime import date

from rou_lease.engine.dates import months_between
from rou_lease.engine.rounding import round_currency


def period_count(start_date: date, end_date: date) -> int:
    """Number of monthly payments from ``start_date`` to ``end_date`` inclusive."""
    return months_between(start_date, end_date) + 1


def monthly_rate(annual_rate_pct: float) -> float:
    """Monthly rate from an annual percentage, without compounding conversion."""
    return annual_rate_pct / 100 / 12


def present_value(
    payment: float,
    start_date: date,
    end_date: date,
    annual_rate_pct: float,
) -> int:
    """Discount the monthly payments to the commencement date.

    Parameters
    ----------
    payment : float
        Fixed monthly payment, paid in arrears.
    start_date, end_date : date
        First and last payment dates (inclusive).
    annual_rate_pct : float
        Annual nominal rate in percent.

    Returns
    -------
    int
        Present value rounded half-up to whole currency units.
    """
    n = period_count(start_date, end_date)
    r = monthly_rate(annual_rate_pct)

    if r == 0:
        return round_currency(payment * n)

    return round_currency(payment * (1 - (1 + r) ** -n) / r)
