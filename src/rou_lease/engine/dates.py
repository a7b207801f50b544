"""Calendar helpers — month arithmetic and reporting-period keys.

All month arithmetic goes through ``dateutil.relativedelta`` so that
month-end dates clamp the same way everywhere (Jan 31 + 1 month = Feb 28/29).
"""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta

from rou_lease.config.contract import ReportingFrequency


def add_months(d: date, months: int) -> date:
    """Shift ``d`` by whole calendar months, clamping to month end."""
    return d + relativedelta(months=months)


def months_between(start: date, end: date) -> int:
    """Whole months elapsed from ``start`` to ``end``.

    The largest ``k`` such that ``add_months(start, k) <= end``; negative
    when ``end`` precedes ``start``.
    """
    whole = (end.year - start.year) * 12 + (end.month - start.month)
    if add_months(start, whole) > end:
        whole -= 1
    return whole


def group_key(d: date, frequency: ReportingFrequency) -> date:
    """Canonical period-end date of the reporting period containing ``d``.

    - ``"monthly"``   → last day of the calendar month
    - ``"quarterly"`` → last day of the calendar quarter
    """
    if frequency == "monthly":
        return d + relativedelta(day=31)
    quarter_end_month = (d.month - 1) // 3 * 3 + 3
    return d + relativedelta(month=quarter_end_month, day=31)
