"""Current / non-current split of the lease liability.

At inception the principal repaid in periods 1–12 is current.  At every
later reporting date the horizon rolls forward and the next slice of
principal moves from non-current to current:

  elapsed   = months_between(start, reporting_date) + 1
  monthly   → period 12 + elapsed
  quarterly → periods 12 + (q − 1) × 3 + 1 … + 3,   q = ceil(elapsed / 3)

Every function here is a pure lookup on the schedule; nothing is cached
between reporting dates.
"""

from __future__ import annotations

import math
from datetime import date

from rou_lease.config.contract import ReportingFrequency
from rou_lease.engine.dates import months_between
from rou_lease.models.results import ScheduleEntry

HORIZON_PERIODS = 12


def initial_current_portion(schedule: list[ScheduleEntry]) -> int:
    """Principal due within the first twelve periods."""
    return sum(e.principal for e in schedule[:HORIZON_PERIODS])


def initial_non_current_portion(schedule: list[ScheduleEntry], present_value: int) -> int:
    """Remainder of the initial liability after the current portion."""
    current = min(initial_current_portion(schedule), present_value)
    return max(0, present_value - current)


def elapsed_periods(start_date: date, reporting_date: date) -> int:
    """Periods elapsed since inception, counting the commencement month."""
    return months_between(start_date, reporting_date) + 1


def reclassification_range(elapsed: int, frequency: ReportingFrequency) -> tuple[int, int]:
    """1-based (first, last) period numbers moved to current at a reporting date."""
    if frequency == "monthly":
        target = HORIZON_PERIODS + elapsed
        return target, target

    quarter = math.ceil(elapsed / 3)
    first = HORIZON_PERIODS + (quarter - 1) * 3 + 1
    return first, first + 2


def current_portion_as_of(
    schedule: list[ScheduleEntry],
    reporting_date: date,
    start_date: date,
    frequency: ReportingFrequency,
) -> int:
    """Principal to reclassify as current at ``reporting_date``.

    Periods in the target range that are not in the schedule contribute
    nothing, so the amount shrinks to zero as the lease runs out.
    """
    first, last = reclassification_range(elapsed_periods(start_date, reporting_date), frequency)
    return sum(e.principal for e in schedule if first <= e.period <= last)
