"""Lease contract — the single input to every engine stage."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReportingFrequency = Literal["monthly", "quarterly"]


class LeaseContract(BaseModel):
    """Contractual terms of one lease.

    Field-level types are enforced by pydantic; the business rules
    (date ordering, positive rate and payment, termination inside the
    term) are checked by ``engine.validation.validate`` so that every
    violation is reported at once instead of failing on the first.
    Instances are frozen: no engine stage may mutate its input.
    """

    model_config = ConfigDict(frozen=True)

    start_date: date | None = Field(
        default=None,
        description="Lease commencement date. The first payment falls on this date.",
    )
    end_date: date | None = Field(
        default=None,
        description="Date of the last scheduled payment (inclusive).",
    )
    annual_rate_pct: float = Field(
        default=0.0,
        description="Annual nominal discount rate in percent (e.g. 6.0 for 6%). "
                    "The monthly rate is annual_rate_pct / 100 / 12.",
    )
    monthly_payment: int = Field(
        default=0,
        description="Fixed monthly lease payment in whole currency units.",
    )
    frequency: ReportingFrequency = Field(
        default="monthly",
        description="Journal grouping: 'monthly' closes each calendar month, "
                    "'quarterly' closes each calendar quarter.",
    )
    termination_date: date | None = Field(
        default=None,
        description="Optional early-termination date. Periods whose payment date "
                    "falls after it are not scheduled and are derecognized.",
    )
