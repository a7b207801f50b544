"""Shared test fixtures — sample lease contracts."""

from __future__ import annotations

from datetime import date

import pytest

from rou_lease.config import LeaseContract
from rou_lease.engine.schedule import generate_schedule
from rou_lease.models.results import ScheduleEntry


@pytest.fixture
def standard_contract() -> LeaseContract:
    """24 monthly payments of 1,000,000 at 6% a year."""
    return LeaseContract(
        start_date=date(2024, 1, 1),
        end_date=date(2025, 12, 1),
        annual_rate_pct=6.0,
        monthly_payment=1_000_000,
        frequency="monthly",
    )


@pytest.fixture
def zero_rate_contract() -> LeaseContract:
    """12 monthly payments, no discounting (engine-level only; fails validation)."""
    return LeaseContract(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 1),
        annual_rate_pct=0.0,
        monthly_payment=1_000_000,
    )


@pytest.fixture
def terminated_contract(standard_contract: LeaseContract) -> LeaseContract:
    """Standard contract terminated on the 13th payment date."""
    return standard_contract.model_copy(update={"termination_date": date(2025, 1, 1)})


@pytest.fixture
def quarterly_contract() -> LeaseContract:
    """36 monthly payments reported quarterly."""
    return LeaseContract(
        start_date=date(2024, 1, 1),
        end_date=date(2026, 12, 1),
        annual_rate_pct=4.5,
        monthly_payment=500_000,
        frequency="quarterly",
    )


@pytest.fixture
def standard_schedule(standard_contract: LeaseContract) -> list[ScheduleEntry]:
    return generate_schedule(standard_contract)


@pytest.fixture
def quarterly_schedule(quarterly_contract: LeaseContract) -> list[ScheduleEntry]:
    return generate_schedule(quarterly_contract)
