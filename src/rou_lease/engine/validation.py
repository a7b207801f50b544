"""Contract validation — the gate in front of every calculation."""

from __future__ import annotations

from rou_lease.config.contract import LeaseContract


def validate(contract: LeaseContract) -> list[str]:
    """Check a contract for completeness and consistency.

    Every rule is checked independently so the caller can show all
    problems at once.  Never raises; an empty list means the contract may
    be calculated.
    """
    errors: list[str] = []
    start, end = contract.start_date, contract.end_date

    if start is None:
        errors.append("Start date is required.")
    if end is None:
        errors.append("End date is required.")
    if start is not None and end is not None and start > end:
        errors.append("Start date must not be after the end date.")
    if not contract.annual_rate_pct or contract.annual_rate_pct <= 0:
        errors.append("Annual interest rate must be greater than 0.")
    if not contract.monthly_payment or contract.monthly_payment <= 0:
        errors.append("Monthly payment must be greater than 0.")
    if contract.termination_date is not None and end is not None and contract.termination_date > end:
        errors.append("Termination date must not be after the end date.")

    return errors
