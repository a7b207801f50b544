"""Calculation pipeline — validate → present value → schedule → journal.

Entry point: ``run_calculation(contract)``.  Each run is a pure function
of its input; independent contracts may be calculated concurrently.
"""

from __future__ import annotations

from rou_lease.config.contract import LeaseContract
from rou_lease.engine.classifier import initial_current_portion, initial_non_current_portion
from rou_lease.engine.journal import generate_journal, journal_totals
from rou_lease.engine.present_value import present_value
from rou_lease.engine.schedule import generate_schedule
from rou_lease.engine.validation import validate
from rou_lease.exceptions import ComputationError, InputError
from rou_lease.logging_config import get_logger
from rou_lease.models.results import CalculationResult

logger = get_logger("engine.orchestrator")


def run_calculation(contract: LeaseContract) -> CalculationResult:
    """Run the full engine for one contract.

    Raises
    ------
    InputError
        The contract failed validation; no calculation was attempted.
    ComputationError
        The termination date precedes the first payment, so there is
        nothing to schedule.
    """
    errors = validate(contract)
    if errors:
        logger.info("contract_rejected", extra={"errors": errors})
        raise InputError(errors)

    pv = present_value(
        contract.monthly_payment, contract.start_date,
        contract.end_date, contract.annual_rate_pct,
    )
    schedule = generate_schedule(contract)
    if not schedule:
        raise ComputationError(
            "Termination date precedes the first payment date; no periods to schedule."
        )

    journal = generate_journal(contract, schedule)
    current = min(initial_current_portion(schedule), pv)

    debit, credit = journal_totals(journal)
    logger.info(
        "lease_calculated",
        extra={
            "periods": len(schedule),
            "present_value": pv,
            "journal_lines": len(journal),
            "total_debit": debit,
            "total_credit": credit,
            "terminated": contract.termination_date is not None,
        },
    )

    return CalculationResult(
        contract=contract,
        present_value=pv,
        initial_current_portion=current,
        initial_non_current_portion=initial_non_current_portion(schedule, pv),
        schedule=schedule,
        journal=journal,
    )
