"""Journal entries — the double-entry ledger of the lease.

Transactions are generated in this order and never re-sorted:

  1. Initial recognition at commencement
       Dr right-of-use-asset              PV
       Cr current-lease-liability         principal of periods 1–12
       Cr non-current-lease-liability     remainder
  2. For each reporting period (calendar month or quarter), at period end
       depreciation, interest, payment, reclassification

     Interest accrues onto lease-liability, so the payment debits
     lease-liability for the full cash amount: interest plus principal.
  3. Either early-termination derecognition (on the termination date)
     or maturity derecognition (on the end date)

Every transaction balances: total debits == total credits.  Lines of
zero amount are omitted.
"""

from __future__ import annotations

from datetime import date
from itertools import groupby

from rou_lease.config.contract import LeaseContract
from rou_lease.engine.classifier import (
    current_portion_as_of,
    elapsed_periods,
    initial_current_portion,
    reclassification_range,
)
from rou_lease.engine.dates import group_key
from rou_lease.engine.present_value import present_value
from rou_lease.engine.schedule import project_schedule
from rou_lease.models.results import Account, JournalLine, ScheduleEntry

_FREQUENCY_LABEL = {"monthly": "Monthly", "quarterly": "Quarterly"}


class _Ledger:
    """Append-only line buffer that numbers balanced transactions."""

    def __init__(self) -> None:
        self.lines: list[JournalLine] = []
        self._transaction = 0

    def post(
        self,
        when: date,
        note: str,
        debits: list[tuple[Account, int]],
        credits: list[tuple[Account, int]],
    ) -> None:
        legs = [(acct, amt, 0) for acct, amt in debits if amt > 0]
        legs += [(acct, 0, amt) for acct, amt in credits if amt > 0]
        if not legs:
            return

        self._transaction += 1
        for account, debit, credit in legs:
            self.lines.append(JournalLine(
                transaction=self._transaction,
                date=when,
                account=account,
                debit=debit,
                credit=credit,
                amount=debit or credit,
                note=note,
            ))


def _reclassification_note(first: int, last: int) -> str:
    if first == last:
        return f"Reclassification to current (period {first})"
    return f"Reclassification to current (periods {first}-{last})"


def _post_initial_recognition(
    ledger: _Ledger, contract: LeaseContract, schedule: list[ScheduleEntry], pv: int,
) -> None:
    current = min(initial_current_portion(schedule), pv)
    ledger.post(
        contract.start_date, "Initial recognition of lease",
        debits=[(Account.RIGHT_OF_USE_ASSET, pv)],
        credits=[
            (Account.CURRENT_LEASE_LIABILITY, current),
            (Account.NON_CURRENT_LEASE_LIABILITY, pv - current),
        ],
    )


def _post_period(
    ledger: _Ledger,
    contract: LeaseContract,
    schedule: list[ScheduleEntry],
    period_end: date,
    group: list[ScheduleEntry],
) -> None:
    label = _FREQUENCY_LABEL[contract.frequency]
    depreciation = sum(e.depreciation for e in group)
    interest = sum(e.interest for e in group)
    payment = sum(e.payment for e in group)

    ledger.post(
        period_end, f"{label} depreciation",
        debits=[(Account.DEPRECIATION_EXPENSE, depreciation)],
        credits=[(Account.ACCUMULATED_DEPRECIATION, depreciation)],
    )
    ledger.post(
        period_end, f"{label} interest expense",
        debits=[(Account.INTEREST_EXPENSE, interest)],
        credits=[(Account.LEASE_LIABILITY, interest)],
    )
    if payment > 0:
        ledger.post(
            period_end, f"{label} lease payment",
            debits=[(Account.LEASE_LIABILITY, payment)],
            credits=[(Account.CASH, payment)],
        )

    reclassified = current_portion_as_of(
        schedule, period_end, contract.start_date, contract.frequency,
    )
    if reclassified > 0:
        first, last = reclassification_range(
            elapsed_periods(contract.start_date, period_end), contract.frequency,
        )
        ledger.post(
            period_end, _reclassification_note(first, last),
            debits=[(Account.NON_CURRENT_LEASE_LIABILITY, reclassified)],
            credits=[(Account.CURRENT_LEASE_LIABILITY, reclassified)],
        )


def remaining_carrying_amounts(contract: LeaseContract) -> tuple[int, int]:
    """(liability, asset) still carried when the lease terminates early.

    Both are measured on the full-term projection over the periods whose
    payment date falls strictly after the termination date: the
    principal not yet repaid and the depreciation not yet charged.
    """
    termination = contract.termination_date
    remaining = [e for e in project_schedule(contract) if e.payment_date > termination]
    liability = sum(e.principal for e in remaining)
    asset = sum(e.depreciation for e in remaining)
    return liability, asset


def _post_termination(ledger: _Ledger, contract: LeaseContract) -> None:
    liability, asset = remaining_carrying_amounts(contract)
    gain_or_loss = liability - asset

    ledger.post(
        contract.termination_date, "Early termination - derecognition",
        debits=[
            (Account.LEASE_LIABILITY, liability),
            (Account.DERECOGNITION_LOSS, max(0, -gain_or_loss)),
        ],
        credits=[
            (Account.RIGHT_OF_USE_ASSET, asset),
            (Account.DERECOGNITION_GAIN, max(0, gain_or_loss)),
        ],
    )


def _post_maturity(
    ledger: _Ledger, contract: LeaseContract, schedule: list[ScheduleEntry], pv: int,
) -> None:
    total_depreciation = sum(e.depreciation for e in schedule)
    ledger.post(
        contract.end_date, "Lease end - derecognition of fully depreciated asset",
        debits=[(Account.ACCUMULATED_DEPRECIATION, total_depreciation)],
        credits=[(Account.RIGHT_OF_USE_ASSET, pv)],
    )


def generate_journal(contract: LeaseContract, schedule: list[ScheduleEntry]) -> list[JournalLine]:
    """Generate the complete, chronologically ordered lease ledger.

    Parameters
    ----------
    contract : LeaseContract
        Validated contract terms.
    schedule : list[ScheduleEntry]
        Output of ``generate_schedule(contract)``.

    Returns
    -------
    list[JournalLine]
        Lines in generation order; callers must not reorder them.
    """
    ledger = _Ledger()
    pv = present_value(
        contract.monthly_payment, contract.start_date,
        contract.end_date, contract.annual_rate_pct,
    )

    _post_initial_recognition(ledger, contract, schedule, pv)

    for period_end, group in groupby(schedule, key=lambda e: group_key(e.payment_date, contract.frequency)):
        _post_period(ledger, contract, schedule, period_end, list(group))

    if contract.termination_date is not None:
        _post_termination(ledger, contract)
    elif schedule:
        _post_maturity(ledger, contract, schedule, pv)

    return ledger.lines


def journal_totals(lines: list[JournalLine]) -> tuple[int, int]:
    """(total debit, total credit) over ``lines``."""
    return sum(line.debit for line in lines), sum(line.credit for line in lines)


def transactions(lines: list[JournalLine]) -> dict[int, list[JournalLine]]:
    """Group lines by transaction number, preserving generation order."""
    grouped: dict[int, list[JournalLine]] = {}
    for line in lines:
        grouped.setdefault(line.transaction, []).append(line)
    return grouped
