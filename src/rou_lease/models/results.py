"""Result types — the contract between engine, reporting, storage and API.

Every model is frozen: a stage's output is never modified by a later
stage.  Amounts are whole currency units (``int``).
"""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict

from rou_lease.config.contract import LeaseContract


# ═══════════════════════════════════════════════════════════════════════════
# Chart of accounts
# ═══════════════════════════════════════════════════════════════════════════

class Account(str, Enum):
    """Fixed chart of accounts used verbatim on journal lines."""

    RIGHT_OF_USE_ASSET = "right-of-use-asset"
    CURRENT_LEASE_LIABILITY = "current-lease-liability"
    NON_CURRENT_LEASE_LIABILITY = "non-current-lease-liability"
    LEASE_LIABILITY = "lease-liability"
    INTEREST_EXPENSE = "interest-expense"
    DEPRECIATION_EXPENSE = "depreciation-expense"
    ACCUMULATED_DEPRECIATION = "accumulated-depreciation-of-right-of-use-asset"
    CASH = "cash"
    DERECOGNITION_GAIN = "derecognition-gain"
    DERECOGNITION_LOSS = "derecognition-loss"


# ═══════════════════════════════════════════════════════════════════════════
# Amortization schedule
# ═══════════════════════════════════════════════════════════════════════════

class ScheduleEntry(BaseModel):
    """One month of the lease amortization schedule."""

    model_config = ConfigDict(frozen=True)

    period: int
    """1-based period number."""

    payment_date: dt.date
    payment: int
    interest: int
    """Interest accrued on the opening balance."""

    principal: int
    """payment − interest."""

    opening_balance: int
    closing_balance: int
    """opening − principal, floored at zero."""

    depreciation: int
    """Straight-line charge; the last period carries the rounding plug."""


# ═══════════════════════════════════════════════════════════════════════════
# Journal
# ═══════════════════════════════════════════════════════════════════════════

class JournalLine(BaseModel):
    """One debit or credit line of the lease ledger."""

    model_config = ConfigDict(frozen=True)

    transaction: int
    """1-based number of the balanced transaction this line belongs to."""

    date: dt.date
    account: Account
    debit: int = 0
    credit: int = 0
    amount: int
    """Whichever of debit / credit is nonzero."""

    note: str = ""


# ═══════════════════════════════════════════════════════════════════════════
# Summary & pipeline result
# ═══════════════════════════════════════════════════════════════════════════

class LeaseSummary(BaseModel):
    """Human-readable headline figures handed to the export sink."""

    model_config = ConfigDict(frozen=True)

    start_date: str
    end_date: str
    duration: str
    monthly_payment: str
    annual_rate: str
    initial_liability: str
    total_payments: str
    total_interest: str


class CalculationResult(BaseModel):
    """Everything one pipeline run produces."""

    model_config = ConfigDict(frozen=True)

    contract: LeaseContract
    present_value: int
    initial_current_portion: int
    initial_non_current_portion: int
    schedule: list[ScheduleEntry]
    journal: list[JournalLine]


class HistoryEntry(BaseModel):
    """One remembered calculation, as kept by the history store."""

    id: int
    """Creation timestamp in epoch milliseconds."""

    timestamp: str
    """ISO-8601 creation time (UTC)."""

    form_data: dict
    summary: dict
