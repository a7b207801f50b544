"""Spreadsheet export — schedule and journal as a two-sheet xlsx workbook.

Sheet ``Schedule``: contract inputs, summary, then the amortization table.
Sheet ``Journal``:  date, account, debit, credit, amount, note.
"""

from __future__ import annotations

import io

import pandas as pd

from rou_lease.config.contract import LeaseContract
from rou_lease.exceptions import ExportError
from rou_lease.logging_config import get_logger
from rou_lease.models.results import JournalLine, LeaseSummary, ScheduleEntry

logger = get_logger("reporting.export")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SCHEDULE_SHEET = "Schedule"
JOURNAL_SHEET = "Journal"

_SCHEDULE_COLUMNS = {
    "period": "No",
    "payment_date": "Payment date",
    "payment": "Payment",
    "interest": "Interest",
    "principal": "Principal",
    "opening_balance": "Opening liability",
    "closing_balance": "Closing liability",
    "depreciation": "Depreciation",
}
_JOURNAL_COLUMNS = ["Date", "Account", "Debit", "Credit", "Amount", "Note"]

_SCHEDULE_WIDTHS = [6, 14, 15, 15, 15, 18, 18, 15]
_JOURNAL_WIDTHS = [12, 46, 16, 16, 16, 48]


def export_filename(contract: LeaseContract) -> str:
    """``lease_<start>_<end>.xlsx``."""
    return f"lease_{contract.start_date.isoformat()}_{contract.end_date.isoformat()}.xlsx"


def _header_frame(contract: LeaseContract, summary: LeaseSummary) -> pd.DataFrame:
    rows = [
        ("Lease accounting calculation", ""),
        ("", ""),
        ("Inputs", ""),
        ("Start date", summary.start_date),
        ("End date", summary.end_date),
        ("Lease term", summary.duration),
        ("Annual rate", summary.annual_rate),
        ("Monthly payment", summary.monthly_payment),
        ("Reporting frequency", contract.frequency),
    ]
    if contract.termination_date is not None:
        rows.append(("Termination date", contract.termination_date.isoformat()))
    rows += [
        ("", ""),
        ("Summary", ""),
        ("Initial lease liability", summary.initial_liability),
        ("Total payments", summary.total_payments),
        ("Total interest", summary.total_interest),
        ("Total depreciation", summary.initial_liability),
        ("", ""),
        ("Schedule", ""),
    ]
    return pd.DataFrame(rows)


def schedule_frame(schedule: list[ScheduleEntry]) -> pd.DataFrame:
    """Amortization table with display column names."""
    df = pd.DataFrame(
        [e.model_dump() for e in schedule],
        columns=list(_SCHEDULE_COLUMNS),
    )
    return df.rename(columns=_SCHEDULE_COLUMNS)


def journal_frame(journal: list[JournalLine]) -> pd.DataFrame:
    """Journal table; zero debits/credits are left blank."""
    rows = [
        (
            line.date.isoformat(),
            line.account.value,
            line.debit or None,
            line.credit or None,
            line.amount,
            line.note,
        )
        for line in journal
    ]
    return pd.DataFrame(rows, columns=_JOURNAL_COLUMNS)


def _set_widths(worksheet, widths: list[int]) -> None:
    for idx, width in enumerate(widths):
        letter = chr(ord("A") + idx)
        worksheet.column_dimensions[letter].width = width


def build_workbook(
    contract: LeaseContract,
    schedule: list[ScheduleEntry],
    journal: list[JournalLine],
    summary: LeaseSummary,
) -> bytes:
    """Render the calculation as xlsx bytes.

    Raises
    ------
    ExportError
        The workbook could not be written.
    """
    output = io.BytesIO()
    header = _header_frame(contract, summary)
    try:
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            header.to_excel(writer, sheet_name=SCHEDULE_SHEET, index=False, header=False)
            schedule_frame(schedule).to_excel(
                writer, sheet_name=SCHEDULE_SHEET, index=False, startrow=len(header),
            )
            journal_frame(journal).to_excel(writer, sheet_name=JOURNAL_SHEET, index=False)

            _set_widths(writer.sheets[SCHEDULE_SHEET], _SCHEDULE_WIDTHS)
            _set_widths(writer.sheets[JOURNAL_SHEET], _JOURNAL_WIDTHS)
    except (ValueError, OSError, KeyError) as exc:
        logger.error("export_failed", exc_info=True)
        raise ExportError(str(exc)) from exc

    return output.getvalue()
