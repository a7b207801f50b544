"""FastAPI server — HTTP access to the lease engine.

Run with:
    uvicorn rou_lease.api.server:app --reload --port 8000

Or:
    rou-lease-api

Endpoints:
    GET    /health               — liveness probe
    GET    /schema               — JSON Schema for LeaseContract
    GET    /accounts             — chart of accounts
    POST   /validate             — validation messages for a contract
    POST   /present-value        — present value, period count, monthly rate
    POST   /calculate            — schedule + journal + summary (recorded in history)
    POST   /export               — xlsx workbook download
    GET    /history              — past calculations, newest first
    DELETE /history/{entry_id}   — forget one calculation
    DELETE /history              — forget all calculations
    GET/PUT/DELETE /draft        — in-progress contract form
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from rou_lease.config.contract import LeaseContract
from rou_lease.config.settings import AppSettings
from rou_lease.engine.orchestrator import run_calculation
from rou_lease.engine.present_value import monthly_rate, period_count, present_value
from rou_lease.engine.validation import validate
from rou_lease.exceptions import (
    CollaboratorError,
    ComputationError,
    InputError,
    LeaseEngineError,
)
from rou_lease.logging_config import configure_logging, get_logger
from rou_lease.models.results import Account, CalculationResult, HistoryEntry, LeaseSummary
from rou_lease.reporting.export import XLSX_MEDIA_TYPE, build_workbook, export_filename
from rou_lease.reporting.summary import build_summary
from rou_lease.storage.history import CalculationHistory, DraftRepository
from rou_lease.storage.store import JsonFileStore, KeyValueStore

logger = get_logger("api")


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="ROU Lease Accounting API",
    version="1.0",
    description=(
        "Right-of-use lease accounting: present value of lease payments, "
        "monthly amortization schedule, current/non-current liability "
        "classification and balanced journal entries."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Dependencies
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache
def get_settings() -> AppSettings:
    return AppSettings.from_env()


@lru_cache
def _default_store() -> JsonFileStore:
    return JsonFileStore(get_settings().storage_path)


def get_store() -> KeyValueStore:
    """Store used by history and drafts. Override in tests."""
    return _default_store()


def get_history(
    store: KeyValueStore = Depends(get_store),
    settings: AppSettings = Depends(get_settings),
) -> CalculationHistory:
    return CalculationHistory(store, limit=settings.history_limit)


def get_drafts(store: KeyValueStore = Depends(get_store)) -> DraftRepository:
    return DraftRepository(store)


# ═══════════════════════════════════════════════════════════════════════════
# Error mapping
# ═══════════════════════════════════════════════════════════════════════════

_STATUS_BY_TYPE: list[tuple[type[LeaseEngineError], int]] = [
    (InputError, 422),
    (ComputationError, 409),
    (CollaboratorError, 500),
]


@app.exception_handler(LeaseEngineError)
async def _handle_engine_error(request: Request, exc: LeaseEngineError) -> JSONResponse:
    status = next((code for cls, code in _STATUS_BY_TYPE if isinstance(exc, cls)), 500)
    logger.warning(
        "request_failed",
        extra={"path": request.url.path, "code": exc.code, "status": status},
    )
    return JSONResponse(
        status_code=status,
        content={
            "code": exc.code,
            "message": str(exc),
            "errors": getattr(exc, "errors", []),
        },
    )


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class ValidateResponse(BaseModel):
    valid: bool
    errors: list[str]


class PresentValueResponse(BaseModel):
    present_value: int
    periods: int
    monthly_rate: float


class CalculateResponse(BaseModel):
    """Response from /calculate."""
    result: CalculationResult
    summary: LeaseSummary
    history_entry_id: int | None = Field(
        default=None,
        description="Id of the history entry, or null if history could not be written.",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "ROU Lease Accounting API",
        "version": "1.0",
        "docs": "GET /docs (interactive Swagger UI)",
        "start_here": "POST /calculate with a LeaseContract (see GET /schema)",
    }


@app.get("/schema")
def get_schema():
    """JSON Schema for LeaseContract."""
    return LeaseContract.model_json_schema()


@app.get("/accounts")
def get_accounts():
    """Chart of accounts used on journal lines."""
    return {"accounts": [a.value for a in Account]}


@app.post("/validate", response_model=ValidateResponse)
def validate_contract(contract: LeaseContract):
    errors = validate(contract)
    return ValidateResponse(valid=not errors, errors=errors)


@app.post("/present-value", response_model=PresentValueResponse)
def compute_present_value(contract: LeaseContract):
    errors = validate(contract)
    if errors:
        raise InputError(errors)
    return PresentValueResponse(
        present_value=present_value(
            contract.monthly_payment, contract.start_date,
            contract.end_date, contract.annual_rate_pct,
        ),
        periods=period_count(contract.start_date, contract.end_date),
        monthly_rate=monthly_rate(contract.annual_rate_pct),
    )


@app.post("/calculate", response_model=CalculateResponse)
def calculate(
    contract: LeaseContract,
    history: CalculationHistory = Depends(get_history),
    settings: AppSettings = Depends(get_settings),
):
    """Run the full engine and remember the calculation.

    A history write failure does not fail the request; the result is
    returned with ``history_entry_id = null``.
    """
    result = run_calculation(contract)
    summary = build_summary(contract, result.schedule, settings.currency_label)
    entry = history.record(contract, result)
    return CalculateResponse(
        result=result,
        summary=summary,
        history_entry_id=entry.id if entry is not None else None,
    )


@app.post("/export")
def export(contract: LeaseContract, settings: AppSettings = Depends(get_settings)):
    """Calculate and return the xlsx workbook."""
    result = run_calculation(contract)
    summary = build_summary(contract, result.schedule, settings.currency_label)
    payload = build_workbook(contract, result.schedule, result.journal, summary)
    return Response(
        content=payload,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(contract)}"'},
    )


@app.get("/history", response_model=list[HistoryEntry])
def list_history(history: CalculationHistory = Depends(get_history)):
    return history.entries()


@app.delete("/history/{entry_id}")
def delete_history_entry(entry_id: int, history: CalculationHistory = Depends(get_history)):
    return {"deleted": history.delete(entry_id)}


@app.delete("/history")
def clear_history(history: CalculationHistory = Depends(get_history)):
    return {"cleared": history.clear()}


@app.get("/draft")
def get_draft(drafts: DraftRepository = Depends(get_drafts)):
    return {"draft": drafts.load_draft()}


@app.put("/draft")
def put_draft(form_data: dict[str, Any], drafts: DraftRepository = Depends(get_drafts)):
    return {"saved": drafts.save_draft(form_data)}


@app.delete("/draft")
def delete_draft(drafts: DraftRepository = Depends(get_drafts)):
    return {"deleted": drafts.clear_draft()}


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    configure_logging(level=get_settings().log_level)
    uvicorn.run(
        "rou_lease.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
