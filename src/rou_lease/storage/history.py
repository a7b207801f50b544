"""Draft form persistence and bounded calculation history."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import ValidationError

from rou_lease.config.contract import LeaseContract
from rou_lease.logging_config import get_logger
from rou_lease.models.results import CalculationResult, HistoryEntry
from rou_lease.storage.store import KeyValueStore

logger = get_logger("storage.history")

DRAFT_KEY = "lease-calculator-data"
HISTORY_KEY = "lease-calculator-history"
DEFAULT_HISTORY_LIMIT = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DraftRepository:
    """The in-progress contract form, saved between sessions."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def save_draft(self, form_data: dict[str, Any]) -> bool:
        return self.store.save(DRAFT_KEY, form_data)

    def load_draft(self) -> dict[str, Any] | None:
        return self.store.load(DRAFT_KEY)

    def clear_draft(self) -> bool:
        return self.store.delete(DRAFT_KEY)


class CalculationHistory:
    """Newest-first list of past calculations, capped at ``limit`` entries.

    Entries are keyed by creation time in epoch milliseconds.  The clock
    is injectable so tests can produce stable ids.
    """

    def __init__(
        self,
        store: KeyValueStore,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.store = store
        self.limit = limit
        self.clock = clock

    def entries(self) -> list[HistoryEntry]:
        """Stored entries, newest first; an unreadable history reads as empty."""
        raw = self.store.load(HISTORY_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("history_load_failed", extra={"reason": f"expected a list, got {type(raw).__name__}"})
            return []
        try:
            return [HistoryEntry.model_validate(item) for item in raw]
        except ValidationError as exc:
            logger.warning("history_load_failed", extra={"reason": f"{exc.error_count()} invalid fields"})
            return []

    def _save(self, entries: list[HistoryEntry]) -> bool:
        return self.store.save(HISTORY_KEY, [e.model_dump(mode="json") for e in entries])

    def record(self, contract: LeaseContract, result: CalculationResult) -> HistoryEntry | None:
        """Prepend a calculation; the oldest entries beyond the limit are dropped.

        Returns the new entry, or ``None`` if the store refused the write.
        """
        now = self.clock()
        schedule = result.schedule
        entry = HistoryEntry(
            id=int(now.timestamp() * 1000),
            timestamp=now.isoformat(),
            form_data=contract.model_dump(mode="json"),
            summary={
                "start_date": contract.start_date.isoformat(),
                "end_date": contract.end_date.isoformat(),
                "monthly_payment": contract.monthly_payment,
                "annual_rate_pct": contract.annual_rate_pct,
                "frequency": contract.frequency,
                "initial_lease_amount": schedule[0].opening_balance if schedule else 0,
                "total_months": len(schedule),
            },
        )

        entries = [entry, *self.entries()][: self.limit]
        if not self._save(entries):
            logger.warning("history_record_failed", extra={"entry_id": entry.id})
            return None
        return entry

    def delete(self, entry_id: int) -> bool:
        remaining = [e for e in self.entries() if e.id != entry_id]
        return self._save(remaining)

    def clear(self) -> bool:
        return self.store.delete(HISTORY_KEY)


def clear_all(store: KeyValueStore) -> bool:
    """Remove both the draft and the history."""
    draft_ok = store.delete(DRAFT_KEY)
    history_ok = store.delete(HISTORY_KEY)
    return draft_ok and history_ok
