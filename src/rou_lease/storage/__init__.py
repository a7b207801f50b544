"""Storage — key-value stores, drafts and calculation history."""

from rou_lease.storage.store import InMemoryStore, JsonFileStore, KeyValueStore
from rou_lease.storage.history import CalculationHistory, DraftRepository, clear_all

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "DraftRepository",
    "CalculationHistory",
    "clear_all",
]
