"""Typed exceptions for the lease engine and its collaborators.

    LeaseEngineError (base)
    |
    +-- InputError            contract failed validation; carries every message
    +-- ComputationError      pipeline produced an unusable result
    +-- CollaboratorError     failure at an I/O boundary
        +-- ExportError
        +-- StorageError

Every class has a ``code`` attribute so callers (the HTTP API in
particular) can branch on type and report a stable identifier.
"""


class LeaseEngineError(Exception):
    """Base exception for all lease engine errors."""

    code: str = "LEASE_ENGINE_ERROR"


class InputError(LeaseEngineError):
    """Contract terms are missing or inconsistent."""

    code: str = "INVALID_INPUT"

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid lease contract")


class ComputationError(LeaseEngineError):
    """A validated contract still produced no usable result."""

    code: str = "COMPUTATION_FAILED"

    def __init__(self, message: str):
        super().__init__(message)


class CollaboratorError(LeaseEngineError):
    """Base exception for export and storage failures."""

    code: str = "COLLABORATOR_ERROR"


class ExportError(CollaboratorError):
    """Spreadsheet export could not be produced."""

    code: str = "EXPORT_FAILED"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Export failed: {reason}")


class StorageError(CollaboratorError):
    """Key-value store is unusable."""

    code: str = "STORAGE_FAILED"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Storage at {path} unusable: {reason}")
