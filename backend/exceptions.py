"""
Domain exceptions for the ledger and numbering engine.

Every core operation either returns its result or raises one of the
exceptions below. The FastAPI handlers registered in ``main.py`` turn
them into JSON responses; nothing here knows about HTTP beyond the
status code each kind maps to.
"""


class LedgerError(Exception):
    """Base exception for ledger errors."""
    status_code = 400
    error = "ledger_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(LedgerError):
    """Malformed or missing voucher, party or item fields. Raised before any write."""
    status_code = 422
    error = "validation_error"


class ConstraintViolation(LedgerError):
    """A business rule or uniqueness constraint would be broken."""
    status_code = 409
    error = "constraint_violation"


class NotFound(LedgerError):
    """Referenced company, party, item or voucher does not exist."""
    status_code = 404
    error = "not_found"


class StorageUnavailable(LedgerError):
    """Transient record store failure. Nothing was committed, so the call can be retried."""
    status_code = 503
    error = "storage_unavailable"
