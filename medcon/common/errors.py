# medcon/common/errors.py
"""Domain error taxonomy shared by every module.

All of these are recoverable at the HTTP boundary: ``medcon.main`` maps each
class to a status code and returns ``{"detail": message}``.
"""

from typing import Optional


class ClinicError(Exception):
    """Base class for all front-desk and billing errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    """A required field is missing or a value is malformed."""

    status_code = 422


class InvalidTransitionError(ClinicError):
    """Operation attempted from the wrong lifecycle state."""

    status_code = 409


class ReferenceNotFoundError(ClinicError):
    """A doctor, procedure, visit, product or supplier id does not exist."""

    status_code = 404


class UnderpaymentError(ClinicError):
    """Payments do not cover the total cost at finalize time."""

    status_code = 402

    def __init__(self, remaining: float, message: Optional[str] = None):
        super().__init__(message or f"Payments must cover the total. Remaining balance: {remaining:.2f}")
        self.remaining = remaining


class AuthorizationError(ClinicError):
    """The current role lacks the capability for this operation."""

    status_code = 403


class PersistenceError(ClinicError):
    """The storage collaborator failed to load or save a collection."""

    status_code = 503


class RestoreFormatError(ClinicError):
    """An imported backup document failed shape validation."""

    status_code = 400
