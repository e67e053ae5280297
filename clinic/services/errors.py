"""
Domain errors raised by the clinic services.

Each error carries a stable ``code`` and the HTTP status the API layer
answers with, so views can let them propagate to
:func:`clinic.exceptions.api_exception_handler`.  Store connectivity
failures are not part of this hierarchy.
"""
from __future__ import annotations


class ClinicError(Exception):
    code = 'error'
    status_code = 400
    default_message = 'Request could not be processed.'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ClinicError):
    code = 'invalid'
    status_code = 400
    default_message = 'Invalid input.'


class PastDateError(InvalidInput):
    code = 'past_date'
    default_message = 'Cannot book in the past.'


class NotFoundError(ClinicError):
    code = 'not_found'
    status_code = 404
    default_message = 'Not found.'


class NotOwnerError(ClinicError):
    code = 'forbidden'
    status_code = 403
    default_message = 'You do not own this record.'


class ConflictError(ClinicError):
    code = 'conflict'
    status_code = 409
    default_message = 'Doctor not available at that time.'


class DuplicateError(ConflictError):
    code = 'duplicate'
    default_message = 'You have already submitted feedback for this doctor.'
