"""Error taxonomy shared by the services and the HTTP layer.

Each error carries the HTTP status it maps to so ``create_app`` can render the
response envelope without a lookup table.
"""

from __future__ import annotations


class FormWizardError(Exception):
    status_code = 500

    def __init__(self, message: str, *, errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(FormWizardError, ValueError):
    """Malformed or missing input. Never retried automatically."""

    status_code = 400


class NotFoundError(FormWizardError, LookupError):
    status_code = 404


class StorageError(FormWizardError):
    """The database rejected or failed an operation."""

    status_code = 500


class FormDataDecodeError(StorageError):
    """A stored form payload could not be parsed."""
