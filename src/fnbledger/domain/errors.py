"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input handed over by an importer or a user."""


class NotFoundError(DomainError):
    """Requested day record or setting does not exist."""


def day_record_not_found(day_id: str) -> str:
    """Return message for a missing day record."""
    return f"No entry recorded for {day_id}"


def invalid_document(source: str, detail: str) -> str:
    """Return message for a document that could not be read."""
    return f"Could not read {source}: {detail}"


def invalid_row(source: str, index: int, detail: str) -> str:
    """Return message for a rejected row, with its location."""
    return f"{source}, entry {index}: {detail}"


def unknown_reason(reason: str) -> str:
    """Return message for a reversal reason filter that matches nothing."""
    return f"Unknown reversal reason '{reason}'"


def reversal_not_found(reversal_id: str) -> str:
    """Return message for a missing reversal."""
    return f"Reversal '{reversal_id}' not found"


def duplicate_reversal(reversal_id: str) -> str:
    """Return message for a reversal id that is already stored."""
    return f"Reversal '{reversal_id}' already exists"
