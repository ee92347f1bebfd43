"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class CSVParseError(ValidationError):
    """CSV input could not be tokenized."""


def missing_import_file() -> str:
    """Return message when no file was selected for import."""
    return "Please select a file to import."


def csv_parse_failed(detail: str) -> str:
    """Return message for a CSV framing failure."""
    return f"Error parsing CSV: {detail}"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def business_not_found(business_id: str) -> str:
    """Return message for missing business."""
    return f"Business '{business_id}' not found"


def duplicate_business_id(business_id: str) -> str:
    """Return message for duplicate business ID."""
    return f"Business with id '{business_id}' already exists"


def unknown_transaction_fields(fields: list[str]) -> str:
    """Return message for update keys that are not transaction fields."""
    return f"Unknown transaction field{'s' if len(fields) != 1 else ''}: {', '.join(fields)}"
