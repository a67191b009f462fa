"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InvalidDateError(ValidationError):
    """A date or calendar period could not be parsed or is out of range."""


class UnsupportedFormatError(ValidationError):
    """Requested export format is not known."""


class ConfigError(ValidationError):
    """Configuration value is malformed."""


def invalid_date(value: object, reason: str) -> str:
    """Return message for an unparseable date."""
    return f"Could not parse date '{value}': {reason}"


def invalid_month(month: object, year: object) -> str:
    """Return message for an out-of-range calendar month."""
    return f"Invalid period {year}-{month}: month must be between 1 and 12"


def inverted_range(start: object, end: object) -> str:
    """Return message when a date range ends before it starts."""
    return f"Start date {start} is after end date {end}"


def negative_amount(field: str, amount: object) -> str:
    """Return message for a negative monetary amount."""
    return f"{field} must not be negative (got {amount})"


def paid_status_mismatch(bill_id: object) -> str:
    """Return message when a bill's status disagrees with its payment date."""
    return f"Bill {bill_id}: status PAID requires paid_on, and only PAID bills may carry it"


def unsupported_format(tag: object, supported: list[str]) -> str:
    """Return message for an unknown export format tag."""
    return f"Unsupported format '{tag}'. Supported formats: {', '.join(supported)}"


def category_not_found(category_id: object) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"
