"""Error kinds raised by the coldcheck core.

The HTTP layer maps these onto status codes; the CLI prints their message.
"""

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .reports.aggregation import RangeQueryResult


class ColdCheckError(Exception):
    """Base class for all coldcheck errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ColdCheckError):
    """Bad input shape or value."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NotFoundError(ColdCheckError):
    """An id did not resolve to a stored row."""

    def __init__(self, resource: str, identifier: str | UUID):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConstraintViolation(ColdCheckError):
    """A write would break a referential or uniqueness invariant."""


class PartialRangeFailure(ColdCheckError):
    """One or more days of a range query could not be fetched.

    Carries the partial result so callers can still use the days that
    succeeded.
    """

    def __init__(self, result: "RangeQueryResult"):
        self.result = result
        dates = ", ".join(f.report_date.isoformat() for f in result.failed_dates)
        super().__init__(f"Failed to load reports for: {dates}")

    @property
    def failed_dates(self) -> list[date]:
        return [f.report_date for f in self.result.failed_dates]
