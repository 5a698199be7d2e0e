"""Base types shared by the coldcheck records."""

import re
from datetime import date, datetime
from enum import Enum

from ..errors import ValidationError

UNKNOWN = "Unknown"

# Column widths of the stored text fields.
NAME_MAX_LENGTH = 200
PHONE_MAX_LENGTH = 50
ACTOR_MAX_LENGTH = 255

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TimeSlot(str, Enum):
    """The four fixed check times of a day."""

    MIDNIGHT = "00:00"
    TWO_AM = "02:00"
    FOUR_AM = "04:00"
    SIX_AM = "06:00"

    @property
    def label(self) -> str:
        """Display label, e.g. ``12:00 AM``."""
        return TIME_SLOT_LABELS[self]

    @classmethod
    def ordered(cls) -> list["TimeSlot"]:
        """Slots in presentation order."""
        return [cls.MIDNIGHT, cls.TWO_AM, cls.FOUR_AM, cls.SIX_AM]

    @classmethod
    def parse(cls, value: "str | TimeSlot") -> "TimeSlot":
        """Resolve a canonical value or a legacy label to a slot.

        Raises:
            ValidationError: If the value is not one of the four slots
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            try:
                return cls(key)
            except ValueError:
                pass
            if key in _SLOT_ALIASES:
                return _SLOT_ALIASES[key]
        allowed = ", ".join(slot.value for slot in cls.ordered())
        raise ValidationError(
            f"Invalid time slot: {value!r}. Expected one of: {allowed}",
            field="time_slot",
        )


TIME_SLOT_LABELS = {
    TimeSlot.MIDNIGHT: "12:00 AM",
    TimeSlot.TWO_AM: "02:00 AM",
    TimeSlot.FOUR_AM: "04:00 AM",
    TimeSlot.SIX_AM: "06:00 AM",
}

# Labels used by the paper checklist and earlier clients
_SLOT_ALIASES = {
    "12am": TimeSlot.MIDNIGHT,
    "2am": TimeSlot.TWO_AM,
    "02am": TimeSlot.TWO_AM,
    "4am": TimeSlot.FOUR_AM,
    "04am": TimeSlot.FOUR_AM,
    "6am": TimeSlot.SIX_AM,
    "06am": TimeSlot.SIX_AM,
    "12:00 am": TimeSlot.MIDNIGHT,
    "02:00 am": TimeSlot.TWO_AM,
    "04:00 am": TimeSlot.FOUR_AM,
    "06:00 am": TimeSlot.SIX_AM,
}


def parse_calendar_date(value: "date | str", field: str = "report_date") -> date:
    """Parse a ``YYYY-MM-DD`` string (or pass through a date).

    Raises:
        ValidationError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _ISO_DATE.match(value.strip()):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid calendar date: {value!r}", field=field)


def require_text(value: str | None, field: str, max_length: int = NAME_MAX_LENGTH) -> str:
    """Return ``value`` trimmed, rejecting empty, whitespace-only or overlong input."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} must not be empty", field=field)
    text = str(value).strip()
    if len(text) > max_length:
        raise ValidationError(
            f"{field} must be at most {max_length} characters", field=field
        )
    return text
