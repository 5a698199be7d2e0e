"""Domain models for coldcheck."""

from .base import (
    ACTOR_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    UNKNOWN,
    TimeSlot,
    parse_calendar_date,
    require_text,
)
from .hierarchy import (
    Contact,
    ContactCreate,
    ContactLinks,
    ContactUpdate,
    Section,
    SectionCreate,
    SectionTree,
    SectionUpdate,
    Unit,
    UnitCreate,
    UnitUpdate,
)
from .reports import Entry, EntryInput, Report, ReportSubmission, ResolvedEntry

__all__ = [
    # Base
    "ACTOR_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "PHONE_MAX_LENGTH",
    "UNKNOWN",
    "TimeSlot",
    "parse_calendar_date",
    "require_text",
    # Hierarchy
    "Contact",
    "ContactCreate",
    "ContactLinks",
    "ContactUpdate",
    "Section",
    "SectionCreate",
    "SectionTree",
    "SectionUpdate",
    "Unit",
    "UnitCreate",
    "UnitUpdate",
    # Reports
    "Entry",
    "EntryInput",
    "Report",
    "ReportSubmission",
    "ResolvedEntry",
]
