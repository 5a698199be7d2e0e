"""Records for compliance reports and their per-unit entries."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .base import UNKNOWN, TimeSlot


class EntryInput(BaseModel):
    """One unit's result as submitted."""

    unit_id: UUID
    in_range: bool = True


class Entry(BaseModel):
    """A stored entry: one unit's compliance flag within a report."""

    id: UUID
    report_id: UUID
    unit_id: UUID
    in_range: bool
    position: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResolvedEntry(Entry):
    """An entry with its unit and section names attached.

    When the unit has been deleted the names fall back to ``"Unknown"``
    and ``section_id`` is None.
    """

    unit_name: str = UNKNOWN
    section_id: UUID | None = None
    section_name: str = UNKNOWN

    @property
    def unit_exists(self) -> bool:
        return self.section_id is not None


class Report(BaseModel):
    """One compliance check submission for a date and time slot."""

    id: UUID
    report_date: date
    time_slot: TimeSlot
    submitter_name: str
    remarks: str | None = None
    submitted_by: str
    created_at: datetime
    entries: list[ResolvedEntry] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def in_range_count(self) -> int:
        return sum(1 for entry in self.entries if entry.in_range)

    @computed_field
    @property
    def attention_count(self) -> int:
        return sum(1 for entry in self.entries if not entry.in_range)

    @computed_field
    @property
    def entry_count(self) -> int:
        return len(self.entries)

    @property
    def time_label(self) -> str:
        return self.time_slot.label


class ReportSubmission(BaseModel):
    """Request body for submitting a report.

    Dates and slots are accepted as strings and validated by the
    ingestion service so every client gets the same error messages.
    """

    report_date: str
    time_slot: str
    submitter_name: str
    remarks: str | None = None
    entries: list[EntryInput] = Field(default_factory=list)
