"""Report ingestion: validate and persist compliance reports."""

from datetime import date
from typing import Iterable, Mapping
from uuid import UUID

from ..errors import ValidationError
from ..logging import get_context_logger, log_report_deleted, log_report_submitted
from ..models import (
    ACTOR_MAX_LENGTH,
    EntryInput,
    Report,
    TimeSlot,
    parse_calendar_date,
    require_text,
)
from ..store import EntityStore


def _coerce_entries(
    entries: Iterable[EntryInput | tuple[UUID | str, bool] | Mapping],
) -> list[EntryInput]:
    coerced = []
    for entry in entries:
        if isinstance(entry, EntryInput):
            coerced.append(entry)
        elif isinstance(entry, Mapping):
            coerced.append(EntryInput.model_validate(entry))
        else:
            unit_id, in_range = entry
            coerced.append(EntryInput(unit_id=unit_id, in_range=in_range))
    return coerced


class ReportIngestionService:
    """Validates submissions and stores them with their entries."""

    def __init__(self, store: EntityStore):
        self._store = store

    async def submit_report(
        self,
        report_date: date | str,
        time_slot: TimeSlot | str,
        submitter_name: str,
        entries: Iterable[EntryInput | tuple[UUID | str, bool] | Mapping],
        remarks: str | None = None,
        submitted_by: str = "",
    ) -> Report:
        """Validate and persist a report with its per-unit entries.

        Entries do not have to cover every unit; whatever is submitted is
        stored as-is.

        Args:
            report_date: Calendar date of the check (date or YYYY-MM-DD)
            time_slot: One of the four fixed slots
            submitter_name: Name of the person who did the check
            entries: (unit_id, in_range) pairs or EntryInput records
            remarks: Optional free text
            submitted_by: Identity of the authenticated actor

        Returns:
            The stored report with resolved entries

        Raises:
            ValidationError: On a bad date, slot, name, actor or a duplicate unit
            ConstraintViolation: If an entry names a unit that does not exist
        """
        parsed_date = parse_calendar_date(report_date)
        slot = TimeSlot.parse(time_slot)
        name = require_text(submitter_name, "submitter_name")
        actor = require_text(submitted_by, "submitted_by", ACTOR_MAX_LENGTH)

        try:
            checked = _coerce_entries(entries)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Malformed entry: {e}", field="entries")

        seen: set[UUID] = set()
        for entry in checked:
            if entry.unit_id in seen:
                raise ValidationError(
                    f"Duplicate entry for unit {entry.unit_id}", field="entries"
                )
            seen.add(entry.unit_id)

        cleaned_remarks = remarks if remarks and remarks.strip() else None

        ctx_logger = get_context_logger(__name__, submitted_by=actor)
        ctx_logger.debug(
            f"Submitting report for {parsed_date} {slot.value} with {len(checked)} entries"
        )

        report = await self._store.insert_report(
            report_date=parsed_date,
            time_slot=slot,
            submitter_name=name,
            remarks=cleaned_remarks,
            submitted_by=actor,
            entries=checked,
        )

        log_report_submitted(
            report_id=str(report.id),
            report_date=report.report_date.isoformat(),
            time_slot=report.time_slot.value,
            entry_count=report.entry_count,
            attention_count=report.attention_count,
            submitted_by=actor,
        )
        return report

    async def default_entries(self) -> list[EntryInput]:
        """Every current unit marked in range, in hierarchy order.

        This is the checklist a new submission starts from; staff then
        flip the units that need attention.
        """
        units = await self._store.list_units()
        return [EntryInput(unit_id=unit.id, in_range=True) for unit in units]

    async def get_report(self, report_id: UUID | str) -> Report:
        return await self._store.get_report(report_id)

    async def delete_report(self, report_id: UUID | str) -> None:
        """Delete a report and its entries.

        Raises:
            NotFoundError: If the report does not exist
        """
        await self._store.delete_report(report_id)
        log_report_deleted(str(report_id))
