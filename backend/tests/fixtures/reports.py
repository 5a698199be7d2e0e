"""Report builders for tests that do not need a database."""

from datetime import date, datetime
from uuid import uuid4

from coldcheck.models import UNKNOWN, Report, ResolvedEntry, TimeSlot


def make_report(
    entries=(),
    remarks=None,
    submitter="Ali",
    slot=TimeSlot.TWO_AM,
    report_date=date(2024, 1, 1),
):
    """Build a resolved report from (section_name, unit_name, in_range) triples."""
    report_id = uuid4()
    created_at = datetime(report_date.year, report_date.month, report_date.day, 2, 5)
    resolved = [
        ResolvedEntry(
            id=uuid4(),
            report_id=report_id,
            unit_id=uuid4(),
            in_range=in_range,
            position=position,
            created_at=created_at,
            unit_name=unit_name,
            section_id=uuid4() if section_name != UNKNOWN else None,
            section_name=section_name,
        )
        for position, (section_name, unit_name, in_range) in enumerate(entries)
    ]
    return Report(
        id=report_id,
        report_date=report_date,
        time_slot=slot,
        submitter_name=submitter,
        remarks=remarks,
        submitted_by="user-1",
        created_at=created_at,
        entries=resolved,
    )
