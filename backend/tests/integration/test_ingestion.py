"""Integration tests for report submission."""

from datetime import date
from uuid import uuid4

import pytest

from coldcheck.errors import ConstraintViolation, NotFoundError, ValidationError
from coldcheck.models import (
    ACTOR_MAX_LENGTH,
    NAME_MAX_LENGTH,
    UNKNOWN,
    EntryInput,
    TimeSlot,
)
from coldcheck.reports import export_reports, to_table


class TestSubmitReport:
    """Tests for ReportIngestionService.submit_report."""

    @pytest.mark.asyncio
    async def test_kitchen_check(self, ingestion, kitchen):
        """A 2am check with one fridge out of range."""
        report = await ingestion.submit_report(
            report_date="2024-01-01",
            time_slot="02am",
            submitter_name="Ali",
            entries=[
                (kitchen.units["Fridge 01"], True),
                (kitchen.units["Fridge 02"], False),
            ],
            submitted_by="user-1",
        )

        assert report.report_date == date(2024, 1, 1)
        assert report.time_slot is TimeSlot.TWO_AM
        assert report.time_label == "02:00 AM"
        assert report.in_range_count == 1
        assert report.attention_count == 1
        assert report.submitted_by == "user-1"
        assert report.remarks is None

        rows = to_table([report], include_header=False)
        assert [row[-1] for row in rows] == ["Yes", "No"]
        assert rows[0][:2] == ["2024-01-01", "02:00 AM"]

    @pytest.mark.asyncio
    async def test_partial_coverage_allowed(self, ingestion, kitchen):
        report = await ingestion.submit_report(
            "2024-01-01",
            "00:00",
            "Ali",
            [EntryInput(unit_id=kitchen.units["Chiller A"], in_range=False)],
            submitted_by="user-1",
        )
        assert report.entry_count == 1

    @pytest.mark.asyncio
    async def test_mapping_entries_and_trimmed_fields(self, ingestion, kitchen):
        report = await ingestion.submit_report(
            "2024-01-01",
            TimeSlot.SIX_AM,
            "  Siti ",
            [{"unit_id": str(kitchen.units["Fridge 01"]), "in_range": True}],
            remarks="   ",
            submitted_by="user-2",
        )
        assert report.submitter_name == "Siti"
        assert report.remarks is None

    @pytest.mark.asyncio
    async def test_duplicate_unit_rejected_without_write(self, ingestion, query_engine, kitchen):
        unit_id = kitchen.units["Fridge 01"]
        with pytest.raises(ValidationError) as exc_info:
            await ingestion.submit_report(
                "2024-01-01",
                "02:00",
                "Ali",
                [(unit_id, True), (unit_id, False)],
                submitted_by="user-1",
            )
        assert exc_info.value.field == "entries"

        result = await query_engine.query_day("2024-01-01")
        assert result.reports == []

    @pytest.mark.asyncio
    async def test_unknown_unit_rejected_without_write(self, ingestion, query_engine, kitchen):
        with pytest.raises(ConstraintViolation):
            await ingestion.submit_report(
                "2024-01-01",
                "02:00",
                "Ali",
                [(kitchen.units["Fridge 01"], True), (uuid4(), True)],
                submitted_by="user-1",
            )

        result = await query_engine.query_day("2024-01-01")
        assert result.reports == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"report_date": "2024-13-01"}, "report_date"),
            ({"time_slot": "03:00"}, "time_slot"),
            ({"submitter_name": "  "}, "submitter_name"),
            ({"submitted_by": ""}, "submitted_by"),
            ({"submitted_by": "u" * (ACTOR_MAX_LENGTH + 1)}, "submitted_by"),
            ({"submitter_name": "A" * (NAME_MAX_LENGTH + 1)}, "submitter_name"),
            ({"entries": [("not-a-uuid", True)]}, "entries"),
        ],
    )
    async def test_invalid_input(self, ingestion, kitchen, overrides, field):
        kwargs = {
            "report_date": "2024-01-01",
            "time_slot": "02:00",
            "submitter_name": "Ali",
            "entries": [(kitchen.units["Fridge 01"], True)],
            "submitted_by": "user-1",
        }
        kwargs.update(overrides)

        with pytest.raises(ValidationError) as exc_info:
            await ingestion.submit_report(**kwargs)
        assert exc_info.value.field == field

    @pytest.mark.asyncio
    async def test_default_entries_cover_every_unit(self, ingestion, kitchen):
        defaults = await ingestion.default_entries()

        assert [e.unit_id for e in defaults] == [
            kitchen.units["Fridge 01"],
            kitchen.units["Fridge 02"],
            kitchen.units["Chiller A"],
        ]
        assert all(e.in_range for e in defaults)

    @pytest.mark.asyncio
    async def test_history_survives_unit_removal(self, ingestion, hierarchy, kitchen):
        report = await ingestion.submit_report(
            "2024-01-01",
            "02am",
            "Ali",
            [(kitchen.units["Fridge 01"], True), (kitchen.units["Fridge 02"], False)],
            submitted_by="user-1",
        )
        await hierarchy.remove_unit(kitchen.units["Fridge 02"])

        fetched = await ingestion.get_report(report.id)

        assert [e.unit_name for e in fetched.entries] == ["Fridge 01", UNKNOWN]
        assert fetched.attention_count == 1
        csv_text = export_reports([fetched])
        assert "Unknown,Unknown,No" in csv_text

    @pytest.mark.asyncio
    async def test_history_survives_section_removal(self, ingestion, hierarchy, kitchen):
        report = await ingestion.submit_report(
            "2024-01-01",
            "02am",
            "Ali",
            [
                (kitchen.units["Fridge 01"], True),
                (kitchen.units["Fridge 02"], False),
                (kitchen.units["Chiller A"], True),
            ],
            submitted_by="user-1",
        )
        await hierarchy.remove_section(kitchen.sections["Kitchen"])

        fetched = await ingestion.get_report(report.id)

        resolved = {e.unit_id: (e.section_name, e.unit_name) for e in fetched.entries}
        assert resolved == {
            kitchen.units["Fridge 01"]: (UNKNOWN, UNKNOWN),
            kitchen.units["Fridge 02"]: (UNKNOWN, UNKNOWN),
            kitchen.units["Chiller A"]: ("Bar", "Chiller A"),
        }
        assert fetched.entry_count == 3
        assert fetched.attention_count == 1

    @pytest.mark.asyncio
    async def test_remarks_kept_as_submitted(self, ingestion, kitchen):
        remarks = "  Fridge 02 door left open\nMoved stock to Fridge 01  \n"
        report = await ingestion.submit_report(
            "2024-01-01", "04:00", "Ali", [], remarks=remarks, submitted_by="user-1"
        )

        fetched = await ingestion.get_report(report.id)
        assert report.remarks == remarks
        assert fetched.remarks == remarks

    @pytest.mark.asyncio
    async def test_delete_report(self, ingestion, kitchen):
        report = await ingestion.submit_report(
            "2024-01-01", "02:00", "Ali", [], submitted_by="user-1"
        )
        await ingestion.delete_report(report.id)

        with pytest.raises(NotFoundError):
            await ingestion.get_report(report.id)
        with pytest.raises(NotFoundError):
            await ingestion.delete_report(report.id)
