"""Unit tests for time slots, calendar dates and text checks."""

from datetime import date, datetime

import pytest

from coldcheck.errors import ValidationError
from coldcheck.models import TimeSlot, parse_calendar_date, require_text


class TestTimeSlotParsing:
    """Tests for TimeSlot.parse."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("00:00", TimeSlot.MIDNIGHT),
            ("02:00", TimeSlot.TWO_AM),
            ("04:00", TimeSlot.FOUR_AM),
            ("06:00", TimeSlot.SIX_AM),
        ],
    )
    def test_canonical_values(self, value, expected):
        assert TimeSlot.parse(value) is expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("12am", TimeSlot.MIDNIGHT),
            ("2am", TimeSlot.TWO_AM),
            ("02am", TimeSlot.TWO_AM),
            ("4AM", TimeSlot.FOUR_AM),
            (" 06am ", TimeSlot.SIX_AM),
            ("12:00 AM", TimeSlot.MIDNIGHT),
            ("02:00 AM", TimeSlot.TWO_AM),
        ],
    )
    def test_legacy_labels(self, value, expected):
        assert TimeSlot.parse(value) is expected

    def test_passes_slot_through(self):
        assert TimeSlot.parse(TimeSlot.FOUR_AM) is TimeSlot.FOUR_AM

    @pytest.mark.parametrize("value", ["03:00", "8am", "", "midnight", None, 2])
    def test_rejects_other_values(self, value):
        with pytest.raises(ValidationError) as exc_info:
            TimeSlot.parse(value)
        assert exc_info.value.field == "time_slot"

    def test_labels(self):
        assert [slot.label for slot in TimeSlot.ordered()] == [
            "12:00 AM",
            "02:00 AM",
            "04:00 AM",
            "06:00 AM",
        ]


class TestCalendarDates:
    """Tests for parse_calendar_date."""

    def test_parses_iso_string(self):
        assert parse_calendar_date("2024-01-01") == date(2024, 1, 1)

    def test_accepts_date_and_datetime(self):
        assert parse_calendar_date(date(2024, 2, 29)) == date(2024, 2, 29)
        assert parse_calendar_date(datetime(2024, 3, 1, 23, 59)) == date(2024, 3, 1)

    @pytest.mark.parametrize(
        "value", ["2024-02-30", "2023-02-29", "2024-1-1", "01/01/2024", "", "2024-01-01T00:00"]
    )
    def test_rejects_invalid_dates(self, value):
        with pytest.raises(ValidationError):
            parse_calendar_date(value)

    def test_error_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_calendar_date("nope", field="start_date")
        assert exc_info.value.field == "start_date"


class TestRequireText:
    def test_trims(self):
        assert require_text("  Kitchen ", "name") == "Kitchen"

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_rejects_blank(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_text(value, "name")
        assert exc_info.value.field == "name"
