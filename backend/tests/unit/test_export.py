"""Unit tests for report export.

Run with: pytest backend/tests/unit/test_export.py -v
"""

import csv
import io
import json
from datetime import date

import pytest

from coldcheck.models import UNKNOWN
from coldcheck.reports import (
    HEADER,
    export_filename,
    export_reports,
    to_csv,
    to_table,
)

from fixtures.reports import make_report


@pytest.fixture
def sample_report():
    return make_report(
        entries=[("Kitchen", "Fridge 01", True), ("Kitchen", "Fridge 02", False)],
    )


class TestToTable:
    """Tests for flattening reports into rows."""

    def test_header_first(self, sample_report):
        rows = to_table([sample_report])
        assert rows[0] == HEADER
        assert rows[0] == [
            "Date",
            "Time",
            "Submitted By",
            "Remarks",
            "Section",
            "Unit Name",
            "In Range",
        ]

    def test_one_row_per_entry(self, sample_report):
        rows = to_table([sample_report])
        assert rows[1:] == [
            ["2024-01-01", "02:00 AM", "Ali", "", "Kitchen", "Fridge 01", "Yes"],
            ["2024-01-01", "02:00 AM", "Ali", "", "Kitchen", "Fridge 02", "No"],
        ]

    def test_without_header(self, sample_report):
        assert len(to_table([sample_report], include_header=False)) == 2

    def test_report_without_entries_keeps_a_row(self):
        rows = to_table([make_report(remarks="Power cut")], include_header=False)
        assert rows == [["2024-01-01", "02:00 AM", "Ali", "Power cut", "", "", ""]]

    def test_blank_submitter_shows_unknown(self):
        rows = to_table([make_report(submitter="")], include_header=False)
        assert rows[0][2] == "Unknown"

    def test_deleted_unit_shows_unknown(self):
        report = make_report(entries=[(UNKNOWN, UNKNOWN, True)])
        rows = to_table([report], include_header=False)
        assert rows[0][4:] == ["Unknown", "Unknown", "Yes"]

    def test_empty_input(self):
        assert to_table([]) == [HEADER]


class TestToCsv:
    """Tests for CSV serialisation."""

    def test_plain_values_unquoted(self):
        assert to_csv([["a", "b"], ["1", "2"]]) == "a,b\n1,2\n"

    def test_special_characters_survive_a_reader(self):
        remarks = 'Door left open, "again"\nchecked twice'
        report = make_report(
            entries=[("Kitchen, back", "Fridge 01", False)], remarks=remarks
        )
        text = export_reports([report], format="csv")

        parsed = list(csv.reader(io.StringIO(text)))
        assert parsed[0] == HEADER
        assert parsed[1][3] == remarks
        assert parsed[1][4] == "Kitchen, back"
        assert len(parsed) == 2

    def test_quotes_are_doubled(self):
        assert to_csv([['say "hi"']]) == '"say ""hi"""\n'

    def test_custom_delimiter(self):
        assert to_csv([["a", "b"]], delimiter=";") == "a;b\n"


class TestExportFormats:
    def test_json_export(self, sample_report):
        data = json.loads(export_reports([sample_report], format="json"))
        assert data[0]["time_slot"] == "02:00"
        assert data[0]["in_range_count"] == 1
        assert data[0]["attention_count"] == 1
        assert [e["unit_name"] for e in data[0]["entries"]] == ["Fridge 01", "Fridge 02"]

    def test_unsupported_format(self, sample_report):
        with pytest.raises(ValueError):
            export_reports([sample_report], format="xlsx")


class TestExportFilename:
    def test_single_day(self):
        assert export_filename("2024-01-01") == "temperature-reports-2024-01-01.csv"

    def test_same_start_and_end(self):
        assert export_filename(date(2024, 1, 1), date(2024, 1, 1)) == (
            "temperature-reports-2024-01-01.csv"
        )

    def test_range(self):
        assert export_filename("2024-01-01", "2024-01-07", extension="json") == (
            "temperature-reports-2024-01-01-to-2024-01-07.json"
        )

    def test_without_extension(self):
        assert export_filename("2024-01-01", extension=None) == "temperature-reports-2024-01-01"
