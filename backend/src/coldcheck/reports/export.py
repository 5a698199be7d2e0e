"""Report export.

Flattens reports into one row per entry and serialises them as CSV (or
JSON). The CSV output uses standard quoting so it opens in spreadsheet
tools and parses back with any compliant reader.
"""

import csv
import io
import json
from datetime import date
from typing import Iterable

from ..models import Report, parse_calendar_date

HEADER = [
    "Date",
    "Time",
    "Submitted By",
    "Remarks",
    "Section",
    "Unit Name",
    "In Range",
]

FILENAME_PREFIX = "temperature-reports"


def to_table(reports: Iterable[Report], include_header: bool = True) -> list[list[str]]:
    """Flatten reports into rows.

    One row per entry, with the report's date, time, submitter and remarks
    repeated on each. A report without entries still gets one row, with
    the entry columns left empty.
    """
    rows: list[list[str]] = [list(HEADER)] if include_header else []

    for report in reports:
        base = [
            report.report_date.isoformat(),
            report.time_slot.label,
            report.submitter_name or "Unknown",
            report.remarks or "",
        ]
        if not report.entries:
            rows.append(base + ["", "", ""])
            continue
        for entry in report.entries:
            rows.append(
                base
                + [
                    entry.section_name,
                    entry.unit_name,
                    "Yes" if entry.in_range else "No",
                ]
            )

    return rows


def to_csv(rows: Iterable[Iterable[str]], delimiter: str = ",") -> str:
    """Serialise rows as CSV text."""
    buf = io.StringIO()
    writer = csv.writer(
        buf,
        delimiter=delimiter,
        quotechar='"',
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerows(rows)
    return buf.getvalue()


def export_json(reports: Iterable[Report], pretty: bool = True) -> str:
    data = [report.model_dump(mode="json") for report in reports]
    if pretty:
        return json.dumps(data, indent=2, default=str)
    return json.dumps(data, default=str)


def export_reports(reports: Iterable[Report], format: str = "csv") -> str:
    """Export reports in the specified format.

    Args:
        reports: Reports to export
        format: Export format ('csv' or 'json')

    Returns:
        Formatted string

    Raises:
        ValueError: If format is not supported
    """
    if format == "csv":
        return to_csv(to_table(reports))
    elif format == "json":
        return export_json(reports)
    else:
        raise ValueError(f"Unsupported export format: {format}")


def export_filename(
    start_date: date | str,
    end_date: date | str | None = None,
    extension: str | None = "csv",
) -> str:
    """Download name for an export.

    ``temperature-reports-2024-01-01`` for one day,
    ``temperature-reports-2024-01-01-to-2024-01-07`` for a range.
    """
    start = parse_calendar_date(start_date, field="start_date")
    end = parse_calendar_date(end_date, field="end_date") if end_date is not None else start

    name = f"{FILENAME_PREFIX}-{start.isoformat()}"
    if end != start:
        name += f"-to-{end.isoformat()}"
    if extension:
        name += f".{extension}"
    return name
