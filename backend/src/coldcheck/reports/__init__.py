"""Compliance reports: ingestion, range aggregation and export."""

from .aggregation import (
    ComplianceSummary,
    DayFailure,
    RangeQueryResult,
    ReportQueryEngine,
    compliance_counts,
    group_by_time_slot,
    iter_dates,
    summarize,
)
from .export import (
    HEADER,
    export_filename,
    export_json,
    export_reports,
    to_csv,
    to_table,
)
from .ingestion import ReportIngestionService

__all__ = [
    "ComplianceSummary",
    "DayFailure",
    "HEADER",
    "RangeQueryResult",
    "ReportIngestionService",
    "ReportQueryEngine",
    "compliance_counts",
    "export_filename",
    "export_json",
    "export_reports",
    "group_by_time_slot",
    "iter_dates",
    "summarize",
    "to_csv",
    "to_table",
]
