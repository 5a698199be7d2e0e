"""Report API endpoints: submission, range browsing and export."""

from datetime import date
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel, Field

from ..formatting import render_remarks
from ..models import EntryInput, Report, ReportSubmission, TimeSlot
from ..reports import (
    ComplianceSummary,
    DayFailure,
    export_filename,
    export_reports,
    group_by_time_slot,
    summarize,
)
from .auth import CurrentUser
from .dependencies import IngestionService, QueryEngine

router = APIRouter(prefix="/reports")

MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "json": "application/json",
}


# =========================
# Response Models
# =========================


class SlotGroup(BaseModel):
    """Reports of one time slot within a range."""

    time_slot: TimeSlot
    label: str
    report_ids: list[UUID]
    summary: ComplianceSummary


class RangeReportResponse(BaseModel):
    """Reports of a date range, grouped by time slot."""

    start_date: date
    end_date: date
    reports: list[Report]
    groups: list[SlotGroup]
    summary: ComplianceSummary
    failed_dates: list[DayFailure] = Field(default_factory=list)
    is_partial: bool = False


class ReportDetail(Report):
    """A report with its remarks rendered for display."""

    remarks_html: str = ""


# =========================
# Submit / Delete
# =========================


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_report(
    body: ReportSubmission,
    service: IngestionService,
    user: CurrentUser,
) -> Report:
    """Submit a compliance report.

    The report is attributed to the authenticated user; ``submitter_name``
    is the name of whoever did the check.
    """
    return await service.submit_report(
        report_date=body.report_date,
        time_slot=body.time_slot,
        submitter_name=body.submitter_name,
        entries=body.entries,
        remarks=body.remarks,
        submitted_by=user.id,
    )


@router.get("/defaults")
async def get_default_entries(
    service: IngestionService, user: CurrentUser
) -> list[EntryInput]:
    """Checklist for a new submission: every current unit, in range."""
    return await service.default_entries()


# =========================
# Range Query
# =========================


@router.get("")
async def list_reports(
    engine: QueryEngine,
    user: CurrentUser,
    start: str = Query(..., description="First day, YYYY-MM-DD (inclusive)"),
    end: str | None = Query(None, description="Last day, YYYY-MM-DD (inclusive)"),
    strict: bool = Query(False, description="Fail if any day cannot be loaded"),
) -> RangeReportResponse:
    """Reports between two dates, grouped by time slot.

    Days that fail to load are listed in ``failed_dates`` unless ``strict``
    is set, in which case the request fails with 503.
    """
    result = await engine.query_range(start, end or start, strict=strict)

    groups = [
        SlotGroup(
            time_slot=slot,
            label=slot.label,
            report_ids=[r.id for r in slot_reports],
            summary=summarize(slot_reports),
        )
        for slot, slot_reports in group_by_time_slot(result.reports).items()
    ]

    return RangeReportResponse(
        start_date=result.start_date,
        end_date=result.end_date,
        reports=result.reports,
        groups=groups,
        summary=summarize(result.reports),
        failed_dates=result.failed_dates,
        is_partial=result.is_partial,
    )


@router.get("/export")
async def export_report_range(
    engine: QueryEngine,
    user: CurrentUser,
    start: str = Query(..., description="First day, YYYY-MM-DD (inclusive)"),
    end: str | None = Query(None, description="Last day, YYYY-MM-DD (inclusive)"),
    format: Literal["csv", "json"] = Query("csv", description="Export format"),
    strict: bool = Query(False, description="Fail if any day cannot be loaded"),
) -> Response:
    """Download the reports of a range as CSV or JSON."""
    result = await engine.query_range(start, end or start, strict=strict)

    headers = {
        "Content-Disposition": (
            f'attachment; filename="'
            f'{export_filename(result.start_date, result.end_date, format)}"'
        ),
    }
    if result.is_partial:
        headers["X-Failed-Dates"] = ",".join(
            f.report_date.isoformat() for f in result.failed_dates
        )

    return Response(
        content=export_reports(result.reports, format),
        media_type=MEDIA_TYPES[format],
        headers=headers,
    )


# =========================
# Single Report
# =========================


@router.get("/{report_id}")
async def get_report(
    report_id: UUID, service: IngestionService, user: CurrentUser
) -> ReportDetail:
    report = await service.get_report(report_id)
    return ReportDetail(
        **report.model_dump(exclude={"in_range_count", "attention_count", "entry_count"}),
        remarks_html=render_remarks(report.remarks),
    )


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_report(
    report_id: UUID, service: IngestionService, user: CurrentUser
) -> Response:
    """Delete a report and its entries. Resubmit to correct a report."""
    await service.delete_report(report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
