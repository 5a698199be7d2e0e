"""Range queries and compliance aggregation over stored reports.

Ranges are fetched one calendar day at a time. A day that fails to load
is recorded in the result and the remaining days are still fetched, so a
single bad day never hides the rest of the range.
"""

import time
from datetime import date, timedelta
from typing import Iterable, Iterator

from pydantic import BaseModel, Field, computed_field

from ..errors import PartialRangeFailure, ValidationError
from ..logging import log_range_day_failure, log_range_query
from ..models import Report, TimeSlot, parse_calendar_date
from ..store import EntityStore


class DayFailure(BaseModel):
    """A day whose reports could not be fetched."""

    report_date: date
    error: str


class ComplianceSummary(BaseModel):
    """Totals across a set of reports."""

    report_count: int = 0
    entry_count: int = 0
    in_range_count: int = 0
    attention_count: int = 0


class RangeQueryResult(BaseModel):
    """Reports of an inclusive date range, oldest day first."""

    start_date: date
    end_date: date
    reports: list[Report] = Field(default_factory=list)
    failed_dates: list[DayFailure] = Field(default_factory=list)

    @computed_field
    @property
    def is_partial(self) -> bool:
        return bool(self.failed_dates)

    def raise_for_failures(self) -> None:
        """Raise PartialRangeFailure if any day failed to load."""
        if self.failed_dates:
            raise PartialRangeFailure(self)


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Every calendar date from start to end, both inclusive."""
    for offset in range((end_date - start_date).days + 1):
        yield start_date + timedelta(days=offset)


def compliance_counts(report: Report) -> tuple[int, int]:
    """Return (in_range_count, attention_count) for a report."""
    in_range = sum(1 for entry in report.entries if entry.in_range)
    return in_range, len(report.entries) - in_range


def summarize(reports: Iterable[Report]) -> ComplianceSummary:
    summary = ComplianceSummary()
    for report in reports:
        in_range, attention = compliance_counts(report)
        summary.report_count += 1
        summary.entry_count += len(report.entries)
        summary.in_range_count += in_range
        summary.attention_count += attention
    return summary


def group_by_time_slot(reports: Iterable[Report]) -> dict[TimeSlot, list[Report]]:
    """Partition reports by time slot.

    The returned mapping iterates in the fixed slot order (00:00, 02:00,
    04:00, 06:00) and omits slots with no reports. Within a slot the input
    order is preserved.
    """
    buckets: dict[TimeSlot, list[Report]] = {}
    for report in reports:
        buckets.setdefault(report.time_slot, []).append(report)
    return {slot: buckets[slot] for slot in TimeSlot.ordered() if slot in buckets}


class ReportQueryEngine:
    """Retrieves reports over date ranges."""

    def __init__(self, store: EntityStore, max_days: int | None = None):
        self._store = store
        self._max_days = max_days

    async def query_range(
        self,
        start_date: date | str,
        end_date: date | str,
        strict: bool = False,
    ) -> RangeQueryResult:
        """Fetch every report dated within [start_date, end_date].

        Days come back in ascending order; within a day, newest report
        first.

        Args:
            start_date: First day (inclusive)
            end_date: Last day (inclusive)
            strict: Raise instead of returning a partial result

        Returns:
            RangeQueryResult with the reports of every day that loaded and
            the days that did not

        Raises:
            ValidationError: If a date is invalid, start_date > end_date or
                the range is longer than max_days
            PartialRangeFailure: If strict and any day failed to load
        """
        start = parse_calendar_date(start_date, field="start_date")
        end = parse_calendar_date(end_date, field="end_date")
        if start > end:
            raise ValidationError(
                f"start_date {start.isoformat()} is after end_date {end.isoformat()}",
                field="start_date",
            )
        span = (end - start).days + 1
        if self._max_days is not None and span > self._max_days:
            raise ValidationError(
                f"Range of {span} days exceeds the limit of {self._max_days}",
                field="end_date",
            )

        started = time.monotonic()
        result = RangeQueryResult(start_date=start, end_date=end)
        for day in iter_dates(start, end):
            try:
                reports = await self._store.list_reports_for_date(day)
            except Exception as e:
                # Recorded on the result; the caller decides what to do with it.
                log_range_day_failure(day.isoformat(), str(e))
                result.failed_dates.append(DayFailure(report_date=day, error=str(e)))
                continue
            result.reports.extend(reports)

        log_range_query(
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            report_count=len(result.reports),
            failed_days=len(result.failed_dates),
            duration_ms=(time.monotonic() - started) * 1000,
        )

        if strict:
            result.raise_for_failures()
        return result

    async def query_day(self, day: date | str, strict: bool = False) -> RangeQueryResult:
        return await self.query_range(day, day, strict=strict)
