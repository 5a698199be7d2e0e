"""CLI commands for submitting, listing and exporting temperature reports."""

from pathlib import Path

import click

from ..config import get_settings
from ..reports import (
    ReportIngestionService,
    ReportQueryEngine,
    export_filename,
    export_reports,
    group_by_time_slot,
    summarize,
)
from ._common import echo_json, run_with_store


def _query_engine(store) -> ReportQueryEngine:
    return ReportQueryEngine(store, max_days=get_settings().max_range_days)


@click.group("report")
def report_group() -> None:
    """Submit and review temperature compliance reports."""
    pass


@report_group.command("submit")
@click.option("--date", "report_date", required=True, help="Report date (YYYY-MM-DD)")
@click.option("--slot", "time_slot", required=True, help="Time slot, e.g. 00:00 or 2am")
@click.option("--submitter", required=True, help="Name of the person who did the check")
@click.option("--remarks", default=None, help="Free-text remarks")
@click.option(
    "--attention",
    "attention",
    multiple=True,
    help="Unit ID that is out of range (repeatable)",
)
@click.option("--actor", default="cli", show_default=True, help="Submitting identity")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def submit_report(
    report_date: str,
    time_slot: str,
    submitter: str,
    remarks: str | None,
    attention: tuple[str, ...],
    actor: str,
    as_json: bool,
) -> None:
    """Submit a report covering every current unit.

    Units are recorded in range unless listed with --attention.
    """

    async def _submit(store) -> None:
        service = ReportIngestionService(store)
        flagged = set(attention)
        entries = []
        for entry in await service.default_entries():
            unit_id = str(entry.unit_id)
            entries.append((unit_id, unit_id not in flagged))
            flagged.discard(unit_id)
        # Unknown ids are passed through so the store rejects them.
        entries.extend((unit_id, False) for unit_id in sorted(flagged))

        report = await service.submit_report(
            report_date=report_date,
            time_slot=time_slot,
            submitter_name=submitter,
            entries=entries,
            remarks=remarks,
            submitted_by=actor,
        )
        if as_json:
            echo_json(report.model_dump(mode="json"))
            return
        click.echo(f"Submitted report: {report.id}")
        click.echo(f"  Date: {report.report_date.isoformat()} {report.time_label}")
        click.echo(f"  In range: {report.in_range_count}")
        click.echo(f"  Needs attention: {report.attention_count}")

    run_with_store(_submit)


@report_group.command("list")
@click.option("--start", "start_date", required=True, help="First day (YYYY-MM-DD)")
@click.option("--end", "end_date", default=None, help="Last day (defaults to --start)")
@click.option("--strict", is_flag=True, help="Fail if any day cannot be loaded")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_reports(start_date: str, end_date: str | None, strict: bool, as_json: bool) -> None:
    """List reports in a date range, grouped by time slot."""

    async def _list(store) -> None:
        result = await _query_engine(store).query_range(
            start_date, end_date or start_date, strict=strict
        )
        for failure in result.failed_dates:
            click.echo(
                f"Warning: could not load {failure.report_date.isoformat()}: {failure.error}",
                err=True,
            )

        if as_json:
            echo_json(result.model_dump(mode="json"))
            return

        summary = summarize(result.reports)
        click.echo(
            f"Reports {result.start_date.isoformat()} to {result.end_date.isoformat()}: "
            f"{summary.report_count} reports, {summary.in_range_count} in range, "
            f"{summary.attention_count} need attention"
        )
        for slot, reports in group_by_time_slot(result.reports).items():
            click.echo("")
            click.echo(f"{slot.label}:")
            for report in reports:
                click.echo(
                    f"  {report.report_date.isoformat()} {report.submitter_name} "
                    f"({report.id}) in range: {report.in_range_count}, "
                    f"attention: {report.attention_count}"
                )
                for entry in report.entries:
                    if not entry.in_range:
                        click.echo(f"    ! {entry.section_name} / {entry.unit_name}")

    run_with_store(_list)


@report_group.command("show")
@click.argument("report_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show_report(report_id: str, as_json: bool) -> None:
    """Show one report with its entries."""

    async def _show(store) -> None:
        report = await ReportIngestionService(store).get_report(report_id)
        if as_json:
            echo_json(report.model_dump(mode="json"))
            return
        click.echo(f"Report: {report.id}")
        click.echo(f"  Date: {report.report_date.isoformat()} {report.time_label}")
        click.echo(f"  Submitted by: {report.submitter_name}")
        if report.remarks:
            click.echo(f"  Remarks: {report.remarks}")
        for entry in report.entries:
            status = "Yes" if entry.in_range else "No"
            click.echo(f"    {entry.section_name} / {entry.unit_name}: {status}")

    run_with_store(_show)


@report_group.command("export")
@click.option("--start", "start_date", required=True, help="First day (YYYY-MM-DD)")
@click.option("--end", "end_date", default=None, help="Last day (defaults to --start)")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["csv", "json"]),
    default="csv",
    show_default=True,
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (defaults to the standard export name)",
)
def export_command(
    start_date: str, end_date: str | None, fmt: str, output: Path | None
) -> None:
    """Export reports in a date range to CSV or JSON."""

    async def _export(store) -> None:
        result = await _query_engine(store).query_range(start_date, end_date or start_date)
        for failure in result.failed_dates:
            click.echo(
                f"Warning: could not load {failure.report_date.isoformat()}: {failure.error}",
                err=True,
            )
        content = export_reports(result.reports, format=fmt)
        target = output or Path(
            export_filename(result.start_date, result.end_date, extension=fmt)
        )
        target.write_text(content, encoding="utf-8")
        click.echo(f"Exported {len(result.reports)} reports to {target}")

    run_with_store(_export)


@report_group.command("delete")
@click.argument("report_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
def delete_report(report_id: str, yes: bool) -> None:
    """Delete a report and its entries."""
    if not yes:
        click.confirm("Delete this report?", abort=True)

    async def _delete(store) -> None:
        await ReportIngestionService(store).delete_report(report_id)
        click.echo(f"Deleted report: {report_id}")

    run_with_store(_delete)
