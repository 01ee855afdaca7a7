"""Command-line interface for planview."""

from __future__ import annotations

import csv
import io
import json
from datetime import date, datetime, time, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from .config import PlanviewConfig
from .engine import GanttService
from .exceptions import PlanviewError
from .loader import discover_config, load_snapshot
from .logger import setup_logger
from .mermaid import render_mermaid
from .models import ResourceAllocation, ScheduleData
from .serializers import allocation_to_dict, schedule_to_dict
from .store import InMemoryTaskStore

app = typer.Typer(
    name="planview",
    help="Gantt timelines, critical paths and workloads for project snapshots",
    add_completion=False,
)


class ScheduleFormat(str, Enum):
    """Output formats for schedule views."""

    JSON = "json"
    MERMAID = "mermaid"


class AllocationFormat(str, Enum):
    """Output formats for the resource allocation view."""

    JSON = "json"
    CSV = "csv"


SnapshotArgument = Annotated[Path, typer.Argument(help="Path to the snapshot YAML/JSON file")]
OutputOption = Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")]
CurrentDateOption = Annotated[
    str | None,
    typer.Option(
        "--current-date",
        help="Reference date (YYYY-MM-DD) for empty timelines and the today marker",
    ),
]


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=warnings only (default), 1=results, 2=inputs, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: planview_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for planview commands."""
    setup_logger(verbose)
    ctx.obj = config


def _parse_current_date(current_date: str | None) -> datetime | None:
    if current_date is None:
        return None
    try:
        parsed = date.fromisoformat(current_date)
    except ValueError:
        typer.echo(f"Error: Invalid date format '{current_date}'. Use YYYY-MM-DD.", err=True)
        raise typer.Exit(1) from None
    return datetime.combine(parsed, time.min, tzinfo=timezone.utc)


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


def _build_service(
    ctx: typer.Context, snapshot: Path, now: datetime | None
) -> tuple[GanttService, PlanviewConfig]:
    """Load config and snapshot and wire up the service."""
    try:
        config = discover_config(snapshot, ctx.obj)
        store = InMemoryTaskStore(load_snapshot(snapshot))
    except (PlanviewError, FileNotFoundError) as e:
        raise _fail(e) from e
    return GanttService(store, config=config, now=now), config


def _write_output(content: str, output: Path | None, *, mermaid: bool = False) -> None:
    """Print content or write it to a file."""
    if output is None:
        typer.echo(content)
        return
    # Mermaid in a .md file goes inside a code fence
    if mermaid and output.suffix.lower() == ".md":
        content = f"```mermaid\n{content}\n```"
    output.write_text(content + "\n", encoding="utf-8")
    typer.echo(f"Output written to {output}")


def _render_schedule(
    data: ScheduleData,
    output_format: ScheduleFormat,
    config: PlanviewConfig,
    now: datetime | None,
    title: str | None,
) -> str:
    if output_format == ScheduleFormat.MERMAID:
        return render_mermaid(
            data,
            title=title or config.gantt.title,
            mark_critical=config.gantt.mark_critical,
            today=now.date() if now is not None else None,
        )
    return json.dumps(schedule_to_dict(data), indent=2)


@app.command()
def project(  # noqa: PLR0913 - CLI command needs multiple options
    ctx: typer.Context,
    snapshot: SnapshotArgument,
    project_id: Annotated[str, typer.Argument(help="Project id")],
    *,
    output_format: Annotated[
        ScheduleFormat, typer.Option("--format", "-f", help="Output format")
    ] = ScheduleFormat.JSON,
    title: Annotated[str | None, typer.Option("--title", help="Mermaid chart title")] = None,
    output: OutputOption = None,
    current_date: CurrentDateOption = None,
) -> None:
    """Show a project's nested tasks, timeline, critical path and milestones."""
    now = _parse_current_date(current_date)
    service, config = _build_service(ctx, snapshot, now)
    try:
        data = service.get_project_schedule(project_id)
    except PlanviewError as e:
        raise _fail(e) from e

    content = _render_schedule(data, output_format, config, now, title)
    _write_output(content, output, mermaid=output_format == ScheduleFormat.MERMAID)


@app.command()
def sprint(  # noqa: PLR0913 - CLI command needs multiple options
    ctx: typer.Context,
    snapshot: SnapshotArgument,
    sprint_id: Annotated[str, typer.Argument(help="Sprint id")],
    *,
    output_format: Annotated[
        ScheduleFormat, typer.Option("--format", "-f", help="Output format")
    ] = ScheduleFormat.JSON,
    title: Annotated[str | None, typer.Option("--title", help="Mermaid chart title")] = None,
    output: OutputOption = None,
    current_date: CurrentDateOption = None,
) -> None:
    """Show a sprint's tasks, timeline and start/end milestones."""
    now = _parse_current_date(current_date)
    service, config = _build_service(ctx, snapshot, now)
    try:
        data = service.get_sprint_schedule(sprint_id)
    except PlanviewError as e:
        raise _fail(e) from e

    content = _render_schedule(data, output_format, config, now, title)
    _write_output(content, output, mermaid=output_format == ScheduleFormat.MERMAID)


def _allocation_csv(allocations: list[ResourceAllocation]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(
        ["assignee_id", "assignee_name", "task_id", "task_title", "start", "end", "story_points"]
    )
    for allocation in allocations:
        for task in allocation.tasks:
            writer.writerow(
                [
                    allocation.assignee.id,
                    allocation.assignee.name,
                    task.id,
                    task.title,
                    task.start.isoformat() if task.start else "",
                    task.end.isoformat() if task.end else "",
                    task.story_points,
                ]
            )
    return buffer.getvalue().rstrip("\n")


@app.command()
def resources(
    ctx: typer.Context,
    snapshot: SnapshotArgument,
    project_id: Annotated[str, typer.Argument(help="Project id")],
    *,
    output_format: Annotated[
        AllocationFormat, typer.Option("--format", "-f", help="Output format")
    ] = AllocationFormat.JSON,
    output: OutputOption = None,
) -> None:
    """Show per-assignee workload for a project's dated, assigned tasks."""
    service, _ = _build_service(ctx, snapshot, None)
    allocations = service.get_resource_allocation(project_id)

    if output_format == AllocationFormat.CSV:
        content = _allocation_csv(allocations)
    else:
        content = json.dumps(allocation_to_dict(allocations), indent=2)
    _write_output(content, output)


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
