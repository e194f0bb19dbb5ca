"""CLI for the Zenith schedule planner.

Command line front end over the schedule service: every edit goes through
the same reconciliation engine, and the state file is rewritten only when
a command is applied.
"""

import json
from pathlib import Path
from typing import TypeVar

import typer
from loguru import logger
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from zenith.config.settings import settings
from zenith.core.errors import StateStoreError
from zenith.core.logger import setup_logger
from zenith.metrics.types import MetricsConfig
from zenith.schedule.commands import (
    AddActivity,
    AddTimeBlock,
    ClearSchedule,
    ImportSchedule,
    RemoveActivity,
    RemoveTimeBlock,
    ScheduleCommand,
    SettingsPatch,
    StatePatch,
    UpdateActivity,
    UpdateSettings,
    UpdateTimeBlock,
)
from zenith.schedule.service import ScheduleService
from zenith.schedule.types import Activity, ScheduleState, StudyTechniques, TimeBlock
from zenith.storage.json_store import JsonStateStore, dump_state

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="zenith",
    help="Zenith - weekly schedule and activity planner",
    add_completion=False,
)
blocks_app = typer.Typer(help="Manage fixed time blocks")
activities_app = typer.Typer(help="Manage activities")
settings_app = typer.Typer(help="Show or change study settings")
app.add_typer(blocks_app, name="blocks")
app.add_typer(activities_app, name="activities")
app.add_typer(settings_app, name="settings")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _setup_logging(debug: bool = False) -> None:
    """Set up logging with console and optional file output.

    Args:
        debug: Enable debug logging level
    """
    log_level = "DEBUG" if debug else settings.log_level
    setup_logger(level=log_level, log_file=settings.log_file or None)


def _service(ctx: typer.Context) -> ScheduleService:
    return ctx.obj


def _build(model: type[ModelT], data: dict) -> ModelT:
    """Validate CLI input into a model, exiting with the validation messages on failure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]Error:[/red] {location}: {error['msg']}")
        raise typer.Exit(1) from e


def _execute(ctx: typer.Context, command: ScheduleCommand) -> ScheduleState:
    """Run a command through the service, exiting non-zero when it is rejected."""
    try:
        result = _service(ctx).execute(command)
    except StateStoreError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e

    if not result.applied:
        for error in result.errors:
            console.print(f"[red]Error:[/red] {error}")
        raise typer.Exit(1)
    return result.state


def _set_fields(**fields) -> dict:
    return {name: value for name, value in fields.items() if value is not None}


@app.callback()
def main(
    ctx: typer.Context,
    state_file: str | None = typer.Option(None, "--state-file", "-f", help="Schedule JSON file (default: ZENITH_STATE_FILE)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Zenith - weekly schedule and activity planner."""
    _setup_logging(debug)
    store = JsonStateStore(state_file or settings.state_file)
    ctx.obj = ScheduleService(store, MetricsConfig.from_settings(settings))
    logger.debug("Using state file", path=str(store.path))


# ---------------------------------------------------------------------------
# Time blocks
# ---------------------------------------------------------------------------


@blocks_app.command("add")
def add_block(
    ctx: typer.Context,
    day: str = typer.Option(..., "--day", "-d", help="Weekday (lunes ... domingo)"),
    start: str = typer.Option(..., "--start", "-s", help="Start time HH:MM"),
    end: str = typer.Option(..., "--end", "-e", help="End time HH:MM"),
    title: str = typer.Option(..., "--title", "-t", help="Block title"),
    block_type: str = typer.Option("occupied", "--type", help="occupied or free"),
    activity_type: str | None = typer.Option(None, "--activity-type", "-a", help="Category tag"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    location: str | None = typer.Option(None, "--location", help="Location"),
) -> None:
    """Add a fixed time block."""
    block = _build(
        TimeBlock,
        _set_fields(
            day=day,
            start_time=start,
            end_time=end,
            title=title,
            type=block_type,
            activity_type=activity_type,
            description=description,
            location=location,
        ),
    )
    state = _execute(ctx, AddTimeBlock(block=block))
    console.print(f"[green]Added block {state.time_blocks[-1].id}[/green]")


@blocks_app.command("update")
def update_block(
    ctx: typer.Context,
    block_id: str = typer.Argument(..., help="Block ID"),
    day: str | None = typer.Option(None, "--day", "-d", help="Weekday"),
    start: str | None = typer.Option(None, "--start", "-s", help="Start time HH:MM"),
    end: str | None = typer.Option(None, "--end", "-e", help="End time HH:MM"),
    title: str | None = typer.Option(None, "--title", "-t", help="Block title"),
    activity_type: str | None = typer.Option(None, "--activity-type", "-a", help="Category tag"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    location: str | None = typer.Option(None, "--location", help="Location"),
) -> None:
    """Edit a time block. Linked activities follow the change."""
    current = _service(ctx).state().find_block(block_id)
    if current is None:
        console.print(f"[red]Error:[/red] Time block {block_id} not found")
        raise typer.Exit(1)

    data = current.model_dump()
    data.update(
        _set_fields(
            day=day,
            start_time=start,
            end_time=end,
            title=title,
            activity_type=activity_type,
            description=description,
            location=location,
        )
    )
    _execute(ctx, UpdateTimeBlock(block=_build(TimeBlock, data)))
    console.print(f"[green]Updated block {block_id}[/green]")


@blocks_app.command("remove")
def remove_block(ctx: typer.Context, block_id: str = typer.Argument(..., help="Block ID")) -> None:
    """Remove a time block. A linked activity is kept but unlinked."""
    _execute(ctx, RemoveTimeBlock(block_id=block_id))
    console.print(f"[green]Removed block {block_id}[/green]")


@blocks_app.command("list")
def list_blocks(ctx: typer.Context) -> None:
    """List time blocks."""
    state = _service(ctx).state()
    if not state.time_blocks:
        console.print("[yellow]No time blocks yet[/yellow]")
        return

    table = Table(title="Time blocks")
    for column in ("ID", "Day", "Time", "Type", "Title", "Category"):
        table.add_column(column)
    for block in state.time_blocks:
        table.add_row(
            block.id or "",
            block.day,
            f"{block.start_time}-{block.end_time}",
            block.type,
            block.title,
            block.activity_type or "",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------


@activities_app.command("add")
def add_activity(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Activity name"),
    activity_type: str = typer.Option(..., "--type", "-t", help="Category"),
    duration: float | None = typer.Option(None, "--duration", help="Hours per occurrence"),
    priority: str = typer.Option("medium", "--priority", "-p", help="high, medium or low"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    start_hour: int | None = typer.Option(None, "--start-hour", help="Preferred start hour"),
    end_hour: int | None = typer.Option(None, "--end-hour", help="Preferred end hour"),
    days: list[str] | None = typer.Option(None, "--day", "-d", help="Preferred weekday (repeatable)"),
) -> None:
    """Add an activity. With a preferred time and day it gets its own time block."""
    data = _set_fields(
        name=name,
        type=activity_type,
        duration=duration,
        priority=priority,
        description=description,
        preferred_days=days or None,
    )
    if start_hour is not None and end_hour is not None:
        data["preferred_time"] = {"start_hour": start_hour, "end_hour": end_hour}

    state = _execute(ctx, AddActivity(activity=_build(Activity, data)))
    added = state.activities[-1]
    console.print(f"[green]Added activity {added.id}[/green]")
    if added.time_block_id:
        console.print(f"[dim]Linked time block {added.time_block_id}[/dim]")


@activities_app.command("update")
def update_activity(
    ctx: typer.Context,
    activity_id: str = typer.Argument(..., help="Activity ID"),
    name: str | None = typer.Option(None, "--name", "-n", help="Activity name"),
    activity_type: str | None = typer.Option(None, "--type", "-t", help="Category"),
    duration: float | None = typer.Option(None, "--duration", help="Hours per occurrence"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="high, medium or low"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    start_hour: int | None = typer.Option(None, "--start-hour", help="Preferred start hour"),
    end_hour: int | None = typer.Option(None, "--end-hour", help="Preferred end hour"),
    days: list[str] | None = typer.Option(None, "--day", "-d", help="Preferred weekday (repeatable)"),
    unschedule: bool = typer.Option(False, "--unschedule", help="Drop the preferred time and days"),
) -> None:
    """Edit an activity. Its linked time block follows the change."""
    current = _service(ctx).state().find_activity(activity_id)
    if current is None:
        console.print(f"[red]Error:[/red] Activity {activity_id} not found")
        raise typer.Exit(1)

    data = current.model_dump()
    data.update(
        _set_fields(
            name=name,
            type=activity_type,
            duration=duration,
            priority=priority,
            description=description,
            preferred_days=days or None,
        )
    )
    if unschedule:
        data["preferred_time"] = None
        data["preferred_days"] = None
    elif start_hour is not None or end_hour is not None:
        preferred = data.get("preferred_time") or {}
        data["preferred_time"] = {
            "start_hour": start_hour if start_hour is not None else preferred.get("start_hour"),
            "end_hour": end_hour if end_hour is not None else preferred.get("end_hour"),
        }

    _execute(ctx, UpdateActivity(activity=_build(Activity, data)))
    console.print(f"[green]Updated activity {activity_id}[/green]")


@activities_app.command("remove")
def remove_activity(ctx: typer.Context, activity_id: str = typer.Argument(..., help="Activity ID")) -> None:
    """Remove an activity together with the time block it owns."""
    _execute(ctx, RemoveActivity(activity_id=activity_id))
    console.print(f"[green]Removed activity {activity_id}[/green]")


@activities_app.command("list")
def list_activities(ctx: typer.Context) -> None:
    """List activities."""
    state = _service(ctx).state()
    if not state.activities:
        console.print("[yellow]No activities yet[/yellow]")
        return

    table = Table(title="Activities")
    for column in ("ID", "Name", "Type", "Hours", "Priority", "Preferred", "Block"):
        table.add_column(column)
    for activity in state.activities:
        preferred = ""
        if activity.preferred_time is not None:
            preferred = f"{activity.preferred_time.start_hour}-{activity.preferred_time.end_hour}h"
        if activity.preferred_days:
            preferred = f"{preferred} {', '.join(activity.preferred_days)}".strip()
        table.add_row(
            activity.id or "",
            activity.name,
            activity.type,
            f"{activity.duration:g}" if activity.duration is not None else "",
            activity.priority,
            preferred,
            activity.time_block_id or "",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@settings_app.command("show")
def show_settings(ctx: typer.Context) -> None:
    """Show study settings."""
    console.print_json(_service(ctx).state().settings.model_dump_json(by_alias=True))


@settings_app.command("set")
def set_settings(
    ctx: typer.Context,
    minimum_sleep_hours: float | None = typer.Option(None, "--min-sleep", help="Minimum sleep hours"),
    break_duration: int | None = typer.Option(None, "--break", help="Break length in minutes"),
    maximum_study_session: int | None = typer.Option(None, "--max-session", help="Longest study session in minutes"),
    pomodoro: bool | None = typer.Option(None, "--pomodoro/--no-pomodoro", help="Pomodoro technique"),
    feynman: bool | None = typer.Option(None, "--feynman/--no-feynman", help="Feynman technique"),
    spaced: bool | None = typer.Option(None, "--spaced/--no-spaced", help="Spaced repetition"),
    concept_mapping: bool | None = typer.Option(None, "--concept-mapping/--no-concept-mapping", help="Concept mapping"),
) -> None:
    """Change study settings. Unset options keep their current value."""
    data = _set_fields(
        minimum_sleep_hours=minimum_sleep_hours,
        break_duration=break_duration,
        maximum_study_session=maximum_study_session,
    )
    technique_flags = _set_fields(pomodoro=pomodoro, feynman=feynman, spaced=spaced, concept_mapping=concept_mapping)
    if technique_flags:
        current = _service(ctx).state().settings.study_techniques
        data["study_techniques"] = _build(StudyTechniques, {**current.model_dump(), **technique_flags})

    if not data:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    _execute(ctx, UpdateSettings(settings=_build(SettingsPatch, data)))
    console.print("[green]Settings updated[/green]")


# ---------------------------------------------------------------------------
# Reports and whole-state commands
# ---------------------------------------------------------------------------


@app.command()
def metrics(ctx: typer.Context) -> None:
    """Show occupied and free time, productivity and hours per category."""
    report = _service(ctx).metrics()

    summary = (
        f"Occupied: {report.total_occupied:.1f}h ({report.occupancy_percent}% of {report.available_hours:g}h)\n"
        f"Free: {report.total_free:.1f}h\n"
        f"Productivity: {report.productivity}% ({report.productivity_level})\n"
        f"Balance: {report.balance}"
    )
    console.print(Panel(summary, title="Week", border_style="cyan"))

    table = Table(title="Hours by category")
    table.add_column("Category")
    table.add_column("Hours", justify="right")
    for category, hours in report.duration_by_type.items():
        if hours:
            table.add_row(category, f"{hours:.1f}")
    console.print(table)


@app.command()
def recommend(ctx: typer.Context) -> None:
    """Show recommendations for the current week."""
    titles = {
        "overview": "Overview",
        "study": "Study techniques",
        "time_management": "Time management",
        "study_session": "Study sessions",
    }
    recommendations = _service(ctx).recommendations()
    for category, title in titles.items():
        lines = [r for r in recommendations if r.category == category]
        if not lines:
            continue
        body = "\n".join(f"{'!' if r.severity == 'warning' else '-'} {r.message}" for r in lines)
        console.print(Panel(body, title=title, border_style="magenta"))


@app.command()
def clear(
    ctx: typer.Context,
    confirm: bool = typer.Option(False, "--confirm", help="Confirm deletion (required for safety)"),
) -> None:
    """Remove every time block and activity, keeping settings."""
    if not confirm:
        console.print("[red]Error:[/red] --confirm flag is required for safety", style="bold red")
        console.print("Usage: clear --confirm")
        raise typer.Exit(1)
    _execute(ctx, ClearSchedule())
    console.print("[green]Schedule cleared[/green]")


@app.command("export")
def export_state(
    ctx: typer.Context,
    output_file: str | None = typer.Option(None, "--output", "-o", help="Write output to file"),
) -> None:
    """Export the schedule as JSON."""
    text = dump_state(_service(ctx).state())
    if output_file:
        Path(output_file).write_text(text, encoding="utf-8")
        console.print(f"[green]Exported to {output_file}[/green]")
    else:
        typer.echo(text)


@app.command("import")
def import_state(
    ctx: typer.Context,
    input_file: str = typer.Argument(..., help="JSON snapshot (full or partial schedule)"),
) -> None:
    """Merge a JSON snapshot over the current schedule."""
    try:
        data = json.loads(Path(input_file).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error:[/red] Could not read {input_file}: {e}")
        raise typer.Exit(1) from e

    state = _execute(ctx, ImportSchedule(snapshot=_build(StatePatch, data)))
    console.print(
        f"[green]Imported: {len(state.time_blocks)} time blocks, {len(state.activities)} activities[/green]"
    )


if __name__ == "__main__":
    app()
