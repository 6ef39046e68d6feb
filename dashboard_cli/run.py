# -*- coding: utf-8 -*-
import logging
import typing as t
from datetime import tzinfo

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from planner_api.client import PlannerApiClient, PlannerApiError
from planner_server.classifier import build_dashboard, status_counts
from planner_server.clock import resolve_now
from planner_server.models import STATUSES, Dashboard, Event
from planner_server.records import classes_from_records, events_from_records
from planner_server.server import (
    EMPTY_SECTION_MESSAGES,
    STATUS_LABELS,
    TYPE_LABELS,
    format_class_time,
    format_datetime,
)
from services.shared.convert import dashboard_to_model
from dashboard_cli.utils import err_console, load_records


console = Console()
logger = logging.getLogger("planner")

STATUS_STYLES = {
    "today": "bold yellow",
    "ongoing": "bold cyan",
    "coming": "bold green",
    "overdue": "bold red",
}


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def create_week_panel(dashboard: Dashboard) -> Panel:
    """Create the 'this week at a glance' panel."""
    stats_text = Text()
    stats_text.append("This week: ", style="white")
    stats_text.append(f"{dashboard.week.total}", style="bold green")
    for event_type, count in dashboard.week.by_type.items():
        stats_text.append(f"   {TYPE_LABELS.get(event_type, event_type)}: ", style="white")
        stats_text.append(f"{count}", style="bold green")
    return Panel(stats_text, title="📊 This week at a glance", border_style="green")


def create_classes_table(dashboard: Dashboard) -> Table:
    """Create a table of today's classes."""
    table = Table(title="🏫 Today's Classes", show_header=True, header_style="bold magenta")
    table.add_column("Course", style="white")
    table.add_column("Location", style="dim")
    table.add_column("Time", style="yellow")
    for cls in dashboard.todays_classes:
        table.add_row(
            cls.course_name,
            cls.location or "—",
            f"{format_class_time(cls.class_start_time[:5])} - {format_class_time(cls.class_end_time[:5])}",
        )
    return table


def create_events_table(title: str, events: list[Event], style: str, tz: t.Optional[tzinfo] = None) -> Table:
    """Create a table for one group of events, with times shown in tz."""
    table = Table(title=title, show_header=True, header_style=style)
    table.add_column("#", style="cyan", width=3)
    table.add_column("Title", style="white")
    table.add_column("Type", style="magenta")
    table.add_column("Course", style="dim")
    table.add_column("Start → End", style="yellow")
    for idx, event in enumerate(events, 1):
        table.add_row(
            str(idx),
            truncate_title(event.title),
            event.type,
            event.course_name or "—",
            f"{format_datetime(event.start_time, tz)} → {format_datetime(event.end_time, tz)}",
        )
    return table


def render_dashboard(dashboard: Dashboard) -> None:
    """Print the dashboard with rich panels and tables."""
    tz = dashboard.now.tzinfo
    console.print(
        Panel.fit(
            f"[bold blue]📚 Planner Dashboard[/bold blue]\n"
            f"{format_datetime(dashboard.now)}",
            border_style="blue",
        )
    )
    console.print(create_week_panel(dashboard))

    if dashboard.todays_classes:
        console.print(create_classes_table(dashboard))
    else:
        console.print("[dim]No classes scheduled today.[/dim]")

    for status in STATUSES:
        events = dashboard.groups.for_status(status)
        if events:
            console.print(create_events_table(STATUS_LABELS[status], events, STATUS_STYLES[status], tz))
        else:
            console.print(f"[bold]{STATUS_LABELS[status]}[/bold]: [dim]{EMPTY_SECTION_MESSAGES[status]}[/dim]")

    if dashboard.completed:
        console.print(create_events_table("✅ Completed", dashboard.completed, "bold dim", tz))

    if dashboard.unparseable_event_ids:
        ids = ", ".join(str(i) for i in dashboard.unparseable_event_ids)
        console.print(f"[yellow]Warning:[/yellow] events with invalid times shown under Coming up: {ids}")


def _fetch_records(api_base: t.Optional[str], token: t.Optional[str]) -> tuple[list, list]:
    with PlannerApiClient(base_url=api_base, token=token) as client:
        with console.status("[bold green]Fetching events and classes..."):
            return client.list_events(), client.list_classes()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--events-file", type=click.Path(exists=True, dir_okay=False), help="JSON array of event records.")
@click.option("--classes-file", type=click.Path(exists=True, dir_okay=False), help="JSON array of class schedule records.")
@click.option("--api-base", default=None, help="Planner API base URL (default: PLANNER_API_BASE).")
@click.option("--token", envvar="PLANNER_API_TOKEN", default=None, help="Bearer token for the planner API.")
@click.option("--now", "now_value", default=None, help="Reference time in ISO format (default: current time).")
@click.option("--tz", "tz_name", default=None, help="IANA time zone (default: PLANNER_TIMEZONE).")
@click.option("--json", "as_json", is_flag=True, help="Print the dashboard as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def main(
    events_file: t.Optional[str],
    classes_file: t.Optional[str],
    api_base: t.Optional[str],
    token: t.Optional[str],
    now_value: t.Optional[str],
    tz_name: t.Optional[str],
    as_json: bool,
    verbose: bool,
) -> None:
    """Show today / ongoing / coming up / overdue events and today's classes.

    Records are read from --events-file/--classes-file when given, otherwise
    fetched from the planner API.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )

    try:
        now = resolve_now(now_value, tz_name)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if events_file or classes_file:
        events = events_from_records(load_records(events_file))
        classes = classes_from_records(load_records(classes_file))
    else:
        try:
            events, classes = _fetch_records(api_base, token)
        except PlannerApiError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)

    logger.debug("Loaded %d events and %d classes", len(events), len(classes))
    dashboard = build_dashboard(events, classes, now)
    logger.debug("Status counts: %s", status_counts(dashboard))

    if as_json:
        click.echo(dashboard_to_model(dashboard).model_dump_json(indent=2))
        return

    render_dashboard(dashboard)


if __name__ == "__main__":
    main()
