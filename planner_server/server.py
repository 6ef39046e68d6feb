# -*- coding: utf-8 -*-
import typing as t
from datetime import datetime, tzinfo

from fastmcp import FastMCP

from planner_server.classifier import build_dashboard, classify_event, compute_windows, todays_classes
from planner_server.clock import resolve_now
from planner_server.models import STATUSES, ClassSchedule, Dashboard, Event

mcp = FastMCP("PlannerServer")


STATUS_LABELS = {
    "today": "Today",
    "ongoing": "Ongoing",
    "coming": "Coming up",
    "overdue": "Overdue",
}

EMPTY_SECTION_MESSAGES = {
    "today": "No events today.",
    "ongoing": "No ongoing items.",
    "coming": "No upcoming items.",
    "overdue": "Nice! Nothing overdue.",
}

TYPE_LABELS = {
    "assignment": "Assignments",
    "quiz": "Quizzes",
    "exam": "Exams",
    "timeblock": "Time blocks",
}


def dashboard_for(events: list[Event], classes: list[ClassSchedule], now: str = "") -> Dashboard:
    """Internal function to build a dashboard, resolving an empty ``now`` to the current time.

    :param events: Events owned by the user.
    :param classes: Class schedules owned by the user.
    :param now: Reference instant in ISO format (optional).
    :return: A Dashboard object.
    """
    return build_dashboard(events, classes, resolve_now(now))


def format_datetime(value: t.Any, tz: t.Optional[tzinfo] = None) -> str:
    """Formats an ISO datetime string (or datetime) as 'Mon 1/15 2:30 PM'.

    Values carrying an offset are shown in ``tz`` when given, so they read on
    the same calendar as the dashboard. If parsing fails, returns the original
    value as a string.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except (ValueError, AttributeError):
            return str(value)
    if tz is not None and dt.tzinfo is not None:
        dt = dt.astimezone(tz)
    return dt.strftime("%a %-m/%-d %-I:%M %p")


def format_class_time(value: str) -> str:
    """Formats a time of day like '13:05:00' as '1:05 PM'."""
    if not value:
        return ""
    parts = value.split(":")
    try:
        hour = int(parts[0])
    except ValueError:
        return value
    minute = parts[1][:2] if len(parts) > 1 else "00"
    ampm = "PM" if hour >= 12 else "AM"
    hour = hour % 12 or 12
    return f"{hour}:{minute} {ampm}"


def _clip(text: str, width: int) -> str:
    return text[:width - 1] if len(text) > width - 1 else text


def format_dashboard(dashboard: Dashboard) -> str:
    """Internal function to format a dashboard as fixed-width text.

    :param dashboard: The Dashboard to format.
    :return: Formatted text with weekly stats, today's classes and each status section.
    """
    lines = []
    tz = dashboard.now.tzinfo
    lines.append(f"📅 PLANNER DASHBOARD  ({format_datetime(dashboard.now)})")
    lines.append("=" * 100)

    week = dashboard.week
    stats = [f"This week: {week.total}"]
    stats.extend(f"{TYPE_LABELS.get(k, k.title())}: {v}" for k, v in week.by_type.items())
    lines.append(" | ".join(stats))

    lines.append("")
    lines.append("🏫 TODAY'S CLASSES")
    lines.append("-" * 100)
    if not dashboard.todays_classes:
        lines.append("No classes scheduled today.")
    for cls in dashboard.todays_classes:
        name = cls.course_name + (f" · {cls.location}" if cls.location else "")
        times = f"{format_class_time(cls.class_start_time[:5])} - {format_class_time(cls.class_end_time[:5])}"
        lines.append(f"  {_clip(name, 60):<60} {times}")

    for status in STATUSES:
        events = dashboard.groups.for_status(status)
        lines.append("")
        lines.append(f"{STATUS_LABELS[status].upper()} ({len(events)})")
        lines.append("-" * 100)
        if not events:
            lines.append(EMPTY_SECTION_MESSAGES[status])
            continue
        lines.append(f"{'#':<4} {'Title':<30} {'Type':<11} {'Course':<15} {'Start':<18} {'End':<18}")
        for idx, event in enumerate(events, 1):
            lines.append(
                f"{idx:<4} {_clip(event.title, 30):<30} {_clip(event.type, 11):<11} "
                f"{_clip(event.course_name or '—', 15):<15} "
                f"{format_datetime(event.start_time, tz):<18} {format_datetime(event.end_time, tz):<18}"
            )

    if dashboard.completed:
        lines.append("")
        lines.append(f"✅ COMPLETED ({len(dashboard.completed)})")
        lines.append("-" * 100)
        for event in dashboard.completed:
            lines.append(f"  {_clip(event.title, 40):<40} done by {format_datetime(event.end_time, tz)}")

    if dashboard.unparseable_event_ids:
        ids = ", ".join(str(i) for i in dashboard.unparseable_event_ids)
        lines.append("")
        lines.append(f"⚠️  Events with invalid times (listed under Coming up): {ids}")

    lines.append("=" * 100)
    return "\n".join(lines)


@mcp.tool()
def build_planner_dashboard(
        events: list[Event],
        classes: list[ClassSchedule],
        now: str = ""
) -> Dashboard:
    """Builds the planner dashboard for a reference time.

    Groups active events into today / ongoing / coming up / overdue, lists
    completed events, counts this week's events by type and picks the
    classes that meet today.

    :param events: Events owned by the user.
    :param classes: Class schedules owned by the user.
    :param now: Reference instant in ISO format (optional, defaults to the current time).
    :return: A Dashboard object.
    """
    return dashboard_for(events, classes, now)


@mcp.tool()
def classify_event_status(event: Event, now: str = "") -> str:
    """Returns the dashboard status of one event: today, ongoing, coming or overdue.

    :param event: The event to classify.
    :param now: Reference instant in ISO format (optional).
    :return: The status string.
    """
    return classify_event(event, compute_windows(resolve_now(now)))


@mcp.tool()
def list_todays_classes(classes: list[ClassSchedule], now: str = "") -> list[ClassSchedule]:
    """Lists the class schedules that meet on the reference date.

    :param classes: Class schedules owned by the user.
    :param now: Reference instant in ISO format (optional).
    :return: The class schedules meeting today.
    """
    return todays_classes(classes, resolve_now(now))


@mcp.tool()
def show_dashboard(
        events: list[Event],
        classes: list[ClassSchedule],
        now: str = ""
) -> str:
    """Displays the planner dashboard as a formatted text view.

    :param events: Events owned by the user.
    :param classes: Class schedules owned by the user.
    :param now: Reference instant in ISO format (optional).
    :return: Formatted dashboard text.
    """
    return format_dashboard(dashboard_for(events, classes, now))


if __name__ == "__main__":
    mcp.run()
