"""Temporal classification of planner events and class schedules.

Given a reference instant ``now`` this module buckets events into the four
dashboard statuses, counts what touches the current week and picks the class
schedules that meet today. Nothing here reads the clock or performs I/O, and
input records are never mutated.

Two kinds of time values are handled differently:

- event ``start_time``/``end_time`` are instants and are compared as
  timezone-aware datetimes;
- schedule ``start_date``/``end_date`` are calendar dates and are compared as
  ISO ``YYYY-MM-DD`` strings, which sort the same way as the dates they name.
"""
from __future__ import annotations

import typing as t
from datetime import date, datetime, time, timedelta, tzinfo

from planner_server.models import (
    STATUSES,
    ClassSchedule,
    Dashboard,
    Event,
    EventGroups,
    TimeWindows,
    WeekSummary,
)


def ensure_aware(now: datetime) -> datetime:
    """Return ``now`` with a timezone, reading a naive value as system local time."""
    if now.tzinfo is None:
        return now.astimezone()
    return now


def parse_instant(value: t.Any, default_tz: t.Optional[tzinfo] = None) -> t.Optional[datetime]:
    """Parse an ISO 8601 timestamp (or pass a datetime through).

    A trailing ``Z`` is read as UTC. Values without an offset are placed in
    ``default_tz``. Returns ``None`` for anything that is not a valid instant.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None and default_tz is not None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed


def compute_windows(now: datetime) -> TimeWindows:
    """Compute today's and this week's boundaries in ``now``'s own time zone.

    The week runs Monday 00:00 to the following Monday 00:00. Day arithmetic
    is done on wall-clock dates so a DST change does not shift midnight.
    """
    now = ensure_aware(now)
    start_of_today = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    end_of_today = start_of_today + timedelta(days=1)
    # Monday is 0, so Sunday steps back six days
    start_of_week = start_of_today - timedelta(days=start_of_today.weekday())
    end_of_week = start_of_week + timedelta(days=7)
    return TimeWindows(
        start_of_today=start_of_today,
        end_of_today=end_of_today,
        start_of_week=start_of_week,
        end_of_week=end_of_week,
    )


def _event_bounds(event: Event, tz: t.Optional[tzinfo]) -> tuple[t.Optional[datetime], t.Optional[datetime]]:
    return parse_instant(event.start_time, tz), parse_instant(event.end_time, tz)


def classify_event(event: Event, windows: TimeWindows) -> str:
    """Return the dashboard status of a single event.

    Rules are checked in order and the first match wins:

    1. either timestamp unparseable -> ``coming``
    2. ends before today -> ``overdue``
    3. ends today -> ``today``
    4. starts after today -> ``coming``
    5. anything else spans today without ending today -> ``ongoing``

    Completion state is not considered here.
    """
    start, end = _event_bounds(event, windows.start_of_today.tzinfo)
    if start is None or end is None:
        return "coming"
    if end < windows.start_of_today:
        return "overdue"
    if windows.start_of_today <= end < windows.end_of_today:
        return "today"
    if start >= windows.end_of_today:
        return "coming"
    return "ongoing"


def active_events(events: t.Iterable[Event]) -> list[Event]:
    """Events that are not completed."""
    return [event for event in events if not event.completed]


def _sort_by(events: t.Iterable[Event], attr: str, tz: t.Optional[tzinfo]) -> list[Event]:
    # Unparseable timestamps sort last, ties keep input order
    def key(event: Event) -> tuple[bool, float]:
        parsed = parse_instant(getattr(event, attr), tz)
        return parsed is None, parsed.timestamp() if parsed is not None else 0.0

    return sorted(events, key=key)


def group_events(events: t.Iterable[Event], windows: TimeWindows) -> EventGroups:
    """Partition the active events by status, each group sorted by start time."""
    tz = windows.start_of_today.tzinfo
    groups = EventGroups()
    for event in _sort_by(active_events(events), "start_time", tz):
        groups.for_status(classify_event(event, windows)).append(event)
    return groups


def completed_events(events: t.Iterable[Event], tz: t.Optional[tzinfo] = None) -> list[Event]:
    """Completed events sorted by end time, outside of the status groups."""
    return _sort_by((event for event in events if event.completed), "end_time", tz)


def summarize_week(events: t.Iterable[Event], windows: TimeWindows) -> WeekSummary:
    """Count active events whose span touches this week.

    The overlap test uses inclusive bounds on both sides, so an event that
    ends exactly at Monday 00:00 or starts exactly at the next Monday 00:00
    still counts. Events with unparseable timestamps are not counted.
    """
    tz = windows.start_of_today.tzinfo
    summary = WeekSummary()
    for event in active_events(events):
        start, end = _event_bounds(event, tz)
        if start is None or end is None:
            continue
        if start <= windows.end_of_week and end >= windows.start_of_week:
            summary.total += 1
            if event.type in summary.by_type:
                summary.by_type[event.type] += 1
    return summary


def weekday_index(day: date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def iso_date(value: t.Any) -> str:
    """Reduce a date, datetime or date-like string to ``YYYY-MM-DD`` ("" if absent)."""
    if isinstance(value, date):
        return value.isoformat()[:10]
    if isinstance(value, str):
        return value.strip()[:10]
    return ""


def class_occurs_on(schedule: ClassSchedule, day: date) -> bool:
    """Whether a recurring class meets on ``day``."""
    days = schedule.days_of_week
    if not isinstance(days, list):
        return False
    if weekday_index(day) not in days:
        return False

    start = iso_date(schedule.start_date)
    end = iso_date(schedule.end_date)
    if not start or not end:
        return False
    today = day.isoformat()
    return start <= today <= end


def todays_classes(schedules: t.Iterable[ClassSchedule], now: datetime) -> list[ClassSchedule]:
    """Schedules that meet on ``now``'s local calendar date, in input order."""
    today = ensure_aware(now).date()
    return [schedule for schedule in schedules if class_occurs_on(schedule, today)]


def build_dashboard(
    events: t.Iterable[Event],
    schedules: t.Iterable[ClassSchedule],
    now: datetime,
) -> Dashboard:
    """Run every classification pass for one reference instant."""
    now = ensure_aware(now)
    events = list(events)
    windows = compute_windows(now)
    tz = windows.start_of_today.tzinfo

    groups = group_events(events, windows)
    unparseable = [
        event.id
        for event in active_events(events)
        if None in _event_bounds(event, tz)
    ]
    return Dashboard(
        now=now,
        windows=windows,
        groups=groups,
        completed=completed_events(events, tz),
        week=summarize_week(events, windows),
        todays_classes=todays_classes(schedules, now),
        unparseable_event_ids=unparseable,
    )


def status_counts(dashboard: Dashboard) -> dict[str, int]:
    """Number of events in each status group."""
    return {status: len(dashboard.groups.for_status(status)) for status in STATUSES}
