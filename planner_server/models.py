"""
Data models for the planner dashboard.

This module contains the dataclasses used to represent events, recurring class
schedules and the dashboard views computed from them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import typing as t


# Type literals for commonly used values
EventType = t.Literal["assignment", "quiz", "exam", "timeblock"]
EventStatus = t.Literal["today", "ongoing", "coming", "overdue"]

EVENT_TYPES: tuple[str, ...] = ("assignment", "quiz", "exam", "timeblock")
STATUSES: tuple[str, ...] = ("today", "ongoing", "coming", "overdue")


@dataclass
class Event:
    """
    A time-bounded planner item.

    Timestamps are kept as received (ISO string or datetime) so that a
    malformed value degrades during classification instead of failing here.
    """
    id: t.Any
    title: str
    type: str
    start_time: t.Any
    end_time: t.Any
    description: str = ""
    course_name: str = ""
    completed: bool = False


@dataclass
class ClassSchedule:
    """
    Recurring weekly class, like:
    - "CS 101, Mon/Wed/Fri 9:30-10:50, 2025-01-13 to 2025-05-02"
    """
    id: t.Any
    course_name: str
    days_of_week: t.Optional[list[int]] = None  # 0 = Sunday ... 6 = Saturday
    start_date: str = ""        # "YYYY-MM-DD"
    end_date: str = ""          # "YYYY-MM-DD"
    class_start_time: str = ""  # "HH:MM" or "HH:MM:SS"
    class_end_time: str = ""    # "HH:MM" or "HH:MM:SS"
    location: str = ""


@dataclass
class TimeWindows:
    """Day and week boundaries derived from a reference instant. Upper bounds are exclusive."""
    start_of_today: datetime
    end_of_today: datetime
    start_of_week: datetime
    end_of_week: datetime


@dataclass
class EventGroups:
    """Active events partitioned by status, each list sorted by start time."""
    today: list[Event] = field(default_factory=list)
    ongoing: list[Event] = field(default_factory=list)
    coming: list[Event] = field(default_factory=list)
    overdue: list[Event] = field(default_factory=list)

    def for_status(self, status: str) -> list[Event]:
        return getattr(self, status)


@dataclass
class WeekSummary:
    """Counts of active events touching the current Monday-to-Sunday week."""
    total: int = 0
    by_type: dict[str, int] = field(default_factory=lambda: {k: 0 for k in EVENT_TYPES})


@dataclass
class Dashboard:
    """Everything the planner dashboard shows for one reference instant."""
    now: datetime
    windows: TimeWindows
    groups: EventGroups = field(default_factory=EventGroups)
    completed: list[Event] = field(default_factory=list)
    week: WeekSummary = field(default_factory=WeekSummary)
    todays_classes: list[ClassSchedule] = field(default_factory=list)
    unparseable_event_ids: list[t.Any] = field(default_factory=list)
