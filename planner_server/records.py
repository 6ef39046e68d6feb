# -*- coding: utf-8 -*-
"""
Conversion of JSON-like planner records into dataclass models.

Rows coming back from the planner API carry extra columns (``user_id``,
``created_at``) and nullable optional fields. Conversion is defensive: unknown
keys are dropped and malformed optional values fall back to empty defaults.
Timestamps are left untouched so the classifier decides what is parseable.
"""
from __future__ import annotations

import typing as t
from dataclasses import asdict

from planner_server.classifier import iso_date
from planner_server.models import ClassSchedule, Event


def _text(value: t.Any) -> str:
    if value is None:
        return ""
    return str(value)


def _flag(value: t.Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1", "yes")
    return bool(value)


def _days(value: t.Any) -> t.Optional[list[int]]:
    """Weekday list with members coerced to int; anything but a list is None."""
    if not isinstance(value, list):
        return None
    days: list[int] = []
    for item in value:
        try:
            days.append(int(item))
        except (TypeError, ValueError):
            continue
    return days


def event_from_record(record: t.Mapping[str, t.Any]) -> Event:
    """Build an Event from an API row."""
    return Event(
        id=record.get("id"),
        title=_text(record.get("title")),
        type=_text(record.get("type")),
        start_time=record.get("start_time"),
        end_time=record.get("end_time"),
        description=_text(record.get("description")),
        course_name=_text(record.get("course_name")),
        completed=_flag(record.get("completed", False)),
    )


def class_from_record(record: t.Mapping[str, t.Any]) -> ClassSchedule:
    """Build a ClassSchedule from an API row."""
    return ClassSchedule(
        id=record.get("id"),
        course_name=_text(record.get("course_name")),
        days_of_week=_days(record.get("days_of_week")),
        start_date=iso_date(record.get("start_date")),
        end_date=iso_date(record.get("end_date")),
        class_start_time=_text(record.get("class_start_time")),
        class_end_time=_text(record.get("class_end_time")),
        location=_text(record.get("location")),
    )


def events_from_records(records: t.Iterable[t.Mapping[str, t.Any]]) -> list[Event]:
    return [event_from_record(r) for r in records if isinstance(r, t.Mapping)]


def classes_from_records(records: t.Iterable[t.Mapping[str, t.Any]]) -> list[ClassSchedule]:
    return [class_from_record(r) for r in records if isinstance(r, t.Mapping)]


def event_to_record(event: Event) -> dict[str, t.Any]:
    """Plain dict of an Event with datetimes rendered as ISO strings."""
    data = asdict(event)
    for key in ("start_time", "end_time"):
        value = data[key]
        if hasattr(value, "isoformat"):
            data[key] = value.isoformat()
    return data


def class_to_record(schedule: ClassSchedule) -> dict[str, t.Any]:
    return asdict(schedule)
