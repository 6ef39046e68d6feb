"""
Conversion between planner dataclasses and the shared Pydantic models.

Used by the planner service to serialize classification results, and by the
MCP wrapper to turn HTTP responses back into the dataclasses its tools expose.
"""
from __future__ import annotations

import typing as t
from datetime import datetime

from planner_server.models import ClassSchedule, Dashboard, Event, EventGroups, TimeWindows, WeekSummary
from planner_server.records import class_from_record, class_to_record, event_from_record, event_to_record
from services.shared.models import (
    ClassScheduleRecord,
    DashboardModel,
    EventGroupsModel,
    EventRecord,
    TimeWindowsModel,
    WeekSummaryModel,
)


def event_to_model(event: Event) -> EventRecord:
    data = event_to_record(event)
    if data["id"] is not None and not isinstance(data["id"], (int, str)):
        data["id"] = str(data["id"])
    return EventRecord(**data)


def class_to_model(schedule: ClassSchedule) -> ClassScheduleRecord:
    return ClassScheduleRecord(**class_to_record(schedule))


def dashboard_to_model(dashboard: Dashboard) -> DashboardModel:
    """Convert a Dashboard dataclass into its JSON-ready Pydantic form."""
    windows = dashboard.windows
    groups = dashboard.groups
    return DashboardModel(
        now=dashboard.now.isoformat(),
        windows=TimeWindowsModel(
            start_of_today=windows.start_of_today.isoformat(),
            end_of_today=windows.end_of_today.isoformat(),
            start_of_week=windows.start_of_week.isoformat(),
            end_of_week=windows.end_of_week.isoformat(),
        ),
        groups=EventGroupsModel(
            today=[event_to_model(e) for e in groups.today],
            ongoing=[event_to_model(e) for e in groups.ongoing],
            coming=[event_to_model(e) for e in groups.coming],
            overdue=[event_to_model(e) for e in groups.overdue],
        ),
        completed=[event_to_model(e) for e in dashboard.completed],
        week=WeekSummaryModel(total=dashboard.week.total, by_type=dict(dashboard.week.by_type)),
        todays_classes=[class_to_model(c) for c in dashboard.todays_classes],
        unparseable_event_ids=list(dashboard.unparseable_event_ids),
    )


def _events(models: t.Iterable[EventRecord]) -> list[Event]:
    return [event_from_record(m.model_dump()) for m in models]


def model_to_dashboard(model: DashboardModel) -> Dashboard:
    """Rebuild a Dashboard dataclass from a service response."""
    return Dashboard(
        now=datetime.fromisoformat(model.now),
        windows=TimeWindows(
            start_of_today=datetime.fromisoformat(model.windows.start_of_today),
            end_of_today=datetime.fromisoformat(model.windows.end_of_today),
            start_of_week=datetime.fromisoformat(model.windows.start_of_week),
            end_of_week=datetime.fromisoformat(model.windows.end_of_week),
        ),
        groups=EventGroups(
            today=_events(model.groups.today),
            ongoing=_events(model.groups.ongoing),
            coming=_events(model.groups.coming),
            overdue=_events(model.groups.overdue),
        ),
        completed=_events(model.completed),
        week=WeekSummary(total=model.week.total, by_type=dict(model.week.by_type)),
        todays_classes=[class_from_record(c.model_dump()) for c in model.todays_classes],
        unparseable_event_ids=list(model.unparseable_event_ids),
    )
