"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
planner_server.models, ensuring consistent JSON serialization between the
planner service and its MCP wrapper.
"""
from __future__ import annotations

import typing as t
from pydantic import BaseModel, Field


EventStatus = t.Literal["today", "ongoing", "coming", "overdue"]


class EventRecord(BaseModel):
    """
    An event row as stored by the planner API.

    Timestamps are accepted as sent so a malformed value is classified
    rather than rejected.
    """
    id: t.Union[int, str, None] = None
    title: str = ""
    description: t.Optional[str] = None
    type: str = "assignment"
    start_time: t.Any = None               # ISO datetime
    end_time: t.Any = None                 # ISO datetime
    course_name: t.Optional[str] = None
    completed: bool = False


class ClassScheduleRecord(BaseModel):
    """
    A recurring class row as stored by the planner API.
    """
    id: t.Union[int, str, None] = None
    course_name: str = ""
    location: t.Optional[str] = None
    days_of_week: t.Any = None             # [0..6], 0 = Sunday
    start_date: t.Optional[str] = None     # "YYYY-MM-DD"
    end_date: t.Optional[str] = None       # "YYYY-MM-DD"
    class_start_time: t.Optional[str] = None   # "HH:MM[:SS]"
    class_end_time: t.Optional[str] = None     # "HH:MM[:SS]"


class TimeWindowsModel(BaseModel):
    """Boundaries used for one classification pass (ISO strings, upper bounds exclusive)."""
    start_of_today: str
    end_of_today: str
    start_of_week: str
    end_of_week: str


class EventGroupsModel(BaseModel):
    """Active events by status."""
    today: list[EventRecord] = Field(default_factory=list)
    ongoing: list[EventRecord] = Field(default_factory=list)
    coming: list[EventRecord] = Field(default_factory=list)
    overdue: list[EventRecord] = Field(default_factory=list)


class WeekSummaryModel(BaseModel):
    """This week at a glance."""
    total: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)


class DashboardModel(BaseModel):
    """Complete dashboard for one reference instant."""
    now: str
    windows: TimeWindowsModel
    groups: EventGroupsModel = Field(default_factory=EventGroupsModel)
    completed: list[EventRecord] = Field(default_factory=list)
    week: WeekSummaryModel = Field(default_factory=WeekSummaryModel)
    todays_classes: list[ClassScheduleRecord] = Field(default_factory=list)
    unparseable_event_ids: list[t.Union[int, str, None]] = Field(default_factory=list)


# Request/Response Models for API endpoints
class DashboardRequest(BaseModel):
    """Request model for building a dashboard."""
    events: list[EventRecord] = Field(default_factory=list)
    classes: list[ClassScheduleRecord] = Field(default_factory=list)
    now: t.Optional[str] = None


class ClassifyEventsRequest(BaseModel):
    """Request model for classifying events."""
    events: list[EventRecord]
    now: t.Optional[str] = None


class EventStatusItem(BaseModel):
    """Status of one event."""
    id: t.Union[int, str, None] = None
    status: EventStatus
    completed: bool = False


class ClassifyEventsResponse(BaseModel):
    """Response model for event classification."""
    statuses: list[EventStatusItem]


class TodaysClassesRequest(BaseModel):
    """Request model for today's classes."""
    classes: list[ClassScheduleRecord]
    now: t.Optional[str] = None


class TodaysClassesResponse(BaseModel):
    """Response model for today's classes."""
    date: str
    classes: list[ClassScheduleRecord]


class DashboardSummaryResponse(BaseModel):
    """Response model for the formatted dashboard."""
    summary: str
