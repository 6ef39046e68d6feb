"""
MCP wrapper for the planner service.

This module keeps the tool signatures of planner_server.server but makes HTTP
calls to the distributed planner service. It handles serialization between
the dataclass and Pydantic models.
"""
from __future__ import annotations

import logging
import os

import httpx
from fastmcp import FastMCP

# Import dataclass models for MCP interface compatibility
from planner_server.models import ClassSchedule, Dashboard, Event
from planner_server.records import class_from_record
from services.shared.convert import class_to_model, event_to_model, model_to_dashboard
# Import Pydantic models for HTTP serialization
from services.shared.models import (
    ClassifyEventsRequest,
    ClassifyEventsResponse,
    DashboardModel,
    DashboardRequest,
    DashboardSummaryResponse,
    TodaysClassesRequest,
    TodaysClassesResponse,
)


logger = logging.getLogger(__name__)

mcp = FastMCP("PlannerMCPWrapper")

# Service URL - configurable via environment variable
PLANNER_SERVICE_URL = os.getenv("PLANNER_SERVICE_URL", "http://localhost:8004")

# Timeout settings (in seconds); classification is fast, no LLM involved
STANDARD_TIMEOUT = 30.0


class PlannerServiceError(RuntimeError):
    """Raised when the planner service cannot be reached or rejects a request."""


def _post(path: str, payload: dict, transport: httpx.BaseTransport | None = None) -> dict:
    """POST a JSON payload to the planner service and return the decoded body."""
    url = f"{PLANNER_SERVICE_URL}{path}"
    try:
        with httpx.Client(timeout=STANDARD_TIMEOUT, transport=transport) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
        return response.json()
    except httpx.TimeoutException:
        raise PlannerServiceError(f"Planner service call {path} timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise PlannerServiceError(f"HTTP error from planner service: {e.response.status_code} {e.response.text}")
    except httpx.HTTPError as e:
        raise PlannerServiceError(f"Error calling planner service: {str(e)}")
    except ValueError:
        raise PlannerServiceError(f"Planner service returned non-JSON body for {path}")


def _dashboard_request(events: list[Event], classes: list[ClassSchedule], now: str) -> dict:
    request = DashboardRequest(
        events=[event_to_model(e) for e in events],
        classes=[class_to_model(c) for c in classes],
        now=now or None,
    )
    return request.model_dump()


def _build_planner_dashboard(
    events: list[Event],
    classes: list[ClassSchedule],
    now: str = "",
    transport: httpx.BaseTransport | None = None,
) -> Dashboard:
    """
    Build the planner dashboard.

    Same signature as the local tool, but the work happens in the
    planner service.
    """
    logger.debug("Requesting dashboard for %d events, %d classes", len(events), len(classes))
    data = _post("/planner/dashboard", _dashboard_request(events, classes, now), transport)
    return model_to_dashboard(DashboardModel(**data))


def _classify_event_status(event: Event, now: str = "", transport: httpx.BaseTransport | None = None) -> str:
    """Return the dashboard status of one event."""
    request = ClassifyEventsRequest(events=[event_to_model(event)], now=now or None)
    result = ClassifyEventsResponse(**_post("/planner/events/classify", request.model_dump(), transport))
    return result.statuses[0].status


def _list_todays_classes(
    classes: list[ClassSchedule],
    now: str = "",
    transport: httpx.BaseTransport | None = None,
) -> list[ClassSchedule]:
    """List the class schedules meeting on the reference date."""
    request = TodaysClassesRequest(classes=[class_to_model(c) for c in classes], now=now or None)
    result = TodaysClassesResponse(**_post("/planner/classes/today", request.model_dump(), transport))
    return [class_from_record(c.model_dump()) for c in result.classes]


def _show_dashboard(
    events: list[Event],
    classes: list[ClassSchedule],
    now: str = "",
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Display the planner dashboard as a formatted text view."""
    data = _post("/planner/dashboard/summary", _dashboard_request(events, classes, now), transport)
    return DashboardSummaryResponse(**data).summary


# MCP tool wrappers that call the raw functions
@mcp.tool()
def build_planner_dashboard(events: list[Event], classes: list[ClassSchedule], now: str = "") -> Dashboard:
    """Builds the planner dashboard for a reference time."""
    return _build_planner_dashboard(events, classes, now)


@mcp.tool()
def classify_event_status(event: Event, now: str = "") -> str:
    """Returns the dashboard status of one event: today, ongoing, coming or overdue."""
    return _classify_event_status(event, now)


@mcp.tool()
def list_todays_classes(classes: list[ClassSchedule], now: str = "") -> list[ClassSchedule]:
    """Lists the class schedules that meet on the reference date."""
    return _list_todays_classes(classes, now)


@mcp.tool()
def show_dashboard(events: list[Event], classes: list[ClassSchedule], now: str = "") -> str:
    """Displays the planner dashboard as a formatted text view."""
    return _show_dashboard(events, classes, now)


if __name__ == "__main__":
    mcp.run()
