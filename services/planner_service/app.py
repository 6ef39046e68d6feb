"""
FastAPI service for planner dashboard operations.

This service exposes the classification logic from planner_server as REST API
endpoints. Callers post the records they already fetched for a user together
with an optional reference time; the service never stores anything.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException

from planner_server.classifier import build_dashboard, classify_event, compute_windows, todays_classes
from planner_server.clock import PLANNER_TIMEZONE, resolve_now
from planner_server.records import classes_from_records, events_from_records
from planner_server.server import format_dashboard
from services.shared.convert import class_to_model, dashboard_to_model
from services.shared.models import (
    ClassifyEventsRequest,
    ClassifyEventsResponse,
    DashboardModel,
    DashboardRequest,
    DashboardSummaryResponse,
    EventStatusItem,
    TodaysClassesRequest,
    TodaysClassesResponse,
)


logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    logger.info("Planner service starting (timezone=%s)", PLANNER_TIMEZONE)
    yield


app = FastAPI(
    title="Planner Service",
    description="REST API for classifying planner events and class schedules",
    version="1.0.0",
    lifespan=lifespan,
)


def _reference_time(value: str | None) -> datetime:
    try:
        return resolve_now(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "planner-service"}


@app.post("/planner/dashboard", response_model=DashboardModel)
async def dashboard(request: DashboardRequest) -> DashboardModel:
    """
    Build the full dashboard: status groups, completed listing,
    weekly counts and today's classes.
    """
    now = _reference_time(request.now)
    try:
        events = events_from_records(e.model_dump() for e in request.events)
        classes = classes_from_records(c.model_dump() for c in request.classes)
        result = build_dashboard(events, classes, now)
        logger.debug(
            "Dashboard for %s: %d events, %d classes today",
            now.isoformat(), len(events), len(result.todays_classes),
        )
        return dashboard_to_model(result)
    except Exception as e:
        logger.exception("Dashboard failed")
        raise HTTPException(status_code=500, detail=f"Error building dashboard: {str(e)}")


@app.post("/planner/events/classify", response_model=ClassifyEventsResponse)
async def classify_events(request: ClassifyEventsRequest) -> ClassifyEventsResponse:
    """
    Return the status of each posted event, in request order.

    Completed events are classified too; the flag is echoed back so callers
    can keep them out of the status sections.
    """
    windows = compute_windows(_reference_time(request.now))
    try:
        events = events_from_records(e.model_dump() for e in request.events)
        return ClassifyEventsResponse(
            statuses=[
                EventStatusItem(id=event.id, status=classify_event(event, windows), completed=event.completed)
                for event in events
            ]
        )
    except Exception as e:
        logger.exception("Classification failed")
        raise HTTPException(status_code=500, detail=f"Error classifying events: {str(e)}")


@app.post("/planner/classes/today", response_model=TodaysClassesResponse)
async def classes_today(request: TodaysClassesRequest) -> TodaysClassesResponse:
    """List the class schedules that meet on the reference date."""
    now = _reference_time(request.now)
    try:
        classes = classes_from_records(c.model_dump() for c in request.classes)
        return TodaysClassesResponse(
            date=now.date().isoformat(),
            classes=[class_to_model(c) for c in todays_classes(classes, now)],
        )
    except Exception as e:
        logger.exception("Today's classes failed")
        raise HTTPException(status_code=500, detail=f"Error listing today's classes: {str(e)}")


@app.post("/planner/dashboard/summary", response_model=DashboardSummaryResponse)
async def dashboard_summary(request: DashboardRequest) -> DashboardSummaryResponse:
    """Generate the formatted text dashboard."""
    now = _reference_time(request.now)
    try:
        events = events_from_records(e.model_dump() for e in request.events)
        classes = classes_from_records(c.model_dump() for c in request.classes)
        return DashboardSummaryResponse(summary=format_dashboard(build_dashboard(events, classes, now)))
    except Exception as e:
        logger.exception("Dashboard summary failed")
        raise HTTPException(status_code=500, detail=f"Error generating dashboard summary: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8004")))
