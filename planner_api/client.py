"""
HTTP client for the planner API that owns events and class schedules.

Only the two read operations the dashboard needs are implemented. Records are
returned as planner_server dataclasses, already scoped to the token's user.
"""
from __future__ import annotations

import logging
import os
import typing as t

import httpx

from planner_server.models import ClassSchedule, Event
from planner_server.records import classes_from_records, events_from_records


logger = logging.getLogger(__name__)

# Base URL and bearer token - configurable via environment variables
PLANNER_API_BASE = os.getenv("PLANNER_API_BASE", "http://localhost:5000")
PLANNER_API_TOKEN = os.getenv("PLANNER_API_TOKEN")

STANDARD_TIMEOUT = 15.0


class PlannerApiError(RuntimeError):
    """Raised when a planner API read fails."""

    def __init__(self, message: str, status_code: t.Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PlannerApiClient:
    """Read-only client for ``/api/events`` and ``/api/classes``."""

    def __init__(
        self,
        base_url: t.Optional[str] = None,
        token: t.Optional[str] = None,
        timeout: float = STANDARD_TIMEOUT,
        transport: t.Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or PLANNER_API_BASE).rstrip("/")
        token = token if token is not None else PLANNER_API_TOKEN
        headers = {"Accept": "application/json"}
        if token:
            # Never log the token value. Only indicate presence.
            headers["Authorization"] = f"Bearer {token}"
            logger.info("Planner API token: set")
        else:
            logger.info("Planner API token: not set")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "PlannerApiClient":
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get_list(self, path: str) -> list[dict[str, t.Any]]:
        try:
            response = self._client.get(path)
            response.raise_for_status()
        except httpx.TimeoutException:
            raise PlannerApiError(f"GET {path} timed out after {self._client.timeout.read} seconds")
        except httpx.HTTPStatusError as e:
            raise PlannerApiError(
                f"HTTP error from planner API: {e.response.status_code} {_message(e.response)}",
                status_code=e.response.status_code,
            )
        except httpx.HTTPError as e:
            raise PlannerApiError(f"Error calling planner API: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            raise PlannerApiError(f"Planner API returned non-JSON body for {path}")
        if not isinstance(data, list):
            raise PlannerApiError(f"Planner API returned {type(data).__name__} for {path}, expected a list")
        logger.debug("GET %s -> %d records", path, len(data))
        return data

    def list_events(self) -> list[Event]:
        """Fetch the user's events."""
        return events_from_records(self._get_list("/api/events"))

    def list_classes(self) -> list[ClassSchedule]:
        """Fetch the user's class schedules."""
        return classes_from_records(self._get_list("/api/classes"))


def _message(response: httpx.Response) -> str:
    # The API reports failures as {"message": "..."}
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text
