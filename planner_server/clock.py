# -*- coding: utf-8 -*-
"""Reference-time helpers shared by the tool server, the REST service and the CLI."""
from __future__ import annotations

import os
import typing as t
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Zone used for "now" and for timestamps that carry no offset
PLANNER_TIMEZONE = os.getenv("PLANNER_TIMEZONE", "UTC")


def get_timezone(name: t.Optional[str] = None) -> ZoneInfo:
    """Resolve an IANA zone name, defaulting to PLANNER_TIMEZONE.

    :raises ValueError: If the zone name is unknown.
    """
    zone_name = name or PLANNER_TIMEZONE
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {zone_name}") from e


def resolve_now(value: t.Union[str, datetime, None] = None, tz_name: t.Optional[str] = None) -> datetime:
    """Turn an optional ISO instant into an aware reference time.

    An empty value means the current time. A value without an offset is read
    as wall-clock time in the configured zone; one with an offset is converted
    to that zone so "today" is the planner's local date.

    :raises ValueError: If the value is not a valid ISO 8601 instant.
    """
    tz = get_timezone(tz_name)
    if value is None or (isinstance(value, str) and not value.strip()):
        return datetime.now(tz)

    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid reference time: {value!r}") from e

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)
