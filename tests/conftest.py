"""Shared fixtures: one week of planner records around Wednesday 2025-03-12."""
import typing as t

import pytest


# Wednesday, 10:30 in New York (EDT)
NOW_ISO = "2025-03-12T10:30:00-04:00"


@pytest.fixture
def event_records() -> list[dict[str, t.Any]]:
    """Event rows as returned by the planner API (extra columns included)."""
    return [
        {
            "id": 1, "user_id": 7, "title": "Essay draft", "description": None, "type": "assignment",
            "start_time": "2025-03-12T13:00:00-04:00", "end_time": "2025-03-12T15:00:00-04:00",
            "course_name": "ENG 102", "completed": False, "created_at": "2025-02-01T12:00:00Z",
        },
        {
            "id": 2, "user_id": 7, "title": "Lab report", "description": "Group 4", "type": "assignment",
            "start_time": "2025-03-05T09:00:00-05:00", "end_time": "2025-03-20T09:00:00-04:00",
            "course_name": "CHEM 110", "completed": False,
        },
        {
            "id": 3, "user_id": 7, "title": "Midterm", "description": None, "type": "exam",
            "start_time": "2025-03-14T10:00:00-04:00", "end_time": "2025-03-14T12:00:00-04:00",
            "course_name": "CS 101", "completed": False,
        },
        {
            "id": 4, "user_id": 7, "title": "Quiz 3", "description": None, "type": "quiz",
            "start_time": "2025-03-03T10:00:00-05:00", "end_time": "2025-03-03T10:30:00-05:00",
            "course_name": None, "completed": False,
        },
        {
            "id": 5, "user_id": 7, "title": "Problem set 1", "description": None, "type": "assignment",
            "start_time": "2025-03-10T09:00:00-04:00", "end_time": "2025-03-11T18:00:00-04:00",
            "course_name": "MATH 221", "completed": True,
        },
        {
            "id": 6, "user_id": 7, "title": "Study block", "description": None, "type": "timeblock",
            "start_time": "garbage", "end_time": "2025-03-12T12:00:00Z",
            "course_name": None, "completed": False,
        },
    ]


@pytest.fixture
def class_records() -> list[dict[str, t.Any]]:
    """Class schedule rows as returned by the planner API."""
    return [
        {
            "id": 10, "user_id": 7, "course_name": "CS 101", "location": "Gates 4401",
            "days_of_week": [1, 3, 5], "start_date": "2025-01-13", "end_date": "2025-05-02",
            "class_start_time": "09:30:00", "class_end_time": "10:50:00",
        },
        {
            "id": 11, "user_id": 7, "course_name": "MATH 221", "location": None,
            "days_of_week": [2, 4], "start_date": "2025-01-13", "end_date": "2025-05-02",
            "class_start_time": "13:00:00", "class_end_time": "14:20:00",
        },
        {
            "id": 12, "user_id": 7, "course_name": "HIST 110", "location": "Baker 101",
            "days_of_week": [3], "start_date": "2024-08-26", "end_date": "2024-12-13",
            "class_start_time": "15:00:00", "class_end_time": "16:20:00",
        },
    ]


@pytest.fixture
def now_iso() -> str:
    return NOW_ISO
