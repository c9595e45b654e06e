"""Tests for tasklane/models.py — JSON shapes and time formatting."""

import re
from datetime import datetime, timedelta, timezone

import pytest

from tasklane.models import ArchiveItem, Task, parse_duration, parse_timestamp


def test_task_from_dict_defaults():
    task = Task.from_dict({"title": "Only a title"})
    assert task.title == "Only a title"
    assert task.description == ""
    assert task.is_done is False
    assert task.elapsed_time == timedelta(0)


def test_task_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        Task.from_dict(["not", "a", "task"])


def test_task_to_dict_duration_shape():
    task = Task(title="t", elapsed_time=timedelta(seconds=90, microseconds=250000))
    d = task.to_dict()
    assert d["elapsed_time"] == {"secs": 90, "nanos": 250000000}
    assert d["created_on"].endswith("Z")


def test_task_round_trip_keeps_fields():
    created = datetime(2026, 2, 10, 9, 30, tzinfo=timezone.utc)
    task = Task(title="a", description="line1\nline2", is_done=True, created_on=created)
    again = Task.from_dict(task.to_dict())
    assert again == task


def test_parse_timestamp_nanoseconds_and_z():
    dt = parse_timestamp("2026-02-10T09:00:00.123456789Z")
    assert dt == datetime(2026, 2, 10, 9, 0, 0, 123456, tzinfo=timezone.utc)


def test_parse_timestamp_naive_is_utc():
    assert parse_timestamp("2026-02-10T09:00:00").tzinfo == timezone.utc


def test_parse_duration_accepts_seconds():
    assert parse_duration(12.5) == timedelta(seconds=12.5)
    assert parse_duration({"secs": 3, "nanos": 1000}) == timedelta(seconds=3, microseconds=1)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "< 1 min"),
        (59, "< 1 min"),
        (60, "1 min"),
        (25 * 60 + 40, "26 min"),
        (3600, "1 h 0 min"),
        (2 * 3600 + 5 * 60, "2 h 5 min"),
    ],
)
def test_time_str(seconds, expected):
    assert Task(elapsed_time=timedelta(seconds=seconds)).time_str() == expected


def test_archive_item_from_dict():
    item = ArchiveItem.from_dict(
        {"date": "2026-02-09T18:00:00Z", "tasks": [{"title": "x", "is_done": True}]}
    )
    assert item.date == datetime(2026, 2, 9, 18, tzinfo=timezone.utc)
    assert [t.title for t in item.tasks] == ["x"]
    assert item.to_dict()["date"] == "2026-02-09T18:00:00Z"


def test_archive_item_date_str_is_minute_precision():
    item = ArchiveItem(date=datetime(2026, 2, 9, 18, 30, 45, tzinfo=timezone.utc))
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}", item.date_str())


def test_null_text_fields_become_empty():
    task = Task.from_dict({"title": None, "description": None})
    assert task.title == ""
    assert task.description == ""
