"""Shared test fixtures for Tasklane tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from tasklane.models import Task, TaskStore


def make_store(*titles: str, selected: int = 0) -> TaskStore:
    """A store with one task per title and the given index selected."""
    tasks = [Task(title=t) for t in titles]
    if tasks:
        tasks[selected].is_selected = True
    return TaskStore(tasks=tasks, last_tick=0.0)


@pytest.fixture
def store() -> TaskStore:
    return make_store("Write report", "Review PR", "Plan sprint")


@pytest.fixture
def storage(tmp_path: Path) -> Path:
    """A storage directory holding tasks, one archive batch and settings."""
    root = tmp_path / "storage"
    root.mkdir()

    tasks = [
        {
            "title": "Write report",
            "description": "Quarterly numbers\nand summary",
            "is_done": False,
            "is_active": False,
            "is_selected": False,
            "elapsed_time": {"secs": 125, "nanos": 0},
            "created_on": "2026-02-10T09:00:00.123456789Z",
        },
        {
            "title": "Review PR",
            "description": "",
            "is_done": True,
            "is_active": False,
            "is_selected": True,
            "elapsed_time": {"secs": 0, "nanos": 500000000},
            "created_on": "2026-02-10T10:00:00Z",
        },
    ]
    (root / "tasks.json").write_text(json.dumps(tasks, indent=2), encoding="utf-8")

    archive = [
        {
            "date": "2026-02-09T18:00:00Z",
            "tasks": [
                {
                    "title": "Old task",
                    "description": "done last week",
                    "is_done": True,
                    "is_active": False,
                    "is_selected": True,
                    "elapsed_time": {"secs": 3600, "nanos": 0},
                    "created_on": "2026-02-01T08:00:00Z",
                }
            ],
        }
    ]
    (root / "archive.json").write_text(json.dumps(archive, indent=2), encoding="utf-8")

    settings = {
        "is_horizontal": False,
        "normal_fg_colour": "White",
        "normal_bg_colour": "Black",
        "select_fg_colour": "Black",
        "select_bg_colour": "Cyan",
        "active_fg_colour": "Green",
        "title_fg_colour": "Yellow",
        "border_colour": "DarkGray",
    }
    (root / "settings.json").write_text(json.dumps(settings, indent=2), encoding="utf-8")

    os.environ["TASKLANE_ROOT"] = str(root)
    yield root
    if "TASKLANE_ROOT" in os.environ:
        del os.environ["TASKLANE_ROOT"]
