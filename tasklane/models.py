"""Typed dataclasses for the Tasklane data model.

All models use from_dict/to_dict for JSON serialization.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any


# ── Primitives ────────────────────────────────────────────────


_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing 'Z' and nanosecond fractions are accepted."""
    if value is None or value == "":
        return utc_now()
    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value).strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        s = _FRACTION_RE.sub(r".\1", s)
        dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_duration(value: Any) -> timedelta:
    """Accept {"secs": s, "nanos": n} or a plain number of seconds."""
    if value is None:
        return timedelta(0)
    if isinstance(value, dict):
        secs = int(value.get("secs", 0))
        nanos = int(value.get("nanos", 0))
        return timedelta(seconds=secs, microseconds=nanos // 1000)
    return timedelta(seconds=float(value))


def format_duration(td: timedelta) -> dict[str, int]:
    total_us = max(0, (td.days * 86400 + td.seconds) * 1_000_000 + td.microseconds)
    secs, us = divmod(total_us, 1_000_000)
    return {"secs": secs, "nanos": us * 1000}


# ── Tasks ─────────────────────────────────────────────────────


@dataclass
class Task:
    title: str = ""
    description: str = ""
    is_done: bool = False
    is_active: bool = False
    is_selected: bool = False
    elapsed_time: timedelta = field(default_factory=timedelta)
    created_on: datetime = field(default_factory=utc_now)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        if not isinstance(d, dict):
            raise ValueError(f"Task entry must be an object, got {type(d).__name__}")
        return cls(
            title=str(d.get("title") or ""),
            description=str(d.get("description") or ""),
            is_done=bool(d.get("is_done", False)),
            is_active=bool(d.get("is_active", False)),
            is_selected=bool(d.get("is_selected", False)),
            elapsed_time=parse_duration(d.get("elapsed_time")),
            created_on=parse_timestamp(d.get("created_on")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "is_done": self.is_done,
            "is_active": self.is_active,
            "is_selected": self.is_selected,
            "elapsed_time": format_duration(self.elapsed_time),
            "created_on": format_timestamp(self.created_on),
        }

    def time_str(self) -> str:
        """Elapsed time as shown next to the task: '< 1 min', '25 min', '2 h 5 min'."""
        secs = int(self.elapsed_time.total_seconds())
        if secs < 60:
            return "< 1 min"
        hours = secs // 3600
        mins = round((secs - hours * 3600) / 60)
        if hours > 0:
            return f"{hours} h {mins} min"
        return f"{mins} min"


@dataclass
class ArchiveItem:
    """A batch of tasks archived together."""

    date: datetime = field(default_factory=utc_now)
    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ArchiveItem:
        if not isinstance(d, dict):
            raise ValueError(f"Archive entry must be an object, got {type(d).__name__}")
        return cls(
            date=parse_timestamp(d.get("date")),
            tasks=[Task.from_dict(t) for t in (d.get("tasks") or [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": format_timestamp(self.date),
            "tasks": [t.to_dict() for t in self.tasks],
        }

    def date_str(self) -> str:
        return self.date.astimezone().strftime("%Y-%m-%d %H:%M")


@dataclass
class TaskStore:
    """Owns the active task list and the archive batches.

    ``last_tick`` is the monotonic reference time elapsed-time accrual
    for the active task is measured from.
    """

    tasks: list[Task] = field(default_factory=list)
    archive: list[ArchiveItem] = field(default_factory=list)
    curr_archive: int = 0
    last_tick: float = field(default_factory=time.monotonic)
