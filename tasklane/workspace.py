"""Storage directory and path helpers for Tasklane."""

from __future__ import annotations

import os
from pathlib import Path


def workspace_root(arg: str | None = None) -> Path:
    """Resolve the storage directory.

    Priority: explicit CLI argument > TASKLANE_ROOT > current directory.
    """
    raw = arg or os.environ.get("TASKLANE_ROOT") or "."
    return Path(raw).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def tasks_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "tasks.json"


def archive_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "archive.json"


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.json"


def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "tasklane.yaml"


def log_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "tasklane.log"
