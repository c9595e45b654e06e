"""Runtime configuration loaded from ``tasklane.yaml`` in the storage directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from tasklane.fileio import read_yaml
from tasklane.workspace import config_path

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class AppConfig:
    tick_ms: int = 200
    blink_ms: int = 400
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AppConfig:
        if not d or not isinstance(d, dict):
            return cls()
        level = str(d.get("log_level", "INFO")).upper()
        if level not in VALID_LOG_LEVELS:
            level = "INFO"
        return cls(
            tick_ms=max(10, int(d.get("tick_ms", 200))),
            blink_ms=max(10, int(d.get("blink_ms", 400))),
            log_level=level,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"tick_ms": self.tick_ms, "blink_ms": self.blink_ms, "log_level": self.log_level}

    @property
    def tick_interval(self) -> float:
        return self.tick_ms / 1000.0

    @property
    def blink_interval(self) -> float:
        return self.blink_ms / 1000.0


def load_config(root: Path | None = None) -> AppConfig:
    """Load tasklane.yaml, falling back to defaults when missing or malformed."""
    path = config_path(root)
    try:
        return AppConfig.from_dict(read_yaml(path))
    except (yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning("Ignoring malformed config %s: %s", path, e)
        return AppConfig()
