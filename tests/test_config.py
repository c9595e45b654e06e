"""Tests for tasklane/config.py and tasklane/workspace.py."""

from pathlib import Path

import pytest

from tasklane.config import AppConfig, load_config
from tasklane.workspace import archive_path, settings_path, tasks_path, workspace_root


def test_defaults_when_missing(tmp_path):
    cfg = load_config(tmp_path)
    assert cfg == AppConfig()
    assert cfg.tick_interval == pytest.approx(0.2)
    assert cfg.blink_interval == pytest.approx(0.4)


def test_reads_yaml(tmp_path):
    (tmp_path / "tasklane.yaml").write_text(
        "tick_ms: 100\nblink_ms: 500\nlog_level: debug\n", encoding="utf-8"
    )
    cfg = load_config(tmp_path)
    assert cfg.tick_ms == 100
    assert cfg.blink_ms == 500
    assert cfg.log_level == "DEBUG"


def test_invalid_values_are_sanitized():
    cfg = AppConfig.from_dict({"tick_ms": 1, "log_level": "LOUD"})
    assert cfg.tick_ms == 10
    assert cfg.log_level == "INFO"


def test_malformed_yaml_falls_back(tmp_path):
    (tmp_path / "tasklane.yaml").write_text("tick_ms: [unclosed\n", encoding="utf-8")
    assert load_config(tmp_path) == AppConfig()


def test_non_numeric_value_falls_back(tmp_path):
    (tmp_path / "tasklane.yaml").write_text("tick_ms: fast\n", encoding="utf-8")
    assert load_config(tmp_path) == AppConfig()


def test_workspace_root_priority(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKLANE_ROOT", str(tmp_path / "env"))
    assert workspace_root(str(tmp_path)) == tmp_path
    assert workspace_root() == tmp_path / "env"
    monkeypatch.delenv("TASKLANE_ROOT")
    monkeypatch.chdir(tmp_path)
    assert workspace_root() == Path.cwd()


def test_storage_file_names(tmp_path):
    assert tasks_path(tmp_path) == tmp_path / "tasks.json"
    assert archive_path(tmp_path) == tmp_path / "archive.json"
    assert settings_path(tmp_path) == tmp_path / "settings.json"
