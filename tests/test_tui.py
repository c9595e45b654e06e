"""Headless tests for cli/tasklane.py driven through Textual's pilot."""

import asyncio
import json

import pytest

from cli.tasklane import TasklaneApp, main
from tasklane.archive import load_store
from tasklane.config import AppConfig
from tasklane.controller import AppState, Controller
from tasklane.settings import load_settings


def _app(root):
    controller = Controller(load_store(root), load_settings(root), root=root)
    return TasklaneApp(controller, AppConfig())


def _drive(app, *keys):
    async def run():
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)
            await pilot.pause()

    asyncio.run(run())


def test_add_task_and_quit_persists(storage):
    app = _app(storage)
    _drive(app, "a", "m", "i", "l", "k", "escape", "q")

    assert not app.controller.running
    tasks = json.loads((storage / "tasks.json").read_text())
    assert tasks[-1]["title"] == "milk"
    assert tasks[-1]["is_done"] is False


def test_tab_moves_between_views(storage):
    app = _app(storage)
    _drive(app, "tab")
    assert app.controller.state is AppState.ARCHIVED
    assert app.controller.tab_index() == 1


def test_archive_done_through_popup(storage):
    app = _app(storage)
    _drive(app, "c", "enter", "q")

    tasks = json.loads((storage / "tasks.json").read_text())
    archive = json.loads((storage / "archive.json").read_text())
    assert [t["title"] for t in tasks] == ["Write report"]
    assert [t["title"] for t in archive[-1]["tasks"]] == ["Review PR"]


def test_main_rejects_extra_arguments(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["one", "two"])
    assert exc.value.code == 1
    assert "Too many arguments" in capsys.readouterr().out


def test_main_rejects_missing_directory(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing")])
    assert exc.value.code == 1
    assert "not found" in capsys.readouterr().out


def test_main_rejects_corrupt_tasks(tmp_path, capsys):
    (tmp_path / "tasks.json").write_text("[{", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path)])
    assert exc.value.code == 1
    assert "Cannot load" in capsys.readouterr().out


def test_main_reports_unwritable_log(tmp_path, capsys):
    (tmp_path / "tasklane.log").mkdir()
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path)])
    assert exc.value.code == 1
    assert "Cannot open log file" in capsys.readouterr().out
