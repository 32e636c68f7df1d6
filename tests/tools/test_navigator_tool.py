#!/usr/bin/env python3
"""
Unit тесты для navigator_tool.py
"""

import errno
import json
import os
import time
from pathlib import Path

import pytest

from dir_navigator_mcp.core import mutations
from dir_navigator_mcp.core.controller import NavigationController
from dir_navigator_mcp.tools.navigator_tool import NavigatorCommands, NavigatorTool


class TestNavigatorTool:
    """Тесты для NavigatorTool"""

    @pytest.fixture
    def navigator_tool(self):
        """Создает экземпляр NavigatorTool"""
        return NavigatorTool(timeout=5.0)

    @pytest.fixture
    def root(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "main.py").write_text("print('hi')\n")
        (tmp_path / "README.md").write_text("# readme\n")
        return tmp_path

    @pytest.fixture
    def session(self, root):
        """Создает сессию навигации"""
        return NavigationController(root)

    def test_definition(self, navigator_tool):
        """Тест описания инструмента"""
        definition = navigator_tool.json_definition()
        assert definition["name"] == "navigator"
        schema = definition["parameters"]
        assert schema["required"] == ["command"]
        assert schema["properties"]["command"]["enum"] == NavigatorCommands

    @pytest.mark.asyncio
    async def test_missing_session(self, navigator_tool):
        """Тест вызова без сессии"""
        result = await navigator_tool.execute({"command": "ls"})
        assert result.error_code == -1
        assert "session" in result.error

    @pytest.mark.asyncio
    async def test_unknown_command(self, navigator_tool, session):
        """Тест неизвестной команды"""
        result = await navigator_tool.execute({"command": "rm -rf", "_session": session})
        assert result.error == "Unknown command: rm -rf"

    @pytest.mark.asyncio
    async def test_target_required(self, navigator_tool, session):
        """Тест: команда без обязательного target"""
        result = await navigator_tool.execute({"command": "create_file", "_session": session})
        assert result.error_code == -1
        assert "target" in result.error

    @pytest.mark.asyncio
    async def test_ls(self, navigator_tool, session, root):
        """Тест команды ls"""
        result = await navigator_tool.execute({"command": "ls", "_session": session})

        assert result.error is None
        output = json.loads(result.output)
        assert output["directory"] == "."
        assert [e["name"] for e in output["entries"]] == ["README.md", "src"]
        assert output["entries"][1]["type"] == "directory"
        assert result.data["snapshot"]["path"] == str(root)

    @pytest.mark.asyncio
    async def test_ls_empty(self, navigator_tool, session, root):
        """Тест ls пустого каталога"""
        (root / "empty").mkdir()
        result = await navigator_tool.execute({"command": "ls", "target": "empty", "_session": session})
        assert json.loads(result.output)["status"] == "empty"

    @pytest.mark.asyncio
    async def test_open_and_back(self, navigator_tool, session, root):
        """Тест команд open и back"""
        opened = await navigator_tool.execute({"command": "open", "target": "src", "_session": session})
        assert opened.data["entered_directory"] == str(root / "src")
        assert [c["name"] for c in opened.data["snapshot"]["children"]] == ["main.py"]
        assert opened.output.startswith("Entered directory")

        pwd = await navigator_tool.execute({"command": "pwd", "_session": session})
        assert pwd.output == str(root / "src")

        history = await navigator_tool.execute({"command": "history", "_session": session})
        assert history.data["history"] == [str(root)]

        back = await navigator_tool.execute({"command": "back", "_session": session})
        assert back.data["new_directory"] == str(root)

        again = await navigator_tool.execute({"command": "back", "_session": session})
        assert again.error is None
        assert again.data["no_history"] is True
        assert again.output.startswith("No previous directory")

    @pytest.mark.asyncio
    async def test_open_file(self, navigator_tool, session, root):
        """Тест открытия файла"""
        result = await navigator_tool.execute({"command": "open", "target": "README.md", "_session": session})
        assert result.data["file_to_view"] == str(root / "README.md")
        assert session.pwd() == root

    @pytest.mark.asyncio
    async def test_open_missing(self, navigator_tool, session):
        """Тест открытия несуществующего элемента"""
        result = await navigator_tool.execute({"command": "open", "target": "nope", "_session": session})
        assert result.error_code == -1
        assert result.data["error_kind"] == "NotFound"

    @pytest.mark.asyncio
    async def test_create_and_delete(self, navigator_tool, session, root):
        """Тест создания и удаления"""
        created = await navigator_tool.execute({"command": "create_directory", "target": "build", "_session": session})
        assert created.data["created"] == str(root / "build")
        assert "build" in [c["name"] for c in created.data["snapshot"]["children"]]

        duplicate = await navigator_tool.execute({"command": "create_directory", "target": "build", "_session": session})
        assert duplicate.data["error_kind"] == "AlreadyExists"

        escaped = await navigator_tool.execute({"command": "create_file", "target": "../x.txt", "_session": session})
        assert escaped.data["error_kind"] == "InvalidName"

        deleted = await navigator_tool.execute({"command": "delete", "target": "src", "_session": session})
        assert deleted.data["deleted_count"] == 2
        assert not (root / "src").exists()

        wrong_kind = await navigator_tool.execute({"command": "delete_file", "target": "build", "_session": session})
        assert wrong_kind.data["error_kind"] == "IsADirectory"

    @pytest.mark.asyncio
    async def test_partial_delete_failure(self, navigator_tool, session, root, monkeypatch):
        """Тест отчета о частичном удалении"""
        failing = root / "src" / "main.py"
        original = os.unlink

        def unlink(path, *args, **kwargs):
            if Path(path) == failing:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            return original(path, *args, **kwargs)

        monkeypatch.setattr(mutations.os, "unlink", unlink)
        result = await navigator_tool.execute({"command": "delete_directory", "target": "src", "_session": session})

        assert result.error_code == -1
        assert result.data == {
            "error_kind": "PartialDeleteFailure",
            "path": str(root / "src"),
            "first_failure": str(failing),
            "deleted_count": 0,
        }

    @pytest.mark.asyncio
    async def test_timeout(self, session, monkeypatch):
        """Тест таймаута файловой системы"""
        def slow_refresh():
            time.sleep(0.5)
            return session.snapshot()

        monkeypatch.setattr(session, "refresh", slow_refresh)
        navigator_tool = NavigatorTool(timeout=0.05)

        result = await navigator_tool.execute({"command": "refresh", "_session": session})

        assert result.error_code == -1
        assert result.data["error_kind"] == "Timeout"
