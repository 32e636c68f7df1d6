#!/usr/bin/env python3
"""
Unit тесты для session_manager.py, path_utils.py и config.py
"""

from pathlib import Path

import pytest

from dir_navigator_mcp.core.errors import ConfigError, ConfigErrorKind, MutationError, MutationErrorKind
from dir_navigator_mcp.utils.config import ServiceConfig
from dir_navigator_mcp.utils.path_utils import (
    is_within,
    normalize_path,
    resolve_target,
    validate_entry_name,
)
from dir_navigator_mcp.utils.session_manager import SessionManager


class TestSessionManager:
    """Тесты для SessionManager"""

    def test_missing_root(self, tmp_path):
        """Тест: сессии не создаются без корня"""
        with pytest.raises(ConfigError) as exc_info:
            SessionManager(tmp_path / "missing")
        assert exc_info.value.kind is ConfigErrorKind.ROOT_NOT_FOUND

    def test_same_id_same_session(self, tmp_path):
        """Тест: один id - одна сессия"""
        manager = SessionManager(tmp_path)
        assert manager.get_session() is manager.get_session("default")

    def test_sessions_are_independent(self, tmp_path):
        """Тест независимости сессий"""
        (tmp_path / "sub").mkdir()
        manager = SessionManager(tmp_path)

        first = manager.get_session("first")
        second = manager.get_session("second")
        first.open("sub")

        assert first.pwd() == tmp_path / "sub"
        assert second.pwd() == tmp_path
        assert manager.session_ids() == ["first", "second"]

    def test_close(self, tmp_path):
        """Тест закрытия сессии"""
        manager = SessionManager(tmp_path)
        session = manager.get_session("a")

        assert manager.close("a")
        assert not manager.close("a")
        assert manager.get_session("a") is not session


class TestPathUtils:
    """Тесты для path_utils"""

    def test_normalize_path(self, tmp_path):
        """Тест нормализации"""
        assert normalize_path(tmp_path / "a" / ".." / "b") == tmp_path / "b"
        assert normalize_path("relative").is_absolute()

    def test_is_within(self):
        """Тест проверки вложенности"""
        assert is_within(Path("/a/b"), Path("/a"))
        assert is_within(Path("/a"), Path("/a"))
        assert not is_within(Path("/ab"), Path("/a"))

    @pytest.mark.parametrize("name", ["a.txt", ".hidden", "with space", "..dots"])
    def test_valid_names(self, name):
        """Тест допустимых имен"""
        assert validate_entry_name(name) == name

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "../x"])
    def test_invalid_names(self, name):
        """Тест недопустимых имен"""
        with pytest.raises(MutationError) as exc_info:
            validate_entry_name(name)
        assert exc_info.value.kind is MutationErrorKind.INVALID_NAME

    def test_resolve_target(self):
        """Тест разрешения цели удаления"""
        root = Path("/srv/root")
        cwd = root / "a"
        assert resolve_target(root, cwd, "x.txt") == cwd / "x.txt"
        assert resolve_target(root, cwd, "../b") == root / "b"
        assert resolve_target(root, cwd, "/srv/root/c") == root / "c"

    @pytest.mark.parametrize("target", ["", "..", ".", "../..", "/etc"])
    def test_resolve_target_rejects(self, target):
        """Тест: корень, текущий каталог и пути вне корня отклоняются"""
        with pytest.raises(MutationError) as exc_info:
            resolve_target(Path("/srv/root"), Path("/srv/root/a"), target)
        assert exc_info.value.kind is MutationErrorKind.INVALID_NAME


class TestServiceConfig:
    """Тесты для ServiceConfig"""

    def test_reads_environment(self, tmp_path, monkeypatch):
        """Тест чтения переменных окружения"""
        monkeypatch.setenv("NAVIGATOR_ROOT", str(tmp_path))
        monkeypatch.setenv("FS_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("MCP_PORT", "9000")

        config = ServiceConfig()

        assert config.NAVIGATOR_ROOT == tmp_path
        assert config.FS_TIMEOUT_SECONDS == 2.5
        assert config.MCP_PORT == 9000
        assert config.MCP_TRANSPORT == "stdio"

    def test_root_defaults_to_cwd(self, tmp_path, monkeypatch):
        """Тест корня по умолчанию"""
        monkeypatch.delenv("NAVIGATOR_ROOT", raising=False)
        monkeypatch.chdir(tmp_path)
        assert ServiceConfig().NAVIGATOR_ROOT == tmp_path
