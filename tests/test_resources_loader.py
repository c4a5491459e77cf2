"""Tests for alias list discovery on disk."""

from pathlib import Path

import pytest

from core.config import AppSettings
from core.errors import DuplicateAlias, UnreadableAliasList
from core.resources_loader import (
    builtin_lists_dir,
    list_dirs,
    load_default_registry,
    load_sources,
)
from core.services.alias_registry import load_registry


class TestLoadSources:
    """Tests for load_sources()."""

    def test_reads_list_files_only(self, tmp_path):
        (tmp_path / "_.list").write_text("a example.com/a@latest\n", encoding="utf-8")
        (tmp_path / "tools.list").write_text("# tools\nb example.com/b@latest desc\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        sources = load_sources([tmp_path])

        assert [s.name for s in sources] == ["_", "tools"]
        registry = load_registry(sources)
        assert set(registry) == {"a", "tools/b"}

    def test_missing_directory_is_skipped(self, tmp_path):
        assert load_sources([tmp_path / "nope"]) == []

    def test_undecodable_file_names_the_file(self, tmp_path):
        bad = tmp_path / "me.list"
        bad.write_bytes(b"caf\xe9 example.com/a@latest\n")
        with pytest.raises(UnreadableAliasList) as excinfo:
            load_sources([tmp_path])
        assert excinfo.value.path == str(bad)
        assert "UTF-8" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


class TestBuiltinLists:
    """The lists shipped with the package must always load."""

    def test_builtin_lists_are_valid(self):
        registry = load_registry(load_sources([builtin_lists_dir()]))
        assert "gopls" in registry
        assert "stringer" in registry
        assert "x/stringer" in registry
        assert str(registry["gopls"].target) == "golang.org/x/tools/gopls@latest"


class TestListDirs:
    """Tests for list_dirs() ordering."""

    def test_order(self, tmp_path, monkeypatch):
        monkeypatch.setattr("core.resources_loader.get_user_config_dir", lambda: tmp_path / "cfg")
        (tmp_path / "cfg" / "lists").mkdir(parents=True)
        settings = AppSettings(alias_dirs=[tmp_path / "from-settings"])

        dirs = list_dirs(settings, [tmp_path / "from-cli"])

        assert dirs == [
            builtin_lists_dir(),
            tmp_path / "cfg" / "lists",
            tmp_path / "from-settings",
            tmp_path / "from-cli",
        ]

    def test_user_dir_only_when_present(self, tmp_path, monkeypatch):
        monkeypatch.setattr("core.resources_loader.get_user_config_dir", lambda: tmp_path / "cfg")
        assert list_dirs(AppSettings()) == [builtin_lists_dir()]


class TestLoadDefaultRegistry:
    def test_extra_dir_collision_with_builtin(self, tmp_path, monkeypatch):
        monkeypatch.setattr("core.resources_loader.get_user_config_dir", lambda: tmp_path / "cfg")
        (tmp_path / "_.list").write_text("gopls example.com/other@latest\n", encoding="utf-8")
        with pytest.raises(DuplicateAlias):
            load_default_registry(AppSettings(), [tmp_path])

    def test_extra_dir_adds_aliases(self, tmp_path, monkeypatch):
        monkeypatch.setattr("core.resources_loader.get_user_config_dir", lambda: tmp_path / "cfg")
        (tmp_path / "me.list").write_text("gopl example.com/gopl@latest\n", encoding="utf-8")
        registry = load_default_registry(AppSettings(), [Path(tmp_path)])
        assert "me/gopl" in registry
        assert "gopls" in registry
