# tests/test_config.py
"""Tests for loading generator configuration from TOML files."""

from pathlib import Path

import pytest

from egogen.config.loader import build_config, load_and_merge_configs
from egogen.config.settings import DEFAULT_TOOL_NAME, GeneratorConfig
from egogen.exceptions import ConfigError


@pytest.fixture(autouse=True)
def no_user_config(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("egogen.config.loader.USER_CONFIG_FILE", tmp_path / "no-user-config.toml")


class TestLoadAndMergeConfigs:
    def test_no_files(self, tmp_path: Path):
        assert load_and_merge_configs(cwd=tmp_path) == {}

    def test_project_file(self, tmp_path: Path):
        (tmp_path / ".egogen.toml").write_text('tool_name = "mytool"\nline_markers = true\n')
        assert load_and_merge_configs(cwd=tmp_path) == {"tool_name": "mytool", "line_markers": True}

    def test_pyproject_tool_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n\n[tool.egogen]\npackage = "views"\n')
        assert load_and_merge_configs(cwd=tmp_path) == {"package": "views"}

    def test_first_project_file_wins(self, tmp_path: Path):
        (tmp_path / ".egogen.toml").write_text('tool_name = "hidden"\n')
        (tmp_path / "egogen.toml").write_text('tool_name = "visible"\n')
        assert load_and_merge_configs(cwd=tmp_path)["tool_name"] == "hidden"

    def test_user_file_is_overridden_by_project(self, tmp_path: Path, monkeypatch):
        user_file = tmp_path / "user.toml"
        user_file.write_text('tool_name = "user"\nnormalize = false\n')
        monkeypatch.setattr("egogen.config.loader.USER_CONFIG_FILE", user_file)
        project = tmp_path / "project"
        project.mkdir()
        (project / "egogen.toml").write_text('tool_name = "project"\n')
        assert load_and_merge_configs(cwd=project) == {"tool_name": "project", "normalize": False}

    def test_invalid_toml(self, tmp_path: Path):
        (tmp_path / "egogen.toml").write_text("tool_name = \n")
        with pytest.raises(ConfigError):
            load_and_merge_configs(cwd=tmp_path)


class TestBuildConfig:
    def test_defaults(self):
        config = build_config({})
        assert config == GeneratorConfig()
        assert config.tool_name == DEFAULT_TOOL_NAME
        assert config.normalize is True
        assert config.line_markers is False

    def test_file_values_and_aliases(self):
        config = build_config({"tool_name": "t", "package": "views", "line_markers": True})
        assert (config.tool_name, config.package_name, config.line_markers) == ("t", "views", True)

    def test_overrides_win_unless_none(self):
        config = build_config({"tool_name": "file", "normalize": False}, tool_name="cli", normalize=None)
        assert config.tool_name == "cli"
        assert config.normalize is False

    def test_unknown_file_keys_are_ignored(self):
        assert build_config({"colour": "blue"}) == GeneratorConfig()

    def test_unknown_override_is_an_error(self):
        with pytest.raises(ConfigError):
            build_config({}, colour="blue")

    def test_type_errors(self):
        with pytest.raises(ConfigError):
            build_config({"line_markers": "yes"})
        with pytest.raises(ConfigError):
            build_config({"tool_name": 3})

    def test_empty_tool_name_falls_back(self):
        assert GeneratorConfig(tool_name="").tool_name == DEFAULT_TOOL_NAME
