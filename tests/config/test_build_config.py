"""
Tests for BuildConfig and the YAML settings file.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from tacobuild.config.settings import (
    BuildConfig,
    find_settings_file,
    load_settings_file,
)
from tacobuild.core.exceptions import ConfigurationError


class TestFromEnvironment:
    def test_cache_from_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = BuildConfig.from_environment({"CORDOVA_CACHE": str(tmp_path / "c")})

        assert config.cache_directory == tmp_path / "c"
        assert config.project_root == Path.cwd()
        assert config.toolchain_version is None

    @pytest.mark.skipif(os.name == "nt", reason="Unix default location")
    def test_default_cache(self, tmp_path):
        with patch("pathlib.Path.home", return_value=tmp_path):
            config = BuildConfig.from_environment({})

        assert config.cache_directory == tmp_path / ".cordova-cache"

    def test_sub_cache_properties(self, config, cache_dir):
        assert config.platform_cache_dir == cache_dir / "_cordovaPlatformCache"
        assert config.plugin_cache_dir == cache_dir / "_pluginCache"


class TestConfigure:
    def test_overrides(self, config, tmp_path):
        other = tmp_path / "other"
        other.mkdir()

        result = config.configure(
            cache_directory=tmp_path / "c2",
            toolchain_version="4.3.0",
            project_root=other,
        )

        assert result is config
        assert config.cache_directory == tmp_path / "c2"
        assert config.toolchain_version == "4.3.0"
        assert config.project_root == other.resolve()

    def test_relative_project_root_resolved(self, config, tmp_path, monkeypatch):
        (tmp_path / "rel").mkdir()
        monkeypatch.chdir(tmp_path)

        config.configure(project_root="rel")

        assert config.project_root == (tmp_path / "rel").resolve()
        assert config.project_root.is_absolute()

    def test_missing_project_root_fails_immediately(self, config, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            config.configure(project_root=tmp_path / "missing")

    def test_failed_configure_changes_nothing(self, config, tmp_path, cache_dir, project_dir):
        with pytest.raises(ConfigurationError):
            config.configure(
                cache_directory=tmp_path / "elsewhere",
                toolchain_version="3.6.3",
                project_root=tmp_path / "missing",
            )

        assert config.cache_directory == cache_dir
        assert config.project_root == project_dir
        assert config.toolchain_version is None

    def test_version_whitespace_stripped(self, config):
        config.configure(toolchain_version=" 5.1.1\n")

        assert config.toolchain_version == "5.1.1"

    def test_project_root_must_be_directory(self, config, tmp_path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")

        with pytest.raises(ConfigurationError):
            config.configure(project_root=file_path)

    def test_none_values_leave_settings(self, config, cache_dir):
        config.configure(cache_directory=None, toolchain_version=None)

        assert config.cache_directory == cache_dir
        assert config.toolchain_version is None

    def test_unknown_option(self, config):
        with pytest.raises(ConfigurationError, match="cordovaVersion"):
            config.configure(cordovaVersion="5.1.1")

    def test_version_coerced_to_string(self, config):
        config.configure(toolchain_version=5.1)

        assert config.toolchain_version == "5.1"


class TestSettingsFile:
    def test_find_settings_file(self, project_dir):
        assert find_settings_file(project_dir) is None

        (project_dir / "tacobuild.yaml").write_text("toolchain_version: 5.1.1\n")

        assert find_settings_file(project_dir) == project_dir / "tacobuild.yaml"

    def test_load_all_keys(self, tmp_path):
        (tmp_path / "app").mkdir()
        settings = tmp_path / "tacobuild.yaml"
        settings.write_text(
            "cache_directory: /opt/cordova-cache\n"
            "toolchain_version: '5.1.1'\n"
            "project_root: app\n"
        )

        options = load_settings_file(settings)

        assert options["cache_directory"] == Path("/opt/cordova-cache")
        assert options["toolchain_version"] == "5.1.1"
        assert options["project_root"] == tmp_path / "app"

    def test_empty_file(self, tmp_path):
        settings = tmp_path / "tacobuild.yaml"
        settings.write_text("")

        assert load_settings_file(settings) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        settings = tmp_path / "tacobuild.yaml"
        settings.write_text("toolchain_version: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_settings_file(settings)

    def test_not_a_mapping(self, tmp_path):
        settings = tmp_path / "tacobuild.yaml"
        settings.write_text("- 5.1.1\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings_file(settings)

    def test_unknown_key(self, tmp_path):
        settings = tmp_path / "tacobuild.yaml"
        settings.write_text("platforms: [ios]\n")

        with pytest.raises(ConfigurationError, match="platforms"):
            load_settings_file(settings)
