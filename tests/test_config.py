"""
Tests for the configuration loader and the InstallConfig model.
"""

from pathlib import Path

import pytest

from bootstrapper.core.config.loader import ConfigError, find_config_file, load_config
from bootstrapper.core.models.config import InstallConfig
from tests.helpers import write_config


class TestFindConfig:
    def test_finds_yaml(self, tmp_path: Path):
        path = write_config(tmp_path)
        assert find_config_file(tmp_path) == path.resolve()

    def test_finds_yml(self, tmp_path: Path):
        (tmp_path / "october.yml").write_text("app: {}\n")
        assert find_config_file(tmp_path).name == "october.yml"

    def test_none_when_missing(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None


class TestLoadConfig:
    def test_empty_file_uses_defaults(self, tmp_path: Path):
        config = load_config(write_config(tmp_path, ""))
        assert config.database.connection == "mysql"
        assert config.plugin_declarations == []
        assert config.theme_declaration is None
        assert config.project_id is None
        assert config.deployment_kind is None

    def test_full_file(self, tmp_path: Path):
        path = write_config(
            tmp_path,
            """\
            app:
              name: Acme
              url: https://acme.test
              debug: false
            cms:
              theme: demo
              edit_mode: true
            database:
              connection: mysql
              host: db
              port: 3306
              username: root
              password: 1234
              database: october
            git:
              deployment: gitlab
              bareRepo: true
            plugins:
              - RainLab.User
              - "!Acme.Blog@https://git.example.com/acme/blog.git:develop"
            project: 987654
            """,
        )
        config = load_config(path)

        assert config.app.debug is False
        assert config.cms.edit_mode is True
        assert config.database.port == 3306
        assert config.database.password == "1234"
        assert config.git.bare_repo is True
        assert config.deployment_kind == "gitlab"
        assert config.theme_declaration == "demo"
        assert config.project_id == "987654"
        assert len(config.plugin_declarations) == 2

    def test_empty_sections(self, tmp_path: Path):
        config = load_config(write_config(tmp_path, "plugins:\ncms:\nproject:\n"))
        assert config.plugin_declarations == []
        assert config.theme_declaration is None

    def test_blank_plugin_entries_are_ignored(self, tmp_path: Path):
        config = load_config(write_config(tmp_path, "plugins:\n  - a.one\n  - ''\n  -\n"))
        assert config.plugin_declarations == ["a.one"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "october.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(write_config(tmp_path, "plugins: [a.one\n"))

    def test_not_a_mapping(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(write_config(tmp_path, "- a.one\n"))

    def test_schema_violation(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(write_config(tmp_path, "database:\n  port: not-a-port\n"))

    def test_malformed_declaration_is_config_error(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="vendorname"):
            load_config(write_config(tmp_path, "plugins:\n  - vendorname\n"))


class TestInstallConfig:
    def test_sqlite_is_file_based(self):
        config = InstallConfig.model_validate({"database": {"connection": "sqlite"}})
        assert config.database.is_file_based

    def test_bare_repo_by_field_name(self):
        config = InstallConfig.model_validate({"git": {"bare_repo": True}})
        assert config.git.bare_repo is True

    def test_whitespace_theme_is_none(self):
        assert InstallConfig.model_validate({"cms": {"theme": "  "}}).theme_declaration is None

    def test_numbers_in_text_fields_become_strings(self):
        config = InstallConfig.model_validate(
            {
                "app": {"name": 2024, "locale": 1.5},
                "mail": {"host": 10, "name": 7},
                "cms": {"theme": 42},
                "git": {"deployment": 1},
            }
        )
        assert config.app.name == "2024"
        assert config.app.locale == "1.5"
        assert config.mail.host == "10"
        assert config.theme_declaration == "42"
        assert config.deployment_kind == "1"

    def test_numeric_fields_stay_numeric(self):
        config = InstallConfig.model_validate({"database": {"port": 3306}, "app": {"debug": False}})
        assert config.database.port == 3306
        assert config.app.debug is False

    def test_empty_text_values(self):
        config = InstallConfig.model_validate({"database": {"password": None}, "cms": {"theme": None}})
        assert config.database.password == ""
        assert config.cms.theme is None


class TestProjectId:
    def test_unquoted_integer(self, tmp_path: Path):
        assert load_config(write_config(tmp_path, "project: 987654\n")).project_id == "987654"

    def test_quoted_scientific_looking_id(self, tmp_path: Path):
        assert load_config(write_config(tmp_path, 'project: "123e4"\n')).project_id == "123e4"

    def test_unquoted_float_is_rejected(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="quote it in october.yaml"):
            load_config(write_config(tmp_path, "project: 12.50\n"))
