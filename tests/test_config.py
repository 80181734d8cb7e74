"""Tests for Config."""

from pathlib import Path

import pytest

from compose_lint.config import Config
from compose_lint.exceptions import ConfigError
from compose_lint.models import Severity
from compose_lint.rules import MODIFIER_WITHOUT_DEFAULT, UNSTABLE_COLLECTIONS


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert "composable" in config.component_markers
        assert config.default_modifier_expression == "Modifier"
        assert config.registry.modifier_types == frozenset({"Modifier"})
        assert "list" in config.registry.unstable_collections
        assert config.log_dir is None

    def test_from_mapping(self):
        config = Config.from_mapping(
            {
                "component-markers": ["component"],
                "modifier_types": ["Modifier", "Style"],
                "workers": 2,
                "log-dir": "/tmp/logs",
            }
        )
        assert config.component_markers == frozenset({"component"})
        assert config.registry.modifier_types == frozenset({"Modifier", "Style"})
        assert config.workers == 2
        assert config.log_dir == Path("/tmp/logs")

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            Config.from_mapping({"colour": "red"})

    @pytest.mark.parametrize(
        "data",
        [
            {"workers": 0},
            {"component_markers": "composable"},
            {"default_modifier_expression": ""},
            {"severity_overrides": {"ComposeUnstableCollections": "fatal"}},
            {"severity_overrides": ["error"]},
        ],
    )
    def test_invalid_values(self, data):
        with pytest.raises(ConfigError):
            Config.from_mapping(data)

    def test_severity_overrides(self):
        config = Config.from_mapping(
            {"severity_overrides": {"composeunstablecollections": "WARNING"}}
        )
        assert config.severity_for(UNSTABLE_COLLECTIONS) == Severity.WARNING
        assert config.severity_for(MODIFIER_WITHOUT_DEFAULT) == Severity.ERROR


class TestFromPyproject:
    def test_reads_tool_table(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "app"\n\n'
            '[tool.compose-lint]\ndisabled-issues = ["ComposeUnstableCollections"]\n'
        )
        config = Config.from_pyproject(path)
        assert config.disabled_issues == frozenset({"ComposeUnstableCollections"})

    def test_missing_table_gives_defaults(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "app"\n')
        assert Config.from_pyproject(path) == Config()

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.compose-lint\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            Config.from_pyproject(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            Config.from_pyproject(tmp_path / "nope.toml")
