"""Tests for the configuration system.

Tests the ConfigBuilder class and the cached module-level accessors,
including file discovery, YAML validation, environment variable resolution
and dot-notation access.
"""

import pytest

from searchable.base.errors import ConfigurationError
from searchable.utils.config import (
    ConfigBuilder,
    get_config_builder,
    get_config_value,
    reset_config,
)


class TestConfigBuilder:
    """Test ConfigBuilder class."""

    def test_loads_yaml(self, tmp_path):
        """Test that ConfigBuilder loads valid YAML configuration."""
        config_file = tmp_path / "custom.yml"
        config_file.write_text(
            """
searchable:
  strict_options: false
  max_hierarchy_depth: 16
logging:
  logging_colors:
    setup_registry: cyan
"""
        )

        builder = ConfigBuilder(str(config_file))

        assert builder.get("searchable.strict_options") is False
        assert builder.get("searchable.max_hierarchy_depth") == 16
        assert builder.get("logging.logging_colors.setup_registry") == "cyan"

    def test_missing_path_returns_default(self, tmp_path):
        config_file = tmp_path / "custom.yml"
        config_file.write_text("searchable:\n  strict_options: true\n")

        builder = ConfigBuilder(config_file)

        assert builder.get("searchable.missing", 7) == 7
        assert builder.get("searchable.strict_options.deeper", "x") == "x"

    def test_no_file_means_empty_config(self):
        """Test that an unconfigured working directory yields defaults."""
        builder = ConfigBuilder()
        assert builder.config_path is None
        assert builder.raw_config == {}
        assert builder.get("searchable.max_hierarchy_depth", 64) == 64

    def test_discovers_file_in_cwd(self, tmp_path):
        (tmp_path / "searchable.yml").write_text("searchable:\n  max_hierarchy_depth: 8\n")
        builder = ConfigBuilder()
        assert builder.config_path.name == "searchable.yml"
        assert builder.get("searchable.max_hierarchy_depth") == 8

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "elsewhere.yml"
        config_file.write_text("searchable:\n  max_hierarchy_depth: 3\n")
        monkeypatch.setenv("SEARCHABLE_CONFIG", str(config_file))

        assert ConfigBuilder().get("searchable.max_hierarchy_depth") == 3

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigBuilder(tmp_path / "absent.yml")

    def test_env_var_missing_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SEARCHABLE_CONFIG", str(tmp_path / "absent.yml"))
        with pytest.raises(ConfigurationError):
            ConfigBuilder()

    def test_invalid_yaml_raises(self, tmp_path):
        config_file = tmp_path / "broken.yml"
        config_file.write_text("searchable: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Error parsing YAML"):
            ConfigBuilder(config_file)

    def test_non_mapping_raises(self, tmp_path):
        config_file = tmp_path / "list.yml"
        config_file.write_text("- one\n- two\n")
        with pytest.raises(ConfigurationError, match="dictionary/mapping"):
            ConfigBuilder(config_file)

    def test_empty_file_is_empty_config(self, tmp_path):
        config_file = tmp_path / "empty.yml"
        config_file.write_text("")
        assert ConfigBuilder(config_file).raw_config == {}


class TestEnvironmentResolution:
    """Test ${VAR} substitution in configuration values."""

    def test_variables_resolved(self, tmp_path, monkeypatch):
        """Test that environment variables are resolved in config."""
        monkeypatch.setenv("TEST_SEARCH_DEPTH_COLOR", "green")
        config_file = tmp_path / "env.yml"
        config_file.write_text(
            """
logging:
  logging_colors:
    fields: ${TEST_SEARCH_DEPTH_COLOR}
    setup_registry: $TEST_SEARCH_DEPTH_COLOR
"""
        )

        builder = ConfigBuilder(config_file)

        assert builder.get("logging.logging_colors.fields") == "green"
        assert builder.get("logging.logging_colors.setup_registry") == "green"

    def test_default_syntax(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TEST_UNSET_VARIABLE", raising=False)
        config_file = tmp_path / "env.yml"
        config_file.write_text("logging:\n  logging_colors:\n    fields: ${TEST_UNSET_VARIABLE:-blue}\n")

        assert ConfigBuilder(config_file).get("logging.logging_colors.fields") == "blue"

    def test_unset_variable_kept_verbatim(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TEST_UNSET_VARIABLE", raising=False)
        config_file = tmp_path / "env.yml"
        config_file.write_text("value: ${TEST_UNSET_VARIABLE}\n")

        assert ConfigBuilder(config_file).get("value") == "${TEST_UNSET_VARIABLE}"


class TestModuleAccessors:
    """Test the cached accessors used throughout the package."""

    def test_get_config_value_default(self):
        assert get_config_value("searchable.strict_options", True) is True

    def test_get_config_value_rejects_empty_path(self):
        with pytest.raises(ValueError):
            get_config_value("")

    def test_default_config_is_cached(self, tmp_path):
        """Test that the default builder is reused until reset_config()."""
        first = get_config_builder()
        (tmp_path / "searchable.yml").write_text("searchable:\n  max_hierarchy_depth: 9\n")

        assert get_config_builder() is first
        assert get_config_value("searchable.max_hierarchy_depth", 64) == 64

        reset_config()
        assert get_config_value("searchable.max_hierarchy_depth", 64) == 9

    def test_explicit_path_set_as_default(self, tmp_path):
        config_file = tmp_path / "explicit.yml"
        config_file.write_text("searchable:\n  strict_options: false\n")

        builder = get_config_builder(config_file, set_as_default=True)

        assert get_config_builder() is builder
        assert get_config_value("searchable.strict_options", True) is False

    def test_explicit_path_lookup(self, tmp_path):
        config_file = tmp_path / "explicit.yml"
        config_file.write_text("searchable:\n  max_hierarchy_depth: 12\n")

        assert get_config_value("searchable.max_hierarchy_depth", 64, config_path=config_file) == 12
        assert get_config_value("searchable.max_hierarchy_depth", 64) == 64
