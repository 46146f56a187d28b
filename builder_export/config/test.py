"""Tests for configuration management."""

from dataclasses import fields

import pytest

from builder_export.config.lib import (
    EnvConfig,
    EnvVar,
    ExportOptions,
    get_environment,
    get_environment_info,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("EXPORT_DESTINATION", raising=False)
        assert get_environment(EnvVar.EXPORT_DESTINATION) == "divi"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("EXPORT_VALIDATE", "false")
        assert get_environment(EnvVar.EXPORT_VALIDATE, override=True) is True

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("EXPORT_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.EXPORT_LOG_LEVEL) == "DEBUG"

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("EXPORT_LAYOUTS", value)
            assert get_environment(EnvVar.EXPORT_LAYOUTS) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("EXPORT_OPTIMIZE", value)
            assert get_environment(EnvVar.EXPORT_OPTIMIZE) is False

    @pytest.mark.unit
    def test_invalid_bool_falls_back_to_default(self, monkeypatch):
        """Unrecognized boolean strings fall back to the default."""
        monkeypatch.setenv("EXPORT_VALIDATE", "maybe")
        assert get_environment(EnvVar.EXPORT_VALIDATE) is True


class TestEnvironmentIntrospection:
    """Tests for metadata and listing helpers."""

    @pytest.mark.unit
    def test_info_returns_config(self):
        """get_environment_info exposes the EnvConfig."""
        info = get_environment_info(EnvVar.EXPORT_GLOBAL_PRESETS)
        assert isinstance(info, EnvConfig)
        assert info.name == "EXPORT_GLOBAL_PRESETS"
        assert info.var_type is bool

    @pytest.mark.unit
    def test_all_names_match_members(self):
        """Each enum member's config name matches the member name."""
        for var in EnvVar:
            assert var.value.name == var.name

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Category filter returns only matching variables."""
        perf = list_environment_variables("performance")
        assert set(perf) == {EnvVar.EXPORT_COMBINE_CSS, EnvVar.EXPORT_CRITICAL_CSS}
        assert len(list_environment_variables()) == len(EnvVar)


# =============================================================================
# Tests for ExportOptions
# =============================================================================


class TestExportOptions:
    """Tests for the per-call export flags."""

    @pytest.mark.unit
    def test_defaults(self):
        """Validation and optimization are on by default."""
        options = ExportOptions()
        assert options.destination == "divi"
        assert options.validate_export is True
        assert options.optimize_export is True
        assert options.export_layouts is False
        assert options.create_global_presets is False

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch):
        """Environment values feed the options."""
        monkeypatch.setenv("EXPORT_GLOBAL_PRESETS", "yes")
        monkeypatch.setenv("EXPORT_OPTIMIZE", "0")
        options = ExportOptions.from_environment()
        assert options.create_global_presets is True
        assert options.optimize_export is False

    @pytest.mark.unit
    def test_overrides_win(self, monkeypatch):
        """Explicit overrides beat environment values; None is ignored."""
        monkeypatch.setenv("EXPORT_LAYOUTS", "false")
        options = ExportOptions.from_environment(export_layouts=True, destination=None)
        assert options.export_layouts is True
        assert options.destination == "divi"

    @pytest.mark.unit
    def test_every_option_has_a_variable(self):
        """Each options field is fed by exactly one environment variable."""
        fed = [var.value.option for var in EnvVar if var.value.option is not None]
        assert sorted(fed) == sorted(f.name for f in fields(ExportOptions))

    @pytest.mark.unit
    def test_blank_string_uses_default(self, monkeypatch):
        """A blank destination variable falls back to the default."""
        monkeypatch.setenv("EXPORT_DESTINATION", "  ")
        assert ExportOptions.from_environment().destination == "divi"

    @pytest.mark.unit
    def test_unknown_override_rejected(self):
        """Unknown keywords raise TypeError."""
        with pytest.raises(TypeError, match="colour"):
            ExportOptions.from_environment(colour=True)

    @pytest.mark.unit
    def test_frozen(self):
        """Options are immutable once built."""
        options = ExportOptions()
        with pytest.raises(AttributeError):
            options.destination = "other"  # type: ignore[misc]
