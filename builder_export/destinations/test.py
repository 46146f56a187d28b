"""Unit tests for destination lookup."""

import pytest

from builder_export.destinations.divi import DiviDestination
from builder_export.destinations.lib import (
    Destination,
    ModuleSpec,
    get_destination,
    list_destinations,
)


class TestLookup:
    """Tests for get_destination and list_destinations."""

    @pytest.mark.unit
    def test_list(self):
        """Divi is registered."""
        assert list_destinations() == ["divi"]

    @pytest.mark.unit
    def test_case_insensitive(self):
        """Names are matched case-insensitively."""
        assert isinstance(get_destination("DIVI"), DiviDestination)

    @pytest.mark.unit
    def test_fresh_instances(self):
        """Every lookup returns a new instance."""
        assert get_destination("divi") is not get_destination("divi")

    @pytest.mark.unit
    def test_unknown(self):
        """Unknown names raise KeyError listing what is available."""
        with pytest.raises(KeyError, match="Available: divi"):
            get_destination("elementor")


class TestDestination:
    """Tests for behavior shared by every destination."""

    @pytest.mark.unit
    def test_abstract(self):
        """The base class cannot be instantiated."""
        with pytest.raises(TypeError):
            Destination()

    @pytest.mark.unit
    def test_vocabulary_includes_default(self, divi):
        """The default module is always part of the vocabulary."""
        assert divi.default_module in divi.vocabulary
        assert set(divi.module_map.values()) <= divi.vocabulary

    @pytest.mark.unit
    def test_module_spec(self, divi):
        """Specs are looked up by module type."""
        spec = divi.module_spec("et_pb_button")
        assert isinstance(spec, ModuleSpec)
        assert spec.defaults["button_alignment"] == "center"
