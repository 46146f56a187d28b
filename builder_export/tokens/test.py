"""Unit tests for the design token linker."""

import pytest

from builder_export.component import ColorPalette, ComponentInfo, TypographySystem
from builder_export.tokens.lib import (
    build_token_index,
    color_slots,
    link_design_tokens,
    normalize_color,
    normalize_font_family,
    normalize_font_size,
)


@pytest.fixture
def palette() -> ColorPalette:
    return ColorPalette.model_validate(
        {
            "primary": [{"hex": "#2563EB"}, {"hex": "#1E40AF"}],
            "accent": [{"hex": "#2563eb"}],
            "neutral": [{"hex": "#fff"}],
            "semantic": {"error": {"hex": "#dc2626"}, "success": {"hex": "#16a34a"}},
        }
    )


@pytest.fixture
def typography() -> TypographySystem:
    return TypographySystem.model_validate(
        {
            "fontFamilies": [
                {"name": "Inter", "contexts": ["body"]},
                {"name": "Playfair Display", "contexts": [{"type": "heading"}]},
                {"name": "Fira Code"},
            ],
            "typeScale": {
                "base": 16,
                "sizes": [
                    {"name": "base", "px": 16, "rem": 1},
                    {"name": "lg", "px": 20.0, "rem": 1.25},
                    {"name": "xl", "px": 24.5},
                ],
            },
        }
    )


class TestNormalization:
    """Tests for value normalization."""

    @pytest.mark.unit
    def test_colors(self):
        """Hex, short hex and rgb forms normalize to six-digit hex."""
        assert normalize_color("#ABCDEF") == "#abcdef"
        assert normalize_color("#fff") == "#ffffff"
        assert normalize_color("rgba(255, 0, 16, 0.5)") == "#ff0010"
        assert normalize_color("transparent") == "transparent"
        assert normalize_color(None) == ""

    @pytest.mark.unit
    def test_fonts(self):
        """Only the first family of a stack is kept."""
        assert normalize_font_family('"Playfair Display", serif') == "playfair display"
        assert normalize_font_family("Inter") == "inter"

    @pytest.mark.unit
    def test_font_sizes(self):
        """Pixel sizes normalize to a compact form; other units pass through."""
        assert normalize_font_size("20.0px") == "20px"
        assert normalize_font_size(" 24.5PX ") == "24.5px"
        assert normalize_font_size(18) == "18px"
        assert normalize_font_size("1.5rem") == "1.5rem"
        assert normalize_font_size(None) == ""


class TestTokenIndex:
    """Tests for build_token_index."""

    @pytest.mark.unit
    def test_slot_order(self, palette):
        """Palette slots come first, then semantic slots in fixed order."""
        slugs = [slot.slug for slot in color_slots(palette)]
        assert slugs == ["primary-1", "primary-2", "accent-1", "neutral-1", "success", "error"]

    @pytest.mark.unit
    def test_last_slot_wins(self, palette):
        """A value registered twice links to its last slot."""
        index = build_token_index(palette)
        assert index.colors["#2563eb"] == "accent-1"
        assert index.colors["#1e40af"] == "primary-2"
        assert index.colors["#ffffff"] == "neutral-1"

    @pytest.mark.unit
    def test_font_slots(self, typography):
        """Fonts are slotted by their first context, else by position."""
        index = build_token_index(typography=typography)
        assert index.fonts == {
            "inter": "body",
            "playfair display": "heading",
            "fira code": "font-3",
        }

    @pytest.mark.unit
    def test_size_slots(self, typography):
        """Type scale steps index by their pixel size."""
        index = build_token_index(typography=typography)
        assert index.sizes == {"16px": "base", "20px": "lg", "24.5px": "xl"}
        assert [slot.slug for slot in index.size_slots] == ["base", "lg", "xl"]

    @pytest.mark.unit
    def test_empty(self):
        """No inputs yield an empty index."""
        assert build_token_index().is_empty


class TestLinking:
    """Tests for link_design_tokens."""

    @pytest.mark.unit
    def test_links_colors_and_fonts(self, palette, typography):
        """Exact value matches are linked per style property."""
        index = build_token_index(palette, typography)
        component = ComponentInfo(
            styles={
                "color": "rgb(220, 38, 38)",
                "backgroundColor": "#FFFFFF",
                "borderColor": "#123456",
                "fontFamily": "'Inter', sans-serif",
            }
        )
        links = link_design_tokens(component, index)
        assert links.colors == {"color": "error", "backgroundColor": "neutral-1"}
        assert links.fonts == {"fontFamily": "body"}
        assert links

    @pytest.mark.unit
    def test_no_match(self, palette):
        """Near-miss colors are not linked."""
        links = link_design_tokens(
            ComponentInfo(styles={"color": "#2563ec"}), build_token_index(palette)
        )
        assert not links

    @pytest.mark.unit
    def test_links_font_size(self, typography):
        """A font size on the scale links to its step name."""
        index = build_token_index(typography=typography)
        links = link_design_tokens(ComponentInfo(styles={"fontSize": "20px"}), index)
        assert links.sizes == {"fontSize": "lg"}
        assert links
        off_scale = link_design_tokens(ComponentInfo(styles={"fontSize": "21px"}), index)
        assert not off_scale
