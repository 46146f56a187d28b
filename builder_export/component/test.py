"""Unit tests for the capture input models."""

import pytest
from pydantic import ValidationError

from builder_export.component.lib import (
    CapturedPage,
    ComponentInfo,
    FontFamily,
    kebab_to_camel,
    parse_style_declarations,
)


class TestStyleParsing:
    """Tests for inline style helpers."""

    @pytest.mark.unit
    def test_kebab_to_camel(self):
        """CSS property names become camelCase keys."""
        assert kebab_to_camel("background-color") == "backgroundColor"
        assert kebab_to_camel("color") == "color"
        assert kebab_to_camel("--brand") == "--brand"

    @pytest.mark.unit
    def test_parse_declarations(self):
        """Well-formed declarations are kept in order."""
        styles = parse_style_declarations("color: red; padding:10px 20px")
        assert styles == {"color": "red", "padding": "10px 20px"}

    @pytest.mark.unit
    def test_malformed_declaration_skipped(self):
        """A malformed declaration does not fail the whole string."""
        styles = parse_style_declarations("bogus; color: blue; :nothing")
        assert styles == {"color": "blue"}

    @pytest.mark.unit
    def test_important_stripped(self):
        """!important flags are dropped from values."""
        assert parse_style_declarations("color: red !important") == {"color": "red"}

    @pytest.mark.unit
    def test_empty_input(self):
        """None and empty strings parse to an empty map."""
        assert parse_style_declarations(None) == {}
        assert parse_style_declarations("") == {}


class TestComponentInfo:
    """Tests for ComponentInfo decoding."""

    @pytest.mark.unit
    def test_decodes_camel_case(self):
        """Capture JSON field names are accepted."""
        info = ComponentInfo.model_validate(
            {
                "tagName": "P",
                "className": "Lead Intro",
                "textContent": "Hi",
                "innerHTML": "<b>Hi</b>",
                "componentType": "text",
            }
        )
        assert info.tag == "p"
        assert info.class_list == ["lead", "intro"]
        assert info.inner_html == "<b>Hi</b>"
        assert info.component_type == "text"

    @pytest.mark.unit
    def test_snake_case_construction(self):
        """Python callers may use field names."""
        info = ComponentInfo(tag_name="img", text_content="")
        assert info.tag == "img"
        assert info.has_content is False

    @pytest.mark.unit
    def test_inline_style_merged_under_styles(self):
        """Inline style fills gaps; the resolved style map wins."""
        info = ComponentInfo.model_validate(
            {
                "tagName": "div",
                "attributes": {"style": "color: red; margin: 4px"},
                "styles": {"color": "blue"},
            }
        )
        assert info.styles == {"color": "blue", "margin": "4px"}

    @pytest.mark.unit
    def test_style_values_stringified(self):
        """Numeric style values become strings; empty ones are dropped."""
        info = ComponentInfo(styles={"zIndex": 3, "color": "", "opacity": None})
        assert info.styles == {"zIndex": "3"}

    @pytest.mark.unit
    def test_frozen(self):
        """Input components cannot be mutated."""
        info = ComponentInfo(tag_name="p")
        with pytest.raises(ValidationError):
            info.tag_name = "div"

    @pytest.mark.unit
    def test_iter_tree_depth_first(self):
        """iter_tree yields nodes depth-first in source order."""
        tree = ComponentInfo.model_validate(
            {
                "tagName": "div",
                "children": [
                    {"tagName": "h1", "children": [{"tagName": "span"}]},
                    {"tagName": "p"},
                ],
            }
        )
        assert [n.tag for n in tree.iter_tree()] == ["div", "h1", "span", "p"]

    @pytest.mark.unit
    def test_advanced_annotations(self):
        """Responsive, hover, animation and pseudo-element data decode."""
        info = ComponentInfo.model_validate(
            {
                "tagName": "div",
                "responsiveStyles": {"mobile": {"fontSize": "14px"}},
                "interactiveStates": {"hover": {"backgroundColor": "#000"}},
                "animations": [{"name": "fadeIn", "duration": "1s"}],
                "pseudoElements": {"before": {"content": "'*'"}},
            }
        )
        assert info.responsive_styles.mobile == {"fontSize": "14px"}
        assert info.interactive_states.hover == {"backgroundColor": "#000"}
        assert info.animations[0].timing_function == "ease"
        assert info.pseudo_elements.before == {"content": "'*'"}


class TestDesignInputs:
    """Tests for optional design inputs."""

    @pytest.mark.unit
    def test_font_contexts_flattened(self):
        """Context records are reduced to their type string."""
        family = FontFamily.model_validate(
            {"name": "Inter", "contexts": [{"type": "body"}, "heading"]}
        )
        assert family.contexts == ["body", "heading"]

    @pytest.mark.unit
    def test_captured_page_accepts_bare_list(self):
        """A bare component list is accepted as a page."""
        page = CapturedPage.model_validate([{"tagName": "p"}])
        assert len(page.components) == 1
        assert page.color_palette is None

    @pytest.mark.unit
    def test_full_page(self):
        """All optional inputs decode from camelCase JSON."""
        page = CapturedPage.model_validate(
            {
                "components": [],
                "colorPalette": {
                    "primary": [{"hex": "#2563eb"}],
                    "semantic": {"error": {"hex": "#dc2626"}},
                },
                "typographySystem": {
                    "fontFamilies": [{"name": "Inter", "contexts": ["body"]}],
                    "textStyles": {"h1": {"fontFamily": "Poppins", "fontSize": "48px"}},
                    "globalSettings": {"baseFontSize": 18},
                },
                "componentLibrary": {
                    "templates": [{"name": "Card", "category": "cards", "reusabilityScore": 90}]
                },
                "templateParts": {"header": {"name": "Header", "confidence": 75}},
            }
        )
        assert page.color_palette.primary[0].hex == "#2563eb"
        assert page.color_palette.semantic.error.hex == "#dc2626"
        assert page.typography_system.text_styles["h1"].font_size == "48px"
        assert page.typography_system.global_settings.base_font_size == 18
        assert page.component_library.templates[0].reusability_score == 90
        assert page.template_parts.header.confidence == 75

    @pytest.mark.unit
    def test_score_bounds(self):
        """Reusability scores outside 0-100 are rejected."""
        with pytest.raises(ValidationError):
            CapturedPage.model_validate(
                {"componentLibrary": {"templates": [{"name": "X", "reusabilityScore": 120}]}}
            )
