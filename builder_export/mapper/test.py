"""Unit tests for the component-to-module mapper."""

import pytest

from builder_export.component import ColorPalette, ComponentInfo, parse_html_components
from builder_export.mapper.lib import map_component, resolve_module_type
from builder_export.tokens import build_token_index


class TestResolveModuleType:
    """Tests for module type resolution."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "html,expected",
        [
            ("<p>x</p>", "et_pb_text"),
            ("<h2>x</h2>", "et_pb_text"),
            ('<img src="a.png">', "et_pb_image"),
            ('<a href="#">Go</a>', "et_pb_button"),
            ("<form><input></form>", "et_pb_contact_form"),
            ("<hr>", "et_pb_divider"),
            ("<pre>x = 1</pre>", "et_pb_code"),
            ('<nav><a href="#">Home</a></nav>', "et_pb_menu"),
            ('<picture><img src="a.png"></picture>', "et_pb_image"),
            ('<audio src="a.mp3"></audio>', "et_pb_audio"),
            ('<div class="feature-blurb"><h4>t</h4></div>', "et_pb_blurb"),
            ('<div class="pricing-card"><h4>t</h4></div>', "et_pb_pricing_tables"),
            ('<div class="cta"><h2>t</h2></div>', "et_pb_cta"),
            ("<span>x</span>", "et_pb_text"),
        ],
    )
    def test_tag_and_class(self, divi, html, expected):
        """Tags and class hints resolve through the destination table."""
        (component,) = parse_html_components(html)
        assert resolve_module_type(component, divi) == expected

    @pytest.mark.unit
    def test_explicit_type_wins(self, divi):
        """An explicit component type overrides the tag."""
        component = ComponentInfo(tag_name="div", component_type="countdown-timer")
        assert resolve_module_type(component, divi) == "et_pb_countdown_timer"

    @pytest.mark.unit
    def test_unknown_type_falls_back(self, divi):
        """Unknown explicit types fall through to tag classification."""
        component = ComponentInfo(tag_name="img", component_type="hologram")
        assert resolve_module_type(component, divi) == "et_pb_image"


class TestMapComponent:
    """Tests for attribute composition."""

    @pytest.mark.unit
    def test_identity_and_defaults(self, divi):
        """Identity attributes and spec defaults are both present."""
        (component,) = parse_html_components('<p id="intro" class="lead">Hi</p>')
        module = map_component(component, divi)
        assert module.type == "et_pb_text"
        assert module.content == "Hi"
        assert module.attrs["module_id"] == "intro"
        assert module.attrs["module_class"] == "lead"
        assert module.attrs["background_layout"] == "light"

    @pytest.mark.unit
    def test_builder_overrides_defaults(self, divi):
        """Source-derived values win over defaults."""
        (component,) = parse_html_components('<a href="/x" target="_blank">Go</a>')
        module = map_component(component, divi)
        assert module.attrs["url_new_window"] == "on"
        assert module.attrs["button_alignment"] == "center"

    @pytest.mark.unit
    def test_feature_payloads(self, divi):
        """Extracted features are encoded and kept as payloads."""
        component = ComponentInfo.model_validate(
            {
                "tagName": "p",
                "textContent": "Hi",
                "styles": {"color": "#111111", "padding": "10px"},
                "animations": [{"name": "slideInLeft", "duration": "1s"}],
                "interactiveStates": {"normal": {"color": "#111111"}, "hover": {"color": "#222222"}},
            }
        )
        module = map_component(component, divi)
        assert module.attrs["animation"] == "left"
        assert module.attrs["animation_duration"] == "1000ms"
        assert module.attrs["text_color_hover"] == "#222222"
        assert module.attrs["custom_padding"] == "10px|10px|10px|10px"
        assert module.entrance_animation.type == "slideInLeft"
        assert module.hover_effects.color == "#222222"
        assert module.box_model is not None
        assert "color: #111111;" in module.custom_css

    @pytest.mark.unit
    def test_token_links(self, divi):
        """Colors matching the palette link to global colors."""
        palette = ColorPalette.model_validate({"primary": [{"hex": "#0066cc"}]})
        component = ComponentInfo(tag_name="p", text_content="x", styles={"color": "#06C"})
        module = map_component(component, divi, build_token_index(palette))
        assert module.attrs["text_color_global"] == "primary-1"
        assert module.color_tokens == {"color": "primary-1"}
        assert module.font_tokens is None

    @pytest.mark.unit
    def test_size_token_payload(self, divi, sample_typography):
        """A font size on the type scale is carried as a size token only."""
        component = ComponentInfo(tag_name="h2", text_content="x", styles={"fontSize": "32px"})
        module = map_component(component, divi, build_token_index(typography=sample_typography))
        assert module.size_tokens == {"fontSize": "2xl"}
        assert module.color_tokens is None
        assert module.attrs.get("text_color_global") is None

    @pytest.mark.unit
    def test_plain_component_has_no_payloads(self, divi):
        """Components without features carry no payloads."""
        module = map_component(ComponentInfo(tag_name="p", text_content="x"), divi)
        assert module.custom_css is None
        assert module.entrance_animation is None
        assert module.color_tokens is None
