"""Unit tests for attribute extractors."""

import pytest

from builder_export.component import ComponentInfo
from builder_export.extract.lib import (
    classify_animation_name,
    detect_dynamic_content,
    extract_entrance_animation,
    extract_hover_effects,
    extract_motion_effects,
    extract_responsive_settings,
    generate_custom_css,
    parse_duration,
    parse_transition,
)


def _component(**data) -> ComponentInfo:
    return ComponentInfo.model_validate({"tagName": "div", **data})


class TestResponsiveSettings:
    """Tests for extract_responsive_settings."""

    @pytest.mark.unit
    def test_no_annotations(self):
        """Components without breakpoint styles yield None."""
        assert extract_responsive_settings(_component()) is None

    @pytest.mark.unit
    def test_mobile_and_tablet(self):
        """Only fontSize, padding and margin are extracted per breakpoint."""
        settings = extract_responsive_settings(
            _component(
                responsiveStyles={
                    "mobile": {"fontSize": "14px", "display": "block"},
                    "tablet": {"padding": "8px"},
                }
            )
        )
        assert settings.mobile.font_size == "14px"
        assert settings.mobile.padding is None
        assert settings.tablet.padding == "8px"

    @pytest.mark.unit
    def test_irrelevant_properties_only(self):
        """Breakpoints with no extracted values yield None."""
        component = _component(responsiveStyles={"mobile": {"display": "none"}})
        assert extract_responsive_settings(component) is None


class TestHoverEffects:
    """Tests for extract_hover_effects."""

    @pytest.mark.unit
    def test_reports_changed_properties(self):
        """Properties equal in both states are not reported."""
        effects = extract_hover_effects(
            _component(
                interactiveStates={
                    "normal": {"backgroundColor": "#fff", "color": "#000"},
                    "hover": {"backgroundColor": "#eee", "color": "#000"},
                }
            )
        )
        assert effects.background_color == "#eee"
        assert effects.color is None

    @pytest.mark.unit
    def test_hover_shadow_parsed(self):
        """A hover box shadow is parsed into its structure."""
        effects = extract_hover_effects(
            _component(interactiveStates={"hover": {"boxShadow": "0 2px 4px #000"}})
        )
        assert effects.box_shadow.vertical.value == 2
        assert effects.box_shadow.color == "#000"

    @pytest.mark.unit
    def test_unchanged_hover(self):
        """A hover bucket identical to normal yields None."""
        component = _component(
            interactiveStates={"normal": {"color": "red"}, "hover": {"color": "red"}}
        )
        assert extract_hover_effects(component) is None

    @pytest.mark.unit
    def test_parse_transition(self):
        """Transition parts are read positionally with defaults."""
        transition = parse_transition("opacity 0.5s")
        assert transition.property == "opacity"
        assert transition.duration == "0.5s"
        assert transition.timing_function == "ease"
        assert transition.delay == "0s"


class TestEntranceAnimation:
    """Tests for entrance animation extraction."""

    @pytest.mark.unit
    def test_parse_duration(self):
        """Seconds and milliseconds parse; anything else is 0."""
        assert parse_duration("1.5s") == 1500
        assert parse_duration("200ms") == 200
        assert parse_duration("fast") == 0
        assert parse_duration("xs") == 0
        assert parse_duration(None) == 0

    @pytest.mark.unit
    def test_classify_known_names(self):
        """Vendor-prefixed names are normalized by substring match."""
        assert classify_animation_name("animate__slideInLeft") == "slideInLeft"
        assert classify_animation_name("FADEIN") == "fadeIn"

    @pytest.mark.unit
    def test_unknown_name_kept(self):
        """Unknown names pass through unchanged."""
        assert classify_animation_name("wobble") == "wobble"

    @pytest.mark.unit
    def test_first_animation_used(self):
        """The first observed animation becomes the entrance animation."""
        animation = extract_entrance_animation(
            _component(
                animations=[
                    {"name": "zoomIn", "duration": "0.4s", "delay": "100ms",
                     "timingFunction": "ease-out"},
                    {"name": "fadeIn"},
                ]
            )
        )
        assert animation.type == "zoomIn"
        assert animation.duration == 400
        assert animation.delay == 100
        assert animation.easing == "ease-out"

    @pytest.mark.unit
    def test_no_animation(self):
        """Components without animations yield None."""
        assert extract_entrance_animation(_component()) is None


class TestMotionEffects:
    """Tests for extract_motion_effects."""

    @pytest.mark.unit
    def test_parallax(self):
        """Fixed background attachment becomes a parallax scroll effect."""
        effects = extract_motion_effects(_component(styles={"backgroundAttachment": "fixed"}))
        assert [e.type for e in effects.scroll_effects] == ["parallax"]

    @pytest.mark.unit
    def test_sticky(self):
        """Sticky positioning is reported with its offsets."""
        effects = extract_motion_effects(_component(styles={"position": "sticky", "top": "0"}))
        assert effects.sticky_effects.enabled is True
        assert effects.sticky_effects.top == "0"

    @pytest.mark.unit
    def test_scroll_reveal_class(self):
        """Animate-on-scroll classes become a fade-in scroll effect."""
        effects = extract_motion_effects(_component(className="card aos-init"))
        assert effects.scroll_effects[0].type == "fadeIn"
        assert effects.scroll_effects[0].viewport.end == 80

    @pytest.mark.unit
    def test_static_component(self):
        """Components without motion yield None."""
        assert extract_motion_effects(_component(styles={"position": "relative"})) is None


class TestCustomCss:
    """Tests for generate_custom_css."""

    @pytest.mark.unit
    def test_base_rule_uses_id(self):
        """The id selector is preferred and properties are kebab-cased."""
        css = generate_custom_css(_component(id="hero", styles={"backgroundColor": "#fff"}))
        assert css == "#hero {\n  background-color: #fff;\n}"

    @pytest.mark.unit
    def test_all_rule_kinds(self):
        """Hover, pseudo-elements and media queries are emitted in order."""
        css = generate_custom_css(
            _component(
                className="card big",
                styles={"color": "red"},
                interactiveStates={"hover": {"color": "blue"}},
                pseudoElements={"after": {"content": "''"}},
                responsiveStyles={"mobile": {"fontSize": "12px"}, "tablet": {"fontSize": "14px"}},
            )
        )
        assert css.index(".card {") < css.index(".card:hover {") < css.index(".card::after {")
        assert "@media (max-width: 767px) {\n  .card {\n    font-size: 12px;\n  }\n}" in css
        assert "@media (min-width: 768px) and (max-width: 1023px)" in css
        assert "::before" not in css

    @pytest.mark.unit
    def test_empty(self):
        """A component without styles yields an empty string."""
        assert generate_custom_css(_component()) == ""


class TestDynamicContent:
    """Tests for detect_dynamic_content."""

    @pytest.mark.unit
    def test_template_markers(self):
        """Template markers are reported with the text as fallback."""
        content = detect_dynamic_content(_component(textContent="Hi {{ user.name }}"))
        assert content.type == "custom_field"
        assert content.source == "Hi {{ user.name }}"
        assert content.fallback == "Hi {{ user.name }}"

    @pytest.mark.unit
    def test_shortcode(self):
        """Bracketed shortcodes are dynamic content."""
        assert detect_dynamic_content(_component(textContent="[year]")) is not None

    @pytest.mark.unit
    def test_data_attribute(self):
        """An explicit attribute names the source without a fallback."""
        content = detect_dynamic_content(
            _component(attributes={"data-dynamic-content": "post_title"})
        )
        assert content.source == "post_title"
        assert content.fallback is None

    @pytest.mark.unit
    def test_static_text(self):
        """Plain text is not dynamic."""
        assert detect_dynamic_content(_component(textContent="Hello")) is None
