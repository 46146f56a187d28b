"""Unit tests for the Divi destination."""

from fractions import Fraction

import pytest

from builder_export.component import (
    ColorPalette,
    ComponentInfo,
    TypographySystem,
    parse_html_components,
)
from builder_export.destinations.divi.lib import (
    MODULE_MAP,
    MODULE_SPECS,
    DiviDestination,
    fraction_code,
    parse_fraction_code,
    spacing,
)
from builder_export.destinations.lib import ModuleFeatures
from builder_export.document import Column, Row
from builder_export.extract import (
    BreakpointSettings,
    EntranceAnimation,
    HoverEffects,
    ResponsiveSettings,
    TransitionEffect,
    extract_box_model,
    parse_box_shadow,
)
from builder_export.segment import segment
from builder_export.tokens import TokenLinks, build_token_index


@pytest.fixture
def destination() -> DiviDestination:
    return DiviDestination()


class TestVocabulary:
    """Tests for the module vocabulary tables."""

    @pytest.mark.unit
    def test_module_map_size(self):
        """The vocabulary covers the full Divi module set."""
        assert len(MODULE_MAP) >= 40

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "component_type,module",
        [
            ("contact-form", "et_pb_contact_form"),
            ("pricing-table", "et_pb_pricing_tables"),
            ("social-media-follow", "et_pb_social_media_follow"),
            ("countdown-timer", "et_pb_countdown_timer"),
            ("post-navigation", "et_pb_post_nav"),
            ("call-to-action", "et_pb_cta"),
            ("html", "et_pb_code"),
            ("heading", "et_pb_text"),
        ],
    )
    def test_module_map_entries(self, component_type, module):
        """Abstract component types map to Divi module identifiers."""
        assert MODULE_MAP[component_type] == module

    @pytest.mark.unit
    def test_specs_are_in_vocabulary(self, destination):
        """Every module spec names a recognized module."""
        assert set(MODULE_SPECS) <= destination.vocabulary

    @pytest.mark.unit
    def test_unknown_type_gets_empty_spec(self, destination):
        """Modules without a spec get one with no builders."""
        spec = destination.module_spec("et_pb_map")
        assert spec.build is None
        assert spec.content is None
        assert dict(spec.defaults) == {}


class TestModuleBuilders:
    """Tests for per-module attribute builders."""

    @pytest.mark.unit
    def test_button(self):
        """Buttons read text, link and target."""
        (link,) = parse_html_components(
            '<a href="/signup" target="_blank" style="background-color: #ff0000">Join</a>'
        )
        attrs = MODULE_SPECS["et_pb_button"].build(link)
        assert attrs["button_text"] == "Join"
        assert attrs["button_url"] == "/signup"
        assert attrs["url_new_window"] == "on"
        assert attrs["button_bg_color"] == "#ff0000"

    @pytest.mark.unit
    def test_button_fallbacks(self):
        """Empty buttons get placeholder text and a hash link."""
        attrs = MODULE_SPECS["et_pb_button"].build(ComponentInfo(tag_name="button"))
        assert attrs["button_text"] == "Click Here"
        assert attrs["button_url"] == "#"
        assert attrs["url_new_window"] == "off"

    @pytest.mark.unit
    def test_image_from_descendant(self):
        """Images are read from the component or its first img descendant."""
        (figure,) = parse_html_components('<figure><img src="a.png" alt="A" title="T"></figure>')
        attrs = MODULE_SPECS["et_pb_image"].build(figure)
        assert (attrs["src"], attrs["alt"], attrs["title_text"]) == ("a.png", "A", "T")

    @pytest.mark.unit
    def test_blurb(self):
        """Blurbs take the heading as title and the paragraph as content."""
        (blurb,) = parse_html_components('<div class="blurb"><h4>Fast</h4><p>Very fast.</p></div>')
        spec = MODULE_SPECS["et_pb_blurb"]
        assert spec.build(blurb)["title"] == "Fast"
        assert spec.content(blurb) == "Very fast."

    @pytest.mark.unit
    def test_testimonial_author(self):
        """Testimonial authors come from cite, with a placeholder fallback."""
        (quote,) = parse_html_components(
            '<blockquote class="testimonial">Great<cite>Ann</cite></blockquote>'
        )
        assert MODULE_SPECS["et_pb_testimonial"].build(quote)["author"] == "Ann"
        assert MODULE_SPECS["et_pb_testimonial"].build(ComponentInfo())["author"] == "Author"

    @pytest.mark.unit
    def test_cta_title_fallback(self):
        """A call to action without a heading gets the default title."""
        assert MODULE_SPECS["et_pb_cta"].build(ComponentInfo())["title"] == "Call To Action"

    @pytest.mark.unit
    def test_text_content_prefers_markup(self):
        """Text modules keep the inner markup."""
        (paragraph,) = parse_html_components("<p>a <b>b</b></p>")
        assert MODULE_SPECS["et_pb_text"].content(paragraph) == "a <b>b</b>"


class TestStructure:
    """Tests for section/row/column encoding."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "fraction,code",
        [(Fraction(1), "4_4"), (Fraction(1, 2), "1_2"), (Fraction(2, 3), "2_3")],
    )
    def test_fraction_codes(self, fraction, code):
        """Fractions encode as Divi column codes and parse back."""
        assert fraction_code(fraction) == code
        assert parse_fraction_code(code) == fraction

    @pytest.mark.unit
    @pytest.mark.parametrize("code", ["", "x", "1_0", "half"])
    def test_unreadable_codes(self, code):
        """Unreadable column codes parse to None."""
        assert parse_fraction_code(code) is None

    @pytest.mark.unit
    def test_hero_section(self, destination, hero_section_html):
        """The hero section encodes its id, structure and column types."""
        (section,) = segment(parse_html_components(hero_section_html))
        attrs = destination.section_attributes(section)
        assert attrs["module_id"] == "hero"
        assert attrs["fullwidth"] == "off"
        (row,) = section.rows
        assert destination.row_attributes(row)["column_structure"] == "1_2,1_2"
        assert [destination.column_attributes(c) for c in row.columns] == [{"type": "1_2"}] * 2

    @pytest.mark.unit
    def test_fullwidth_requires_single_columns(self, destination):
        """A fullwidth section with a multi-column row is not fullwidth."""
        (section,) = segment(
            parse_html_components(
                '<section class="fullwidth"><div class="row">'
                '<div class="col-6">a</div><div class="col-6">b</div></div></section>'
            )
        )
        assert destination.section_attributes(section)["fullwidth"] == "off"

        (single,) = segment(parse_html_components('<section class="full-width"><p>a</p></section>'))
        assert destination.section_attributes(single)["fullwidth"] == "on"

    @pytest.mark.unit
    def test_section_background(self, destination):
        """Background images are unwrapped from url()."""
        (section,) = segment(
            parse_html_components(
                "<section style=\"background-image: url('bg.jpg'); padding: 10px 20px\"><p>a</p></section>"
            )
        )
        attrs = destination.section_attributes(section)
        assert attrs["background_image"] == "bg.jpg"
        assert attrs["parallax"] == "off"
        assert attrs["custom_padding"] == "10px|20px|10px|20px"

    @pytest.mark.unit
    def test_synthesized_section(self, destination):
        """Synthesized sections carry only the layout flags."""
        (section,) = segment(parse_html_components("<p>Hello</p>"))
        assert destination.section_attributes(section) == {"fullwidth": "off", "specialty": "off"}

    @pytest.mark.unit
    def test_read_back_structure(self, destination):
        """Exported rows and columns decode to fractions."""
        row = Row(attrs={"column_structure": "1_3,2_3"})
        assert destination.row_structure(row) == (Fraction(1, 3), Fraction(2, 3))
        assert destination.row_structure(Row()) is None
        assert destination.column_fraction(Column(attrs={"type": "4_4"})) == 1


class TestFeatureEncoding:
    """Tests for feature attribute encoding."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "animation_type,style",
        [("slideInLeft", "left"), ("zoomIn", "zoom"), ("wobble", "fade")],
    )
    def test_animation_style(self, destination, animation_type, style):
        """Entrance types map through the table; unknown types fade."""
        features = ModuleFeatures(
            animation=EntranceAnimation(type=animation_type, duration=800, delay=100)
        )
        attrs = destination.feature_attributes(features)
        assert attrs["animation"] == style
        assert attrs["animation_duration"] == "800ms"
        assert attrs["animation_delay"] == "100ms"

    @pytest.mark.unit
    def test_responsive(self, destination):
        """Breakpoint values get phone/tablet suffixes and edit markers."""
        features = ModuleFeatures(
            responsive=ResponsiveSettings(
                mobile=BreakpointSettings(font_size="14px", padding="10px"),
            )
        )
        attrs = destination.feature_attributes(features)
        assert attrs["font_size_phone"] == "14px"
        assert attrs["custom_padding_phone"] == "10px|10px|10px|10px"
        assert attrs["custom_padding_last_edited"] == "on|desktop"
        assert attrs["font_size_last_edited"] == "on|desktop"
        assert "font_size_tablet" not in attrs

    @pytest.mark.unit
    def test_hover(self, destination):
        """Hover values use the _hover suffix."""
        features = ModuleFeatures(
            hover=HoverEffects(
                background_color="#000",
                box_shadow=parse_box_shadow("0 4px 8px #333"),
                transition=TransitionEffect(duration="0.5s"),
            )
        )
        attrs = destination.feature_attributes(features)
        assert attrs["background_color_hover"] == "#000"
        assert attrs["box_shadow_vertical_hover"] == "4px"
        assert attrs["box_shadow_color_hover"] == "#333"
        assert attrs["hover_transition_duration"] == "0.5s"

    @pytest.mark.unit
    def test_box_shadow(self, destination):
        """Shadows encode every length; missing ones are zero."""
        attrs = destination.feature_attributes(
            ModuleFeatures(box_shadow=parse_box_shadow("inset 2px 3px red"))
        )
        assert attrs["box_shadow_style"] == "preset1"
        assert attrs["box_shadow_horizontal"] == "2px"
        assert attrs["box_shadow_blur"] == "0px"
        assert attrs["box_shadow_spread"] == "0px"
        assert attrs["box_shadow_position"] == "inner"

    @pytest.mark.unit
    def test_box_model(self, destination):
        """Spacing is positional; uniform borders get border_width_all."""
        box = extract_box_model({"padding": "5px 10px", "borderWidth": "2px"})
        attrs = destination.feature_attributes(ModuleFeatures(box_model=box))
        assert attrs["custom_padding"] == "5px|10px|5px|10px"
        assert attrs["border_width_all"] == "2px"

    @pytest.mark.unit
    def test_no_features(self, destination):
        """No features encode to no attributes."""
        assert destination.feature_attributes(ModuleFeatures()) == {}

    @pytest.mark.unit
    def test_tokens(self, destination):
        """Color links become global color references."""
        links = TokenLinks(colors={"color": "primary-1", "backgroundColor": "neutral-1"})
        assert destination.token_attributes(links) == {
            "text_color_global": "primary-1",
            "background_color_global": "neutral-1",
        }

    @pytest.mark.unit
    def test_escape_attribute(self, destination):
        """Quotes and brackets are percent-encoded."""
        assert destination.escape_attribute('say "hi" [x]') == "say %22hi%22 %91x%93"

    @pytest.mark.unit
    def test_spacing_rejects_garbage(self):
        """Unreadable spacing is dropped."""
        assert spacing("calc(1px + 2px)") is None
        assert spacing(None) is None


class TestThemeRegistries:
    """Tests for global colors, font settings and categories."""

    @pytest.mark.unit
    def test_global_colors(self, destination):
        """Every palette slot becomes a numbered global color."""
        palette = ColorPalette.model_validate(
            {
                "primary": [{"hex": "#0066CC"}, {"hex": "#003366"}],
                "semantic": {"error": {"hex": "#ff0000"}},
            }
        )
        colors = destination.global_colors(build_token_index(palette))
        assert [c.id for c in colors] == ["gcid-1", "gcid-2", "gcid-3"]
        assert [c.slug for c in colors] == ["primary-1", "primary-2", "error"]
        assert colors[0].color == "#0066CC"

    @pytest.mark.unit
    def test_font_settings(self, destination):
        """Body and heading fonts come from family contexts."""
        typography = TypographySystem.model_validate(
            {
                "fontFamilies": [
                    {"name": "Inter", "contexts": ["body"]},
                    {"name": "Playfair Display", "contexts": ["heading"]},
                ],
                "textStyles": {"h1": {"fontFamily": "Playfair Display", "fontSize": "48px"}},
                "globalSettings": {"baseFontSize": 16, "baseLineHeight": 1.6},
            }
        )
        settings = destination.font_settings(typography)
        assert settings.body_font.font == "Inter"
        assert settings.heading_font.font == "Playfair Display"
        assert settings.heading_font.weight == "700"
        assert settings.body_font_size == "16px"
        assert settings.body_line_height == "1.6"
        assert settings.h1_font.font == "Playfair Display"
        assert settings.h1_font.size == "48px"
        assert settings.h3_font.weight == "600"
        assert settings.h6_font.font == "Inter"

    @pytest.mark.unit
    def test_font_settings_without_families(self, destination):
        """Global settings supply fonts when no family is given."""
        typography = TypographySystem.model_validate(
            {"globalSettings": {"baseFontFamily": "Arial", "headingFontFamily": "Georgia"}}
        )
        settings = destination.font_settings(typography)
        assert settings.body_font.font == "Arial"
        assert settings.heading_font.font == "Georgia"

    @pytest.mark.unit
    def test_layout_category(self, destination):
        """Library categories map through the table; unknown is Content."""
        assert destination.layout_category("heroes") == "Hero"
        assert destination.layout_category("widgets") == "Content"
