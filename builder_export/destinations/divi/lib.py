"""Divi Builder destination.

Divi stores pages as nested shortcodes::

    [et_pb_section fullwidth="off"]
    [et_pb_row column_structure="1_2,1_2"]
    [et_pb_column type="1_2"][et_pb_text]A[/et_pb_text][/et_pb_column]
    ...

Module identifiers, attribute names and the positional
``top|right|bottom|left`` spacing format follow Divi's own importer.
"""

import re
from collections.abc import Mapping
from fractions import Fraction
from types import MappingProxyType
from typing import Any

from builder_export.component import ComponentInfo, TextStyle, TypographySystem
from builder_export.core import get_logger
from builder_export.destinations.lib import Destination, ModuleFeatures, ModuleSpec
from builder_export.document import Column, Font, FontSettings, GlobalColor, Row
from builder_export.extract import (
    BoxShadow,
    format_dimension,
    format_dimension_set,
    parse_shorthand_dimension,
)
from builder_export.segment import FULL_WIDTH, ColumnUnit, RowUnit, SectionUnit
from builder_export.tokens import DesignTokenIndex, TokenLinks

logger = get_logger("divi")

# =============================================================================
# Module Vocabulary
# =============================================================================

MODULE_MAP: Mapping[str, str] = MappingProxyType(
    {
        # Text
        "text": "et_pb_text",
        "paragraph": "et_pb_text",
        "heading": "et_pb_text",
        # Media
        "image": "et_pb_image",
        "video": "et_pb_video",
        "video-slider": "et_pb_video_slider",
        "gallery": "et_pb_gallery",
        "slider": "et_pb_slider",
        "audio": "et_pb_audio",
        "icon": "et_pb_icon",
        # Interactive
        "button": "et_pb_button",
        "contact-form": "et_pb_contact_form",
        "email-optin": "et_pb_signup",
        "login": "et_pb_login",
        "search": "et_pb_search",
        "accordion": "et_pb_accordion",
        "tabs": "et_pb_tabs",
        "toggle": "et_pb_toggle",
        # Layout helpers
        "sidebar": "et_pb_sidebar",
        "divider": "et_pb_divider",
        "code": "et_pb_code",
        "html": "et_pb_code",
        "menu": "et_pb_menu",
        # Social
        "social-follow": "et_pb_social_media_follow",
        "social-media-follow": "et_pb_social_media_follow",
        # Commerce and content
        "pricing-table": "et_pb_pricing_tables",
        "testimonial": "et_pb_testimonial",
        "team-member": "et_pb_team_member",
        "portfolio": "et_pb_portfolio",
        "filterable-portfolio": "et_pb_filterable_portfolio",
        "shop": "et_pb_shop",
        # Posts
        "blog": "et_pb_blog",
        "post-title": "et_pb_post_title",
        "post-navigation": "et_pb_post_nav",
        "post-slider": "et_pb_post_slider",
        "comments": "et_pb_comments",
        # Counters
        "counter": "et_pb_counter",
        "bar-counters": "et_pb_counters",
        "number-counter": "et_pb_number_counter",
        "circle-counter": "et_pb_circle_counter",
        "countdown": "et_pb_countdown_timer",
        "countdown-timer": "et_pb_countdown_timer",
        # Misc
        "map": "et_pb_map",
        "blurb": "et_pb_blurb",
        "cta": "et_pb_cta",
        "call-to-action": "et_pb_cta",
    }
)

DEFAULT_MODULE = "et_pb_text"

# Entrance animation type -> Divi animation style
ANIMATION_STYLES: Mapping[str, str] = MappingProxyType(
    {
        "fadeIn": "fade",
        "slideInUp": "slide",
        "slideInDown": "slide",
        "slideInLeft": "left",
        "slideInRight": "right",
        "zoomIn": "zoom",
        "bounceIn": "bounce",
        "rotateIn": "rotate",
        "flipIn": "flip",
    }
)

DEFAULT_ANIMATION_STYLE = "fade"

# Component library category -> Divi library category
LAYOUT_CATEGORIES: Mapping[str, str] = MappingProxyType(
    {
        "headers": "Header",
        "footers": "Footer",
        "heroes": "Hero",
        "cards": "Content",
        "forms": "Forms",
        "ctas": "CTA",
        "galleries": "Gallery",
        "testimonials": "Testimonials",
        "pricing": "Pricing",
        "content": "Content",
        "navigation": "Navigation",
        "misc": "Miscellaneous",
    }
)

DEFAULT_LAYOUT_CATEGORY = "Content"

# Default weights of h1-h6 when the typography system gives none
HEADING_WEIGHTS: Mapping[str, str] = MappingProxyType(
    {"h1": "700", "h2": "700", "h3": "600", "h4": "600", "h5": "500", "h6": "500"}
)

# Shortcode-breaking characters in attribute values
ATTRIBUTE_ESCAPES: Mapping[str, str] = MappingProxyType({'"': "%22", "[": "%91", "]": "%93"})

LAST_EDITED_DESKTOP = "on|desktop"

_BACKGROUND_URL_RE = re.compile(r"url\(\s*['\"]?([^'\")]+)['\"]?\s*\)")
_HEADING_RE = re.compile(r"^h[1-6]$")


# =============================================================================
# Module Builders
# =============================================================================


def _find(component: ComponentInfo, predicate) -> ComponentInfo | None:
    """First node of the subtree (self included) matching ``predicate``."""
    for node in component.iter_tree():
        if predicate(node):
            return node
    return None


def _find_tag(component: ComponentInfo, *tags: str) -> ComponentInfo | None:
    return _find(component, lambda node: node.tag in tags)


def _find_heading(component: ComponentInfo) -> ComponentInfo | None:
    return _find(component, lambda node: bool(_HEADING_RE.match(node.tag)))


def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


def build_text(component: ComponentInfo) -> dict[str, Any]:
    return {
        "text_color": component.styles.get("color"),
        "text_font_size": component.styles.get("fontSize"),
        "text_orientation": component.styles.get("textAlign"),
    }


def build_image(component: ComponentInfo) -> dict[str, Any]:
    image = _find_tag(component, "img") or component
    link = _find_tag(component, "a")
    return {
        "src": image.attributes.get("src", ""),
        "alt": image.attributes.get("alt", ""),
        "title_text": image.attributes.get("title", ""),
        "url": link.attributes.get("href") if link else None,
    }


def build_button(component: ComponentInfo) -> dict[str, Any]:
    link = _find_tag(component, "a") or component
    return {
        "button_text": component.text_content or "Click Here",
        "button_url": link.attributes.get("href") or "#",
        "url_new_window": _on_off(link.attributes.get("target") == "_blank"),
        "button_bg_color": component.styles.get("backgroundColor"),
        "button_text_color": component.styles.get("color"),
    }


def build_blurb(component: ComponentInfo) -> dict[str, Any]:
    heading = _find_heading(component)
    image = _find_tag(component, "img")
    attrs: dict[str, Any] = {"title": heading.text_content if heading else "Title"}
    if image is not None and image.attributes.get("src"):
        attrs["image"] = image.attributes["src"]
        attrs["use_icon"] = "off"
    return attrs


def build_testimonial(component: ComponentInfo) -> dict[str, Any]:
    cite = _find_tag(component, "cite")
    return {"author": cite.text_content if cite and cite.text_content else "Author"}


def build_cta(component: ComponentInfo) -> dict[str, Any]:
    heading = _find_heading(component)
    link = _find_tag(component, "a", "button")
    attrs: dict[str, Any] = {"title": heading.text_content if heading else "Call To Action"}
    if link is not None:
        attrs["button_text"] = link.text_content or None
        attrs["button_url"] = link.attributes.get("href") or None
        attrs["url_new_window"] = _on_off(link.attributes.get("target") == "_blank")
    return attrs


def build_video(component: ComponentInfo) -> dict[str, Any]:
    video = _find_tag(component, "video", "iframe") or component
    source = _find_tag(component, "source")
    src = video.attributes.get("src") or (source.attributes.get("src") if source else None)
    return {"src": src, "image_src": video.attributes.get("poster")}


def build_audio(component: ComponentInfo) -> dict[str, Any]:
    audio = _find_tag(component, "audio") or component
    source = _find_tag(component, "source")
    src = audio.attributes.get("src") or (source.attributes.get("src") if source else None)
    heading = _find_heading(component)
    return {"audio": src, "title": heading.text_content if heading else None}


def build_divider(component: ComponentInfo) -> dict[str, Any]:
    return {
        "color": component.styles.get("borderColor") or component.styles.get("borderTopColor"),
    }


def build_contact_form(component: ComponentInfo) -> dict[str, Any]:
    heading = _find_heading(component)
    submit = _find(
        component,
        lambda node: node.tag == "button"
        or (node.tag == "input" and node.attributes.get("type") == "submit"),
    )
    submit_text = None
    if submit is not None:
        submit_text = submit.text_content or submit.attributes.get("value")
    return {
        "title": heading.text_content if heading else None,
        "submit_button_text": submit_text,
    }


def text_content(component: ComponentInfo) -> str:
    return component.inner_html or component.text_content or ""


def first_paragraph_text(component: ComponentInfo) -> str:
    paragraph = _find_tag(component, "p")
    return paragraph.text_content if paragraph else ""


def first_paragraph_markup(component: ComponentInfo) -> str:
    paragraph = _find_tag(component, "p")
    return paragraph.inner_html if paragraph else ""


def plain_text(component: ComponentInfo) -> str:
    return component.text_content or ""


def raw_markup(component: ComponentInfo) -> str:
    return component.inner_html or ""


MODULE_SPECS: Mapping[str, ModuleSpec] = MappingProxyType(
    {
        spec.module_type: spec
        for spec in (
            ModuleSpec(
                "et_pb_text",
                build=build_text,
                content=text_content,
                defaults={"background_layout": "light"},
            ),
            ModuleSpec(
                "et_pb_image",
                build=build_image,
                defaults={
                    "show_in_lightbox": "off",
                    "url_new_window": "off",
                    "use_overlay": "off",
                    "align": "center",
                    "force_fullwidth": "off",
                    "always_center_on_mobile": "on",
                },
            ),
            ModuleSpec(
                "et_pb_button",
                build=build_button,
                defaults={"button_alignment": "center", "custom_button": "off"},
            ),
            ModuleSpec(
                "et_pb_blurb",
                build=build_blurb,
                content=first_paragraph_text,
                defaults={
                    "url_new_window": "off",
                    "use_icon": "on",
                    "icon_placement": "top",
                    "use_circle": "off",
                    "use_circle_border": "off",
                    "text_orientation": "center",
                    "animation": "top",
                    "background_layout": "light",
                },
            ),
            ModuleSpec(
                "et_pb_testimonial",
                build=build_testimonial,
                content=plain_text,
                defaults={
                    "url_new_window": "off",
                    "quote_icon": "on",
                    "use_background_color": "on",
                    "background_layout": "light",
                },
            ),
            ModuleSpec(
                "et_pb_cta",
                build=build_cta,
                content=first_paragraph_markup,
                defaults={
                    "button_text": "Click Here",
                    "button_url": "#",
                    "url_new_window": "off",
                    "use_background_color": "on",
                    "background_layout": "light",
                    "text_orientation": "center",
                },
            ),
            ModuleSpec(
                "et_pb_gallery",
                defaults={
                    "posts_number": "10",
                    "show_title_and_caption": "on",
                    "show_pagination": "on",
                    "orientation": "landscape",
                    "zoom_icon_color": "#ffffff",
                    "hover_overlay_color": "rgba(255,255,255,0.9)",
                    "fullwidth": "off",
                },
            ),
            ModuleSpec(
                "et_pb_slider",
                defaults={
                    "show_arrows": "on",
                    "show_pagination": "on",
                    "auto": "off",
                    "auto_speed": "7000",
                    "auto_ignore_hover": "off",
                    "parallax": "off",
                    "parallax_method": "off",
                    "remove_inner_shadow": "off",
                    "background_position": "default",
                    "background_size": "default",
                    "hide_content_on_mobile": "off",
                    "hide_cta_on_mobile": "off",
                    "show_image_video_mobile": "off",
                },
            ),
            ModuleSpec(
                "et_pb_contact_form",
                build=build_contact_form,
                defaults={
                    "captcha": "on",
                    "title": "Contact Us",
                    "success_message": "Thanks for contacting us!",
                    "submit_button_text": "Submit",
                    "use_redirect": "off",
                },
            ),
            ModuleSpec("et_pb_video", build=build_video),
            ModuleSpec("et_pb_audio", build=build_audio),
            ModuleSpec("et_pb_divider", build=build_divider, defaults={"show_divider": "on"}),
            ModuleSpec("et_pb_code", content=raw_markup),
        )
    }
)


# =============================================================================
# Encoding Helpers
# =============================================================================


def fraction_code(fraction: Fraction) -> str:
    """Divi column code for a width: ``1_2``, ``2_3``; full width is ``4_4``."""
    if fraction == FULL_WIDTH:
        return "4_4"
    return f"{fraction.numerator}_{fraction.denominator}"


def parse_fraction_code(code: str) -> Fraction | None:
    """Parse a Divi column code; unreadable codes yield None."""
    numerator, _, denominator = code.strip().partition("_")
    try:
        value = Fraction(int(numerator), int(denominator))
    except (ValueError, ZeroDivisionError):
        return None
    return value


def spacing(value: str | None) -> str | None:
    """Raw CSS spacing shorthand to ``top|right|bottom|left``; None if unreadable."""
    dimensions = parse_shorthand_dimension(value)
    return format_dimension_set(dimensions) if dimensions else None


def shadow_attributes(shadow: BoxShadow, suffix: str = "") -> dict[str, Any]:
    return {
        f"box_shadow_style{suffix}": "preset1",
        f"box_shadow_horizontal{suffix}": format_dimension(shadow.horizontal),
        f"box_shadow_vertical{suffix}": format_dimension(shadow.vertical),
        f"box_shadow_blur{suffix}": format_dimension(shadow.blur) or "0px",
        f"box_shadow_spread{suffix}": format_dimension(shadow.spread) or "0px",
        f"box_shadow_color{suffix}": shadow.color,
        f"box_shadow_position{suffix}": "inner" if shadow.inset else "outer",
    }


def background_image_url(styles: dict[str, str]) -> str | None:
    match = _BACKGROUND_URL_RE.search(styles.get("backgroundImage", ""))
    return match.group(1) if match else None


def has_fullwidth_class(component: ComponentInfo) -> bool:
    return any(token in ("fullwidth", "full-width") for token in component.class_list)


# =============================================================================
# Destination
# =============================================================================


class DiviDestination(Destination):
    """Divi Builder shortcode destination.

    Sections, rows and columns map to ``et_pb_section``/``et_pb_row``/
    ``et_pb_column``. Hover variants use a ``_hover`` suffix, breakpoint
    variants ``_phone``/``_tablet`` with a ``*_last_edited`` marker.
    """

    NAME = "divi"

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def section_tag(self) -> str:
        return "et_pb_section"

    @property
    def row_tag(self) -> str:
        return "et_pb_row"

    @property
    def column_tag(self) -> str:
        return "et_pb_column"

    @property
    def module_map(self) -> Mapping[str, str]:
        return MODULE_MAP

    @property
    def module_specs(self) -> Mapping[str, ModuleSpec]:
        return MODULE_SPECS

    @property
    def default_module(self) -> str:
        return DEFAULT_MODULE

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def section_attributes(self, unit: SectionUnit) -> dict[str, Any]:
        attrs: dict[str, Any] = {"fullwidth": "off", "specialty": "off"}
        component = unit.source
        if component is None:
            return attrs

        attrs.update(self.identity_attributes(component))
        styles = component.styles
        attrs["background_color"] = styles.get("backgroundColor")
        image = background_image_url(styles)
        if image:
            attrs["background_image"] = image
            attrs["parallax"] = "off"
        attrs["custom_padding"] = spacing(styles.get("padding"))
        attrs["custom_margin"] = spacing(styles.get("margin"))

        if has_fullwidth_class(component):
            if any(len(row.columns) > 1 for row in unit.rows):
                logger.debug(
                    "Section %s holds a multi-column row; dropping fullwidth",
                    component.id or component.tag,
                )
            else:
                attrs["fullwidth"] = "on"
        return attrs

    def structure_attributes(self, structure: tuple[Fraction, ...]) -> dict[str, Any]:
        return {"column_structure": ",".join(fraction_code(f) for f in structure)}

    def row_attributes(self, unit: RowUnit) -> dict[str, Any]:
        attrs = self.structure_attributes(unit.structure)
        component = unit.source
        if component is None:
            return attrs

        attrs["use_custom_gutter"] = "off"
        attrs.update(self.identity_attributes(component))
        attrs["background_color"] = component.styles.get("backgroundColor")
        attrs["custom_padding"] = spacing(component.styles.get("padding"))
        attrs["custom_margin"] = spacing(component.styles.get("margin"))
        return attrs

    def column_attributes(self, unit: ColumnUnit) -> dict[str, Any]:
        return {"type": fraction_code(unit.fraction)}

    def row_structure(self, row: Row) -> tuple[Fraction, ...] | None:
        structure = row.attrs.get("column_structure")
        if not structure:
            return None
        fractions = tuple(parse_fraction_code(code) for code in str(structure).split(","))
        if any(fraction is None for fraction in fractions):
            return None
        return fractions

    def column_fraction(self, column: Column) -> Fraction | None:
        return parse_fraction_code(str(column.attrs.get("type", "")))

    # -------------------------------------------------------------------------
    # Modules
    # -------------------------------------------------------------------------

    def identity_attributes(self, component: ComponentInfo) -> dict[str, Any]:
        return {"module_id": component.id, "module_class": component.class_name}

    def feature_attributes(self, features: ModuleFeatures) -> dict[str, Any]:
        attrs: dict[str, Any] = {}

        if features.responsive is not None:
            self._encode_responsive(features, attrs)

        if features.hover is not None:
            self._encode_hover(features, attrs)

        if features.animation is not None:
            animation = features.animation
            attrs["animation"] = ANIMATION_STYLES.get(animation.type, DEFAULT_ANIMATION_STYLE)
            attrs["animation_duration"] = f"{animation.duration}ms"
            attrs["animation_delay"] = f"{animation.delay}ms"
            attrs["animation_timing_function"] = animation.easing

        if features.box_shadow is not None:
            attrs.update(shadow_attributes(features.box_shadow))

        if features.box_model is not None:
            box = features.box_model
            attrs["custom_padding"] = format_dimension_set(box.padding) or None
            attrs["custom_margin"] = format_dimension_set(box.margin) or None
            border = box.border
            if border is not None and border.top is not None and all(
                getattr(border, side) == border.top for side in ("right", "bottom", "left")
            ):
                attrs["border_width_all"] = format_dimension(border.top)

        return attrs

    def _encode_responsive(self, features: ModuleFeatures, attrs: dict[str, Any]) -> None:
        responsive = features.responsive
        has_font_size = False
        for breakpoint, suffix in (("mobile", "phone"), ("tablet", "tablet")):
            settings = getattr(responsive, breakpoint)
            if settings is None:
                continue
            if settings.font_size:
                attrs[f"font_size_{suffix}"] = settings.font_size
                has_font_size = True
            attrs[f"custom_padding_{suffix}"] = spacing(settings.padding)
            attrs[f"custom_margin_{suffix}"] = spacing(settings.margin)
        attrs["custom_padding_last_edited"] = LAST_EDITED_DESKTOP
        attrs["custom_margin_last_edited"] = LAST_EDITED_DESKTOP
        if has_font_size:
            attrs["font_size_last_edited"] = LAST_EDITED_DESKTOP

    def _encode_hover(self, features: ModuleFeatures, attrs: dict[str, Any]) -> None:
        hover = features.hover
        attrs["background_color_hover"] = hover.background_color
        attrs["text_color_hover"] = hover.color
        attrs["border_color_hover"] = hover.border_color
        attrs["transform_hover"] = hover.transform
        attrs["opacity_hover"] = hover.opacity
        if hover.box_shadow is not None:
            attrs.update(shadow_attributes(hover.box_shadow, suffix="_hover"))
        if hover.transition is not None:
            attrs["hover_transition_duration"] = hover.transition.duration
            attrs["hover_transition_delay"] = hover.transition.delay
            attrs["hover_transition_speed_curve"] = hover.transition.timing_function

    def token_attributes(self, links: TokenLinks) -> dict[str, Any]:
        return {
            "text_color_global": links.colors.get("color"),
            "background_color_global": links.colors.get("backgroundColor"),
        }

    def design_attributes(self, component: ComponentInfo) -> dict[str, Any]:
        return {"background_color": component.styles.get("backgroundColor")}

    # -------------------------------------------------------------------------
    # Theme registries
    # -------------------------------------------------------------------------

    def global_colors(self, index: DesignTokenIndex) -> list[GlobalColor]:
        return [
            GlobalColor(id=f"gcid-{number}", name=slot.name, color=slot.value, slug=slot.slug)
            for number, slot in enumerate(index.color_slots, start=1)
        ]

    def font_settings(self, typography: TypographySystem) -> FontSettings:
        families = typography.font_families
        base = typography.global_settings

        def by_context(context: str):
            return next((f for f in families if context in f.contexts), None)

        body_family = by_context("body") or (families[0] if families else None)
        heading_family = by_context("heading")

        body_font = Font(font=body_family.name if body_family else base.base_font_family)
        heading_font = Font(
            font=(
                heading_family.name
                if heading_family
                else base.heading_font_family or body_font.font
            ),
            weight=str(base.heading_font_weight or 700),
        )

        def heading(level: str) -> Font:
            style = typography.text_styles.get(level) or TextStyle()
            family = style.font_family
            return Font(
                font=body_font.font if not family or family == "inherit" else family,
                weight=str(style.font_weight or HEADING_WEIGHTS[level]),
                size=style.font_size,
                line_height=str(style.line_height) if style.line_height is not None else None,
                letter_spacing=style.letter_spacing,
            )

        return FontSettings(
            body_font=body_font,
            heading_font=heading_font,
            body_font_size=f"{base.base_font_size:g}px",
            body_line_height=f"{base.base_line_height:g}",
            **{f"{level}_font": heading(level) for level in HEADING_WEIGHTS},
        )

    def layout_category(self, category: str) -> str:
        return LAYOUT_CATEGORIES.get(category, DEFAULT_LAYOUT_CATEGORY)

    def fraction_label(self, fraction: Fraction) -> str:
        return fraction_code(fraction)

    def escape_attribute(self, value: Any) -> str:
        text = str(value)
        for char, replacement in ATTRIBUTE_ESCAPES.items():
            text = text.replace(char, replacement)
        return text


__all__ = [
    "ANIMATION_STYLES",
    "ATTRIBUTE_ESCAPES",
    "DEFAULT_ANIMATION_STYLE",
    "DEFAULT_MODULE",
    "DiviDestination",
    "HEADING_WEIGHTS",
    "LAYOUT_CATEGORIES",
    "MODULE_MAP",
    "MODULE_SPECS",
    "fraction_code",
    "parse_fraction_code",
    "spacing",
]
