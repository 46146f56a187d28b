"""Attribute extractors.

Stateless functions deriving advanced presentation features from one
component's resolved styles and annotations into a destination-agnostic
intermediate form. Destinations encode these into their own attribute
vocabulary; see ``builder_export.destinations``.

Every extractor returns ``None`` (or an empty string for custom CSS) when
the component carries nothing to extract.
"""

import re

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from builder_export.component import ComponentInfo
from builder_export.extract.box import BoxShadow, parse_box_shadow

# Recognized entrance animation names, matched as substrings of the
# lowercased CSS animation name. Order matters: first match wins.
ENTRANCE_ANIMATIONS: tuple[str, ...] = (
    "fadeIn",
    "fadeOut",
    "slideInUp",
    "slideInDown",
    "slideInLeft",
    "slideInRight",
    "zoomIn",
    "zoomOut",
    "rotateIn",
    "flipIn",
    "bounceIn",
)

# Breakpoint media queries used for custom CSS
MOBILE_MEDIA_QUERY = "@media (max-width: 767px)"
TABLET_MEDIA_QUERY = "@media (min-width: 768px) and (max-width: 1023px)"

_SHORTCODE_RE = re.compile(r"\[.*?\]")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


class FeatureModel(BaseModel):
    """Base for extracted payloads: camelCase JSON, immutable."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class BreakpointSettings(FeatureModel):
    """Values authored for one breakpoint."""

    font_size: str | None = None
    padding: str | None = None
    margin: str | None = None


class ResponsiveSettings(FeatureModel):
    """Per-breakpoint overrides of desktop values."""

    mobile: BreakpointSettings | None = None
    tablet: BreakpointSettings | None = None


class TransitionEffect(FeatureModel):
    """Parsed CSS ``transition`` shorthand."""

    property: str = "all"
    duration: str = "0.3s"
    timing_function: str = "ease"
    delay: str = "0s"


class HoverEffects(FeatureModel):
    """Styles that change between the normal and hover states."""

    transform: str | None = None
    background_color: str | None = None
    color: str | None = None
    border_color: str | None = None
    box_shadow: BoxShadow | None = None
    opacity: str | None = None
    transition: TransitionEffect | None = None


class EntranceAnimation(FeatureModel):
    """Entrance animation with durations in milliseconds."""

    type: str
    duration: int = 0
    delay: int = 0
    easing: str = "ease"


class Viewport(FeatureModel):
    """Viewport percentage window in which a scroll effect runs."""

    start: int = 0
    end: int = 100


class ScrollEffect(FeatureModel):
    """Scroll-driven effect."""

    type: str
    speed: int = 5
    viewport: Viewport = Field(default_factory=Viewport)


class StickyEffect(FeatureModel):
    """Sticky positioning."""

    enabled: bool = True
    top: str | None = None
    bottom: str | None = None
    offset: int = 0


class MotionEffects(FeatureModel):
    """Scroll and sticky effects, carried opaquely to the output."""

    scroll_effects: list[ScrollEffect] = Field(default_factory=list)
    sticky_effects: StickyEffect | None = None


class DynamicContent(FeatureModel):
    """Placeholder for content resolved by the destination at render time."""

    type: str = "custom_field"
    source: str
    fallback: str | None = None


# =============================================================================
# Responsive
# =============================================================================


def _breakpoint_settings(styles: dict[str, str]) -> BreakpointSettings | None:
    settings = BreakpointSettings(
        font_size=styles.get("fontSize"),
        padding=styles.get("padding"),
        margin=styles.get("margin"),
    )
    if settings.font_size or settings.padding or settings.margin:
        return settings
    return None


def extract_responsive_settings(component: ComponentInfo) -> ResponsiveSettings | None:
    """Extract fontSize/padding/margin for the mobile and tablet breakpoints.

    Args:
        component: Component whose ``responsive_styles`` are read.

    Returns:
        ResponsiveSettings, or None when no breakpoint carries a value.
    """
    responsive = component.responsive_styles
    if responsive is None:
        return None
    mobile = _breakpoint_settings(responsive.mobile)
    tablet = _breakpoint_settings(responsive.tablet)
    if mobile is None and tablet is None:
        return None
    return ResponsiveSettings(mobile=mobile, tablet=tablet)


# =============================================================================
# Hover
# =============================================================================


def parse_transition(value: str) -> TransitionEffect:
    """Parse ``property duration timing-function delay`` positionally."""
    parts = value.split()
    defaults = TransitionEffect()
    return TransitionEffect(
        property=parts[0] if len(parts) > 0 else defaults.property,
        duration=parts[1] if len(parts) > 1 else defaults.duration,
        timing_function=parts[2] if len(parts) > 2 else defaults.timing_function,
        delay=parts[3] if len(parts) > 3 else defaults.delay,
    )


def extract_hover_effects(component: ComponentInfo) -> HoverEffects | None:
    """Diff the hover bucket against the normal bucket.

    Only properties whose hover value differs from the normal value are
    reported. A hover ``transition`` is always reported when present.
    """
    states = component.interactive_states
    if states is None or not states.hover:
        return None
    normal, hover = states.normal, states.hover

    def changed(prop: str) -> str | None:
        value = hover.get(prop)
        if value is not None and value != normal.get(prop):
            return value
        return None

    shadow_value = changed("boxShadow")
    effects = HoverEffects(
        transform=changed("transform"),
        background_color=changed("backgroundColor"),
        color=changed("color"),
        border_color=changed("borderColor"),
        box_shadow=parse_box_shadow(shadow_value) if shadow_value else None,
        opacity=changed("opacity"),
        transition=parse_transition(hover["transition"]) if hover.get("transition") else None,
    )
    if not effects.model_dump(exclude_none=True):
        return None
    return effects


# =============================================================================
# Entrance Animation
# =============================================================================


def parse_duration(value: str | None) -> int:
    """Parse a CSS time value to whole milliseconds; unreadable values are 0.

    Example:
        >>> parse_duration("1.5s"), parse_duration("200ms"), parse_duration("fast")
        (1500, 200, 0)
    """
    if not value:
        return 0
    text = value.strip().lower()
    try:
        if text.endswith("ms"):
            return round(float(text[:-2]))
        if text.endswith("s"):
            return round(float(text[:-1]) * 1000)
    except ValueError:
        return 0
    return 0


def classify_animation_name(name: str) -> str:
    """Normalize a CSS animation name to a known entrance type.

    Names that match no known type are returned unchanged; destinations map
    them to their fallback value.
    """
    lowered = name.lower()
    for known in ENTRANCE_ANIMATIONS:
        if known.lower() in lowered:
            return known
    return name


def extract_entrance_animation(component: ComponentInfo) -> EntranceAnimation | None:
    """Read the first observed animation as the entrance animation."""
    if not component.animations:
        return None
    animation = component.animations[0]
    return EntranceAnimation(
        type=classify_animation_name(animation.name),
        duration=parse_duration(animation.duration),
        delay=parse_duration(animation.delay),
        easing=animation.timing_function or "ease",
    )


# =============================================================================
# Motion Effects
# =============================================================================


def extract_motion_effects(component: ComponentInfo) -> MotionEffects | None:
    """Detect parallax, sticky and scroll-reveal effects."""
    styles = component.styles
    scroll_effects: list[ScrollEffect] = []
    sticky = None

    if styles.get("backgroundAttachment") == "fixed":
        scroll_effects.append(ScrollEffect(type="parallax"))

    if styles.get("position") in ("sticky", "fixed"):
        sticky = StickyEffect(top=styles.get("top"), bottom=styles.get("bottom"))

    classes = (component.class_name or "").lower()
    if "aos-" in classes or "scroll-" in classes:
        scroll_effects.append(
            ScrollEffect(type="fadeIn", viewport=Viewport(start=0, end=80))
        )

    if not scroll_effects and sticky is None:
        return None
    return MotionEffects(scroll_effects=scroll_effects, sticky_effects=sticky)


# =============================================================================
# Custom CSS
# =============================================================================


def camel_to_kebab(name: str) -> str:
    """Convert a camelCase style key back to a CSS property name."""
    if name.startswith("--"):
        return name
    return _CAMEL_BOUNDARY_RE.sub(r"\1-\2", name).lower()


def css_selector(component: ComponentInfo) -> str:
    """Selector for a component: ``#id``, else its first class, else ``.element``."""
    if component.id:
        return f"#{component.id}"
    classes = (component.class_name or "").split()
    return f".{classes[0] if classes else 'element'}"


def _declarations(styles: dict[str, str], indent: str) -> list[str]:
    return [f"{indent}{camel_to_kebab(prop)}: {value};" for prop, value in styles.items() if value]


def _rule(selector: str, styles: dict[str, str]) -> str | None:
    lines = _declarations(styles, "  ")
    if not lines:
        return None
    return f"{selector} {{\n" + "\n".join(lines) + "\n}"


def _media_rule(query: str, selector: str, styles: dict[str, str]) -> str | None:
    lines = _declarations(styles, "    ")
    if not lines:
        return None
    return f"{query} {{\n  {selector} {{\n" + "\n".join(lines) + "\n  }\n}"


def generate_custom_css(component: ComponentInfo) -> str:
    """Render a component's styles as standalone CSS.

    Emits, in order: base rule, ``:hover``, ``::before``, ``::after``, then
    mobile and tablet media queries. Rules with no declarations are omitted.
    """
    selector = css_selector(component)
    rules = [_rule(selector, component.styles)]

    if component.interactive_states is not None:
        rules.append(_rule(f"{selector}:hover", component.interactive_states.hover))

    if component.pseudo_elements is not None:
        rules.append(_rule(f"{selector}::before", component.pseudo_elements.before))
        rules.append(_rule(f"{selector}::after", component.pseudo_elements.after))

    if component.responsive_styles is not None:
        responsive = component.responsive_styles
        rules.append(_media_rule(MOBILE_MEDIA_QUERY, selector, responsive.mobile))
        rules.append(_media_rule(TABLET_MEDIA_QUERY, selector, responsive.tablet))

    return "\n\n".join(rule for rule in rules if rule)


# =============================================================================
# Dynamic Content
# =============================================================================


def detect_dynamic_content(component: ComponentInfo) -> DynamicContent | None:
    """Detect template markers, shortcodes or an explicit dynamic-content attribute."""
    text = component.text_content or ""
    if "{{" in text or "{%" in text or _SHORTCODE_RE.search(text):
        return DynamicContent(source=text, fallback=text)

    source = component.attributes.get("data-dynamic-content")
    if source:
        return DynamicContent(source=source)
    return None


__all__ = [
    "BreakpointSettings",
    "DynamicContent",
    "ENTRANCE_ANIMATIONS",
    "EntranceAnimation",
    "FeatureModel",
    "HoverEffects",
    "MotionEffects",
    "ResponsiveSettings",
    "ScrollEffect",
    "StickyEffect",
    "TransitionEffect",
    "Viewport",
    "camel_to_kebab",
    "classify_animation_name",
    "css_selector",
    "detect_dynamic_content",
    "extract_entrance_animation",
    "extract_hover_effects",
    "extract_motion_effects",
    "extract_responsive_settings",
    "generate_custom_css",
    "parse_duration",
    "parse_transition",
]
