"""Attribute extractors for advanced presentation features.

Example:
    >>> from builder_export.extract import extract_entrance_animation
    >>> extract_entrance_animation(component).type
    'slideInLeft'
"""

from builder_export.extract.box import (
    BoxModel,
    BoxShadow,
    Dimension,
    DimensionSet,
    extract_box_model,
    extract_box_shadow,
    format_dimension,
    format_dimension_set,
    parse_box_shadow,
    parse_dimension,
    parse_shorthand_dimension,
)
from builder_export.extract.lib import (
    ENTRANCE_ANIMATIONS,
    BreakpointSettings,
    DynamicContent,
    EntranceAnimation,
    HoverEffects,
    MotionEffects,
    ResponsiveSettings,
    ScrollEffect,
    StickyEffect,
    TransitionEffect,
    Viewport,
    camel_to_kebab,
    classify_animation_name,
    css_selector,
    detect_dynamic_content,
    extract_entrance_animation,
    extract_hover_effects,
    extract_motion_effects,
    extract_responsive_settings,
    generate_custom_css,
    parse_duration,
    parse_transition,
)

__all__ = [
    # Box model
    "BoxModel",
    "BoxShadow",
    "Dimension",
    "DimensionSet",
    "extract_box_model",
    "extract_box_shadow",
    "format_dimension",
    "format_dimension_set",
    "parse_box_shadow",
    "parse_dimension",
    "parse_shorthand_dimension",
    # Features
    "ENTRANCE_ANIMATIONS",
    "BreakpointSettings",
    "DynamicContent",
    "EntranceAnimation",
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
