"""Divi Builder destination tables and encoders.

Example:
    >>> from builder_export.destinations.divi import DiviDestination
    >>> DiviDestination().module_map["contact-form"]
    'et_pb_contact_form'
"""

from builder_export.destinations.divi.lib import (
    ANIMATION_STYLES,
    ATTRIBUTE_ESCAPES,
    DEFAULT_ANIMATION_STYLE,
    DEFAULT_MODULE,
    HEADING_WEIGHTS,
    LAYOUT_CATEGORIES,
    MODULE_MAP,
    MODULE_SPECS,
    DiviDestination,
    fraction_code,
    parse_fraction_code,
    spacing,
)

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
