"""Capture-side input models for the export engine.

The capture collaborator hands over a recursive ``ComponentInfo`` forest plus
optional design inputs. All models decode the collaborator's camelCase JSON.

Example:
    >>> from builder_export.component import CapturedPage, parse_html_components
    >>>
    >>> page = CapturedPage(components=parse_html_components("<p>Hello</p>"))
    >>> page.components[0].text_content
    'Hello'
"""

from builder_export.component.html import ComponentTreeBuilder, parse_html_components
from builder_export.component.lib import (
    AnimationInfo,
    CaptureModel,
    CapturedPage,
    ColorPalette,
    ComponentInfo,
    ComponentLibrary,
    ComponentTemplate,
    FontFamily,
    GlobalTypography,
    InteractiveStates,
    PaletteColor,
    PseudoElements,
    ResponsiveStyles,
    SemanticColors,
    TemplatePart,
    TemplateParts,
    TextStyle,
    TypeScale,
    TypeSize,
    TypographySystem,
    kebab_to_camel,
    parse_style_declarations,
)

__all__ = [
    # Component tree
    "AnimationInfo",
    "CaptureModel",
    "ComponentInfo",
    "InteractiveStates",
    "PseudoElements",
    "ResponsiveStyles",
    "kebab_to_camel",
    "parse_style_declarations",
    # Design inputs
    "CapturedPage",
    "ColorPalette",
    "ComponentLibrary",
    "ComponentTemplate",
    "FontFamily",
    "GlobalTypography",
    "PaletteColor",
    "SemanticColors",
    "TemplatePart",
    "TemplateParts",
    "TextStyle",
    "TypeScale",
    "TypeSize",
    "TypographySystem",
    # HTML reader
    "ComponentTreeBuilder",
    "parse_html_components",
]
