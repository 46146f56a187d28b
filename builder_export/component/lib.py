"""Input models produced by the page-capture collaborator.

This module defines the normalized, destination-agnostic representation of a
captured page: a recursive `ComponentInfo` tree plus the optional design
inputs (color palette, typography system, component library and template
parts) produced by the analysis stage. The capture stage emits camelCase
JSON (`tagName`, `className`, `innerHTML`, ...), which these models accept
directly; Python callers may use the snake_case field names.

The export engine treats every model here as read-only.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_DECLARATION_RE = re.compile(r"^\s*([-a-zA-Z]+)\s*:\s*(.+?)\s*$", re.DOTALL)


def kebab_to_camel(name: str) -> str:
    """Convert a CSS property name to the camelCase key used in style maps.

    Custom properties (``--brand``) are returned unchanged.

    Example:
        >>> kebab_to_camel("background-color")
        'backgroundColor'
    """
    if name.startswith("--"):
        return name
    head, *rest = name.strip().lower().split("-")
    return head + "".join(part.capitalize() for part in rest if part)


def parse_style_declarations(text: str | None) -> dict[str, str]:
    """Parse an inline ``style`` attribute into a camelCase style map.

    Malformed declarations are skipped rather than failing the whole string.

    Example:
        >>> parse_style_declarations("color: red; padding:10px 20px; bogus")
        {'color': 'red', 'padding': '10px 20px'}
    """
    styles: dict[str, str] = {}
    if not text:
        return styles
    for declaration in text.split(";"):
        match = _DECLARATION_RE.match(declaration)
        if not match:
            continue
        prop, value = match.groups()
        value = value.replace("!important", "").strip()
        if value:
            styles[kebab_to_camel(prop)] = value
    return styles


def _stringify_styles(value: Any) -> Any:
    """Coerce style map values to strings and drop empty entries."""
    if not isinstance(value, dict):
        return value
    return {
        str(key): str(val)
        for key, val in value.items()
        if val is not None and str(val) != ""
    }


class CaptureModel(BaseModel):
    """Base for capture-produced models: camelCase aliases, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# Component Tree
# =============================================================================


class ResponsiveStyles(CaptureModel):
    """Style maps scoped to narrower breakpoints."""

    mobile: dict[str, str] = Field(default_factory=dict)
    tablet: dict[str, str] = Field(default_factory=dict)

    @field_validator("mobile", "tablet", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return _stringify_styles(value)


class InteractiveStates(CaptureModel):
    """Style buckets for interaction states."""

    normal: dict[str, str] = Field(default_factory=dict)
    hover: dict[str, str] = Field(default_factory=dict)

    @field_validator("normal", "hover", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return _stringify_styles(value)


class PseudoElements(CaptureModel):
    """Resolved styles of ``::before`` and ``::after``."""

    before: dict[str, str] = Field(default_factory=dict)
    after: dict[str, str] = Field(default_factory=dict)

    @field_validator("before", "after", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return _stringify_styles(value)


class AnimationInfo(CaptureModel):
    """A CSS animation observed on the element."""

    name: str
    duration: str = "0s"
    delay: str = "0s"
    timing_function: str = "ease"


class ComponentInfo(CaptureModel):
    """Normalized representation of one captured DOM node and its subtree.

    Attributes:
        tag_name: Lowercase-insensitive HTML tag name.
        id: Optional element id.
        class_name: Raw class attribute.
        attributes: Remaining HTML attributes.
        text_content: Text of the node and its descendants.
        inner_html: Inner markup.
        styles: Resolved styles keyed by camelCase property name.
        component_type: Abstract component type assigned by recognition.
        responsive_styles: Breakpoint-scoped style annotations.
        interactive_states: Normal/hover style buckets.
        animations: Observed CSS animations, first one wins.
        pseudo_elements: ``::before``/``::after`` styles.
        children: Ordered child components.
    """

    tag_name: str = "div"
    id: str | None = None
    class_name: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    text_content: str = ""
    inner_html: str = Field(default="", alias="innerHTML")
    styles: dict[str, str] = Field(default_factory=dict)
    component_type: str | None = None
    responsive_styles: ResponsiveStyles | None = None
    interactive_states: InteractiveStates | None = None
    animations: list[AnimationInfo] = Field(default_factory=list)
    pseudo_elements: PseudoElements | None = None
    children: list[ComponentInfo] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _merge_inline_style(cls, data: Any) -> Any:
        """Fold the inline ``style`` attribute under the resolved style map."""
        if not isinstance(data, dict):
            return data
        attributes = data.get("attributes") or {}
        inline = parse_style_declarations(
            attributes.get("style") if isinstance(attributes, dict) else None
        )
        if inline:
            resolved = _stringify_styles(data.get("styles") or {})
            data = {**data, "styles": {**inline, **resolved}}
        return data

    @field_validator("styles", mode="before")
    @classmethod
    def _coerce_styles(cls, value: Any) -> Any:
        return _stringify_styles(value)

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(k): "" if v is None else str(v) for k, v in value.items()}

    @property
    def tag(self) -> str:
        """Lowercase tag name."""
        return (self.tag_name or "").lower()

    @property
    def class_list(self) -> list[str]:
        """Lowercase class names in source order."""
        return (self.class_name or "").lower().split()

    @property
    def has_content(self) -> bool:
        """True when the node carries text or inner markup."""
        return bool(self.text_content.strip() or self.inner_html.strip())

    def iter_tree(self) -> Iterator[ComponentInfo]:
        """Yield this node and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.iter_tree()


# =============================================================================
# Design Inputs
# =============================================================================


class PaletteColor(CaptureModel):
    """One palette entry."""

    hex: str
    name: str | None = None


class SemanticColors(CaptureModel):
    """Semantic color slots."""

    success: PaletteColor | None = None
    warning: PaletteColor | None = None
    error: PaletteColor | None = None
    info: PaletteColor | None = None


class ColorPalette(CaptureModel):
    """Extracted color palette, ordered per slot."""

    primary: list[PaletteColor] = Field(default_factory=list)
    secondary: list[PaletteColor] = Field(default_factory=list)
    accent: list[PaletteColor] = Field(default_factory=list)
    neutral: list[PaletteColor] = Field(default_factory=list)
    semantic: SemanticColors = Field(default_factory=SemanticColors)


class FontFamily(CaptureModel):
    """A font family and the contexts it is used in ("body", "heading", ...)."""

    name: str
    contexts: list[str] = Field(default_factory=list)
    fallbacks: list[str] = Field(default_factory=list)

    @field_validator("contexts", mode="before")
    @classmethod
    def _flatten_contexts(cls, value: Any) -> Any:
        # The analyzer may emit {"type": "body", ...} records.
        if isinstance(value, list):
            return [v.get("type", "") if isinstance(v, dict) else v for v in value]
        return value


class TextStyle(CaptureModel):
    """Resolved text style for one heading level or body text."""

    font_family: str = "inherit"
    font_weight: str | int | None = None
    font_size: str | None = None
    line_height: str | float | None = None
    letter_spacing: str | None = None


class GlobalTypography(CaptureModel):
    """Page-wide base typography."""

    base_font_family: str = ""
    base_font_size: float = 16
    base_line_height: float = 1.5
    heading_font_family: str | None = None
    heading_font_weight: int | None = None


class TypeSize(CaptureModel):
    """One named step of the type scale ("sm", "base", "xl", ...)."""

    name: str
    px: float
    rem: float | None = None
    usage: int = 0
    contexts: list[str] = Field(default_factory=list)


class TypeScale(CaptureModel):
    """Font sizes observed on the page, as a named scale."""

    base: float = 16
    ratio: float | None = None
    sizes: list[TypeSize] = Field(default_factory=list)
    heading_sizes: dict[str, float] = Field(default_factory=dict)


class TypographySystem(CaptureModel):
    """Extracted typography system."""

    font_families: list[FontFamily] = Field(default_factory=list)
    type_scale: TypeScale = Field(default_factory=TypeScale)
    text_styles: dict[str, TextStyle] = Field(default_factory=dict)
    global_settings: GlobalTypography = Field(default_factory=GlobalTypography)


class ComponentTemplate(CaptureModel):
    """A reusable fragment identified on the page."""

    name: str
    category: str = "misc"
    html: str = ""
    reusability_score: float = Field(default=0, ge=0, le=100)


class ComponentLibrary(CaptureModel):
    """Reusable fragments identified on the page."""

    templates: list[ComponentTemplate] = Field(default_factory=list)


class TemplatePart(CaptureModel):
    """A header or footer candidate."""

    name: str
    html: str = ""
    confidence: float = Field(default=0, ge=0, le=100)


class TemplateParts(CaptureModel):
    """Header/footer candidates."""

    header: TemplatePart | None = None
    footer: TemplatePart | None = None


class CapturedPage(CaptureModel):
    """Everything the analysis stage hands to the export engine.

    Example:
        >>> page = CapturedPage.model_validate_json(raw_json)
        >>> page.components[0].tag
        'section'
    """

    components: list[ComponentInfo] = Field(default_factory=list)
    color_palette: ColorPalette | None = None
    typography_system: TypographySystem | None = None
    component_library: ComponentLibrary | None = None
    template_parts: TemplateParts | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_forest(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"components": value}
        return value


__all__ = [
    "AnimationInfo",
    "CaptureModel",
    "CapturedPage",
    "ColorPalette",
    "ComponentInfo",
    "ComponentLibrary",
    "ComponentTemplate",
    "FontFamily",
    "GlobalTypography",
    "InteractiveStates",
    "PaletteColor",
    "PseudoElements",
    "ResponsiveStyles",
    "SemanticColors",
    "TemplatePart",
    "TemplateParts",
    "TextStyle",
    "TypeScale",
    "TypeSize",
    "TypographySystem",
    "kebab_to_camel",
    "parse_style_declarations",
]
