"""Output document models.

The exported document is a Section -> Row -> Column -> Module tree plus the
theme-level registries derived alongside it (layouts, global presets,
global colors, font settings). It is created fresh per export call and
mutated in place by the validator and optimizer before serialization.

JSON keys follow the destination importer's conventions: document-level
and payload keys are camelCase, attribute maps and preset/font records
keep the destination's snake_case vocabulary.
"""

from collections.abc import Iterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from builder_export.extract import (
    BoxModel,
    BoxShadow,
    DynamicContent,
    EntranceAnimation,
    HoverEffects,
    MotionEffects,
    ResponsiveSettings,
)


def is_blank(value: Any) -> bool:
    """True for attribute values omitted from every serialization."""
    return value is None or value == ""


def clean_attributes(attrs: dict[str, Any]) -> dict[str, Any]:
    """Drop ``None`` and empty-string attribute values, keeping order."""
    return {key: value for key, value in attrs.items() if not is_blank(value)}


class DocumentModel(BaseModel):
    """Base for document models: camelCase JSON keys, mutable."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BuilderNode(DocumentModel):
    """Common shape of every tree node.

    Attributes:
        attrs: Destination attribute map. Blank values are kept in memory
            and dropped on serialization.
        synthesized: True when the node has no source component. Never
            serialized.
    """

    attrs: dict[str, Any] = Field(default_factory=dict)
    synthesized: bool = Field(default=False, exclude=True)

    @field_serializer("attrs")
    def _serialize_attrs(self, attrs: dict[str, Any]) -> dict[str, Any]:
        return clean_attributes(attrs)


class Module(BuilderNode):
    """A destination content module.

    Payload fields carry the extracted features losslessly alongside the
    attributes they were encoded into.
    """

    type: str
    content: str = ""
    responsive_settings: ResponsiveSettings | None = None
    hover_effects: HoverEffects | None = None
    entrance_animation: EntranceAnimation | None = None
    motion_effects: MotionEffects | None = None
    custom_css: str | None = Field(default=None, alias="customCSS")
    dynamic_content: DynamicContent | None = None
    box_model: BoxModel | None = None
    box_shadow: BoxShadow | None = None
    color_tokens: dict[str, str] | None = None
    font_tokens: dict[str, str] | None = None
    size_tokens: dict[str, str] | None = None


class Column(BuilderNode):
    """A column holding modules."""

    type: Literal["column"] = "column"
    content: list[Module] = Field(default_factory=list)


class Row(BuilderNode):
    """A row holding columns."""

    type: Literal["row"] = "row"
    content: list[Column] = Field(default_factory=list)

    def iter_modules(self) -> Iterator[Module]:
        for column in self.content:
            yield from column.content


class Section(BuilderNode):
    """A top-level section holding rows."""

    type: Literal["section"] = "section"
    content: list[Row] = Field(default_factory=list)

    def iter_modules(self) -> Iterator[Module]:
        for row in self.content:
            yield from row.iter_modules()


class Layout(DocumentModel):
    """A reusable library layout."""

    id: int
    title: str
    content: str = ""
    categories: list[str] = Field(default_factory=list)
    is_global: bool = Field(default=False, alias="global")


class GlobalPreset(BaseModel):
    """Attribute template shared by every module of one type."""

    id: str
    title: str
    module_type: str
    settings: dict[str, Any] = Field(default_factory=dict)


class GlobalColor(BaseModel):
    """One theme color registry entry."""

    id: str
    name: str
    color: str
    slug: str


class Font(BaseModel):
    """Font record in the destination's theme settings."""

    font: str
    weight: str = "400"
    style: str = "normal"
    size: str | None = None
    line_height: str | None = None
    letter_spacing: str | None = None


class FontSettings(BaseModel):
    """Theme typography: body/heading fonts, base metrics, h1-h6."""

    body_font: Font
    heading_font: Font
    body_font_size: str
    body_line_height: str
    h1_font: Font
    h2_font: Font
    h3_font: Font
    h4_font: Font
    h5_font: Font
    h6_font: Font


class PageSettings(DocumentModel):
    """Page-level CSS delivery settings."""

    combine_css_files: bool = False
    inline_critical_css: bool = False


class BuilderExport(DocumentModel):
    """The complete exported document.

    Example:
        >>> document = BuilderExport(sections=[Section()])
        >>> document.to_dict()
        {'sections': [{'attrs': {}, 'type': 'section', 'content': []}], 'modules': [], 'layouts': []}
    """

    sections: list[Section] = Field(default_factory=list)
    modules: list[Module] = Field(default_factory=list)
    layouts: list[Layout] = Field(default_factory=list)
    global_presets: list[GlobalPreset] | None = None
    global_colors: list[GlobalColor] | None = None
    font_settings: FontSettings | None = None
    header: Layout | None = None
    footer: Layout | None = None
    page_settings: PageSettings | None = None

    def iter_modules(self) -> Iterator[Module]:
        """Yield every module in the section tree depth-first."""
        for section in self.sections:
            yield from section.iter_modules()

    def refresh_modules(self) -> None:
        """Rebuild the flattened module list from the section tree."""
        self.modules = list(self.iter_modules())

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


__all__ = [
    "BuilderExport",
    "BuilderNode",
    "Column",
    "DocumentModel",
    "Font",
    "FontSettings",
    "GlobalColor",
    "GlobalPreset",
    "Layout",
    "Module",
    "PageSettings",
    "Row",
    "Section",
    "clean_attributes",
    "is_blank",
]
