"""Output document models: Section/Row/Column/Module and theme registries.

Example:
    >>> from builder_export.document import BuilderExport, Module
    >>> Module(type="et_pb_text", attrs={"text_color": ""}).model_dump(by_alias=True)["attrs"]
    {}
"""

from builder_export.document.lib import (
    BuilderExport,
    BuilderNode,
    Column,
    DocumentModel,
    Font,
    FontSettings,
    GlobalColor,
    GlobalPreset,
    Layout,
    Module,
    PageSettings,
    Row,
    Section,
    clean_attributes,
    is_blank,
)

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
