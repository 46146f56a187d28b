"""Serialization and review output for exported documents.

Two encodings are produced from the same Section tree: the JSON document
(:meth:`BuilderExport.to_json`) and the destination markup rendered here.
Both drop blank attribute values, so their attribute key sets match.
"""

import re
from dataclasses import dataclass
from typing import Any

from builder_export.destinations import Destination
from builder_export.document import (
    BuilderExport,
    BuilderNode,
    Column,
    Module,
    Row,
    Section,
    clean_attributes,
)
from builder_export.validation import ValidationReport

PREVIEW_LENGTH = 40

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


@dataclass
class ExportOutput:
    """Complete result of one export.

    Attributes:
        document: Exported document.
        json: JSON encoding of the document.
        markup: Destination markup encoding of the section tree.
        tree: Human-readable tree for review.
        report: Validation report, None when validation was disabled.
        destination: Destination name.
    """

    document: BuilderExport
    json: str
    markup: str
    tree: str
    report: ValidationReport | None = None
    destination: str = "divi"


# =============================================================================
# Markup
# =============================================================================


def render_attributes(attrs: dict[str, Any], destination: Destination) -> str:
    """Render ``key="value"`` pairs, omitting blank values.

    Example:
        >>> render_attributes({"a": "x", "b": None}, get_destination("divi"))
        'a="x"'
    """
    return " ".join(
        f'{key}="{destination.escape_attribute(value)}"'
        for key, value in clean_attributes(attrs).items()
    )


def _open_tag(tag: str, node: BuilderNode, destination: Destination) -> str:
    attributes = render_attributes(node.attrs, destination)
    return f"[{tag} {attributes}]" if attributes else f"[{tag}]"


def _render_module(module: Module, destination: Destination) -> str:
    return f"{_open_tag(module.type, module, destination)}{module.content}[/{module.type}]"


def _render_column(column: Column, destination: Destination) -> list[str]:
    tag = destination.column_tag
    lines = [_open_tag(tag, column, destination)]
    lines.extend(_render_module(module, destination) for module in column.content)
    lines.append(f"[/{tag}]")
    return lines


def _render_row(row: Row, destination: Destination) -> list[str]:
    tag = destination.row_tag
    lines = [_open_tag(tag, row, destination)]
    for column in row.content:
        lines.extend(_render_column(column, destination))
    lines.append(f"[/{tag}]")
    return lines


def render_markup(sections: list[Section], destination: Destination) -> str:
    """Render a section tree as destination markup, depth-first.

    Args:
        sections: Sections to render.
        destination: Destination supplying tags and value escaping.

    Returns:
        Markup string, one structural tag per line with modules inline.
    """
    tag = destination.section_tag
    lines: list[str] = []
    for section in sections:
        lines.append(_open_tag(tag, section, destination))
        for row in section.content:
            lines.extend(_render_row(row, destination))
        lines.append(f"[/{tag}]")
    return "\n".join(lines)


# =============================================================================
# Review tree
# =============================================================================


def _preview(module: Module) -> str:
    text = _SPACE_RE.sub(" ", _TAG_RE.sub(" ", module.content)).strip()
    if len(text) > PREVIEW_LENGTH:
        text = text[: PREVIEW_LENGTH - 3] + "..."
    return text


def _label(node: BuilderNode, destination: Destination) -> str:
    if isinstance(node, Section):
        return "Section (synthesized)" if node.synthesized else "Section"
    if isinstance(node, Row):
        structure = destination.row_structure(node)
        if structure is None:
            return "Row"
        return f"Row [{','.join(destination.fraction_label(f) for f in structure)}]"
    if isinstance(node, Column):
        fraction = destination.column_fraction(node)
        return "Column" if fraction is None else f"Column [{destination.fraction_label(fraction)}]"
    preview = _preview(node)
    return f'{node.type} "{preview}"' if preview else node.type


def _format_node(
    node: BuilderNode,
    destination: Destination,
    lines: list[str],
    prefix: str,
    is_last: bool,
) -> None:
    connector = "└── " if is_last else "├── "
    lines.append(f"{prefix}{connector}{_label(node, destination)}")
    child_prefix = prefix + ("    " if is_last else "│   ")
    children = node.content if isinstance(node, (Section, Row, Column)) else []
    for i, child in enumerate(children):
        _format_node(child, destination, lines, child_prefix, i == len(children) - 1)


def format_export_tree(document: BuilderExport, destination: Destination) -> str:
    """Format the section tree for review.

    Example output:
        Export [divi]
        └── Section
            └── Row [1_2,1_2]
                ├── Column [1_2]
                │   └── et_pb_text "A"
                └── Column [1_2]
                    └── et_pb_text "B"

    Args:
        document: Exported document.
        destination: Destination used to read row and column widths.

    Returns:
        Formatted tree string.
    """
    lines = [f"Export [{destination.name}]"]
    for i, section in enumerate(document.sections):
        _format_node(section, destination, lines, "", i == len(document.sections) - 1)
    return "\n".join(lines)


__all__ = [
    "ExportOutput",
    "format_export_tree",
    "render_attributes",
    "render_markup",
]
