"""Serialization and review output.

Example:
    >>> from builder_export.output import format_export_tree, render_markup
    >>> print(render_markup(document.sections, destination))
    [et_pb_section fullwidth="off" specialty="off"]
    ...
"""

from builder_export.output.lib import (
    ExportOutput,
    format_export_tree,
    render_attributes,
    render_markup,
)

__all__ = [
    "ExportOutput",
    "format_export_tree",
    "render_attributes",
    "render_markup",
]
