"""builder-export: re-emit captured page component trees as page-builder documents.

Example:
    >>> from builder_export import ExportOptions, export, parse_html_components
    >>>
    >>> result = export(parse_html_components("<p>Hello</p>"), ExportOptions())
    >>> print(result.markup)
    [et_pb_section fullwidth="off" specialty="off"]
    [et_pb_row column_structure="4_4"]
    [et_pb_column type="4_4"]
    [et_pb_text background_layout="light"]Hello[/et_pb_text]
    [/et_pb_column]
    [/et_pb_row]
    [/et_pb_section]
"""

from builder_export.component import CapturedPage, ComponentInfo, parse_html_components
from builder_export.config import ExportOptions
from builder_export.destinations import get_destination, list_destinations
from builder_export.document import BuilderExport
from builder_export.exporter import export, export_page
from builder_export.output import ExportOutput

__all__ = [
    "BuilderExport",
    "CapturedPage",
    "ComponentInfo",
    "ExportOptions",
    "ExportOutput",
    "export",
    "export_page",
    "get_destination",
    "list_destinations",
    "parse_html_components",
]
