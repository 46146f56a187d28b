"""Target exporter: the full export pipeline.

Example:
    >>> from builder_export.config import ExportOptions
    >>> from builder_export.exporter import export
    >>>
    >>> result = export(components, ExportOptions(create_global_presets=True))
    >>> print(result.markup)
"""

from builder_export.exporter.lib import (
    build_global_presets,
    build_library_layouts,
    build_page_settings,
    build_sections,
    build_template_part,
    convert_html,
    export,
    export_page,
)

__all__ = [
    "build_global_presets",
    "build_library_layouts",
    "build_page_settings",
    "build_sections",
    "build_template_part",
    "convert_html",
    "export",
    "export_page",
]
