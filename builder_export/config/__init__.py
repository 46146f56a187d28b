"""Centralized configuration management for builder-export.

Example:
    >>> from builder_export.config import EnvVar, ExportOptions, get_environment
    >>>
    >>> get_environment(EnvVar.EXPORT_DESTINATION)
    'divi'
    >>> options = ExportOptions.from_environment(export_layouts=True)

Environment Variable Categories:
    export: Export pipeline flags (destination, layouts, presets, validate, optimize)
    performance: Page-level CSS delivery settings
    logging: CLI log level
"""

from builder_export.config.lib import (
    EnvConfig,
    EnvVar,
    ExportOptions,
    get_environment,
    get_environment_info,
    list_environment_variables,
)

__all__ = [
    "EnvConfig",
    "EnvVar",
    "ExportOptions",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
]
