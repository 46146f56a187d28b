"""Component-to-module mapping.

Example:
    >>> from builder_export.destinations import get_destination
    >>> from builder_export.mapper import map_component
    >>>
    >>> module = map_component(component, get_destination("divi"))
    >>> module.type
    'et_pb_text'
"""

from builder_export.mapper.lib import (
    CLASS_TYPES,
    TAG_TYPES,
    extract_features,
    map_component,
    resolve_module_type,
)

__all__ = [
    "CLASS_TYPES",
    "TAG_TYPES",
    "extract_features",
    "map_component",
    "resolve_module_type",
]
