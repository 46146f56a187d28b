"""Export destinations.

A destination supplies the module vocabulary and attribute conventions of
one page builder. Look one up by name:

Example:
    >>> from builder_export.destinations import get_destination, list_destinations
    >>>
    >>> list_destinations()
    ['divi']
    >>> get_destination("divi").section_tag
    'et_pb_section'
"""

from builder_export.destinations.lib import (
    AttributeBuilder,
    ContentBuilder,
    Destination,
    ModuleFeatures,
    ModuleSpec,
    get_destination,
    list_destinations,
)

__all__ = [
    "AttributeBuilder",
    "ContentBuilder",
    "Destination",
    "ModuleFeatures",
    "ModuleSpec",
    "get_destination",
    "list_destinations",
]
