"""Destination abstraction and lookup.

A destination is a fixed set of tables (module vocabulary, per-module
attribute builders, layout categories) plus the encoders that turn
destination-agnostic structure and extracted features into the
destination's attribute conventions. Exporters never branch on the
destination; adding one means adding a table.

Destinations are looked up from an immutable mapping and instantiated per
call, so concurrent exports share no mutable state.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from types import MappingProxyType
from typing import Any

from builder_export.component import ComponentInfo, TypographySystem
from builder_export.document import Column, FontSettings, GlobalColor, Row
from builder_export.extract import (
    BoxModel,
    BoxShadow,
    DynamicContent,
    EntranceAnimation,
    HoverEffects,
    MotionEffects,
    ResponsiveSettings,
)
from builder_export.segment import ColumnUnit, RowUnit, SectionUnit
from builder_export.tokens import DesignTokenIndex, TokenLinks

AttributeBuilder = Callable[[ComponentInfo], dict[str, Any]]
ContentBuilder = Callable[[ComponentInfo], str]


@dataclass(frozen=True)
class ModuleSpec:
    """Declarative attribute construction for one destination module.

    Attributes:
        module_type: Destination module identifier.
        build: Source-derived attributes; overrides earlier values.
        content: Inline module content.
        defaults: Destination-idiomatic values for keys still unset.
    """

    module_type: str
    build: AttributeBuilder | None = None
    content: ContentBuilder | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ModuleFeatures:
    """Every extracted feature of one component."""

    responsive: ResponsiveSettings | None = None
    hover: HoverEffects | None = None
    animation: EntranceAnimation | None = None
    motion: MotionEffects | None = None
    custom_css: str = ""
    dynamic_content: DynamicContent | None = None
    box_model: BoxModel | None = None
    box_shadow: BoxShadow | None = None


class Destination(ABC):
    """Abstract base class for export destinations.

    Subclasses must implement:
        - name: Destination identifier string
        - section_tag / row_tag / column_tag: Markup tag names
        - module_map: Abstract component type to module identifier
        - module_specs: Module identifier to ModuleSpec
        - default_module: Fallback module identifier
        - the structure and feature encoders below

    Example:
        >>> destination = get_destination("divi")
        >>> destination.module_map["image"]
        'et_pb_image'
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Destination identifier string."""
        ...

    @property
    @abstractmethod
    def section_tag(self) -> str: ...

    @property
    @abstractmethod
    def row_tag(self) -> str: ...

    @property
    @abstractmethod
    def column_tag(self) -> str: ...

    @property
    @abstractmethod
    def module_map(self) -> Mapping[str, str]:
        """Abstract component type to destination module identifier.

        This table is a compatibility contract with the destination's own
        importer and must be reproduced exactly.
        """
        ...

    @property
    @abstractmethod
    def module_specs(self) -> Mapping[str, ModuleSpec]:
        """Module identifier to its attribute construction spec."""
        ...

    @property
    @abstractmethod
    def default_module(self) -> str:
        """Module used when no classification step matches."""
        ...

    @property
    def vocabulary(self) -> frozenset[str]:
        """Every module identifier this destination recognizes."""
        return frozenset(self.module_map.values()) | {self.default_module}

    def module_spec(self, module_type: str) -> ModuleSpec:
        """Spec for a module type; types without one get an empty spec."""
        return self.module_specs.get(module_type) or ModuleSpec(module_type)

    # -------------------------------------------------------------------------
    # Structure encoding
    # -------------------------------------------------------------------------

    @abstractmethod
    def section_attributes(self, unit: SectionUnit) -> dict[str, Any]: ...

    @abstractmethod
    def row_attributes(self, unit: RowUnit) -> dict[str, Any]: ...

    @abstractmethod
    def column_attributes(self, unit: ColumnUnit) -> dict[str, Any]: ...

    @abstractmethod
    def structure_attributes(self, structure: tuple[Fraction, ...]) -> dict[str, Any]:
        """Row attributes declaring a column structure."""
        ...

    @abstractmethod
    def row_structure(self, row: Row) -> tuple[Fraction, ...] | None:
        """Declared column fractions of an exported row, None if unreadable."""
        ...

    @abstractmethod
    def column_fraction(self, column: Column) -> Fraction | None:
        """Width of an exported column, None if unreadable."""
        ...

    # -------------------------------------------------------------------------
    # Module encoding
    # -------------------------------------------------------------------------

    @abstractmethod
    def identity_attributes(self, component: ComponentInfo) -> dict[str, Any]:
        """Attributes naming the source element (id, classes)."""
        ...

    @abstractmethod
    def feature_attributes(self, features: ModuleFeatures) -> dict[str, Any]:
        """Encode extracted features into destination attributes."""
        ...

    @abstractmethod
    def token_attributes(self, links: TokenLinks) -> dict[str, Any]:
        """Encode design token links into destination attributes."""
        ...

    @abstractmethod
    def design_attributes(self, component: ComponentInfo) -> dict[str, Any]:
        """Design settings common to every module type."""
        ...

    # -------------------------------------------------------------------------
    # Theme registries
    # -------------------------------------------------------------------------

    @abstractmethod
    def global_colors(self, index: DesignTokenIndex) -> list[GlobalColor]: ...

    @abstractmethod
    def font_settings(self, typography: TypographySystem) -> FontSettings: ...

    @abstractmethod
    def layout_category(self, category: str) -> str:
        """Destination library category for a component library category."""
        ...

    def escape_attribute(self, value: Any) -> str:
        """Render an attribute value for the markup encoding."""
        return str(value)

    def fraction_label(self, fraction: Fraction) -> str:
        """Short label of a column width for review output."""
        return str(fraction)


def _destination_table() -> Mapping[str, type[Destination]]:
    """Read-only table of destination classes by name."""
    from builder_export.destinations.divi import DiviDestination

    return MappingProxyType({DiviDestination.NAME: DiviDestination})


def get_destination(name: str) -> Destination:
    """Get a fresh destination instance by name.

    Args:
        name: Destination identifier (e.g., "divi").

    Returns:
        Destination: A new instance of the requested destination.

    Raises:
        KeyError: If no destination with the given name exists.
    """
    table = _destination_table()
    key = (name or "").lower()
    if key not in table:
        available = ", ".join(table) or "(none)"
        raise KeyError(f"Unknown destination '{name}'. Available: {available}")
    return table[key]()


def list_destinations() -> list[str]:
    """List available destination names.

    Example:
        >>> list_destinations()
        ['divi']
    """
    return list(_destination_table())


__all__ = [
    "AttributeBuilder",
    "ContentBuilder",
    "Destination",
    "ModuleFeatures",
    "ModuleSpec",
    "get_destination",
    "list_destinations",
]
