"""Design token linker.

Builds an index from concrete color values, font-family names and font
sizes to semantic slot identifiers (``primary-1``, ``body``, ``lg``, ...)
and links a component's resolved styles to it. Matching is value-based:
colors are normalized to lowercase six-digit hex before lookup, fonts to
their first family name without quotes, sizes to ``<n>px``.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from builder_export.component import ColorPalette, ComponentInfo, TypographySystem

# Palette slots in registration order
PALETTE_SLOTS: tuple[str, ...] = ("primary", "secondary", "accent", "neutral")

# Semantic slots in registration order
SEMANTIC_SLOTS: tuple[str, ...] = ("success", "warning", "error", "info")

# Style properties linked to color tokens
COLOR_PROPERTIES: tuple[str, ...] = ("color", "backgroundColor", "borderColor")

# Style properties linked to font tokens
FONT_PROPERTIES: tuple[str, ...] = ("fontFamily",)

# Style properties linked to size tokens
SIZE_PROPERTIES: tuple[str, ...] = ("fontSize",)

_RGB_RE = re.compile(r"rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})")
_SHORT_HEX_RE = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$")
_PX_RE = re.compile(r"^(\d+(?:\.\d+)?)px$")


@dataclass(frozen=True)
class TokenSlot:
    """One semantic slot in the token index."""

    slug: str
    name: str
    value: str


@dataclass(frozen=True)
class DesignTokenIndex:
    """Value-to-slot lookup built from the optional design inputs.

    Attributes:
        colors: Normalized hex value to slot slug.
        fonts: Normalized font-family name to slot slug.
        sizes: Normalized ``<n>px`` size to type scale step name.
        color_slots: Every registered color slot in order, duplicates included.
        font_slots: Every registered font slot in order.
        size_slots: Every type scale step in order.
    """

    colors: dict[str, str] = field(default_factory=dict)
    fonts: dict[str, str] = field(default_factory=dict)
    sizes: dict[str, str] = field(default_factory=dict)
    color_slots: tuple[TokenSlot, ...] = ()
    font_slots: tuple[TokenSlot, ...] = ()
    size_slots: tuple[TokenSlot, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.colors or self.fonts or self.sizes)


@dataclass(frozen=True)
class TokenLinks:
    """Token references for one component, keyed by style property."""

    colors: dict[str, str] = field(default_factory=dict)
    fonts: dict[str, str] = field(default_factory=dict)
    sizes: dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.colors or self.fonts or self.sizes)


def normalize_color(value: str | None) -> str:
    """Normalize a CSS color to lowercase hex where possible.

    Example:
        >>> normalize_color("rgb(37, 99, 235)")
        '#2563eb'
        >>> normalize_color("#FFF")
        '#ffffff'
    """
    if not value:
        return ""
    text = str(value).strip().lower()
    short = _SHORT_HEX_RE.match(text)
    if short:
        return "#" + "".join(channel * 2 for channel in short.groups())
    if text.startswith("#"):
        return text
    rgb = _RGB_RE.match(text)
    if rgb:
        channels = [min(int(channel), 255) for channel in rgb.groups()]
        return "#" + "".join(f"{channel:02x}" for channel in channels)
    return text


def normalize_font_family(value: str | None) -> str:
    """Reduce a font stack to its first family, unquoted and lowercased."""
    if not value:
        return ""
    first = str(value).split(",")[0]
    return first.strip().strip("'\"").strip().lower()


def normalize_font_size(value: str | float | None) -> str:
    """Normalize a pixel font size to ``<n>px``; other units pass through lowercased.

    Example:
        >>> normalize_font_size("24.0px"), normalize_font_size(18)
        ('24px', '18px')
    """
    if value is None or value == "":
        return ""
    if isinstance(value, (int, float)):
        return f"{value:g}px"
    text = str(value).strip().lower()
    match = _PX_RE.match(text)
    if match:
        return f"{float(match.group(1)):g}px"
    return text


def color_slots(palette: ColorPalette) -> list[TokenSlot]:
    """List palette colors as slots in registration order.

    Palette slots are numbered per slot (``primary-1``, ``primary-2``);
    semantic slots use their bare name.
    """
    slots: list[TokenSlot] = []
    for slot in PALETTE_SLOTS:
        for index, color in enumerate(getattr(palette, slot), start=1):
            slots.append(
                TokenSlot(slug=f"{slot}-{index}", name=f"{slot.capitalize()} {index}", value=color.hex)
            )
    for slot in SEMANTIC_SLOTS:
        color = getattr(palette.semantic, slot)
        if color is not None:
            slots.append(TokenSlot(slug=slot, name=slot.capitalize(), value=color.hex))
    return slots


def font_slots(typography: TypographySystem) -> list[TokenSlot]:
    """List font families as slots named after their first usage context."""
    slots: list[TokenSlot] = []
    used: set[str] = set()
    for index, family in enumerate(typography.font_families, start=1):
        slug = family.contexts[0] if family.contexts and family.contexts[0] else f"font-{index}"
        if slug in used:
            slug = f"{slug}-{index}"
        used.add(slug)
        slots.append(TokenSlot(slug=slug, name=family.name, value=family.name))
    return slots


def size_slots(typography: TypographySystem) -> list[TokenSlot]:
    """List type scale steps as slots named after the step."""
    return [
        TokenSlot(slug=size.name, name=size.name, value=normalize_font_size(size.px))
        for size in typography.type_scale.sizes
    ]


def build_token_index(
    palette: ColorPalette | None = None,
    typography: TypographySystem | None = None,
) -> DesignTokenIndex:
    """Build the value-to-slot index.

    When several slots share a value, the last registered slot wins, so a
    hex listed under both primary and neutral links to the neutral slot.

    Args:
        palette: Optional color palette.
        typography: Optional typography system.

    Returns:
        DesignTokenIndex, empty when neither input is given.
    """
    colors: dict[str, str] = {}
    fonts: dict[str, str] = {}
    sizes: dict[str, str] = {}
    registered_colors = color_slots(palette) if palette is not None else []
    registered_fonts = font_slots(typography) if typography is not None else []
    registered_sizes = size_slots(typography) if typography is not None else []

    for slot in registered_colors:
        colors[normalize_color(slot.value)] = slot.slug
    for slot in registered_fonts:
        fonts[normalize_font_family(slot.value)] = slot.slug
    for slot in registered_sizes:
        sizes[slot.value] = slot.slug

    return DesignTokenIndex(
        colors=colors,
        fonts=fonts,
        sizes=sizes,
        color_slots=tuple(registered_colors),
        font_slots=tuple(registered_fonts),
        size_slots=tuple(registered_sizes),
    )


def _link(
    component: ComponentInfo,
    properties: tuple[str, ...],
    normalize: Callable[[str | None], str],
    table: dict[str, str],
) -> dict[str, str]:
    links = {}
    for prop in properties:
        value = normalize(component.styles.get(prop))
        slug = table.get(value) if value else None
        if slug:
            links[prop] = slug
    return links


def link_design_tokens(component: ComponentInfo, index: DesignTokenIndex) -> TokenLinks:
    """Link a component's resolved colors, fonts and font size to token slots.

    Args:
        component: Component whose ``styles`` are inspected.
        index: Token index from :func:`build_token_index`.

    Returns:
        TokenLinks mapping style property to slot slug.
    """
    if index.is_empty:
        return TokenLinks()
    return TokenLinks(
        colors=_link(component, COLOR_PROPERTIES, normalize_color, index.colors),
        fonts=_link(component, FONT_PROPERTIES, normalize_font_family, index.fonts),
        sizes=_link(component, SIZE_PROPERTIES, normalize_font_size, index.sizes),
    )


__all__ = [
    "COLOR_PROPERTIES",
    "DesignTokenIndex",
    "FONT_PROPERTIES",
    "PALETTE_SLOTS",
    "SEMANTIC_SLOTS",
    "SIZE_PROPERTIES",
    "TokenLinks",
    "TokenSlot",
    "build_token_index",
    "color_slots",
    "font_slots",
    "link_design_tokens",
    "normalize_color",
    "normalize_font_family",
    "normalize_font_size",
    "size_slots",
]
