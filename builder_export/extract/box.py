"""Box model and box shadow parsing.

Raw CSS strings are parsed once into normalized structures (four-sided
dimension sets, shadow offsets) and formatted on output into the
destination's positional string convention. Every parser returns ``None``
for values it cannot read; nothing here raises on malformed input.
"""

import re

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DIMENSION_RE = re.compile(
    r"^(-?\d*\.?\d+)(px|em|rem|%|vh|vw|vmin|vmax|ch|ex|cm|mm|in|pt|pc)?$",
    re.IGNORECASE,
)

# Keywords accepted in place of a length
KEYWORD_DIMENSIONS = {"auto", "inherit", "initial"}

# Units that scale with the viewport or font size
RESPONSIVE_UNITS = {"%", "vh", "vw", "vmin", "vmax", "em", "rem"}


class BoxValue(BaseModel):
    """Base for box/shadow structures: camelCase JSON, immutable."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Dimension(BoxValue):
    """A parsed CSS length."""

    value: float
    unit: str
    original: str
    is_responsive: bool = False


class DimensionSet(BoxValue):
    """Four-sided dimension set; unset sides are ``None``."""

    top: Dimension | None = None
    right: Dimension | None = None
    bottom: Dimension | None = None
    left: Dimension | None = None


class BoxModel(BoxValue):
    """Normalized box model of one element."""

    margin: DimensionSet | None = None
    padding: DimensionSet | None = None
    border: DimensionSet | None = None
    width: Dimension | None = None
    height: Dimension | None = None
    min_width: Dimension | None = None
    max_width: Dimension | None = None
    min_height: Dimension | None = None
    max_height: Dimension | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


class BoxShadow(BoxValue):
    """First layer of a CSS ``box-shadow``."""

    horizontal: Dimension
    vertical: Dimension
    blur: Dimension | None = None
    spread: Dimension | None = None
    color: str = "rgba(0,0,0,0.3)"
    inset: bool = False


# =============================================================================
# Dimensions
# =============================================================================


def parse_dimension(value: str | int | float | None) -> Dimension | None:
    """Parse a single CSS length; unitless numbers are pixels.

    Example:
        >>> parse_dimension("1.5rem").unit
        'rem'
        >>> parse_dimension("calc(100% - 2px)") is None
        True
    """
    if value is None or value == "":
        return None
    text = str(value).strip()
    if text in KEYWORD_DIMENSIONS:
        return Dimension(value=0, unit=text, original=text)
    match = DIMENSION_RE.match(text)
    if not match:
        return None
    unit = (match.group(2) or "px").lower()
    return Dimension(
        value=float(match.group(1)),
        unit=unit,
        original=text,
        is_responsive=unit in RESPONSIVE_UNITS,
    )


def parse_shorthand_dimension(value: str | None) -> DimensionSet | None:
    """Parse a 1-4 value shorthand (``margin``, ``padding``, ``border-width``).

    Any unparseable part invalidates the whole shorthand.
    """
    if not value:
        return None
    parts = [parse_dimension(part) for part in str(value).split()]
    if not parts or len(parts) > 4 or any(part is None for part in parts):
        return None
    if len(parts) == 1:
        top = right = bottom = left = parts[0]
    elif len(parts) == 2:
        top, right = parts
        bottom, left = top, right
    elif len(parts) == 3:
        top, right, bottom = parts
        left = right
    else:
        top, right, bottom, left = parts
    return DimensionSet(top=top, right=right, bottom=bottom, left=left)


def _sided(styles: dict[str, str], prefix: str, suffix: str = "") -> DimensionSet | None:
    sides = {
        side: parse_dimension(styles.get(f"{prefix}{side.capitalize()}{suffix}"))
        for side in ("top", "right", "bottom", "left")
    }
    if not any(sides.values()):
        return None
    return DimensionSet(**sides)


def extract_box_model(styles: dict[str, str]) -> BoxModel | None:
    """Build a BoxModel from a resolved style map.

    Shorthands win over per-side longhands. Returns ``None`` when no box
    property could be read.
    """
    if not styles:
        return None
    box = BoxModel(
        margin=(
            parse_shorthand_dimension(styles["margin"])
            if styles.get("margin")
            else _sided(styles, "margin")
        ),
        padding=(
            parse_shorthand_dimension(styles["padding"])
            if styles.get("padding")
            else _sided(styles, "padding")
        ),
        border=(
            parse_shorthand_dimension(styles["borderWidth"])
            if styles.get("borderWidth")
            else _sided(styles, "border", "Width")
        ),
        width=parse_dimension(styles.get("width")),
        height=parse_dimension(styles.get("height")),
        min_width=parse_dimension(styles.get("minWidth")),
        max_width=parse_dimension(styles.get("maxWidth")),
        min_height=parse_dimension(styles.get("minHeight")),
        max_height=parse_dimension(styles.get("maxHeight")),
    )
    return None if box.is_empty else box


def format_dimension(dimension: Dimension | None) -> str:
    """Format a dimension as ``<value><unit>``; keywords pass through."""
    if dimension is None:
        return ""
    if dimension.unit in KEYWORD_DIMENSIONS:
        return dimension.unit
    value = dimension.value
    number = str(int(value)) if value == int(value) else f"{value:g}"
    return f"{number}{dimension.unit}"


def format_dimension_set(dimensions: DimensionSet | None, separator: str = "|") -> str:
    """Format a dimension set positionally as ``top|right|bottom|left``.

    Example:
        >>> format_dimension_set(parse_shorthand_dimension("10px 20px"))
        '10px|20px|10px|20px'
    """
    if dimensions is None:
        return ""
    return separator.join(
        format_dimension(getattr(dimensions, side))
        for side in ("top", "right", "bottom", "left")
    )


# =============================================================================
# Box Shadow
# =============================================================================

_COLOR_RE = re.compile(r"(#[0-9a-fA-F]{3,8}\b|(?:rgba?|hsla?)\([^)]*\))")


def _split_layers(value: str) -> list[str]:
    """Split a comma-separated shadow list, ignoring commas inside parens."""
    layers, depth, current = [], 0, []
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            layers.append("".join(current))
            current = []
        else:
            current.append(char)
    layers.append("".join(current))
    return [layer.strip() for layer in layers if layer.strip()]


def parse_box_shadow(value: str | None) -> BoxShadow | None:
    """Parse the first layer of a CSS ``box-shadow`` value.

    Example:
        >>> shadow = parse_box_shadow("0 4px 6px -1px rgba(0, 0, 0, 0.1)")
        >>> format_dimension(shadow.vertical), shadow.color
        ('4px', 'rgba(0, 0, 0, 0.1)')
    """
    if not value or value.strip() == "none":
        return None
    layers = _split_layers(value)
    if not layers:
        return None
    layer = layers[0]

    color = None
    color_match = _COLOR_RE.search(layer)
    if color_match:
        color = color_match.group(1)
        layer = layer[: color_match.start()] + layer[color_match.end() :]

    inset = False
    lengths = []
    for token in layer.split():
        if token == "inset":
            inset = True
            continue
        dimension = parse_dimension(token)
        if dimension is None or dimension.unit in KEYWORD_DIMENSIONS:
            # Named colors
            if color is None and token.isalpha():
                color = token
                continue
            return None
        lengths.append(dimension)

    if not 2 <= len(lengths) <= 4:
        return None
    shadow = BoxShadow(
        horizontal=lengths[0],
        vertical=lengths[1],
        blur=lengths[2] if len(lengths) > 2 else None,
        spread=lengths[3] if len(lengths) > 3 else None,
        inset=inset,
    )
    if color:
        shadow = shadow.model_copy(update={"color": color})
    return shadow


def extract_box_shadow(styles: dict[str, str]) -> BoxShadow | None:
    """Read ``boxShadow`` from a style map."""
    if not styles:
        return None
    return parse_box_shadow(styles.get("boxShadow"))


__all__ = [
    "BoxModel",
    "BoxShadow",
    "Dimension",
    "DimensionSet",
    "extract_box_model",
    "extract_box_shadow",
    "format_dimension",
    "format_dimension_set",
    "parse_box_shadow",
    "parse_dimension",
    "parse_shorthand_dimension",
]
