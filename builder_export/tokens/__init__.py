"""Design token linker: palette, typography and type scale slots and value-based linking."""

from builder_export.tokens.lib import (
    COLOR_PROPERTIES,
    FONT_PROPERTIES,
    PALETTE_SLOTS,
    SEMANTIC_SLOTS,
    SIZE_PROPERTIES,
    DesignTokenIndex,
    TokenLinks,
    TokenSlot,
    build_token_index,
    color_slots,
    font_slots,
    link_design_tokens,
    normalize_color,
    normalize_font_family,
    normalize_font_size,
    size_slots,
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
