"""Structural segmenter: ComponentInfo forest to Section/Row/Column units.

Example:
    >>> from builder_export.segment import segment
    >>> sections = segment(components)
    >>> [len(row.columns) for row in sections[0].rows]
    [2]
"""

from builder_export.segment.lib import (
    COLUMN_WIDTHS,
    FULL_WIDTH,
    ROW_STRUCTURES,
    ColumnUnit,
    RowUnit,
    SectionUnit,
    build_row,
    build_section,
    collect_content,
    column_fraction,
    count_content_units,
    has_class_keyword,
    is_column_like,
    is_content,
    is_row_like,
    is_section_like,
    is_structural,
    iter_rows,
    matches_keyword,
    row_structure,
    segment,
)

__all__ = [
    "COLUMN_WIDTHS",
    "ColumnUnit",
    "FULL_WIDTH",
    "ROW_STRUCTURES",
    "RowUnit",
    "SectionUnit",
    "build_row",
    "build_section",
    "collect_content",
    "column_fraction",
    "count_content_units",
    "has_class_keyword",
    "is_column_like",
    "is_content",
    "is_row_like",
    "is_section_like",
    "is_structural",
    "iter_rows",
    "matches_keyword",
    "row_structure",
    "segment",
]
