"""Structural segmenter.

Classifies a ComponentInfo forest into Section -> Row -> Column units,
synthesizing the structure the source markup leaves implicit. The result
is destination-agnostic: columns carry an exact width fraction and the
content components that will each become one module.

Classification is by class token. A token matches a keyword when it equals
the keyword or one of its ``-``/``_`` separated parts does, so ``col-md-6``
is a column candidate and ``hero-banner`` is section-like.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from fractions import Fraction

from builder_export.component import ComponentInfo
from builder_export.core import get_logger

logger = get_logger("segment")

SECTION_TAGS = {"section"}
SECTION_KEYWORDS = {"section", "hero", "banner"}
ROW_KEYWORDS = {"row", "container"}
COLUMN_KEYWORDS = {"col", "column"}

# Grid span -> column width
COLUMN_WIDTHS: dict[int, Fraction] = {
    3: Fraction(1, 4),
    4: Fraction(1, 3),
    6: Fraction(1, 2),
    8: Fraction(2, 3),
    9: Fraction(3, 4),
}

FULL_WIDTH = Fraction(1)

# Row structure by column count; any other count falls back to full width
ROW_STRUCTURES: dict[int, tuple[Fraction, ...]] = {
    1: (FULL_WIDTH,),
    2: (Fraction(1, 2),) * 2,
    3: (Fraction(1, 3),) * 3,
    4: (Fraction(1, 4),) * 4,
}

# Tags that always form one content unit with their subtree
CONTENT_TAGS = {
    "a",
    "audio",
    "blockquote",
    "button",
    "figure",
    "form",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "iframe",
    "img",
    "ol",
    "p",
    "pre",
    "table",
    "ul",
    "video",
}

# Class keywords marking a composite content unit
CONTENT_CLASS_HINTS = ("blurb", "testimonial", "pricing", "cta")

# Component types that describe layout rather than content
STRUCTURAL_TYPES = {"container", "section", "row", "column", "wrapper", "layout", "grid"}

_SPAN_RE = re.compile(r"^col(?:-[a-z]{2})?-(\d+)$")
_TOKEN_SPLIT_RE = re.compile(r"[-_]")


@dataclass
class ColumnUnit:
    """A column and the content components it holds, in source order."""

    source: ComponentInfo | None
    fraction: Fraction = FULL_WIDTH
    components: list[ComponentInfo] = field(default_factory=list)
    synthesized: bool = False


@dataclass
class RowUnit:
    """A row and its columns."""

    source: ComponentInfo | None
    columns: list[ColumnUnit] = field(default_factory=list)
    synthesized: bool = False

    @property
    def structure(self) -> tuple[Fraction, ...]:
        """Declared column fractions, derived from the column count only."""
        return row_structure(len(self.columns))


@dataclass
class SectionUnit:
    """A section and its rows."""

    source: ComponentInfo | None
    rows: list[RowUnit] = field(default_factory=list)
    synthesized: bool = False


# =============================================================================
# Classification
# =============================================================================


def matches_keyword(class_token: str, keywords: Iterable[str]) -> bool:
    """Check a single class token against a keyword set.

    Example:
        >>> matches_keyword("col-md-6", {"col"})
        True
        >>> matches_keyword("collapse", {"col"})
        False
    """
    keywords = set(keywords)
    token = class_token.lower()
    if token in keywords:
        return True
    return any(part in keywords for part in _TOKEN_SPLIT_RE.split(token))


def has_class_keyword(component: ComponentInfo, keywords: Iterable[str]) -> bool:
    keywords = set(keywords)
    return any(matches_keyword(token, keywords) for token in component.class_list)


def is_section_like(component: ComponentInfo) -> bool:
    return component.tag in SECTION_TAGS or has_class_keyword(component, SECTION_KEYWORDS)


def is_row_like(component: ComponentInfo) -> bool:
    return has_class_keyword(component, ROW_KEYWORDS)


def is_column_like(component: ComponentInfo) -> bool:
    return has_class_keyword(component, COLUMN_KEYWORDS)


def is_structural(component: ComponentInfo) -> bool:
    """True when class tokens declare a section, row or column."""
    return is_section_like(component) or is_row_like(component) or is_column_like(component)


def is_content(component: ComponentInfo) -> bool:
    """True when a component becomes exactly one module.

    Class-declared layout wins: a section, row or column candidate is
    content only when it is childless and carries text of its own. Other
    childless components, components with a non-layout type, content tags
    and composite-content class hints qualify. Everything else is a
    structural wrapper whose children are considered instead.
    """
    if not component.children:
        return component.has_content or not is_structural(component)
    if is_structural(component):
        return False
    component_type = (component.component_type or "").lower()
    if component_type and component_type not in STRUCTURAL_TYPES:
        return True
    if component.tag in CONTENT_TAGS:
        return True
    classes = (component.class_name or "").lower()
    return any(hint in classes for hint in CONTENT_CLASS_HINTS)


def column_fraction(component: ComponentInfo) -> Fraction:
    """Width of a column candidate from its grid-span class.

    Unrecognized spans are full width.

    Example:
        >>> column_fraction(ComponentInfo(class_name="col-md-4"))
        Fraction(1, 3)
    """
    for token in component.class_list:
        match = _SPAN_RE.match(token)
        if match:
            return COLUMN_WIDTHS.get(int(match.group(1)), FULL_WIDTH)
    return FULL_WIDTH


def row_structure(column_count: int) -> tuple[Fraction, ...]:
    """Declared column fractions for a row with ``column_count`` columns.

    Derived from the count alone; the widths detected on individual columns
    are not consulted.
    """
    return ROW_STRUCTURES.get(column_count, (FULL_WIDTH,))


# =============================================================================
# Segmentation
# =============================================================================


def _own_children(component: ComponentInfo) -> list[ComponentInfo]:
    """Children, or the node itself when it is childless but carries content."""
    if component.children:
        return list(component.children)
    return [component] if component.has_content else []


def collect_content(components: Iterable[ComponentInfo]) -> list[ComponentInfo]:
    """Flatten structural wrappers into their content components, in order."""
    collected: list[ComponentInfo] = []
    for component in components:
        if is_content(component):
            collected.append(component)
        else:
            collected.extend(collect_content(component.children))
    return collected


def count_content_units(components: Iterable[ComponentInfo]) -> int:
    """Number of modules a forest exports to.

    Each content unit counts once with its whole subtree; structural
    wrappers, empty ones included, count nothing themselves.

    Example:
        >>> count_content_units(parse_html_components("<p>a <b>b</b></p><ul><li>c</li></ul>"))
        2
    """
    return len(collect_content(components))


def _synthesized_row(components: list[ComponentInfo]) -> RowUnit:
    column = ColumnUnit(source=None, components=collect_content(components), synthesized=True)
    return RowUnit(source=None, columns=[column], synthesized=True)


def build_row(component: ComponentInfo) -> RowUnit:
    """Build a row from a row-like component.

    Column candidates become columns; runs of other children between them
    are grouped into one synthesized full-width column. A row without
    candidates gets a single synthesized column holding all its content.
    """
    children = _own_children(component)
    columns: list[ColumnUnit] = []
    pending: list[ComponentInfo] = []

    def flush() -> None:
        if pending:
            columns.append(
                ColumnUnit(source=None, components=collect_content(pending), synthesized=True)
            )
            pending.clear()

    for child in children:
        if child is not component and is_column_like(child):
            flush()
            columns.append(
                ColumnUnit(
                    source=child,
                    fraction=column_fraction(child),
                    components=collect_content(_own_children(child)),
                )
            )
        else:
            pending.append(child)
    flush()

    if not columns:
        columns.append(ColumnUnit(source=None, synthesized=True))
    if all(column.synthesized for column in columns):
        logger.debug("Row %s has no column candidates", component.id or component.tag)
    return RowUnit(source=component, columns=columns)


def _has_row_children(component: ComponentInfo) -> bool:
    return any(is_row_like(child) for child in component.children)


def _has_column_children(component: ComponentInfo) -> bool:
    return any(is_column_like(child) for child in component.children)


def iter_rows(components: Iterable[ComponentInfo]) -> Iterator[RowUnit]:
    """Classify section-level components into rows.

    Row-like components with column candidates become rows. Wrappers whose
    direct children are row-like are transparent: their children are
    classified in their place. Any other component is an orphan and gets
    its own synthesized row and full-width column.
    """
    for component in components:
        if is_content(component):
            logger.debug("Wrapping orphan %s in a synthesized row", component.tag)
            yield _synthesized_row([component])
        elif is_row_like(component) and _has_column_children(component):
            yield build_row(component)
        elif _has_row_children(component):
            yield from iter_rows(component.children)
        elif is_row_like(component):
            yield build_row(component)
        else:
            logger.debug("Wrapping orphan %s in a synthesized row", component.tag)
            yield _synthesized_row([component])


def build_section(component: ComponentInfo) -> SectionUnit:
    """Build a section from a section-like component."""
    return SectionUnit(source=component, rows=list(iter_rows(_own_children(component))))


def segment(components: Iterable[ComponentInfo]) -> list[SectionUnit]:
    """Segment a top-level component forest into sections.

    Section-like components open a new section. Any other top-level
    component joins the open section, or opens a synthesized default
    section when none is open yet. Source order is preserved throughout.

    Args:
        components: Top-level components in document order.

    Returns:
        Ordered list of SectionUnit.

    Example:
        >>> sections = segment(parse_html_components("<p>Hello</p>"))
        >>> sections[0].synthesized, len(sections[0].rows)
        (True, 1)
    """
    sections: list[SectionUnit] = []
    current: SectionUnit | None = None

    for component in components:
        if is_section_like(component):
            current = build_section(component)
            sections.append(current)
            continue
        if current is None:
            logger.debug("Opening implicit section for %s", component.tag)
            current = SectionUnit(source=None, synthesized=True)
            sections.append(current)
        current.rows.extend(iter_rows([component]))

    return sections


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
    "count_content_units",
    "column_fraction",
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
