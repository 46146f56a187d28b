"""Export optimizer.

Prunes structure that was synthesized during segmentation but ended up
holding no modules. Structure taken from the source is never removed,
merged or reordered, so optimizing an optimized document is a no-op.
"""

from dataclasses import dataclass

from builder_export.core import get_logger
from builder_export.destinations import Destination
from builder_export.document import BuilderExport, Column, Row
from builder_export.segment import row_structure

logger = get_logger("optimize")


@dataclass
class OptimizeStats:
    """Counts of pruned nodes."""

    sections: int = 0
    rows: int = 0
    columns: int = 0

    @property
    def total(self) -> int:
        return self.sections + self.rows + self.columns


def _is_empty_synthesized(node: Column | Row) -> bool:
    if not node.synthesized:
        return False
    if isinstance(node, Column):
        return not node.content
    return not any(True for _ in node.iter_modules())


def _prune_columns(row: Row) -> int:
    kept: list[Column] = []
    pruned = 0
    for index, column in enumerate(row.content):
        remaining = len(kept) + len(row.content) - index - 1
        if _is_empty_synthesized(column) and remaining > 0:
            pruned += 1
            continue
        kept.append(column)
    row.content = kept
    return pruned


def optimize_export(document: BuilderExport, destination: Destination) -> OptimizeStats:
    """Prune empty synthesized sections, rows and columns in place.

    A synthesized column is pruned only while its row keeps another
    column; rows that lose columns have their declared structure
    re-encoded. The flattened module list is not refreshed here.

    Args:
        document: Exported document, modified in place.
        destination: Destination used to re-encode row structures.

    Returns:
        OptimizeStats with the number of pruned nodes per level.
    """
    stats = OptimizeStats()

    for section in document.sections:
        for row in section.content:
            pruned = _prune_columns(row)
            if pruned:
                row.attrs.update(
                    destination.structure_attributes(row_structure(len(row.content)))
                )
                stats.columns += pruned

        rows = [row for row in section.content if not _is_empty_synthesized(row)]
        stats.rows += len(section.content) - len(rows)
        section.content = rows

    sections = [
        section
        for section in document.sections
        if not (section.synthesized and not any(True for _ in section.iter_modules()))
    ]
    stats.sections = len(document.sections) - len(sections)
    document.sections = sections

    if stats.total:
        logger.debug(
            "Pruned %d sections, %d rows, %d columns",
            stats.sections,
            stats.rows,
            stats.columns,
        )
    return stats


__all__ = ["OptimizeStats", "optimize_export"]
