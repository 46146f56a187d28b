"""Structural validation of an exported document.

Validation never raises: every violation is collected into a
:class:`ValidationReport` and logged as a warning, and the caller decides
what to do with it.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction

from builder_export.core import get_logger
from builder_export.destinations import Destination
from builder_export.document import BuilderExport, Column, Module, Row, Section

logger = get_logger("validation")


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One validation finding.

    Attributes:
        node_path: Location such as ``sections[0].rows[1].columns[0]``.
        message: Human-readable description.
        error_type: Machine-readable category.
        severity: ERROR for hard violations, WARNING otherwise.
    """

    node_path: str
    message: str
    error_type: str
    severity: Severity = Severity.ERROR


@dataclass
class ValidationReport:
    """Collected validation findings."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, issue: ValidationIssue) -> None:
        if issue.severity is Severity.ERROR:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)


# =============================================================================
# Checks
# =============================================================================


def _check_row(
    row: Row, path: str, destination: Destination, report: ValidationReport
) -> None:
    if not isinstance(row, Row):
        report.add(
            ValidationIssue(path, f"expected a row, found {type(row).__name__}", "nesting")
        )
        return

    structure = destination.row_structure(row)
    if structure is None:
        report.add(ValidationIssue(path, "row has no readable column structure", "structure"))
    else:
        if len(structure) != len(row.content):
            report.add(
                ValidationIssue(
                    path,
                    f"structure declares {len(structure)} columns, row has {len(row.content)}",
                    "structure",
                )
            )
        if sum(structure, Fraction(0)) != 1:
            report.add(
                ValidationIssue(path, "declared column fractions do not sum to 1", "structure")
            )

    for index, column in enumerate(row.content):
        column_path = f"{path}.columns[{index}]"
        if not isinstance(column, Column):
            report.add(
                ValidationIssue(
                    column_path, f"expected a column, found {type(column).__name__}", "nesting"
                )
            )
            continue
        if destination.column_fraction(column) is None:
            report.add(
                ValidationIssue(column_path, "column has no readable width", "structure")
            )
        for module_index, module in enumerate(column.content):
            _check_module(module, f"{column_path}.modules[{module_index}]", destination, report)


def _check_module(
    module: Module, path: str, destination: Destination, report: ValidationReport
) -> None:
    if not isinstance(module, Module):
        report.add(
            ValidationIssue(path, f"expected a module, found {type(module).__name__}", "nesting")
        )
        return
    if module.type not in destination.vocabulary:
        report.add(
            ValidationIssue(path, f"unknown module type '{module.type}'", "module_type")
        )


def _check_identifiers(document: BuilderExport, report: ValidationReport) -> None:
    counts = Counter(
        module.attrs.get("module_id")
        for module in document.iter_modules()
        if module.attrs.get("module_id")
    )
    for module_id, count in counts.items():
        if count > 1:
            report.add(
                ValidationIssue(
                    "modules",
                    f"module id '{module_id}' is used {count} times",
                    "duplicate_id",
                )
            )


def _check_registries(document: BuilderExport, report: ValidationReport) -> None:
    present = {module.type for module in document.iter_modules()}
    for index, preset in enumerate(document.global_presets or []):
        if preset.module_type not in present:
            report.add(
                ValidationIssue(
                    f"global_presets[{index}]",
                    f"preset references absent module type '{preset.module_type}'",
                    "preset",
                    Severity.WARNING,
                )
            )

    slugs = Counter(color.slug for color in document.global_colors or [])
    for slug, count in slugs.items():
        if count > 1:
            report.add(
                ValidationIssue(
                    "global_colors",
                    f"color slug '{slug}' is registered {count} times",
                    "color_slug",
                    Severity.WARNING,
                )
            )


def validate_export(document: BuilderExport, destination: Destination) -> ValidationReport:
    """Validate the Section -> Row -> Column -> Module tree and registries.

    Checks nesting, that each row's declared structure matches its column
    count and sums to one, that every module type is in the destination's
    vocabulary, that module ids are unique, and that presets and global
    colors are consistent.

    Args:
        document: Exported document.
        destination: Destination the document was built for.

    Returns:
        ValidationReport; the document is never modified.
    """
    report = ValidationReport()

    for index, section in enumerate(document.sections):
        path = f"sections[{index}]"
        if not isinstance(section, Section):
            report.add(
                ValidationIssue(
                    path, f"expected a section, found {type(section).__name__}", "nesting"
                )
            )
            continue
        for row_index, row in enumerate(section.content):
            _check_row(row, f"{path}.rows[{row_index}]", destination, report)

    _check_identifiers(document, report)
    _check_registries(document, report)

    for issue in report.errors:
        logger.warning(
            "Export validation failed: %s: %s (%s)", issue.node_path, issue.message, issue.error_type
        )
    for issue in report.warnings:
        logger.warning("Export validation: %s: %s (%s)", issue.node_path, issue.message, issue.error_type)
    return report


__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "validate_export",
]
