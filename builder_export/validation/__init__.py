"""Export validation.

Example:
    >>> from builder_export.validation import validate_export
    >>> report = validate_export(document, destination)
    >>> report.is_valid
    True
"""

from builder_export.validation.lib import (
    Severity,
    ValidationIssue,
    ValidationReport,
    validate_export,
)

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "validate_export",
]
