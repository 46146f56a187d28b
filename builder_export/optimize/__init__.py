"""Export optimizer: prunes empty synthesized structure.

Example:
    >>> from builder_export.optimize import optimize_export
    >>> optimize_export(document, destination).total
    0
"""

from builder_export.optimize.lib import OptimizeStats, optimize_export

__all__ = ["OptimizeStats", "optimize_export"]
