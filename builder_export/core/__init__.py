"""Core utilities shared across builder-export."""

from builder_export.core.log import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
