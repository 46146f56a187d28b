"""Logging micro API for builder-export."""

from builder_export.core.log.lib import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
