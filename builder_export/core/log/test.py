"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from builder_export.core.log.lib import LOGGER_NAMESPACE, get_logger, setup_logging


@pytest.fixture
def package_logger():
    """Restore the package logger after each test."""
    root = logging.getLogger(LOGGER_NAMESPACE)
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger_is_namespaced(self):
        """Area loggers are children of the package logger."""
        logger = get_logger("segment")
        assert logger.name == "builder_export.segment"
        assert logger.parent is logging.getLogger(LOGGER_NAMESPACE)

    @pytest.mark.unit
    def test_get_logger_default_name(self):
        """No name gives the package logger."""
        assert get_logger().name == "builder_export"

    @pytest.mark.unit
    def test_setup_logging_writes_to_stream(self, package_logger):
        """Records from area loggers reach the configured stream."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        get_logger("mapper").debug("mapped %d modules", 3)
        assert "builder_export.mapper - DEBUG - mapped 3 modules" in stream.getvalue()

    @pytest.mark.unit
    def test_setup_logging_replaces_handler(self, package_logger):
        """Repeated setup keeps a single package handler."""
        first = setup_logging(stream=StringIO())
        second = setup_logging(stream=StringIO())
        assert second in package_logger.handlers
        assert first not in package_logger.handlers

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "level,expected",
        [("debug", logging.DEBUG), (" Warning ", logging.WARNING), ("loud", logging.INFO)],
    )
    def test_setup_logging_level_names(self, package_logger, level, expected):
        """Level names are accepted; unknown names fall back to INFO."""
        setup_logging(level=level, stream=StringIO())
        assert package_logger.level == expected
