"""Unit tests for infrastructure.logging.setup module."""

import logging

import pytest
import structlog

from infrastructure.logging.setup import (
    SILENT_LEVEL,
    _is_test_environment,
    build_processors,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestBuildProcessors:
    """Test suite for build_processors."""

    def test_production_renders_json(self):
        processors = build_processors(is_production=True)
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self):
        processors = build_processors(is_production=False)
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_tracebacks_rendered_before_output(self):
        processors = build_processors(is_production=True)
        assert structlog.processors.format_exc_info in processors
        assert processors.index(structlog.processors.format_exc_info) == (
            len(processors) - 2
        )


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_detects_pytest(self):
        assert _is_test_environment() is True

    def test_returns_logger(self, mock_settings):
        result = configure_logging(settings=mock_settings)

        assert hasattr(result, "info")
        assert hasattr(result, "warning")

    def test_accepts_overrides(self, mock_settings):
        assert configure_logging(settings=mock_settings, log_level="DEBUG") is not None
        assert configure_logging(settings=mock_settings, is_production=True) is not None

    def test_silent_under_pytest(self, mock_settings):
        configure_logging(settings=mock_settings, log_level="DEBUG")
        assert logging.getLogger().level == SILENT_LEVEL

    def test_without_settings(self):
        assert configure_logging() is not None


@pytest.mark.unit
class TestGetModuleLogger:
    """Test suite for get_module_logger."""

    def test_binds_calling_module(self, mock_settings):
        configure_logging(settings=mock_settings)
        logger = get_module_logger()

        context = structlog.get_context(logger)
        assert context["module_path"] == __name__
        assert context["component"] == __name__.rsplit(".", 1)[-1]

    def test_logger_is_usable(self, mock_settings):
        configure_logging(settings=mock_settings)
        logger = get_module_logger()

        logger.info("translation_not_found", key="greeting", locale="en-US")
        try:
            raise ValueError("boom")
        except ValueError:
            logger.warning("formatter_failed", format="number", exc_info=True)
