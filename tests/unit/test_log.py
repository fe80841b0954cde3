"""Tests for structlog configuration."""

import logging

import structlog

from swaprouter.log import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self) -> None:
        structlog.reset_defaults()

    def test_info_level_by_default(self) -> None:
        configure_logging()
        logger = structlog.get_logger()
        assert not logger.bind().is_enabled_for(logging.DEBUG)
        assert logger.bind().is_enabled_for(logging.INFO)

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert structlog.get_logger().bind().is_enabled_for(logging.DEBUG)
