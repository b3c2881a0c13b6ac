"""Tests for correlation-aware logging."""

import logging

from lenient_markup_parser.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test structured fields added to log records."""

    def test_component_defaults_to_module_name(self):
        assert get_logger("lenient_markup_parser.api.parser").component == "parser"

    def test_records_carry_correlation_fields(self, caplog):
        logger = get_logger("lenient_markup_parser.test", "req-7", "unit")
        with caplog.at_level(logging.DEBUG, logger="lenient_markup_parser.test"):
            logger.debug("step", extra={"tag": "p"})
            logger.warning("odd")
            logger.error("failed")

        assert [record.levelno for record in caplog.records] == [
            logging.DEBUG, logging.WARNING, logging.ERROR,
        ]
        first = caplog.records[0]
        assert first.correlation_id == "req-7"
        assert first.component == "unit"
        assert first.tag == "p"

    def test_is_enabled_for(self):
        logger = CorrelationLogger("lenient_markup_parser.quiet")
        logger.logger.setLevel(logging.ERROR)
        try:
            assert not logger.is_enabled_for(logging.DEBUG)
            assert logger.is_enabled_for(logging.ERROR)
        finally:
            logger.logger.setLevel(logging.NOTSET)
