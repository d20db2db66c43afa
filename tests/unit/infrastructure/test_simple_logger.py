"""Unit tests for the simple logger."""

import logging

from clerq.infrastructure.simple_logger import SimpleLogger


class TestSimpleLogger:
    """Test cases for SimpleLogger."""

    def test_level_and_single_handler(self):
        SimpleLogger("clerq.test.handlers", level=logging.DEBUG)
        logger = SimpleLogger("clerq.test.handlers", level=logging.DEBUG)

        underlying = logging.getLogger("clerq.test.handlers")
        assert underlying.level == logging.DEBUG
        assert len(underlying.handlers) == 1
        assert logger is not None

    def test_context_rendered(self, caplog):
        logger = SimpleLogger("clerq.test.context")

        with caplog.at_level(logging.INFO, logger="clerq.test.context"):
            logger.info("Service registered", service="svc-a", added=1)

        record = caplog.records[-1]
        assert record.getMessage() == "Service registered [service=svc-a added=1]"
        assert record.context == {"service": "svc-a", "added": 1}

    def test_message_without_context(self, caplog):
        logger = SimpleLogger("clerq.test.plain")

        with caplog.at_level(logging.WARNING, logger="clerq.test.plain"):
            logger.warning("plain")

        assert caplog.records[-1].getMessage() == "plain"

    def test_exception(self, caplog):
        logger = SimpleLogger("clerq.test.exc")

        with caplog.at_level(logging.ERROR, logger="clerq.test.exc"):
            try:
                raise RuntimeError("boom")
            except RuntimeError as e:
                logger.exception("failed", exc_info=e, op="add")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None
