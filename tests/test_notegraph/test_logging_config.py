"""Unit tests for notegraph.logging_config."""

import io
import logging

import pytest

from notegraph.logging_config import configure_logging


@pytest.fixture(autouse=True)
def fresh_logger():
    """Detach handlers installed by earlier tests, restore them afterwards."""
    logger = logging.getLogger("notegraph")
    saved = logger.handlers[:]
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved


class TestConfigureLogging:
    def test_single_handler(self):
        first = configure_logging()
        second = configure_logging(verbose=True)
        logger = logging.getLogger("notegraph")
        assert first is second
        assert logger.handlers.count(first) == 1

    def test_levels(self):
        configure_logging(verbose=True)
        assert logging.getLogger("notegraph").level == logging.DEBUG
        handler = configure_logging(verbose=False)
        assert logging.getLogger("notegraph").level == logging.WARNING
        assert handler.level == logging.WARNING

    def test_stream_can_be_replaced(self):
        handler = configure_logging()
        stream = io.StringIO()
        previous = handler.setStream(stream)
        try:
            logging.getLogger("notegraph.test").warning("careful")
        finally:
            handler.setStream(previous)
        assert "careful" in stream.getvalue()

    def test_writes_to_stderr(self, capsys):
        configure_logging()
        logging.getLogger("notegraph.test").warning("careful")
        assert "careful" in capsys.readouterr().err
