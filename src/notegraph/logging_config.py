"""Logging configuration for notegraph."""

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _StderrHandler(logging.StreamHandler):
    """The stderr handler installed by :func:`configure_logging`."""


def configure_logging(verbose: bool = False) -> logging.Handler:
    """Send ``notegraph`` log records to stderr.

    Debug output when *verbose*, warnings and errors otherwise.  Calling
    this again reuses the handler installed the first time.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("notegraph")
    logger.setLevel(level)

    for handler in logger.handlers:
        if isinstance(handler, _StderrHandler):
            handler.setLevel(level)
            return handler

    handler = _StderrHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return handler
