"""Logger setup driven by the TFCTL_LOG environment variable."""

import logging
import os
import sys

LOG_ENV = "TFCTL_LOG"
LOG_FORMAT = "%(asctime)s %(levelname).1s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class StderrHandler(logging.StreamHandler):
    """Stream handler that writes to whatever ``sys.stderr`` is at emit time.

    ``setStream`` pins it to a specific stream instead.
    """

    def __init__(self):
        super().__init__()
        self._stream = None

    @property
    def stream(self):
        return sys.stderr if self._stream is None else self._stream

    @stream.setter
    def stream(self, value):
        self._stream = value


def init_logger(level: str | None = None) -> logging.Logger:
    """Configure the ``tfctl`` logger.

    The level comes from ``level`` or ``$TFCTL_LOG`` and defaults to ERROR so
    that only malformed queries are reported. Records go to stderr; stdout is
    reserved for rendered output.
    """
    name = (level or os.environ.get(LOG_ENV) or "ERROR").upper()
    logger = logging.getLogger("tfctl")

    if not any(isinstance(h, StderrHandler) for h in logger.handlers):
        handler = StderrHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(handler)

    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        resolved = logging.ERROR
    logger.setLevel(resolved)
    return logger
