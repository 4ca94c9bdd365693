from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ThirdPartyNoiseFilter(logging.Filter):
    """Keep taskboard logs at the configured level; other libraries only WARNING+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("taskboard"):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure the root logger with a single stderr handler.

    Safe to call more than once: existing handlers are replaced.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    handler.addFilter(_ThirdPartyNoiseFilter())
    root.addHandler(handler)

    logging.captureWarnings(True)
