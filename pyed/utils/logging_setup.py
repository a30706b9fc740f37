from __future__ import annotations

import logging
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "pyed"
_MAX_BYTES = 1_048_576
_BACKUPS = 3


class ConsoleFormatter(logging.Formatter):
    """Readable console line: short timestamp, padded level, logger name."""

    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%H:%M:%S", time.localtime(record.created))
        line = f"{ts} {record.levelname.ljust(7)} [{record.name}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    """
    Configure the package logger once:
      - console handler with ConsoleFormatter
      - optional rotating file handler (1MB x 3)
    Calling it again only updates the level.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    if getattr(logger, "_pyed_configured", False):
        return logger

    ch = logging.StreamHandler()
    ch.setFormatter(ConsoleFormatter())
    logger.addHandler(ch)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                log_file, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
            )
        except OSError:
            logger.warning("Cannot open log file %s; logging to console only", log_file)
        else:
            fh.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            logger.addHandler(fh)

    logger.propagate = False
    logger._pyed_configured = True  # type: ignore[attr-defined]
    return logger
