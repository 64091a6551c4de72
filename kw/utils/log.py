"""
Logging utilities for the kw toolkit.

Provides unified structured logging:
- pretty console output via Rich, on stderr so stdout stays free for CSV
- optional structured (JSON) file output when running `kw export --log-file`
"""

import logging
import json
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "kw"


class JSONFormatter(logging.Formatter):
    """
    Formatter that serializes log records to JSON.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level":     record.levelname,
            "logger":    record.name,
            "message":   record.getMessage(),
        }
        return json.dumps(log_record)


def get_logger(name: str, level: int | str = logging.INFO) -> logging.Logger:
    """
    Return a configured logger for the given name.

    Attaches a RichHandler writing to stderr, once per logger.

    Parameters
    ----------
    name
        Logger name (typically __name__).
    level
        Log level (int or string), defaults to INFO.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = RichHandler(
            console=Console(stderr=True), rich_tracebacks=True
        )
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    return logger


def add_json_log(log_path: str | Path, level: int | str = logging.INFO) -> logging.Handler:
    """
    Append JSON log lines from every `kw.*` logger to `log_path`.

    Returns the handler so callers can detach it again.
    """
    file_handler = logging.FileHandler(Path(log_path), mode="a", encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(JSONFormatter())
    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(file_handler)
    return file_handler


def remove_log_handler(handler: logging.Handler) -> None:
    """
    Detach and close a handler returned by `add_json_log`.
    """
    logging.getLogger(ROOT_LOGGER).removeHandler(handler)
    handler.close()
