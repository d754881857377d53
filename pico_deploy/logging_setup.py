"""
Logging setup for pico-deploy.

Configures logging with UTC timestamps and a consistent formatter. Console
output always; a rotating log file when a log directory is configured.

Usage:
    from pico_deploy.logging_setup import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="/var/log/pico")
    logger = get_logger("PICO.Deploy.Assets")
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from datetime import datetime, timezone
from typing import List, Optional, Union


class UTCFormatter(logging.Formatter):
    """Custom formatter that uses UTC timestamps in ISO format."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="seconds")


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[str] = None,
    service_name: str = "pico-deploy",
    handlers: Optional[List[logging.Handler]] = None,
    max_log_bytes: int = 5 * 1024 * 1024,
    log_backup_count: int = 3,
) -> None:
    """
    Configure root logging for a bootstrap run.

    Args:
        level: Logging level, as int or name (default: INFO)
        log_dir: Directory for the rotating log file. If None, console only.
        service_name: Tag included in each line and used as the log file name
        handlers: Additional handlers to add
        max_log_bytes: Max size of the log file before rotation
        log_backup_count: Number of rotated backup files to keep
    """
    level = _coerce_level(level)
    root = logging.getLogger()
    root.setLevel(level)

    formatter = UTCFormatter(f"%(asctime)s [{service_name}] %(levelname)s: %(message)s")

    # Remove existing handlers to avoid double-logging
    for h in list(root.handlers):
        root.removeHandler(h)

    stream_h = logging.StreamHandler()
    stream_h.setFormatter(formatter)
    stream_h.setLevel(level)
    root.addHandler(stream_h)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_h = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, f"{service_name}.log"),
            maxBytes=max_log_bytes,
            backupCount=log_backup_count,
            encoding="utf-8",
        )
        file_h.setFormatter(formatter)
        file_h.setLevel(level)
        root.addHandler(file_h)

    if handlers:
        for h in handlers:
            h.setFormatter(formatter)
            root.addHandler(h)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)


__all__ = [
    "setup_logging",
    "get_logger",
    "UTCFormatter",
]
