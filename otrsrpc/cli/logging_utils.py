"""Loguru file sinks for CLI runs."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

LOG_DIR_ENV = "OTRS_API_LOG_DIR"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}"

_SINK_IDS: dict[str, int] = {}


def get_log_dir() -> Path:
    """``$OTRS_API_LOG_DIR`` when set, else ``~/.otrsrpc/logs``."""
    override = os.environ.get(LOG_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".otrsrpc" / "logs"


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Add one rotating sink per command that only receives otrsrpc records.

    Trace dumps are redacted before they are logged, so the file never holds
    the SOAP password.
    """
    log_path = get_log_dir() / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level,
        filter="otrsrpc",
        format=_FILE_FORMAT,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path
