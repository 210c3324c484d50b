"""Logging setup shared by the inkflow command-line tools.

Library modules only ever do ``logger = logging.getLogger(__name__)``.
Entry points call :func:`setup_logging` once; calling it again swaps the
handlers it installed earlier instead of stacking new ones, and leaves
handlers installed by anyone else (pytest, an embedding app) alone.

Records carry the fields pushed with :func:`push_context` (for example
``app=render input=sketch.yaml``).  Two output shapes::

    2026-10-17T13:45:12.345Z | INFO     | app=render | Wrote 800x600 PNG to out.png
    {"t": "2026-10-17T13:45:12.345+00:00", "lvl": "INFO", "name": "...", "app": "render", "msg": "..."}
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

_context: contextvars.ContextVar = contextvars.ContextVar("inkflow_log_context", default={})

# Handlers added by the last setup_logging() call
_installed: List[logging.Handler] = []

_LEVEL_COLORS = {
    "DEBUG": "\033[2;37m",
    "INFO": "\033[36m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}
_RESET = "\033[0m"


class ContextFormatter(logging.Formatter):
    """Render a record plus the current context fields.

    Parameters
    ----------
    fmt_mode : str
        ``"human"`` for aligned single lines, ``"json"`` for JSON lines.
    use_color : bool
        Color the level name; only honoured when stderr is a TTY.
    tz : str
        ``"UTC"`` or ``"local"`` timestamps.
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = True, tz: str = "UTC"):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

    def _timestamp(self, record: logging.LogRecord) -> datetime:
        if self.tz == "UTC":
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created).astimezone()

    def format(self, record: logging.LogRecord) -> str:
        fields = dict(_context.get())
        when = self._timestamp(record)
        if self.fmt_mode == "json":
            payload = {"t": when.isoformat(), "lvl": record.levelname, "name": record.name,
                       "pid": os.getpid(), **fields, "msg": record.getMessage()}
            if record.exc_info:
                payload["exc"] = self.formatException(record.exc_info)
            return json.dumps(payload)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"
        stamp = when.strftime("%Y-%m-%dT%H:%M:%S.") + f"{when.microsecond // 1000:03d}Z"

        pieces = [stamp, level]
        if fields:
            pieces.append(" ".join(f"{k}={v}" for k, v in fields.items()))
        pieces.append(record.getMessage())
        line = " | ".join(pieces)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
) -> logging.Handler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    if not rotate:
        return logging.FileHandler(log_file, encoding="utf-8")

    mode = rotate.get("mode", "size")
    if mode == "size":
        return logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=rotate.get("max_bytes", 10_000_000),
            backupCount=rotate.get("backup_count", 5),
            encoding="utf-8",
        )
    if mode == "time":
        return logging.handlers.TimedRotatingFileHandler(
            log_file,
            when=rotate.get("when", "D"),
            interval=rotate.get("interval", 1),
            backupCount=rotate.get("backup_count", 7),
            encoding="utf-8",
        )
    raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Configure the root logger for a CLI run.

    Parameters
    ----------
    log_level : str
        Root level name, case-insensitive.
    log_file : str, optional
        Also log to this file (parents are created).
    json : bool
        JSON lines in the log file.  The console stays human-readable.
    color : bool
        Colored level names on a TTY console.
    to_stderr : bool
        Attach a console handler.
    rotate : dict, optional
        ``{"mode": "size", "max_bytes": ..., "backup_count": ...}`` or
        ``{"mode": "time", "when": "D", "interval": 1, "backup_count": ...}``.
    tz : str
        ``"UTC"`` or ``"local"``.
    capture_warnings : bool
        Route ``warnings.warn`` through logging.
    quiet_libs : list[str], optional
        Logger names clamped to WARNING (e.g. ``["PIL"]``).
    context : dict, optional
        Fields pushed with :func:`push_context`.

    Returns
    -------
    dict
        ``{"handlers": [...]}``, the handlers now installed.

    Raises
    ------
    ValueError
        Unknown level name or rotation mode.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    while _installed:
        old = _installed.pop()
        root.removeHandler(old)
        old.close()

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", use_color=color, tz=tz))
        _installed.append(console)
    if log_file:
        handler = _file_handler(log_file, rotate)
        handler.setFormatter(
            ContextFormatter("json" if json else "human", use_color=False, tz=tz)
        )
        _installed.append(handler)

    for handler in _installed:
        root.addHandler(handler)
    root.setLevel(level)

    for name in quiet_libs or ():
        logging.getLogger(name).setLevel(logging.WARNING)
    if capture_warnings:
        logging.captureWarnings(True)
    if context:
        push_context(**context)

    return {"handlers": list(_installed)}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def push_context(**fields: Any) -> None:
    """Attach ``fields`` to every record formatted from now on."""
    _context.set({**_context.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop the named context fields, or all of them."""
    if keys is None:
        _context.set({})
        return
    _context.set({k: v for k, v in _context.get().items() if k not in keys})
