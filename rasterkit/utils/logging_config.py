"""Unified logging configuration for rasterkit entrypoints.

Library modules only ever call logging.getLogger(__name__); handlers are
installed once by whoever owns the process (scripts/render_scene.py, tests,
or an embedding application) through setup_logging().

Provides:
    - Console handler (stderr) with optional ANSI level colors
    - File handler, plain or rotating by size/time
    - JSON-lines output for the file handler
    - Contextual fields (scene, renderer, app) stamped on every line
    - Python warnings routed into logging, uncaught exceptions logged

Public API:
    setup_logging(**render_cfg.logging.setup_kwargs(), context={"app": "render"})
    get_logger(name)
    push_context(scene="demo", renderer="antialiased")
    pop_context(keys=["renderer"])
    install_excepthook()

Line formats:
    human: 2025-10-28T13:45:12.345Z | INFO     | scene=demo | Rendered scene 'demo': 20 shapes
    json:  {"t": "2025-10-28T13:45:12.345+00:00", "lvl": "INFO", "name": "rasterkit.scene",
            "pid": 4242, "msg": "...", "scene": "demo"}

Context lives in a contextvars.ContextVar, so concurrent tasks keep separate
fields. Calling setup_logging() again replaces the previous handlers.
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

_context: contextvars.ContextVar = contextvars.ContextVar('rasterkit_log_context', default={})

# Handlers installed by setup_logging(); replaced on the next call
_installed: List[logging.Handler] = []

_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET = '\033[0m'


def _level(name: str) -> int:
    value = logging.getLevelName(name.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return value


class ContextFormatter(logging.Formatter):
    """Render records as human-readable lines or JSON objects.

    Parameters
    ----------
    fmt_mode : str
        "human" or "json"
    use_color : bool
        Color the level name; only honored when stderr is a TTY
    tz : str
        "UTC" or "local" timestamps
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = True, tz: str = "UTC"):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"fmt_mode must be 'human' or 'json', got {fmt_mode!r}")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

    def _timestamp(self, record: logging.LogRecord) -> datetime:
        if self.tz == "UTC":
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created).astimezone()

    def format(self, record: logging.LogRecord) -> str:
        fields = _context.get()
        ts = self._timestamp(record)

        if self.fmt_mode == "json":
            payload = {
                't': ts.isoformat(timespec='milliseconds'),
                'lvl': record.levelname,
                'name': record.name,
                'pid': os.getpid(),
                'msg': record.getMessage(),
                **fields,
            }
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = _LEVEL_COLORS.get(record.levelname, '') + level + _RESET

        stamp = ts.strftime('%Y-%m-%dT%H:%M:%S.') + f"{ts.microsecond // 1000:03d}"
        stamp += 'Z' if self.tz == "UTC" else ts.strftime('%z')

        segments = [stamp, level]
        if fields:
            segments.append(' '.join(f"{k}={v}" for k, v in fields.items()))
        segments.append(record.getMessage())

        text = ' | '.join(segments)
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
    tz: str
) -> logging.Handler:
    """File handler for log_file, rotating when rotate is given.

    rotate keys: mode ("size" | "time"), then max_bytes/backup_count for
    size rotation or when/interval/backup_count for time rotation.
    """
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    if not rotate:
        handler: logging.Handler = logging.FileHandler(log_file, encoding='utf-8')
    elif rotate.get('mode', 'size') == 'size':
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=int(rotate.get('max_bytes', 10_000_000)),
            backupCount=int(rotate.get('backup_count', 3)),
            encoding='utf-8',
        )
    elif rotate['mode'] == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when=rotate.get('when', 'D'),
            interval=int(rotate.get('interval', 1)),
            backupCount=int(rotate.get('backup_count', 7)),
            encoding='utf-8',
        )
    else:
        raise ValueError(f"Unknown rotation mode: {rotate['mode']!r}. Use 'size' or 'time'.")

    handler.setFormatter(ContextFormatter("json" if json_format else "human", use_color=False, tz=tz))
    return handler


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
    """Install rasterkit's handlers on the root logger.

    Parameters
    ----------
    log_level : str
        Root level name, case-insensitive ("debug" shows per-primitive timings)
    log_file : str, optional
        Also write to this file (parent directories are created)
    json : bool
        JSON lines in the file instead of human lines, default False
    color : bool
        Colored level names on the console, default True
    to_stderr : bool
        Attach a console handler on stderr, default True
    rotate : dict, optional
        {"mode": "size", "max_bytes": ..., "backup_count": ...} or
        {"mode": "time", "when": "D", "interval": 1, "backup_count": ...}
    tz : str
        "UTC" (default) or "local" timestamps
    capture_warnings : bool
        Route warnings.warn() into logging, default True
    quiet_libs : list[str], optional
        Loggers to cap at WARNING (Pillow's "PIL" is chatty at DEBUG)
    context : dict, optional
        Fields pushed onto the logging context right away

    Returns
    -------
    dict
        {"handlers": [...]} as installed, console first

    Raises
    ------
    ValueError
        On an unknown level or rotation mode (nothing is installed then)

    Examples
    --------
    >>> setup_logging(log_level="DEBUG", log_file="outputs/logs/render.log",
    ...               rotate={"mode": "size", "max_bytes": 1_000_000, "backup_count": 3},
    ...               context={"app": "render"})
    """
    level = _level(log_level)

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", use_color=color, tz=tz))
        handlers.append(console)
    if log_file:
        handlers.append(_create_file_handler(log_file, rotate, json, tz))

    # Only our own handlers are replaced; pytest's caplog handler survives
    root = logging.getLogger()
    for old in _installed:
        root.removeHandler(old)
        old.close()
    _installed[:] = handlers

    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)

    for lib in quiet_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)
    if capture_warnings:
        route_warnings()
    if context:
        push_context(**context)

    return {'handlers': handlers}


def get_logger(name: str) -> logging.Logger:
    """logging.getLogger(name), for symmetry with setup_logging()."""
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the root level without touching handlers.

    Examples
    --------
    >>> set_level("DEBUG")  # per-primitive timings become visible
    """
    logging.getLogger().setLevel(_level(level))


def push_context(**fields) -> None:
    """Stamp fields on every subsequent record of this context.

    Examples
    --------
    >>> push_context(scene="demo", renderer="basic")
    >>> logger.info("Started")  # → "... | scene=demo renderer=basic | Started"
    """
    _context.set({**_context.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop the given context fields, or all of them when keys is None."""
    if keys is None:
        _context.set({})
        return
    _context.set({k: v for k, v in _context.get().items() if k not in keys})


def install_excepthook() -> None:
    """Send uncaught exceptions (except Ctrl-C) to the log before exiting."""
    previous = sys.excepthook

    def _hook(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            previous(exc_type, exc_value, exc_tb)
            return
        logging.getLogger("rasterkit").critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_tb)
        )

    sys.excepthook = _hook


def route_warnings() -> None:
    """Send warnings.warn() output to the 'py.warnings' logger."""
    logging.captureWarnings(True)
    logging.getLogger('py.warnings').setLevel(logging.WARNING)


def shutdown() -> None:
    """Flush and close every handler; call last in main()."""
    logging.shutdown()
