"""Logging setup for the export entrypoint.

Console output always goes to stderr so that ``--dry-run`` can print the
G-code program on stdout. An optional log file receives the same records,
either as human lines or as JSON lines (one object per record).

Fields set with :func:`push_context` are attached to every record, which
is how the emitter tags messages with the artboard being drawn:

    Human: 2026-10-18T13:45:12.345Z | INFO     | app=export artboard=A1 | Message
    JSON:  {"t": "2026-10-18T13:45:12.345+00:00", "lvl": "INFO", "artboard": "A1", ...}

Library modules only call ``logging.getLogger(__name__)``.
"""

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('logging_context', default={})

# Handlers installed by the last setup_logging() call
_installed: List[logging.Handler] = []


class ContextFormatter(logging.Formatter):
    """Render a record plus the current context, as text or as JSON."""

    def __init__(self, as_json: bool = False):
        super().__init__()
        self.as_json = as_json

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)

        if self.as_json:
            entry = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'logger': record.name,
                'msg': record.getMessage(),
            }
            entry.update(context)
            if record.exc_info:
                entry['exc'] = self.formatException(record.exc_info)
            return json.dumps(entry)

        parts = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', f"{record.levelname:8s}"]
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()))
        parts.append(record.getMessage())
        line = ' | '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Install the stderr handler and an optional file handler on the root logger.

    Calling it again replaces the handlers from the previous call, so a
    process never logs a record twice.

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Log file path; parent directories are created
    json : bool
        Write the log file as JSON lines; the console stays human-readable
    context : dict, optional
        Initial contextual fields (e.g. ``{"app": "export"}``)

    Returns
    -------
    list[logging.Handler]
        The console handler, followed by the file handler when *log_file*
        is given.
    """
    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    root.setLevel(getattr(logging, log_level.upper()))

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ContextFormatter())
    _installed.append(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(ContextFormatter(as_json=json))
        _installed.append(file_handler)

    for handler in _installed:
        root.addHandler(handler)

    if context:
        push_context(**context)

    return list(_installed)


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(app="export")
    >>> push_context(artboard="Cover")
    >>> logger.info("Emitting")  # -> "... | app=export artboard=Cover | Emitting"
    """
    current = _context_var.get({})
    _context_var.set({**current, **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; clears all context when *keys* is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)
