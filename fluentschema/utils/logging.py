"""
fluentschema Logging Utilities - Session-Scoped Debug Logging

Overview:
---------
Centralised logging configuration for the builder.  All loggers live under
the ``fluentschema`` namespace and share a short session identifier so that
traces from one process can be correlated.  Nothing is written to disk unless
a log directory is configured.

Log Location:
-------------
- Disabled by default (no file output)
- Enabled by passing ``log_dir`` or setting FLUENTSCHEMA_LOG_DIR
- Each session writes fluentschema_YYYYMMDD_HHMMSS_<session_id>.log

Log Levels:
-----------
- DEBUG: Every declaration, refinement and dropped attribute key
- INFO: Session start
- WARNING / ERROR: unused by the builder itself, available to callers

Usage:
------
    from fluentschema.utils.logging import get_logger, setup_logging

    # Call once at startup to capture builder traces
    setup_logging(level="DEBUG", console_output=True)

    logger = get_logger(__name__)
    logger.debug("Appending property...")
"""

from __future__ import annotations

import logging
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

# ============================================================================
# Constants
# ============================================================================

ROOT_LOGGER_NAME = "fluentschema"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# File output also carries line numbers
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s:%(lineno)d | %(message)s"

_logging_initialised = False
_log_file_path: Optional[Path] = None
_session_id: Optional[str] = None


# ============================================================================
# Session ID Filter / Formatter
# ============================================================================

class SessionIdFilter(logging.Filter):
    """Add session_id to all log records."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = self.session_id  # type: ignore[attr-defined]
        return True


class SessionFormatter(logging.Formatter):
    """Formatter that tolerates records emitted before a session exists."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id or "N/A"  # type: ignore[attr-defined]
        return super().format(record)


# ============================================================================
# Setup Functions
# ============================================================================

def generate_session_id() -> str:
    """Generate a short unique session ID (6 characters)."""
    return uuid.uuid4().hex[:6]


def generate_log_filename(session_id: str) -> str:
    """Generate a timestamped log filename with session ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"fluentschema_{timestamp}_{session_id}.log"


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    console_output: bool = False,
) -> Optional[Path]:
    """
    Initialise fluentschema logging for a new session.

    Parameters
    ----------
    level : str, optional
        DEBUG, INFO, WARNING or ERROR. Defaults to the configured
        ``log_level`` (FLUENTSCHEMA_LOG_LEVEL).
    log_dir : Path, optional
        Directory for the session log file. Defaults to the configured
        ``log_dir``; when neither is set no file is written.
    console_output : bool
        If True, also log to stderr.

    Returns
    -------
    Path or None
        Path of the session log file, if file logging is enabled.
    """
    global _logging_initialised, _log_file_path, _session_id

    from fluentschema.config import get_config

    cfg = get_config()
    _session_id = generate_session_id()

    if level is None:
        level = cfg.log_level
    log_level = getattr(logging, level.upper(), logging.WARNING)

    if log_dir is None:
        log_dir = cfg.log_dir

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    for f in root.filters[:]:
        root.removeFilter(f)

    root.setLevel(log_level)
    root.addFilter(SessionIdFilter(_session_id))

    _log_file_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        _log_file_path = log_dir / generate_log_filename(_session_id)
        file_handler = logging.FileHandler(_log_file_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(SessionFormatter(FILE_LOG_FORMAT, LOG_DATE_FORMAT))
        root.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(SessionFormatter(LOG_FORMAT, LOG_DATE_FORMAT))
        root.addHandler(console_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    # Library traces stay out of the application's root logger
    root.propagate = False

    _logging_initialised = True
    root.info("fluentschema logging session %s started (level %s)", _session_id, level.upper())
    return _log_file_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``fluentschema`` namespace.

    Example
    -------
        logger = get_logger(__name__)
        logger.debug("Refining property...")
    """
    if not _logging_initialised:
        setup_logging()

    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_current_log_file() -> Optional[Path]:
    """Return the path to the current log file, if file logging is enabled."""
    return _log_file_path


def get_session_id() -> Optional[str]:
    """Return the current session ID, if logging is initialised."""
    return _session_id
