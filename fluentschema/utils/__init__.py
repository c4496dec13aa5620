"""
fluentschema Utilities Package - Cross-Cutting Helpers

Logging setup shared by the builder and by applications embedding it.
"""

from .logging import (
    setup_logging,
    get_logger,
    get_current_log_file,
    get_session_id,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_current_log_file",
    "get_session_id",
]
