"""
Shared logging configuration.

Every record carries the service name and the selected store backend.
Exceptions are flattened onto one line so a traceback stays a single
structured log entry.
"""
import os
import sys
import json
import traceback
from typing import Any, Optional
from aws_lambda_powertools import Logger

def format_exception(exc_info) -> Optional[str]:
    """Format exception info into a single line."""
    if exc_info is True:
        exc_info = sys.exc_info()

    if exc_info and isinstance(exc_info, tuple) and len(exc_info) == 3 and exc_info[0] is not None:
        try:
            trace = ''.join(traceback.format_exception(*exc_info))
            return trace.replace('\n', ' | ').strip()
        except Exception as e:
            return f"Error formatting exception: {str(e)}"
    return None

class TrackerLogger(Logger):
    """Service logger with single-line exceptions and soft-error reporting."""

    def exception(self, message, *args, **kwargs):
        exc_info = kwargs.pop('exc_info', True)
        extra = kwargs.pop('extra', {})
        extra['exception'] = format_exception(exc_info)
        kwargs['exc_info'] = False
        kwargs['extra'] = extra
        super().exception(message, *args, **kwargs)

    def recovered(self, message: str, key: str, **fields: Any) -> None:
        """
        Report persisted data that was unusable and replaced by a fallback.

        Args:
            message: What was wrong with the value
            key: Store key the value was read from
            fields: Additional structured context
        """
        extra = {"key": key, "recovered": True, **fields}
        exception = format_exception(sys.exc_info())
        if exception:
            extra['exception'] = exception
        self.warning(message, extra=extra)

logger = TrackerLogger(
    service="period_tracker",
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(store_backend=os.environ.get('TRACKER_STORE', 'memory'))

def log_exception(logger, message, exc_info=None, **kwargs):
    """Helper function to log exceptions in a single line."""
    extra = kwargs.pop('extra', {})
    extra['exception'] = format_exception(exc_info if exc_info else sys.exc_info())
    logger.error(message, extra=extra, **kwargs)
