"""
Service-level exceptions.

Malformed persisted data and insufficient history are not errors; they
are recovered where they are read. What remains are backend failures.
"""

class TrackerError(Exception):
    """Base exception for period tracker errors."""
    pass

class RecordStoreError(TrackerError):
    """Raised when the record store backend cannot be read or written."""

    def __init__(self, operation: str, key: str, cause: Exception):
        self.operation = operation
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to {operation} {key}: {str(cause)}")
