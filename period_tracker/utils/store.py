"""
Record store adapters.

The tracker persists through a plain string key-value contract: load, save
and remove. Any backend satisfying it is interchangeable.

Typical usage:
    store = get_store()
    store.save("period_tracker_cycle_length", "30")
    value = store.load("period_tracker_cycle_length")
"""
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional
from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from period_tracker.services.exceptions import RecordStoreError
from period_tracker.utils.dynamo import DynamoDBClient, get_dynamo
from period_tracker.utils.logging import log_exception

logger = Logger()

class RecordStore(ABC):
    """Key-value persistence the tracker reads and writes through."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is not an error."""

class InMemoryRecordStore(RecordStore):
    """Dict-backed store for embedding and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

class DynamoRecordStore(RecordStore):
    """
    Store keeping one DynamoDB item per key under the owner's partition.
    """

    def __init__(self, user_id: str, dynamo: Optional[DynamoDBClient] = None):
        """
        Args:
            user_id: Owner of the stored values
            dynamo: Client to use; defaults to the shared singleton
        """
        self.user_id = user_id
        self.dynamo = dynamo or get_dynamo()

    def load(self, key: str) -> Optional[str]:
        try:
            return self.dynamo.get_value(self.user_id, key)
        except (BotoCoreError, ClientError) as e:
            self._log_failure("load", key, e)
            raise RecordStoreError("load", key, e)

    def save(self, key: str, value: str) -> None:
        try:
            self.dynamo.put_value(self.user_id, key, value)
        except (BotoCoreError, ClientError) as e:
            self._log_failure("save", key, e)
            raise RecordStoreError("save", key, e)

    def remove(self, key: str) -> None:
        try:
            self.dynamo.delete_value(self.user_id, key)
        except (BotoCoreError, ClientError) as e:
            self._log_failure("remove", key, e)
            raise RecordStoreError("remove", key, e)

    def _log_failure(self, operation: str, key: str, error: Exception) -> None:
        log_exception(logger, "Record store operation failed", extra={
            "operation": operation,
            "key": key,
            "user_id": self.user_id,
            "error": str(error),
            "error_type": error.__class__.__name__
        })

def get_store() -> RecordStore:
    """
    Build the store selected by the TRACKER_STORE environment variable.

    "memory" (the default) gives a fresh in-memory store. "dynamodb" needs
    TRACKER_TABLE_NAME and TRACKER_USER_ID.

    Raises:
        EnvironmentError: If the backend is unknown or its settings are missing
    """
    backend = os.environ.get("TRACKER_STORE", "memory").lower()
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "dynamodb":
        try:
            user_id = os.environ["TRACKER_USER_ID"]
        except KeyError:
            raise EnvironmentError(
                "TRACKER_USER_ID environment variable not set. "
                "The DynamoDB store needs the owner of the tracked data."
            )
        return DynamoRecordStore(user_id)
    raise EnvironmentError(f"Unknown TRACKER_STORE backend: {backend}")
