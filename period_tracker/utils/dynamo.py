"""
DynamoDB access for persisted tracker values.

Each stored value is one item: the partition key identifies the owning
user and the sort key the tracker key, with the raw string in a single
attribute.
"""
import os
from typing import Dict, Optional
import boto3

VALUE_ATTRIBUTE = "value"

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create the shared DynamoDB client.

    Example:
        dynamo = get_dynamo()
        value = dynamo.get_value("123", "period_tracker_history")

    Raises:
        EnvironmentError: If TRACKER_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['TRACKER_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "TRACKER_TABLE_NAME environment variable not set. "
                "The DynamoDB store needs the table holding tracker values."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Reads and writes tracker values in one DynamoDB table."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.table = boto3.resource('dynamodb').Table(table_name)

    def get_value(self, user_id: str, key: str) -> Optional[str]:
        """
        Read a stored value.

        Reads are strongly consistent so a value is visible right after
        it was written.

        Returns:
            The stored string, or None if the item does not exist
        """
        response = self.table.get_item(Key=item_key(user_id, key), ConsistentRead=True)
        item = response.get('Item')
        if not item:
            return None
        return item.get(VALUE_ATTRIBUTE)

    def put_value(self, user_id: str, key: str, value: str) -> None:
        """Write a value, replacing the previous item."""
        self.table.put_item(Item={**item_key(user_id, key), VALUE_ATTRIBUTE: value})

    def delete_value(self, user_id: str, key: str) -> None:
        """Delete a value. Deleting a missing item succeeds."""
        self.table.delete_item(Key=item_key(user_id, key))

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

def create_setting_sk(key: str) -> str:
    """Create sort key for a tracker key, e.g. "SETTING#period_tracker_history"."""
    return f"SETTING#{key}"

def item_key(user_id: str, key: str) -> Dict[str, str]:
    return {"PK": create_pk(user_id), "SK": create_setting_sk(key)}
