"""
Bridge between the entry store and the DynamoDB table.

The table is the durable copy; the store is the in-memory snapshot the
engine computes on. Writes go to the store first so validation and clamping
happen before anything is persisted.
"""
from datetime import date
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key

from src.models.entry import SymptomEntry
from src.models.result import OperationResult
from src.services.entry_store import EntryStore, EntryInput
from src.utils.dynamo import DynamoDBClient, create_entry_sk, create_pk
from src.utils.validators import format_calendar_date, parse_calendar_date

logger = Logger()


def entry_to_item(entry: SymptomEntry) -> Dict[str, Any]:
    """Convert an entry into a DynamoDB item."""
    item = entry.to_item()
    return {
        "PK": create_pk(),
        "SK": create_entry_sk(item["date"]),
        **item
    }


def load_store(dynamo: DynamoDBClient, strict: bool = False) -> EntryStore:
    """
    Materialize an entry store from all persisted entries.

    Args:
        dynamo: DynamoDB client
        strict: Strict mode for the returned store

    Returns:
        EntryStore holding every valid persisted entry
    """
    items = dynamo.query_items(
        partition_key="PK",
        partition_value=create_pk(),
        sort_key_condition=Key("SK").begins_with("ENTRY#")
    )
    store = EntryStore.from_items(items, strict=strict)
    logger.info("Loaded entries from table", extra={
        "item_count": len(items),
        "entry_count": len(store)
    })
    return store


def save_entry(
    dynamo: DynamoDBClient,
    store: EntryStore,
    entry: EntryInput,
    today: Optional[date] = None
) -> OperationResult:
    """
    Upsert an entry into the store and persist it when accepted.

    Returns:
        The store's OperationResult; nothing is written on failure
    """
    result = store.upsert(entry, today=today)
    if not result.ok:
        return result

    entry_date = entry.date if isinstance(entry, SymptomEntry) else entry.get("date")
    stored = store.get(entry_date)
    dynamo.put_item(entry_to_item(stored))
    logger.info("Persisted entry", extra={
        "date": format_calendar_date(stored.date),
        "replaced": result.replaced
    })
    return result


def delete_entry(dynamo: DynamoDBClient, store: EntryStore, entry_date: Any) -> OperationResult:
    """
    Delete an entry from the store and the table.

    Returns:
        The store's OperationResult; the table is untouched on NOT_FOUND
    """
    result = store.delete(entry_date)
    if not result.ok:
        return result

    date_str = format_calendar_date(parse_calendar_date(entry_date))
    dynamo.delete_item({"PK": create_pk(), "SK": create_entry_sk(date_str)})
    logger.info("Deleted entry", extra={"date": date_str})
    return result
