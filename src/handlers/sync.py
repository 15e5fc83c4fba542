"""
Scheduled Lambda handler mirroring the remote entry feed into the table.

The feed is treated as the source of truth: entries that differ are
rewritten and entries missing from the feed are deleted. Concurrent edits
are not reconciled; whichever write lands last wins. Feed rows are always
clamped, never rejected, so a row outside the value domain is never mistaken
for a missing one.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.entry_store import snapshot_changed
from src.services.exceptions import EntryFeedError
from src.services.persistence import delete_entry, load_store, save_entry
from src.utils.clients import get_entry_feed
from src.utils.dynamo import get_dynamo
from src.utils.logging import logger

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Pull the feed and apply its differences to the table.

    Returns:
        Summary with ``changed``, ``written`` and ``deleted`` counts
    """
    try:
        feed_store = get_entry_feed().fetch_store()
    except EntryFeedError as e:
        logger.warning("Entry feed unavailable", extra={"error": str(e)})
        return {"changed": False, "error": str(e)}

    dynamo = get_dynamo()
    table_store = load_store(dynamo)
    if not snapshot_changed(table_store.fingerprint(), feed_store.list()):
        logger.info("Entry feed unchanged")
        return {"changed": False, "written": 0, "deleted": 0}

    written = 0
    for entry in feed_store.list():
        if table_store.get(entry.date) != entry:
            save_entry(dynamo, table_store, entry)
            written += 1

    deleted = 0
    for entry in table_store.list():
        if entry.date not in feed_store:
            delete_entry(dynamo, table_store, entry.date)
            deleted += 1

    logger.info("Synchronized entries from feed", extra={
        "written": written,
        "deleted": deleted
    })
    return {"changed": True, "written": written, "deleted": deleted}
