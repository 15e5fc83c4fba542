"""
Lambda handler for reading and editing symptom entries.

Supported actions (query string or JSON body):
    fetch   - list all entries, newest first
    save    - insert or replace the entry for a date
    delete  - remove the entry for a date
"""
from datetime import date
from typing import Any, Dict
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.handlers.responses import (
    error_response,
    json_response,
    request_params,
    strict_validation_enabled
)
from src.services.persistence import delete_entry, load_store, save_entry
from src.utils.dynamo import get_dynamo
from src.utils.logging import logger

tracer = Tracer()

def fetch_entries() -> Dict[str, Any]:
    """Return every stored entry, newest first, with the snapshot fingerprint."""
    store = load_store(get_dynamo())
    entries = sorted(store.list(), key=lambda e: e.date, reverse=True)
    return json_response(200, {
        "entries": [e.to_item() for e in entries],
        "count": len(entries),
        "fingerprint": store.fingerprint()
    })

def save(params: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and persist one entry; future dates are refused."""
    entry = params.get("entry")
    if not isinstance(entry, dict):
        entry = {k: v for k, v in params.items() if k != "action"}

    dynamo = get_dynamo()
    store = load_store(dynamo)
    # Stored rows are read leniently; strictness applies to the incoming entry
    store.strict = strict_validation_enabled()
    result = save_entry(dynamo, store, entry, today=date.today())
    if not result.ok:
        return error_response(result)

    stored = store.get(entry.get("date"))
    return json_response(200, {
        "message": "Entry updated" if result.replaced else "Entry added",
        "entry": stored.to_item()
    })

def delete(params: Dict[str, Any]) -> Dict[str, Any]:
    """Delete the entry for the requested date."""
    entry_date = params.get("date")
    if not entry_date:
        return json_response(400, {"error": "Missing required parameter: date"})

    dynamo = get_dynamo()
    store = load_store(dynamo)
    result = delete_entry(dynamo, store, entry_date)
    if not result.ok:
        return error_response(result)
    return json_response(200, {"message": "Entry deleted", "date": entry_date})

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle an entries request.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        
    Returns:
        API Gateway Lambda proxy response
    """
    try:
        params = request_params(event)
    except json.JSONDecodeError:
        return json_response(400, {"error": "Request body is not valid JSON"})

    action = params.get("action")
    try:
        if action == "fetch":
            return fetch_entries()
        if action == "save":
            return save(params)
        if action == "delete":
            return delete(params)

        logger.warning("Unknown action requested", extra={"action": action})
        return json_response(400, {"error": "Unknown action parameter"})

    except Exception:
        logger.exception("Error handling entries request", extra={"action": action})
        return json_response(500, {"error": "Internal error"})
