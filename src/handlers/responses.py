"""
Shared helpers for API Gateway proxy requests and responses.
"""
import json
import os
from typing import Any, Dict

from src.models.result import ErrorKind, OperationResult

ERROR_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
}

def json_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Build an API Gateway proxy response with a JSON body."""
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": "*"
        },
        "body": json.dumps(body, default=str)
    }

def error_response(result: OperationResult) -> Dict[str, Any]:
    """Build the response for a failed store operation."""
    return json_response(ERROR_STATUS_CODES.get(result.error, 400), {
        "error": result.error.value,
        "message": result.message
    })

def request_params(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge query string parameters with a JSON object body.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON
    """
    params = dict(event.get("queryStringParameters") or {})
    body = event.get("body")
    if isinstance(body, str) and body:
        body = json.loads(body)
    if isinstance(body, dict):
        params.update(body)
    return params

def strict_validation_enabled() -> bool:
    """Check the STRICT_VALIDATION flag for handler-created stores."""
    return os.environ.get("STRICT_VALIDATION", "false").lower() == "true"
