"""
Lambda handler for next period predictions.
"""
from typing import Dict
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.handlers.responses import json_response, request_params
from src.services.cycle import predict_from_store
from src.services.persistence import load_store
from src.utils.dynamo import get_dynamo
from src.utils.formatters import format_prediction_message
from src.utils.logging import logger
from src.utils.validators import validate_date

tracer = Tracer()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle prediction request.

    An optional ``today`` parameter (YYYY-MM-DD) sets the reference date.
    Degraded states (no data, no period data, insufficient data) are normal
    200 responses carrying their status.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        
    Returns:
        API Gateway Lambda proxy response
    """
    try:
        params = request_params(event)
        today = None
        if params.get("today"):
            today = validate_date(params["today"])
            if today is None:
                return json_response(400, {"error": "invalid_date", "message": "today must be YYYY-MM-DD"})

        store = load_store(get_dynamo())
        result = predict_from_store(store, today=today)

        return json_response(200, {
            "prediction": result.model_dump(mode="json"),
            "message": format_prediction_message(result)
        })

    except json.JSONDecodeError:
        return json_response(400, {"error": "Request body is not valid JSON"})
    except Exception as e:
        logger.exception("Error calculating prediction")
        return json_response(500, {"error": str(e)})
