"""
Lambda handler for cycle predictions.

The request body is the user's journal document; the response carries
today's cycle status, the period history and the marked calendar month.
"""
from typing import Any, Dict
from datetime import date
import json
import os

from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from src.services.cycle import get_cycle_status
from src.services.exceptions import StorageError
from src.services.history import get_detailed_history
from src.services.month_calendar import build_month_calendar
from src.services.partner import build_partner_data, build_partner_link
from src.utils.logging import logger
from src.utils.storage import parse_user_data

def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json"
        },
        "body": json.dumps(body, default=str)
    }

@logger.inject_lambda_context
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle prediction request.
    
    Args:
        event: API Gateway Lambda proxy event. Optional query parameters:
            today (YYYY-MM-DD), year and month of the calendar to render.
        context: Lambda context
        
    Returns:
        API Gateway Lambda proxy response
    """
    try:
        query_params = event.get("queryStringParameters") or {}
        body = event.get("body") or "{}"
        document = json.loads(body) if isinstance(body, str) else body

        user_data = parse_user_data(document)
        today = date.fromisoformat(query_params["today"]) if query_params.get("today") else date.today()
        year = int(query_params.get("year", today.year))
        month = int(query_params.get("month", today.month))

        status = get_cycle_status(user_data, today)
        calendar_days = build_month_calendar(year, month, user_data, today)
    except (StorageError, ValidationError, ValueError) as e:
        logger.warning("Invalid prediction request", extra={"error": str(e)})
        return _response(400, {"error": str(e)})
    except Exception:
        logger.exception("Error calculating prediction")
        return _response(500, {"error": "Internal error"})

    result = {
        "status": status.model_dump(mode="json"),
        "history": get_detailed_history(user_data.logs),
        "calendar": [day.model_dump(mode="json") for day in calendar_days]
    }

    base_url = os.environ.get("PARTNER_BASE_URL")
    if base_url:
        result["partner_link"] = build_partner_link(base_url, build_partner_data(user_data, today))

    logger.info("Prediction calculated", extra={
        "cycle_day": status.cycle_day,
        "phase": status.phase.value
    })
    return _response(200, result)
