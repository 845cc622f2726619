"""
Lambda handler for the partner portal view.
"""
from typing import Any, Dict
import json

from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.exceptions import InvalidPartnerPayloadError
from src.services.partner import decode_partner_payload, generate_partner_report
from src.utils.logging import logger

@logger.inject_lambda_context
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Decode the snapshot carried by a partner link and describe it.
    
    Args:
        event: API Gateway Lambda proxy event with a ``data`` query parameter
        context: Lambda context
        
    Returns:
        API Gateway Lambda proxy response with the snapshot and report text
    """
    query_params = event.get("queryStringParameters") or {}
    try:
        partner = decode_partner_payload(query_params.get("data", ""))
    except InvalidPartnerPayloadError as e:
        return _response(400, {"error": str(e)})

    return _response(200, {
        "partner": partner.model_dump(mode="json", by_alias=True),
        "report": generate_partner_report(partner)
    })

def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json"
        },
        "body": json.dumps(body, ensure_ascii=False)
    }
