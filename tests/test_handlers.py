"""Tests for the Lambda handlers."""
import io
import json
from datetime import date

from src.handlers.prediction import handler as prediction_handler
from src.handlers.partner_view import handler as partner_view_handler
from src.models.partner import PartnerData
from src.models.phase import CyclePhase
from src.services.partner import encode_partner_payload
from src.utils.logging import logger
from src.utils.storage import serialize_user_data

def _prediction_event(body, **query):
    return {
        "body": body if isinstance(body, str) else json.dumps(body),
        "queryStringParameters": query or None
    }

def test_prediction_handler(sample_user_data, lambda_context, monkeypatch):
    """Status, history and calendar are returned for the posted journal."""
    monkeypatch.delenv("PARTNER_BASE_URL", raising=False)
    event = _prediction_event(serialize_user_data(sample_user_data), today="2024-03-05")

    response = prediction_handler(event, lambda_context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["status"]["cycle_day"] == 9
    assert body["status"]["phase"] == "Follicular"
    assert body["status"]["next_period_date"] == "2024-03-25"
    assert len(body["history"]) == 3
    assert body["history"][0]["start_date"] == "2024-02-26"
    assert len(body["calendar"]) == 31
    assert body["calendar"][4]["is_today"]
    assert "partner_link" not in body

def test_prediction_handler_month_and_link(sample_user_data, lambda_context, monkeypatch):
    """A requested month is rendered and a partner link added when configured."""
    monkeypatch.setenv("PARTNER_BASE_URL", "https://luna.example/")
    event = _prediction_event(serialize_user_data(sample_user_data), today="2024-03-05", year="2024", month="4")

    response = prediction_handler(event, lambda_context)

    body = json.loads(response["body"])
    assert response["statusCode"] == 200
    assert len(body["calendar"]) == 30
    assert body["partner_link"].startswith("https://luna.example/#/partner-view?data=")

def test_prediction_handler_empty_journal(lambda_context):
    """An empty journal is answered with defaults."""
    response = prediction_handler(_prediction_event({}, today="2024-03-05"), lambda_context)

    body = json.loads(response["body"])
    assert response["statusCode"] == 200
    assert body["status"]["cycle_day"] == 0
    assert body["status"]["next_period_date"] is None
    assert body["history"] == []

def test_prediction_handler_bad_requests(lambda_context):
    """Invalid bodies and parameters are client errors."""
    bad_json = prediction_handler(_prediction_event("{not json"), lambda_context)
    bad_month = prediction_handler(_prediction_event({}, today="2024-03-05", month="13"), lambda_context)
    bad_today = prediction_handler(_prediction_event({}, today="tomorrow"), lambda_context)
    not_object = prediction_handler(_prediction_event([1, 2]), lambda_context)

    assert bad_json["statusCode"] == 400
    assert bad_month["statusCode"] == 400
    assert bad_today["statusCode"] == 400
    assert not_object["statusCode"] == 400

def test_partner_view_handler(lambda_context):
    """A valid link is decoded and described."""
    data = PartnerData(phase=CyclePhase.OVULATION, days_until_next=14, symptoms=["Acne"], avg_cycle=28)
    event = {"queryStringParameters": {"data": encode_partner_payload(data)}}

    response = partner_view_handler(event, lambda_context)

    body = json.loads(response["body"])
    assert response["statusCode"] == 200
    assert body["partner"] == {"phase": "Ovulation", "daysUntilNext": 14, "symptoms": ["Acne"], "avgCycle": 28}
    assert "Ovulation Phase" in body["report"]

def test_partner_view_handler_invalid(lambda_context):
    """Missing or broken payloads are client errors."""
    assert partner_view_handler({"queryStringParameters": None}, lambda_context)["statusCode"] == 400
    assert partner_view_handler({"queryStringParameters": {"data": "@@@"}}, lambda_context)["statusCode"] == 400

def test_prediction_handler_unexpected_error(sample_user_data, lambda_context, monkeypatch):
    """An unexpected failure answers 500 and logs the traceback on one line."""
    def failing_status(user_data, today=None):
        raise RuntimeError("status unavailable")

    monkeypatch.setattr("src.handlers.prediction.get_cycle_status", failing_status)
    stream = io.StringIO()
    previous = logger.registered_handler.setStream(stream)
    try:
        response = prediction_handler(
            _prediction_event(json.loads(serialize_user_data(sample_user_data))),
            lambda_context
        )
    finally:
        logger.registered_handler.setStream(previous)

    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "Internal error"}

    records = [json.loads(line) for line in stream.getvalue().splitlines() if line]
    errors = [r for r in records if r["message"] == "Error calculating prediction"]
    assert len(errors) == 1
    assert errors[0]["level"] == "ERROR"
    assert "RuntimeError: status unavailable" in errors[0]["exception"]
    assert "\n" not in errors[0]["exception"]

def test_prediction_handler_logs_not_a_list(lambda_context):
    """A journal whose period collection is not a list is treated as empty."""
    response = prediction_handler(_prediction_event({"logs": 5}), lambda_context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["status"]["cycle_day"] == 0
