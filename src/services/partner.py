"""
Service module for the partner portal.

A partner receives a read-only snapshot of the cycle encoded into a link.
This module builds that snapshot, encodes and decodes the link payload and
renders the short status report shown on the portal.

Typical usage:
    data = build_partner_data(user_data)
    link = build_partner_link("https://example.app/", data)
    ...
    data = decode_partner_payload(payload)
    print(generate_partner_report(data))
"""
import base64
import binascii
import json
from typing import Optional
from datetime import date
from urllib.parse import quote

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from src.models.partner import PartnerData
from src.models.user_data import UserData
from src.services.constants import PHASE_DESCRIPTIONS, PHASE_ICONS
from src.services.cycle import get_cycle_status
from src.services.exceptions import InvalidPartnerPayloadError
from src.services.utils import to_day

logger = Logger()

PARTNER_VIEW_ROUTE = "#/partner-view"

def build_partner_data(user_data: UserData, today: Optional[date] = None) -> PartnerData:
    """
    Build the snapshot shared with a partner.
    
    Args:
        user_data: The user's journal
        today: Date to treat as today, defaults to the current date
        
    Returns:
        PartnerData with today's phase, days until the next period (the
        average cycle length when nothing is logged) and today's physical
        symptoms
    """
    today = to_day(today) or date.today()
    status = get_cycle_status(user_data, today)
    symptoms = next(
        (s.physical_symptoms for s in user_data.symptoms if s.date == today),
        []
    )
    days_until_next = status.days_until_next
    if days_until_next is None:
        days_until_next = status.average_cycle_length

    return PartnerData(
        phase=status.phase,
        days_until_next=days_until_next,
        symptoms=list(symptoms),
        avg_cycle=status.average_cycle_length
    )

def encode_partner_payload(data: PartnerData) -> str:
    """
    Encode a partner snapshot for use in a link.
    
    Returns:
        URL-safe base64 of the camelCase JSON document
    """
    document = data.model_dump_json(by_alias=True)
    return base64.urlsafe_b64encode(document.encode("utf-8")).decode("ascii")

def decode_partner_payload(payload: str) -> PartnerData:
    """
    Decode a partner snapshot from a link payload.
    
    Both URL-safe and standard base64 alphabets are accepted; missing
    padding is restored.
    
    Args:
        payload: The ``data`` parameter of a partner link
        
    Returns:
        The decoded PartnerData
        
    Raises:
        InvalidPartnerPayloadError: If the payload is not valid base64,
            JSON or a valid snapshot
    """
    if not payload:
        raise InvalidPartnerPayloadError("Empty partner payload")

    normalized = payload.strip().replace(" ", "+").replace("+", "-").replace("/", "_")
    normalized += "=" * (-len(normalized) % 4)
    try:
        document = json.loads(base64.urlsafe_b64decode(normalized).decode("utf-8"))
        return PartnerData.model_validate(document)
    except (binascii.Error, UnicodeDecodeError, ValueError, ValidationError) as e:
        logger.warning("Failed to decode partner data", extra={"error": str(e)})
        raise InvalidPartnerPayloadError("Partner payload could not be decoded") from e

def build_partner_link(base_url: str, data: PartnerData) -> str:
    """
    Build the shareable partner portal link.
    
    Example:
        >>> build_partner_link("https://example.app/", data)
        'https://example.app/#/partner-view?data=eyJwaGFzZSI6...'
    """
    payload = quote(encode_partner_payload(data), safe="")
    return f"{base_url.split('#')[0]}{PARTNER_VIEW_ROUTE}?data={payload}"

def generate_partner_report(data: PartnerData) -> str:
    """
    Generate the status report shown on the partner portal.
    
    Args:
        data: Decoded partner snapshot
        
    Returns:
        Formatted report string
    """
    if data.days_until_next == 0:
        countdown = "Period expected today"
    elif data.days_until_next < 0:
        countdown = f"Period {abs(data.days_until_next)} days late"
    else:
        countdown = f"{data.days_until_next} days until next period"

    report = [
        f"{PHASE_ICONS[data.phase]} {data.phase.value} Phase",
        PHASE_DESCRIPTIONS[data.phase],
        "",
        f"📅 {countdown}",
        f"🔁 Average cycle: {data.avg_cycle} days",
    ]

    if data.symptoms:
        report.extend([
            "",
            "🩺 Today's symptoms:",
            *[f"• {symptom}" for symptom in data.symptoms]
        ])

    return "\n".join(report)
