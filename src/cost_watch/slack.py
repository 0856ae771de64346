"""Slack incoming webhook notifications."""

import json
import logging
from typing import Dict, Tuple
from urllib.parse import urlsplit

import requests

from .config import SLACK_COLOR
from .errors import NotificationFailed
from .models import CostSummary, MessageField, NotificationMessage

logger = logging.getLogger(__name__)


def build_message(display_name: str, summary: CostSummary) -> NotificationMessage:
    """Headline with the period and yen total, one field per service."""
    headline = (
        f"{display_name} @{summary.period_start}〜{summary.period_end}\n"
        f"💰 {summary.total_amount_formatted} (${summary.total_amount})"
    )
    fields = [
        MessageField(title=item.label, value=f"{item.amount_formatted} (${item.amount_raw})")
        for item in summary.line_items
    ]
    return NotificationMessage(headline=headline, fields=fields)


def to_payload(message: NotificationMessage) -> Dict:
    return {
        'color': SLACK_COLOR,
        'pretext': message.headline,
        'fields': [{'title': field.title, 'value': field.value} for field in message.fields],
    }


def webhook_endpoint(webhook_url: str) -> Tuple[str, int, str]:
    """Split a webhook URL into host, port and path."""
    parsed = urlsplit(webhook_url)
    if not parsed.hostname:
        raise NotificationFailed("Invalid webhook URL")
    port = 443 if parsed.scheme == 'https' else 80
    return parsed.hostname, port, parsed.path or '/'


def notify(webhook_url: str, message: NotificationMessage) -> None:
    """POST the message once; the response body is not inspected."""
    host, port, path = webhook_endpoint(webhook_url)
    scheme = 'https' if port == 443 else 'http'

    try:
        response = requests.post(
            f"{scheme}://{host}:{port}{path}",
            data=json.dumps(to_payload(message)),
            headers={'Content-Type': 'application/json'},
        )
    except requests.RequestException as e:
        raise NotificationFailed(f"Slack webhook request failed: {e}") from e

    logger.info(f"Posted '{message.headline.splitlines()[0]}' to Slack (HTTP {response.status_code})")
