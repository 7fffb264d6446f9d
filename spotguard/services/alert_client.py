"""
Alert Client Service

Posts human-readable alerts to a Teams incoming webhook.
Delivery is best effort: errors are logged and swallowed.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .interfaces import AlertSink

logger = logging.getLogger(__name__)

ADAPTIVE_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"
ADAPTIVE_CARD_VERSION = "1.4"


def build_adaptive_card(title: str, body: str, is_error: bool) -> Dict[str, Any]:
    """Adaptive Card wrapped in a webhook message"""
    return {
        "type": "message",
        "attachments": [
            {
                "contentType": "application/vnd.microsoft.card.adaptive",
                "contentUrl": None,
                "content": {
                    "$schema": ADAPTIVE_CARD_SCHEMA,
                    "type": "AdaptiveCard",
                    "version": ADAPTIVE_CARD_VERSION,
                    "body": [
                        {
                            "type": "TextBlock",
                            "text": title,
                            "weight": "Bolder",
                            "size": "Medium",
                            "color": "Attention" if is_error else "Good",
                            "wrap": True,
                        },
                        {
                            "type": "TextBlock",
                            "text": body,
                            "wrap": True,
                        },
                    ],
                },
            }
        ],
    }


def build_message_card(title: str, body: str, is_error: bool) -> Dict[str, Any]:
    """Legacy Office 365 connector MessageCard"""
    return {
        "@type": "MessageCard",
        "@context": "http://schema.org/extensions",
        "themeColor": "FF0000" if is_error else "00FF00",
        "summary": title,
        "sections": [{"activityTitle": title, "text": body}],
    }


CARD_BUILDERS = {
    "adaptive": build_adaptive_card,
    "messagecard": build_message_card,
}


class AlertClient(AlertSink):
    """Webhook client for the alert channel"""

    def __init__(
        self,
        webhook_url: Optional[str],
        card_format: str = "adaptive",
        timeout: int = 10,
        session: Optional[requests.Session] = None
    ):
        self.webhook_url = webhook_url or None
        self.timeout = timeout
        self.build_card = CARD_BUILDERS.get(card_format, build_adaptive_card)
        self.session = session or requests.Session()

        if self.webhook_url:
            logger.info(f"Alert client initialized ({card_format})")
        else:
            logger.debug("TEAMS_WEBHOOK_URL not set, alerts disabled")

    @property
    def enabled(self) -> bool:
        return self.webhook_url is not None

    def notify(self, title: str, body: str, is_error: bool = False) -> bool:
        """
        Send one alert

        Args:
            title: Card title
            body: Card text (markdown)
            is_error: Render with error severity

        Returns:
            True if the webhook accepted the message
        """
        if not self.enabled:
            return False

        card = self.build_card(title, body, is_error)

        try:
            response = self.session.post(self.webhook_url, json=card, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.error(f"Teams webhook timeout: {title}")
            return False
        except requests.exceptions.ConnectionError:
            logger.error(f"Teams webhook connection error: {title}")
            return False
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.error(f"Teams webhook HTTP error {status}: {title}")
            return False
        except Exception as e:
            logger.error(f"Teams error: {e}")
            return False

        logger.info(f"📨 Teams message sent: {title}")
        return True
