"""
Outbound notification delivery for the support intake
"""
import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a notification could not be delivered"""


class NotificationSink:
    """Destination for structured support messages."""

    def send(self, payload: Dict[str, Any]) -> None:
        raise NotImplementedError


class WebhookNotificationSink(NotificationSink):
    """
    Posts payloads to a chat webhook (Discord-style embeds).
    The URL stays in server configuration and is never sent to clients.
    """
    def __init__(self, url: Optional[str], timeout: float = 10, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, payload: Dict[str, Any]) -> None:
        if not self.url:
            raise NotificationError("SUPPORT_WEBHOOK_URL is not configured")

        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error sending support request: {str(e)}")
            raise NotificationError("Failed to send message") from e

        logger.info(f"Support notification delivered with status {response.status_code}")
