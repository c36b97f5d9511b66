"""Webhook notifier.

Posts each alert and new report as JSON to a subscriber endpoint (dashboard relay,
chat channel, socket gateway).
"""

import logging

import requests

from .base import NEW_REPORT_EVENT, BaseNotifier, event_name
from .console import ConsoleNotifier
from ..config import config
from ..exceptions import NotifierUnavailable
from ..models import LiveAlert, SymptomReport

logger = logging.getLogger(__name__)


class WebhookNotifier(BaseNotifier):
    """Broadcasts alerts to an HTTP webhook."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.url = url or config.ALERT_WEBHOOK_URL
        self.timeout = timeout or config.WEBHOOK_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self._sent = 0

    def send_alert(self, alert: LiveAlert) -> None:
        self._post({
            "event": event_name(alert),
            "alert": alert.to_dict(),
        })
        self._sent += 1
        logger.debug(f"Broadcast {event_name(alert)} for {alert.area}")

    def send_report(self, report: SymptomReport) -> None:
        self._post({
            "event": NEW_REPORT_EVENT,
            "report": report.to_dict(),
        })
        logger.debug(f"Broadcast {NEW_REPORT_EVENT} for {report.location}")

    def _post(self, payload: dict) -> None:
        if not self.url:
            raise NotifierUnavailable("No webhook URL configured")

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NotifierUnavailable(f"Webhook broadcast failed: {e}") from e

    def get_alert_count(self) -> int:
        return self._sent


def get_default_notifier() -> BaseNotifier:
    """Webhook notifier when configured, console otherwise."""
    if config.is_webhook_configured():
        return WebhookNotifier()
    return ConsoleNotifier()
