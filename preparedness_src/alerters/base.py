"""Base notifier interface."""

from abc import ABC, abstractmethod

from ..models import AlertType, LiveAlert, SymptomReport

NEW_REPORT_EVENT = "new-report"


def event_name(alert: LiveAlert) -> str:
    """Subscriber event a given alert is broadcast under."""
    if alert.type == AlertType.PROACTIVE:
        return "proactive-alert"
    return "live-alert"


class BaseNotifier(ABC):
    """Abstract base class for notifiers."""

    @abstractmethod
    def send_alert(self, alert: LiveAlert) -> None:
        """
        Broadcast an alert to subscribers.

        Args:
            alert: The alert to broadcast

        Raises:
            NotifierUnavailable: if the transport is down or rejects the alert
        """
        pass

    def send_report(self, report: SymptomReport) -> None:
        """
        Broadcast a newly submitted symptom report.

        Notifiers without a report feed ignore it.

        Raises:
            NotifierUnavailable: if the transport is down or rejects the event
        """
        return None

    @abstractmethod
    def get_alert_count(self) -> int:
        """Return the number of alerts sent."""
        pass
