"""Console notifier for local runs and demos."""

from .base import NEW_REPORT_EVENT, BaseNotifier, event_name
from ..models import LiveAlert, SymptomReport


class ConsoleNotifier(BaseNotifier):
    """Prints alerts to stdout."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose
        self.alerts_sent: list[LiveAlert] = []

    def send_alert(self, alert: LiveAlert) -> None:
        self.alerts_sent.append(alert)

        print(f"\n[{event_name(alert)}] {alert.severity.value} - {alert.area}")
        if self.verbose:
            print(f"  {alert.message}")
            print(f"  source: {alert.source}")

    def send_report(self, report: SymptomReport) -> None:
        if self.verbose:
            symptoms = ", ".join(s.value for s in report.symptoms)
            print(f"\n[{NEW_REPORT_EVENT}] {report.location}: {symptoms}")

    def get_alert_count(self) -> int:
        return len(self.alerts_sent)
