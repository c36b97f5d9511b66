"""Proactive alert engine.

Turns weather conditions and high-confidence outbreak clusters into
preventive alerts. Each emitted alert is persisted to the alert sink and
broadcast through the notifier; the two steps succeed or fail
independently.
"""

import logging

from .alerters import BaseNotifier
from .config import config, Config
from .db import PreparednessDatabase
from .exceptions import DataSourceUnavailable, NotifierUnavailable
from .models import (
    AlertDelivery,
    AlertSeverity,
    AlertType,
    ClusterResult,
    LiveAlert,
    PROACTIVE_SOURCE,
    ProactiveContext,
    WeatherContext,
)
from .rules import confidence_percent

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    """Render a reading exactly as supplied (60.0 -> "60", 85.1234567 -> "85.1234567")."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class ProactiveAlertEngine:
    """Evaluates proactive alert rules and dispatches the resulting alerts."""

    def __init__(
        self,
        sink: PreparednessDatabase | None = None,
        notifier: BaseNotifier | None = None,
        cfg: Config | None = None,
    ):
        self.sink = sink or PreparednessDatabase()
        self.notifier = notifier
        self.cfg = cfg or config

    # ------------------------------------------------------------------
    # Rule evaluation (no side effects)
    # ------------------------------------------------------------------

    def evaluate(self, context: ProactiveContext) -> list[LiveAlert]:
        """Evaluate all rules against the context.

        Returns:
            Alerts in rule order: vector-borne, post-flood, then one
            escalation per qualifying cluster in cluster order
        """
        if context.is_empty():
            logger.debug("No weather or cluster context supplied, nothing to evaluate")
            return []

        alerts = []
        if context.weather is not None:
            alerts.extend(self._evaluate_weather(context.weather))
        for cluster in context.clusters or []:
            alert = self._evaluate_cluster(cluster)
            if alert:
                alerts.append(alert)
        return alerts

    def _evaluate_weather(self, weather: WeatherContext) -> list[LiveAlert]:
        alerts = []
        area = weather.area or "Unknown"
        rainfall, humidity, temp = weather.rainfall, weather.humidity, weather.temperature

        wet = rainfall > self.cfg.DENGUE_RAINFALL_MM or humidity > self.cfg.DENGUE_HUMIDITY_PCT
        if wet and temp > self.cfg.DENGUE_MIN_TEMPERATURE_C:
            severity = (
                AlertSeverity.HIGH
                if humidity > self.cfg.DENGUE_HIGH_HUMIDITY_PCT
                else AlertSeverity.MEDIUM
            )
            alerts.append(self._make_alert(
                message=(
                    f"Dengue risk predicted for {area}: high humidity ({_fmt(humidity)}%) "
                    f"+ rainfall ({_fmt(rainfall)}mm) + warm temperature ({_fmt(temp)}°C). "
                    f"Take preventive measures."
                ),
                severity=severity,
                area=area,
            ))

        if rainfall > self.cfg.FLOOD_RAINFALL_MM:
            alerts.append(self._make_alert(
                message=(
                    f"Waterborne disease risk for {area}: heavy rainfall ({_fmt(rainfall)}mm). "
                    f"Boil water before consumption. Avoid wading in flood waters."
                ),
                severity=AlertSeverity.HIGH,
                area=area,
            ))

        return alerts

    def _evaluate_cluster(self, cluster: ClusterResult) -> LiveAlert | None:
        if cluster.confidence < self.cfg.ESCALATION_MIN_CONFIDENCE:
            return None
        if cluster.total_reports < self.cfg.ESCALATION_MIN_REPORTS:
            return None

        return self._make_alert(
            message=(
                f"Outbreak escalation: {cluster.predicted_disease_type} in {cluster.area}, "
                f"{cluster.total_reports} reports with {confidence_percent(cluster.confidence)}% confidence. "
                f"Deploy rapid response team."
            ),
            severity=AlertSeverity.CRITICAL,
            area=cluster.area,
        )

    def _make_alert(self, message: str, severity: AlertSeverity, area: str) -> LiveAlert:
        return LiveAlert(
            type=AlertType.PROACTIVE,
            message=message,
            severity=severity,
            area=area,
            source=PROACTIVE_SOURCE,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def should_emit(self, alert: LiveAlert) -> bool:
        """Hook for suppressing repeats of recently sent alerts.

        Every alert is emitted; identical alerts re-fire on every call
        while their conditions hold.
        """
        return True

    def dispatch(self, alert: LiveAlert) -> AlertDelivery:
        """Persist and broadcast one alert."""
        delivery = AlertDelivery(alert=alert)

        try:
            delivery.alert = self.sink.create_alert(alert)
            delivery.persisted = True
        except DataSourceUnavailable as e:
            logger.error(f"Failed to persist proactive alert for {alert.area}: {e}")
            delivery.errors.append(str(e))

        if self.notifier is None:
            return delivery

        try:
            self.notifier.send_alert(delivery.alert)
            delivery.broadcast = True
        except NotifierUnavailable as e:
            logger.warning(f"Broadcast unavailable for alert in {alert.area}: {e}")
            delivery.errors.append(str(e))
        except Exception as e:
            logger.error(f"Unexpected notifier error for alert in {alert.area}: {e}")
            delivery.errors.append(str(e))

        return delivery

    def run(self, context: ProactiveContext) -> list[AlertDelivery]:
        """Evaluate the context and dispatch every emitted alert once."""
        deliveries = []
        for alert in self.evaluate(context):
            if not self.should_emit(alert):
                continue
            deliveries.append(self.dispatch(alert))

        if deliveries:
            logger.info(
                f"Proactive engine emitted {len(deliveries)} alerts "
                f"({sum(d.persisted for d in deliveries)} persisted, "
                f"{sum(d.broadcast for d in deliveries)} broadcast)"
            )
        return deliveries


def check_proactive_alerts(
    notifier: BaseNotifier | None,
    context: ProactiveContext,
    sink: PreparednessDatabase | None = None,
) -> list[LiveAlert]:
    """Convenience function to evaluate and dispatch proactive alerts.

    Args:
        notifier: Broadcast transport (None skips broadcasting)
        context: Weather and/or cluster signals
        sink: Alert store (default database if None)

    Returns:
        Emitted alerts in rule order
    """
    engine = ProactiveAlertEngine(sink=sink, notifier=notifier)
    return [d.alert for d in engine.run(context)]
