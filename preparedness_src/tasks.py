"""Celery tasks for outbreak detection.

Detection failures are retried here; the detector itself never retries.
"""

import logging

from celery import shared_task

from .db import PreparednessDatabase
from .exceptions import DataSourceUnavailable
from .intake import purge_expired_reports
from .models import WeatherContext
from .monitor import OutbreakMonitor

logger = logging.getLogger(__name__)


def _get_monitor() -> OutbreakMonitor:
    return OutbreakMonitor()


@shared_task(
    bind=True,
    max_retries=3,
    autoretry_for=(DataSourceUnavailable,),
    retry_backoff=True,
    default_retry_delay=60,
)
def detect_clusters_task(self):
    """Run cluster detection and return the serialized result."""
    monitor = _get_monitor()
    result = monitor.detector.detect_clusters()
    logger.info("Cluster detection: %d clusters", result.clusters_detected)
    return result.to_dict()


@shared_task(
    bind=True,
    max_retries=3,
    autoretry_for=(DataSourceUnavailable,),
    retry_backoff=True,
    default_retry_delay=60,
)
def run_outbreak_monitor(self, weather=None, enrich=False):
    """Detect clusters and escalate them (plus optional weather) to alerts.

    Args:
        weather: Optional dict with rainfall, humidity, temperature and area
        enrich: Request an LLM briefing for detected clusters
    """
    monitor = _get_monitor()
    weather_context = WeatherContext.from_dict(weather) if weather else None
    result = monitor.run_once(weather=weather_context, enrich=enrich)
    logger.info(
        "Outbreak monitor: %d clusters, %d alerts emitted",
        result['detection']['clustersDetected'], result['alerts_emitted'],
    )
    return result


@shared_task(
    bind=True,
    max_retries=3,
    autoretry_for=(DataSourceUnavailable,),
    retry_backoff=True,
)
def purge_expired_reports_task(self):
    """Delete reports past the retention window."""
    removed = purge_expired_reports(PreparednessDatabase())
    logger.info("Purged %d expired reports", removed)
    return removed
