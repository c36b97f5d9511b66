"""Outbreak monitor service.

Runs cluster detection on the report store and feeds the result, plus
any weather context, to the proactive alert engine.
"""

import logging
import time
from datetime import datetime, timedelta

from .alerters import BaseNotifier, get_default_notifier
from .config import config
from .db import PreparednessDatabase
from .detector import ClusterDetector
from .enrichment import OutbreakBriefingClient, enrich_detection
from .exceptions import DataSourceUnavailable
from .models import ProactiveContext, WeatherContext
from .proactive import ProactiveAlertEngine
from .sources import DatabaseReportSource

logger = logging.getLogger(__name__)


class OutbreakMonitor:
    """Monitor service for outbreak detection and proactive alerting."""

    def __init__(
        self,
        db: PreparednessDatabase | None = None,
        notifier: BaseNotifier | None = None,
        detector: ClusterDetector | None = None,
        briefing_client: OutbreakBriefingClient | None = None,
    ):
        self.db = db or PreparednessDatabase()
        self.notifier = notifier or get_default_notifier()
        self.detector = detector or ClusterDetector(DatabaseReportSource(self.db))
        self.engine = ProactiveAlertEngine(sink=self.db, notifier=self.notifier)
        self.briefing_client = briefing_client

    def run_once(
        self,
        weather: WeatherContext | None = None,
        enrich: bool = False,
        now: datetime | None = None,
    ) -> dict:
        """Run a single detection + escalation cycle.

        Args:
            weather: Optional weather context for the proactive rules
            enrich: Request an LLM briefing for detected clusters
            now: End of the detection window (default: current time)

        Returns:
            Dict with detection output and alert delivery counts

        Raises:
            DataSourceUnavailable: if the report store cannot be read
        """
        result = {
            "detection": None,
            "alerts_emitted": 0,
            "alerts_persisted": 0,
            "alerts_broadcast": 0,
            "started_at": datetime.now().isoformat(),
            "completed_at": None,
        }

        try:
            detection = self.detector.detect_clusters(now=now)
        except DataSourceUnavailable as e:
            logger.error(f"Cluster detection failed: {e}")
            raise

        deliveries = self.engine.run(
            ProactiveContext(weather=weather, clusters=detection.clusters)
        )
        result["alerts_emitted"] = len(deliveries)
        result["alerts_persisted"] = sum(d.persisted for d in deliveries)
        result["alerts_broadcast"] = sum(d.broadcast for d in deliveries)

        # Enrichment never gates alert dispatch
        if enrich:
            result["detection"] = enrich_detection(detection, self.briefing_client)
        else:
            result["detection"] = detection.to_dict()

        result["completed_at"] = datetime.now().isoformat()
        return result

    def get_stats(self) -> dict:
        """Get report and alert statistics for the current window."""
        since = datetime.now() - timedelta(hours=self.detector.window_hours)
        return self.db.get_summary_stats(since)

    def run_continuous(
        self,
        interval_seconds: int | None = None,
        weather: WeatherContext | None = None,
    ) -> None:
        """Run continuous monitoring loop.

        Args:
            interval_seconds: Seconds between polls (default from config)
            weather: Fixed weather context applied to every cycle
        """
        interval = interval_seconds or config.POLL_INTERVAL

        logger.info(f"Starting outbreak monitor (polling every {interval} seconds)")

        while True:
            try:
                result = self.run_once(weather=weather)
                logger.info(
                    f"Polling complete: {result['detection']['clustersDetected']} clusters, "
                    f"{result['alerts_emitted']} alerts"
                )
            except Exception as e:
                logger.error(f"Error in monitor loop: {e}")

            time.sleep(interval)
