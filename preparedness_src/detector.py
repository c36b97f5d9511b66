"""Outbreak cluster detection engine.

Aggregates recent symptom reports by location and evaluates each
outbreak rule independently against every location's counts.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable

from .config import config
from .models import ClusterResult, DetectionResult, LocationSymptomCounts
from .rules import OutbreakRule, DEFAULT_RULES
from .sources import DatabaseReportSource, ReportSource

logger = logging.getLogger(__name__)


class ClusterDetector:
    """Detects potential outbreak clusters from recent symptom reports."""

    def __init__(
        self,
        source: ReportSource | None = None,
        rules: Iterable[OutbreakRule] | None = None,
        window_hours: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.source = source or DatabaseReportSource()
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES
        self.window_hours = (
            window_hours if window_hours is not None else config.CLUSTER_WINDOW_HOURS
        )
        self.clock = clock or datetime.now

    def detect_clusters(self, now: datetime | None = None) -> DetectionResult:
        """Run cluster detection over the trailing window.

        Args:
            now: End of the window (default: current time)

        Returns:
            DetectionResult with one cluster per (location, matching rule)

        Raises:
            DataSourceUnavailable: if the report source cannot be read
        """
        now = now or self.clock()
        since = now - timedelta(hours=self.window_hours)

        locations = self.source.get_symptom_counts(since, now)
        logger.info(
            f"Analysing {len(locations)} locations from last {self.window_hours} hours"
        )

        clusters = []
        for location in locations:
            clusters.extend(self.evaluate_location(location))

        if clusters:
            logger.info(f"Detected {len(clusters)} outbreak clusters")

        return DetectionResult(
            analysed_at=now,
            window_hours=self.window_hours,
            clusters=clusters,
        )

    def evaluate_location(self, location: LocationSymptomCounts) -> list[ClusterResult]:
        """Evaluate every rule against one location's counts."""
        clusters = []
        for rule in self.rules:
            if not rule.matches(location.symptom_counts):
                continue

            clusters.append(
                ClusterResult(
                    area=location.location,
                    predicted_disease_type=rule.label,
                    detection_rule=rule.id,
                    symptom_counts=dict(location.symptom_counts),
                    total_reports=location.total_reports,
                    confidence=rule.score(location.symptom_counts),
                    recommended_authority_action=list(rule.actions),
                )
            )
            logger.debug(f"Rule {rule.id} matched {location.location}")

        return clusters


def detect_clusters(source: ReportSource | None = None) -> dict:
    """Convenience function to run cluster detection.

    Args:
        source: Optional report source

    Returns:
        Dict with analysedAt, windowHours, clustersDetected and clusters
    """
    detector = ClusterDetector(source)
    return detector.detect_clusters().to_dict()
