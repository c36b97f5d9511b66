"""Report sources for cluster detection.

Adapters that supply grouped symptom counts to the detector.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from .db import PreparednessDatabase
from .models import LocationSymptomCounts

logger = logging.getLogger(__name__)


class ReportSource(ABC):
    """Abstract base class for symptom report sources."""

    @abstractmethod
    def get_symptom_counts(
        self,
        since: datetime,
        until: datetime,
    ) -> list[LocationSymptomCounts]:
        """Get per-location symptom counts for reports created in [since, until).

        Raises:
            DataSourceUnavailable: if the underlying store cannot be read
        """
        pass


class DatabaseReportSource(ReportSource):
    """Report source backed by the SQLite report store."""

    def __init__(self, db: PreparednessDatabase | None = None):
        self.db = db or PreparednessDatabase()

    def get_symptom_counts(
        self,
        since: datetime,
        until: datetime,
    ) -> list[LocationSymptomCounts]:
        counts = self.db.count_symptoms_by_location(since, until)
        logger.debug(f"Aggregated symptom counts for {len(counts)} locations")
        return counts
