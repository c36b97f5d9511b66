"""Database operations for symptom reports and live alerts."""

import logging
import sqlite3
import uuid
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import config
from .exceptions import DataSourceUnavailable
from .models import (
    AlertSeverity,
    AlertType,
    LiveAlert,
    LocationSymptomCounts,
    Symptom,
    SymptomReport,
)

logger = logging.getLogger(__name__)


def _ts(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


class PreparednessDatabase:
    """SQLite store for symptom reports (read side) and live alerts (append side)."""

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = Path(db_path or config.DB_PATH).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path) as f:
            schema = f.read()

        with self._get_connection() as conn:
            conn.executescript(schema)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    # --- Report Operations ---

    def save_report(self, report: SymptomReport) -> None:
        """Insert a symptom report. Reports are never updated."""
        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO symptom_reports (id, location, user_name, user_id, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        report.id,
                        report.location,
                        report.user_name,
                        report.user_id,
                        _ts(report.created_at),
                    ),
                )
                conn.executemany(
                    "INSERT INTO report_symptoms (report_id, symptom) VALUES (?, ?)",
                    [(report.id, s.value) for s in report.symptoms],
                )
                conn.commit()
        except sqlite3.Error as e:
            raise DataSourceUnavailable(f"Failed to save report {report.id}: {e}") from e

    def list_reports(self, limit: int = 50) -> list[SymptomReport]:
        """Get the most recent reports, newest first."""
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    """
                    SELECT * FROM symptom_reports
                    ORDER BY created_at DESC
                    LIMIT ?
                    """,
                    (limit,),
                ).fetchall()
                return [self._row_to_report(row, conn) for row in rows]
        except sqlite3.Error as e:
            raise DataSourceUnavailable(f"Failed to list reports: {e}") from e

    def count_symptoms_by_location(
        self,
        since: datetime,
        until: datetime,
    ) -> list[LocationSymptomCounts]:
        """Count symptoms per location for reports created in [since, until).

        Returns:
            One entry per location, busiest location first
        """
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    """
                    SELECT r.location AS location, s.symptom AS symptom, COUNT(*) AS count
                    FROM symptom_reports r
                    JOIN report_symptoms s ON s.report_id = r.id
                    WHERE r.created_at >= ? AND r.created_at < ?
                    GROUP BY r.location, s.symptom
                    ORDER BY r.location, s.symptom
                    """,
                    (_ts(since), _ts(until)),
                ).fetchall()
        except sqlite3.Error as e:
            raise DataSourceUnavailable(f"Symptom aggregation failed: {e}") from e

        by_location: dict[str, LocationSymptomCounts] = {}
        for row in rows:
            entry = by_location.setdefault(
                row["location"], LocationSymptomCounts(location=row["location"])
            )
            entry.symptom_counts[row["symptom"]] = row["count"]
            entry.total_reports += row["count"]

        return sorted(
            by_location.values(),
            key=lambda e: (-e.total_reports, e.location),
        )

    def purge_expired_reports(self, before: datetime) -> int:
        """Delete reports created before the cutoff.

        Returns:
            Number of reports removed
        """
        try:
            with self._get_connection() as conn:
                cursor = conn.execute(
                    "DELETE FROM symptom_reports WHERE created_at < ?",
                    (_ts(before),),
                )
                conn.commit()
                return cursor.rowcount
        except sqlite3.Error as e:
            raise DataSourceUnavailable(f"Failed to purge reports: {e}") from e

    def _row_to_report(self, row: sqlite3.Row, conn: sqlite3.Connection) -> SymptomReport:
        """Convert database row to SymptomReport."""
        symptom_rows = conn.execute(
            "SELECT symptom FROM report_symptoms WHERE report_id = ? ORDER BY symptom",
            (row["id"],),
        ).fetchall()

        return SymptomReport(
            id=row["id"],
            location=row["location"],
            symptoms=[Symptom(sr["symptom"]) for sr in symptom_rows],
            created_at=datetime.fromisoformat(row["created_at"]),
            user_name=row["user_name"],
            user_id=row["user_id"],
        )

    # --- Alert Operations ---

    def create_alert(self, alert: LiveAlert) -> LiveAlert:
        """Append an alert.

        Returns:
            The stored alert with its id and creation time
        """
        stored = replace(
            alert,
            id=alert.id or str(uuid.uuid4()),
            created_at=alert.created_at or datetime.now(),
        )

        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO live_alerts (
                        id, type, message, severity, area, source, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        stored.id,
                        stored.type.value,
                        stored.message,
                        stored.severity.value,
                        stored.area,
                        stored.source,
                        _ts(stored.created_at),
                    ),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise DataSourceUnavailable(f"Failed to persist alert: {e}") from e

        return stored

    def get_recent_alerts(
        self,
        limit: int = 50,
        alert_type: AlertType | None = None,
    ) -> list[LiveAlert]:
        """Get recent alerts, newest first."""
        query = "SELECT * FROM live_alerts"
        params: list[Any] = []

        if alert_type:
            query += " WHERE type = ?"
            params.append(alert_type.value)

        query += " ORDER BY created_at DESC LIMIT ?"
        params.append(limit)

        try:
            with self._get_connection() as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise DataSourceUnavailable(f"Failed to read alerts: {e}") from e

        return [self._row_to_alert(row) for row in rows]

    def _row_to_alert(self, row: sqlite3.Row) -> LiveAlert:
        """Convert database row to LiveAlert."""
        return LiveAlert(
            id=row["id"],
            type=AlertType(row["type"]),
            message=row["message"],
            severity=AlertSeverity(row["severity"]),
            area=row["area"],
            source=row["source"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    # --- Statistics ---

    def get_summary_stats(self, since: datetime) -> dict[str, Any]:
        """Get summary statistics for the dashboard."""
        try:
            with self._get_connection() as conn:
                total_reports = conn.execute(
                    "SELECT COUNT(*) FROM symptom_reports"
                ).fetchone()[0]

                window_reports = conn.execute(
                    "SELECT COUNT(*) FROM symptom_reports WHERE created_at >= ?",
                    (_ts(since),),
                ).fetchone()[0]

                by_location_rows = conn.execute(
                    """
                    SELECT location, COUNT(*) as count
                    FROM symptom_reports
                    WHERE created_at >= ?
                    GROUP BY location
                    ORDER BY count DESC
                    """,
                    (_ts(since),),
                ).fetchall()
                by_location = {row["location"]: row["count"] for row in by_location_rows}

                by_severity_rows = conn.execute(
                    "SELECT severity, COUNT(*) as count FROM live_alerts GROUP BY severity"
                ).fetchall()
                by_severity = {row["severity"]: row["count"] for row in by_severity_rows}

                by_type_rows = conn.execute(
                    "SELECT type, COUNT(*) as count FROM live_alerts GROUP BY type"
                ).fetchall()
                by_type = {row["type"]: row["count"] for row in by_type_rows}
        except sqlite3.Error as e:
            raise DataSourceUnavailable(f"Failed to compute stats: {e}") from e

        return {
            "total_reports": total_reports,
            "window_reports": window_reports,
            "reports_by_location": by_location,
            "alerts_by_severity": by_severity,
            "alerts_by_type": by_type,
            "total_alerts": sum(by_type.values()),
        }
