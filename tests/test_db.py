"""Tests for the SQLite report and alert store."""

import sqlite3
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from preparedness_src.exceptions import DataSourceUnavailable
from preparedness_src.models import AlertSeverity, AlertType, LiveAlert, Symptom

from .conftest import add_reports


def make_alert(**overrides):
    fields = {
        "type": AlertType.HEALTH,
        "message": "Boil water advisory",
        "severity": AlertSeverity.HIGH,
        "area": "chennai",
    }
    fields.update(overrides)
    return LiveAlert(**fields)


class TestReports:
    """Report persistence and aggregation."""

    def test_list_reports_newest_first(self, db, now):
        add_reports(db, "Mumbai", ["fever"], 1, now - timedelta(hours=2))
        add_reports(db, "Chennai", ["vomiting", "diarrhea"], 1, now - timedelta(hours=1))

        reports = db.list_reports()

        assert [r.location for r in reports] == ["chennai", "mumbai"]
        assert set(reports[0].symptoms) == {Symptom.VOMITING, Symptom.DIARRHEA}
        assert reports[0].created_at == now - timedelta(hours=1)

    def test_list_reports_limit(self, db, recent):
        add_reports(db, "Mumbai", ["fever"], 5, recent)
        assert len(db.list_reports(limit=3)) == 3

    def test_count_symptoms_by_location(self, db, recent, now):
        add_reports(db, "Chennai", ["vomiting"], 5, recent)
        add_reports(db, "Chennai", ["diarrhea"], 4, recent)
        add_reports(db, "Madurai", ["rash"], 3, recent)

        counts = db.count_symptoms_by_location(now - timedelta(hours=12), now)

        assert [c.location for c in counts] == ["chennai", "madurai"]
        assert counts[0].symptom_counts == {"vomiting": 5, "diarrhea": 4}
        assert counts[0].total_reports == 9
        assert counts[1].symptom_counts == {"rash": 3}

    def test_count_symptoms_empty_window(self, db, now):
        add_reports(db, "Mumbai", ["fever"], 3, now - timedelta(days=2))
        assert db.count_symptoms_by_location(now - timedelta(hours=12), now) == []

    def test_purge_removes_old_reports_and_symptoms(self, db, now):
        add_reports(db, "Mumbai", ["fever", "cough"], 3, now - timedelta(days=8))
        add_reports(db, "Mumbai", ["fever"], 2, now - timedelta(days=1))

        removed = db.purge_expired_reports(now - timedelta(days=7))

        assert removed == 3
        assert len(db.list_reports()) == 2
        with sqlite3.connect(db.db_path) as conn:
            orphans = conn.execute(
                "SELECT COUNT(*) FROM report_symptoms "
                "WHERE report_id NOT IN (SELECT id FROM symptom_reports)"
            ).fetchone()[0]
        assert orphans == 0

    def test_unreadable_store_raises(self, db, now):
        with sqlite3.connect(db.db_path) as conn:
            conn.execute("DROP TABLE report_symptoms")

        with pytest.raises(DataSourceUnavailable):
            db.count_symptoms_by_location(now - timedelta(hours=12), now)


class TestAlerts:
    """Live alert persistence."""

    def test_create_alert_assigns_id_and_time(self, db):
        alert = make_alert()
        stored = db.create_alert(alert)

        assert stored.id
        assert stored.created_at is not None
        assert alert.id is None
        assert stored.to_record() == alert.to_record()

    def test_recent_alerts_round_trip(self, db, now):
        db.create_alert(make_alert(created_at=now - timedelta(minutes=5)))
        db.create_alert(make_alert(
            type=AlertType.PROACTIVE,
            severity=AlertSeverity.CRITICAL,
            area="mumbai",
            source="proactive-engine",
            created_at=now,
        ))

        alerts = db.get_recent_alerts()

        assert [a.area for a in alerts] == ["mumbai", "chennai"]
        assert alerts[0].severity == AlertSeverity.CRITICAL
        assert alerts[0].source == "proactive-engine"
        assert alerts[1].source == "system"

    def test_concurrent_appends_are_all_kept(self, db):
        alerts = [make_alert(message=f"Advisory {i}") for i in range(40)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            stored = list(pool.map(db.create_alert, alerts))

        recent = db.get_recent_alerts(limit=100)
        assert len(recent) == 40
        assert {a.id for a in recent} == {a.id for a in stored}
        assert {a.message for a in recent} == {f"Advisory {i}" for i in range(40)}

    def test_filter_by_type(self, db):
        db.create_alert(make_alert())
        db.create_alert(make_alert(type=AlertType.PROACTIVE))

        alerts = db.get_recent_alerts(alert_type=AlertType.PROACTIVE)

        assert [a.type for a in alerts] == [AlertType.PROACTIVE]


class TestSummaryStats:
    """Dashboard statistics."""

    def test_summary_stats(self, db, now, recent):
        add_reports(db, "Mumbai", ["fever"], 3, recent)
        add_reports(db, "Chennai", ["vomiting"], 1, recent)
        add_reports(db, "Mumbai", ["fever"], 2, now - timedelta(days=2))
        db.create_alert(make_alert())
        db.create_alert(make_alert(type=AlertType.PROACTIVE, severity=AlertSeverity.MEDIUM))

        stats = db.get_summary_stats(now - timedelta(hours=12))

        assert stats["total_reports"] == 6
        assert stats["window_reports"] == 4
        assert stats["reports_by_location"] == {"mumbai": 3, "chennai": 1}
        assert stats["alerts_by_severity"] == {"HIGH": 1, "MEDIUM": 1}
        assert stats["alerts_by_type"] == {"health": 1, "proactive": 1}
        assert stats["total_alerts"] == 2
