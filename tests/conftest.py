"""Test configuration and fixtures."""

from datetime import datetime, timedelta

import pytest

from preparedness_src.alerters import BaseNotifier
from preparedness_src.db import PreparednessDatabase
from preparedness_src.exceptions import DataSourceUnavailable, NotifierUnavailable
from preparedness_src.intake import submit_report
from preparedness_src.models import LocationSymptomCounts
from preparedness_src.sources import ReportSource


NOW = datetime(2026, 10, 18, 12, 0, 0)


class StaticReportSource(ReportSource):
    """Returns fixed per-location counts and records the requested window."""

    def __init__(self, locations=None):
        self.locations = locations or []
        self.calls = []

    def get_symptom_counts(self, since, until):
        self.calls.append((since, until))
        return [
            LocationSymptomCounts(
                location=loc.location,
                symptom_counts=dict(loc.symptom_counts),
                total_reports=loc.total_reports,
            )
            for loc in self.locations
        ]


class FailingReportSource(ReportSource):
    """Simulates a report store that cannot be read."""

    def get_symptom_counts(self, since, until):
        raise DataSourceUnavailable("connection refused")


class RecordingNotifier(BaseNotifier):
    """Keeps every broadcast alert in memory."""

    def __init__(self):
        self.sent = []
        self.reports = []

    def send_alert(self, alert):
        self.sent.append(alert)

    def send_report(self, report):
        self.reports.append(report)

    def get_alert_count(self):
        return len(self.sent)


class DownNotifier(BaseNotifier):
    """Broadcast transport that is always unavailable."""

    def __init__(self):
        self.attempts = 0

    def send_alert(self, alert):
        self.attempts += 1
        raise NotifierUnavailable("socket server down")

    def send_report(self, report):
        self.attempts += 1
        raise NotifierUnavailable("socket server down")

    def get_alert_count(self):
        return 0


def location(name, **counts):
    """Build grouped counts for one location; total is the sum of counts."""
    return LocationSymptomCounts(
        location=name,
        symptom_counts=counts,
        total_reports=sum(counts.values()),
    )


def add_reports(db, where, symptoms, count, at):
    """Insert `count` identical reports at the given time."""
    for _ in range(count):
        submit_report(db, location=where, symptoms=symptoms, created_at=at)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def db(tmp_path):
    return PreparednessDatabase(tmp_path / "preparedness.db")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def recent(now):
    """A timestamp comfortably inside the detection window."""
    return now - timedelta(hours=1)
