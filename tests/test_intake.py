"""Tests for citizen report intake."""

from datetime import timedelta

import pytest

from preparedness_src.exceptions import InvalidReport
from preparedness_src.intake import parse_symptoms, purge_expired_reports, submit_report
from preparedness_src.models import Symptom

from .conftest import add_reports


class TestParseSymptoms:
    """Symptom tag validation."""

    def test_valid_tags(self):
        assert parse_symptoms(["fever", "Cough "]) == [Symptom.FEVER, Symptom.COUGH]

    def test_duplicates_collapse(self):
        assert parse_symptoms(["fever", "fever", "rash"]) == [Symptom.FEVER, Symptom.RASH]

    @pytest.mark.parametrize("values", [[], None, "fever", 5, {"fever": 1}])
    def test_rejects_missing_or_non_list(self, values):
        with pytest.raises(InvalidReport):
            parse_symptoms(values)

    def test_rejects_unknown_tag(self):
        with pytest.raises(InvalidReport, match="headache"):
            parse_symptoms(["fever", "headache"])

    def test_invalid_report_is_value_error(self):
        with pytest.raises(ValueError):
            parse_symptoms([])


class TestSubmitReport:
    """Report submission."""

    def test_location_normalized(self, db):
        report = submit_report(db, location="  Mumbai ", symptoms=["fever"])

        assert report.location == "mumbai"
        assert report.user_name == "Citizen"
        assert db.list_reports()[0].id == report.id

    def test_reporter_kept(self, db):
        report = submit_report(
            db, location="Chennai", symptoms=["diarrhea"], user_name="Asha", user_id="u-17"
        )
        stored = db.list_reports()[0]
        assert stored.user_name == "Asha"
        assert stored.user_id == "u-17"
        assert report.to_dict()["userName"] == "Asha"

    @pytest.mark.parametrize("where", [None, "", "   "])
    def test_location_required(self, db, where):
        with pytest.raises(InvalidReport):
            submit_report(db, location=where, symptoms=["fever"])
        assert db.list_reports() == []


class TestRetention:
    """Seven-day report retention."""

    def test_default_retention(self, db, now):
        add_reports(db, "Mumbai", ["fever"], 2, now - timedelta(days=7, minutes=1))
        add_reports(db, "Mumbai", ["fever"], 3, now - timedelta(days=6))

        assert purge_expired_reports(db, now=now) == 2
        assert len(db.list_reports()) == 3

    def test_zero_retention_is_not_default(self, db, now):
        add_reports(db, "Mumbai", ["fever"], 2, now - timedelta(hours=1))
        assert purge_expired_reports(db, now=now, retention_days=0) == 2

    def test_custom_retention(self, db, now):
        add_reports(db, "Mumbai", ["fever"], 3, now - timedelta(days=2))
        assert purge_expired_reports(db, now=now, retention_days=1) == 3
