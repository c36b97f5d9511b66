"""Citizen report intake and retention."""

import logging
import uuid
from datetime import datetime, timedelta

from .config import config
from .db import PreparednessDatabase
from .exceptions import InvalidReport
from .models import Symptom, SymptomReport, normalize_location

logger = logging.getLogger(__name__)


def parse_symptoms(values: list[str] | tuple[str, ...]) -> list[Symptom]:
    """Validate symptom tags.

    Duplicates collapse; order of first appearance is kept.

    Raises:
        InvalidReport: if values is not a list, is empty or contains an unknown tag
    """
    if not isinstance(values, (list, tuple)):
        raise InvalidReport("symptoms must be a list")

    symptoms: list[Symptom] = []
    for value in values:
        try:
            symptom = Symptom(str(value).strip().lower())
        except ValueError:
            raise InvalidReport(f"Unknown symptom: {value}") from None
        if symptom not in symptoms:
            symptoms.append(symptom)

    if not symptoms:
        raise InvalidReport("At least one symptom is required")
    return symptoms


def submit_report(
    db: PreparednessDatabase,
    location: str,
    symptoms: list[str] | tuple[str, ...],
    user_name: str | None = None,
    user_id: str | None = None,
    created_at: datetime | None = None,
) -> SymptomReport:
    """Validate and store a citizen symptom report.

    Args:
        db: Report store
        location: Free-text location; stored trimmed and lower-cased
        symptoms: Symptom tags
        user_name: Reporter display name (default "Citizen")
        user_id: Reporter id, if authenticated
        created_at: Report time (default now)

    Returns:
        The stored report

    Raises:
        InvalidReport: on a missing location or bad symptom list
    """
    if not isinstance(location, str) or not location.strip():
        raise InvalidReport("location is required")

    report = SymptomReport(
        id=str(uuid.uuid4()),
        location=normalize_location(location),
        symptoms=parse_symptoms(symptoms),
        created_at=created_at or datetime.now(),
        user_name=(user_name or "").strip() or "Citizen",
        user_id=user_id,
    )
    db.save_report(report)

    logger.info(
        f"Symptom report from {report.location}: "
        f"{', '.join(s.value for s in report.symptoms)}"
    )
    return report


def purge_expired_reports(
    db: PreparednessDatabase,
    now: datetime | None = None,
    retention_days: int | None = None,
) -> int:
    """Delete reports older than the retention window.

    Returns:
        Number of reports removed
    """
    days = retention_days if retention_days is not None else config.REPORT_RETENTION_DAYS
    cutoff = (now or datetime.now()) - timedelta(days=days)

    removed = db.purge_expired_reports(cutoff)
    if removed:
        logger.info(f"Purged {removed} reports older than {days} days")
    return removed
