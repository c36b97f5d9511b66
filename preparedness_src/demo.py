"""Demo symptom report data for development and testing.

Generates report sets that exercise each outbreak rule.
"""

import logging
import random
from datetime import datetime, timedelta

from .db import PreparednessDatabase
from .intake import submit_report

logger = logging.getLogger(__name__)


# Location -> list of (symptom tags, number of reports)
DEMO_SCENARIOS = {
    "mumbai": [
        (["fever"], 12),
    ],
    "chennai": [
        (["vomiting"], 5),
        (["diarrhea"], 4),
    ],
    "coimbatore": [
        (["fever", "cough"], 14),
        (["cough", "breathing_issue"], 2),
    ],
    "madurai": [
        (["rash"], 3),
        (["fever"], 2),
    ],
}


def create_demo_reports(
    db: PreparednessDatabase,
    now: datetime | None = None,
    window_hours: int = 12,
    seed: int | None = None,
) -> int:
    """Insert demo reports spread across the detection window.

    Returns:
        Number of reports created
    """
    now = now or datetime.now()
    rng = random.Random(seed)
    window_minutes = window_hours * 60

    created = 0
    for location, batches in DEMO_SCENARIOS.items():
        for symptoms, count in batches:
            for _ in range(count):
                offset = timedelta(minutes=rng.randint(1, window_minutes - 1))
                submit_report(
                    db,
                    location=location,
                    symptoms=symptoms,
                    user_name="Demo Citizen",
                    created_at=now - offset,
                )
                created += 1

    logger.info(f"Created {created} demo reports across {len(DEMO_SCENARIOS)} locations")
    return created
