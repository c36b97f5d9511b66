"""Outbreak rule definitions.

A rule sums the counts of one or more symptoms at a location and fires
when the sum reaches its threshold. Confidence grows linearly with the
excess over the threshold and is capped.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from .config import config, Config
from .models import Symptom


@dataclass(frozen=True)
class OutbreakRule:
    """A single outbreak detection rule."""
    id: str
    label: str
    symptoms: tuple[Symptom, ...]
    threshold: int
    divisor: float
    actions: tuple[str, ...] = ()
    base_confidence: float = 0.5
    max_confidence: float = 0.95

    def signal(self, counts: Mapping[str, int]) -> int:
        """Summed count of this rule's symptoms. Missing symptoms count as zero."""
        return sum(counts.get(s.value, 0) for s in self.symptoms)

    def matches(self, counts: Mapping[str, int]) -> bool:
        return self.signal(counts) >= self.threshold

    def score(self, counts: Mapping[str, int]) -> float:
        """Confidence in [0, max_confidence], rounded to 2 decimals."""
        raw = self.base_confidence + (self.signal(counts) - self.threshold) / self.divisor
        capped = max(0.0, min(self.max_confidence, raw))
        return round_confidence(capped)


def round_confidence(value: float) -> float:
    """Round half up to 2 decimals on the exact float value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def confidence_percent(confidence: float) -> int:
    """Confidence as a whole percentage, rounded half up."""
    return int(Decimal(confidence * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


VIRAL_ACTIONS = (
    "Deploy medical camp with fever medication",
    "Distribute ORS and paracetamol kits",
    "Issue public health advisory for the area",
    "Begin door-to-door health screening",
)

WATERBORNE_ACTIONS = (
    "Send water tankers with purified water",
    "Test local water supply for contamination",
    "Distribute water purification tablets",
    "Set up oral rehydration stations",
)

RESPIRATORY_ACTIONS = (
    "Distribute N95 masks in affected area",
    "Deploy mobile X-ray / testing unit",
    "Advise indoor ventilation improvements",
    "Start mosquito control (if dengue co-suspected)",
)


def build_default_rules(cfg: Config | None = None) -> tuple[OutbreakRule, ...]:
    """Build the standard viral / waterborne / respiratory rule set.

    Args:
        cfg: Configuration to read thresholds from (default: global config)

    Returns:
        Ordered, immutable tuple of rules
    """
    cfg = cfg or config
    return (
        OutbreakRule(
            id="viral",
            label="Viral Infection Outbreak",
            symptoms=(Symptom.FEVER,),
            threshold=cfg.VIRAL_FEVER_THRESHOLD,
            divisor=cfg.VIRAL_CONFIDENCE_DIVISOR,
            actions=VIRAL_ACTIONS,
            base_confidence=cfg.BASE_CONFIDENCE,
            max_confidence=cfg.MAX_CONFIDENCE,
        ),
        OutbreakRule(
            id="waterborne",
            label="Waterborne Disease Outbreak",
            symptoms=(Symptom.VOMITING, Symptom.DIARRHEA),
            threshold=cfg.WATERBORNE_GI_THRESHOLD,
            divisor=cfg.WATERBORNE_CONFIDENCE_DIVISOR,
            actions=WATERBORNE_ACTIONS,
            base_confidence=cfg.BASE_CONFIDENCE,
            max_confidence=cfg.MAX_CONFIDENCE,
        ),
        OutbreakRule(
            id="respiratory",
            label="Respiratory Illness Spread",
            symptoms=(Symptom.COUGH,),
            threshold=cfg.RESPIRATORY_COUGH_THRESHOLD,
            divisor=cfg.RESPIRATORY_CONFIDENCE_DIVISOR,
            actions=RESPIRATORY_ACTIONS,
            base_confidence=cfg.BASE_CONFIDENCE,
            max_confidence=cfg.MAX_CONFIDENCE,
        ),
    )


DEFAULT_RULES = build_default_rules()
