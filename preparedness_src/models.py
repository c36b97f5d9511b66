"""Data models for outbreak detection and proactive alerting."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional


class Symptom(Enum):
    """Symptom tags a citizen can report."""
    FEVER = "fever"
    COUGH = "cough"
    VOMITING = "vomiting"
    DIARRHEA = "diarrhea"
    RASH = "rash"
    BREATHING_ISSUE = "breathing_issue"


class AlertSeverity(Enum):
    """Severity of a live alert."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class AlertType(Enum):
    """Kind of live alert."""
    DISASTER = "disaster"
    HEALTH = "health"
    SOS = "sos"
    GEOFENCE = "geofence"
    PROACTIVE = "proactive"


PROACTIVE_SOURCE = "proactive-engine"


def normalize_location(location: str) -> str:
    """Locations are case-insensitive keys."""
    return location.strip().lower()


@dataclass
class SymptomReport:
    """A citizen symptom report. Immutable once stored."""
    id: str
    location: str
    symptoms: list[Symptom]
    created_at: datetime
    user_name: str = "Citizen"
    user_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "location": self.location,
            "symptoms": [s.value for s in self.symptoms],
            "userName": self.user_name,
            "userId": self.user_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class LocationSymptomCounts:
    """Grouped symptom counts for one location within the detection window."""
    location: str
    symptom_counts: dict[str, int] = field(default_factory=dict)
    total_reports: int = 0


@dataclass
class ClusterResult:
    """A potential outbreak: one location matched by one outbreak rule."""
    area: str
    predicted_disease_type: str
    detection_rule: str
    symptom_counts: dict[str, int]
    total_reports: int
    confidence: float
    recommended_authority_action: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "area": self.area,
            "predictedDiseaseType": self.predicted_disease_type,
            "detectionRule": self.detection_rule,
            "symptomCounts": dict(self.symptom_counts),
            "totalReports": self.total_reports,
            "confidence": self.confidence,
            "recommendedAuthorityAction": list(self.recommended_authority_action),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterResult":
        """Build a cluster from its serialized (API) form."""
        if not isinstance(data, Mapping):
            raise ValueError("cluster must be an object")
        return cls(
            area=data["area"],
            predicted_disease_type=data.get("predictedDiseaseType", ""),
            detection_rule=data.get("detectionRule", ""),
            symptom_counts=dict(data.get("symptomCounts") or {}),
            total_reports=int(data.get("totalReports", 0)),
            confidence=float(data.get("confidence", 0)),
            recommended_authority_action=list(data.get("recommendedAuthorityAction") or []),
        )


@dataclass
class DetectionResult:
    """Output of a single cluster detection run."""
    analysed_at: datetime
    window_hours: int
    clusters: list[ClusterResult] = field(default_factory=list)

    @property
    def clusters_detected(self) -> int:
        return len(self.clusters)

    def to_dict(self) -> dict:
        return {
            "analysedAt": self.analysed_at.isoformat(),
            "windowHours": self.window_hours,
            "clustersDetected": self.clusters_detected,
            "clusters": [c.to_dict() for c in self.clusters],
        }


@dataclass
class WeatherContext:
    """Current weather for a named area."""
    rainfall: float  # mm
    humidity: float  # %
    temperature: float  # degrees C
    area: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeatherContext":
        """Accepts either `temperature` or the short `temp` key, `area` or `city`."""
        if not isinstance(data, Mapping):
            raise ValueError("weather must be an object")
        temperature = data.get("temperature", data.get("temp"))
        if temperature is None:
            raise ValueError("weather requires a temperature")
        area = data.get("area") or data.get("city")
        if area is not None and not isinstance(area, str):
            raise ValueError("weather area must be a string")
        return cls(
            rainfall=float(data.get("rainfall", 0)),
            humidity=float(data.get("humidity", 0)),
            temperature=float(temperature),
            area=area,
        )


@dataclass
class ProactiveContext:
    """Signals handed to the proactive alert engine."""
    weather: Optional[WeatherContext] = None
    clusters: Optional[list[ClusterResult]] = None

    def is_empty(self) -> bool:
        return self.weather is None and not self.clusters


@dataclass(frozen=True)
class LiveAlert:
    """A broadcast alert. Never mutated after creation."""
    type: AlertType
    message: str
    severity: AlertSeverity
    area: str
    source: str = "system"
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_record(self) -> dict:
        """The persisted/broadcast shape."""
        return {
            "type": self.type.value,
            "message": self.message,
            "severity": self.severity.value,
            "area": self.area,
            "source": self.source,
        }

    def to_dict(self) -> dict:
        data = self.to_record()
        data["id"] = self.id
        data["createdAt"] = self.created_at.isoformat() if self.created_at else None
        return data


@dataclass
class AlertDelivery:
    """Outcome of persisting and broadcasting one alert."""
    alert: LiveAlert
    persisted: bool = False
    broadcast: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "alert": self.alert.to_dict(),
            "persisted": self.persisted,
            "broadcast": self.broadcast,
            "errors": list(self.errors),
        }
