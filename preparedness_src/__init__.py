"""Outbreak Cluster Detection Module.

Detects potential disease outbreaks from citizen symptom reports and
raises proactive alerts.

Rules evaluated per location over the last 12 hours of reports:
- viral: fever reports
- waterborne: vomiting + diarrhea reports
- respiratory: cough reports

Proactive alerts are raised from weather conditions (dengue and
post-flood waterborne risk) and from high-confidence clusters.
"""

from .alerters import BaseNotifier, ConsoleNotifier, WebhookNotifier
from .config import config, Config
from .db import PreparednessDatabase
from .detector import ClusterDetector, detect_clusters
from .enrichment import OutbreakBriefingClient, enrich_detection
from .exceptions import (
    DataSourceUnavailable,
    EnrichmentUnavailable,
    InvalidReport,
    NotifierUnavailable,
    PreparednessError,
)
from .intake import submit_report, purge_expired_reports
from .models import (
    AlertSeverity,
    AlertType,
    ClusterResult,
    DetectionResult,
    LiveAlert,
    ProactiveContext,
    Symptom,
    SymptomReport,
    WeatherContext,
)
from .monitor import OutbreakMonitor
from .proactive import ProactiveAlertEngine, check_proactive_alerts
from .rules import OutbreakRule, DEFAULT_RULES, build_default_rules
from .sources import ReportSource, DatabaseReportSource

__all__ = [
    # Config
    "config",
    "Config",
    # Database
    "PreparednessDatabase",
    # Detector
    "ClusterDetector",
    "detect_clusters",
    # Enrichment
    "OutbreakBriefingClient",
    "enrich_detection",
    # Errors
    "DataSourceUnavailable",
    "EnrichmentUnavailable",
    "InvalidReport",
    "NotifierUnavailable",
    "PreparednessError",
    # Intake
    "submit_report",
    "purge_expired_reports",
    # Models
    "AlertSeverity",
    "AlertType",
    "ClusterResult",
    "DetectionResult",
    "LiveAlert",
    "ProactiveContext",
    "Symptom",
    "SymptomReport",
    "WeatherContext",
    # Monitor
    "OutbreakMonitor",
    # Notifiers
    "BaseNotifier",
    "ConsoleNotifier",
    "WebhookNotifier",
    # Proactive
    "ProactiveAlertEngine",
    "check_proactive_alerts",
    # Rules
    "OutbreakRule",
    "DEFAULT_RULES",
    "build_default_rules",
    # Sources
    "ReportSource",
    "DatabaseReportSource",
]
