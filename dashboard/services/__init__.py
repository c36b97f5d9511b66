"""Dashboard services."""

from flask import current_app, request

from preparedness_src.alerters import BaseNotifier
from preparedness_src.db import PreparednessDatabase
from preparedness_src.detector import ClusterDetector
from preparedness_src.enrichment import OutbreakBriefingClient

from .user import get_current_user, get_current_user_id, get_reporter

EXTENSION_KEY = "preparedness"


def _services() -> dict:
    return current_app.extensions[EXTENSION_KEY]


def get_database() -> PreparednessDatabase:
    return _services()["db"]


def get_detector() -> ClusterDetector:
    return _services()["detector"]


def get_notifier() -> BaseNotifier | None:
    return _services()["notifier"]


def get_briefing_client() -> OutbreakBriefingClient:
    return _services()["briefing_client"]


def get_json_body() -> dict | None:
    """Request body as a JSON object; {} when absent, None when not an object."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


__all__ = [
    "EXTENSION_KEY",
    "get_database",
    "get_detector",
    "get_notifier",
    "get_briefing_client",
    "get_json_body",
    "get_current_user",
    "get_current_user_id",
    "get_reporter",
]
