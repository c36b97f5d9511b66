"""Routes for outbreak cluster detection.

"No clusters" and "detection failed" are distinct responses: the first is
a 200 with clustersDetected 0, the second a 503.
"""

import logging
from datetime import datetime, timedelta

from flask import Blueprint, jsonify, request

from preparedness_src.enrichment import enrich_detection
from preparedness_src.exceptions import DataSourceUnavailable

from ..services import get_briefing_client, get_database, get_detector

logger = logging.getLogger(__name__)

clusters_bp = Blueprint("clusters", __name__, url_prefix="/api")

TRUTHY = {"1", "true", "yes", "on"}


@clusters_bp.route("/cluster", methods=["GET"])
def detect():
    """Run cluster detection over the current window."""
    try:
        result = get_detector().detect_clusters()
    except DataSourceUnavailable as e:
        logger.error(f"Cluster detection error: {e}")
        return jsonify({
            "error": "cluster_detection_failed",
            "message": "Failed to detect clusters",
        }), 503

    if request.args.get("enrich", "").lower() in TRUTHY:
        return jsonify(enrich_detection(result, get_briefing_client()))

    return jsonify(result.to_dict())


@clusters_bp.route("/stats", methods=["GET"])
def stats():
    """Report and alert statistics for the current window."""
    window_hours = get_detector().window_hours
    since = datetime.now() - timedelta(hours=window_hours)
    data = get_database().get_summary_stats(since)
    data["window_hours"] = window_hours
    return jsonify(data)
