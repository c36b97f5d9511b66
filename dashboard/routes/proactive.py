"""Routes for proactive alert checks.

Called after a risk assessment (with weather) or after cluster
detection (with clusters, or detect=true to run it here).
"""

import logging

from flask import Blueprint, jsonify

from preparedness_src.exceptions import DataSourceUnavailable
from preparedness_src.models import ClusterResult, ProactiveContext, WeatherContext
from preparedness_src.proactive import ProactiveAlertEngine

from ..services import get_database, get_detector, get_json_body, get_notifier

logger = logging.getLogger(__name__)

proactive_bp = Blueprint("proactive", __name__, url_prefix="/api/proactive")


@proactive_bp.route("/check", methods=["POST"])
def check():
    """Evaluate proactive rules and dispatch the resulting alerts."""
    body = get_json_body()
    if body is None:
        return jsonify({"error": "request body must be a JSON object"}), 400

    try:
        weather = WeatherContext.from_dict(body["weather"]) if body.get("weather") else None
        clusters = [ClusterResult.from_dict(c) for c in body.get("clusters") or []]
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"error": f"Invalid context: {e}"}), 400

    if body.get("detect"):
        try:
            clusters.extend(get_detector().detect_clusters().clusters)
        except DataSourceUnavailable as e:
            logger.error(f"Cluster detection error: {e}")
            return jsonify({
                "error": "cluster_detection_failed",
                "message": "Failed to detect clusters",
            }), 503

    engine = ProactiveAlertEngine(sink=get_database(), notifier=get_notifier())
    deliveries = engine.run(ProactiveContext(weather=weather, clusters=clusters or None))

    return jsonify({
        "alertsEmitted": len(deliveries),
        "alerts": [d.alert.to_dict() for d in deliveries],
        "deliveries": [d.to_dict() for d in deliveries],
    })
