"""Routes for live alerts."""

import logging

from flask import Blueprint, jsonify, request

from preparedness_src.exceptions import NotifierUnavailable
from preparedness_src.models import AlertSeverity, AlertType, LiveAlert

from ..services import get_database, get_json_body, get_notifier

logger = logging.getLogger(__name__)

live_alert_bp = Blueprint("live_alert", __name__, url_prefix="/api/live-alert")


@live_alert_bp.route("", methods=["POST"])
def create_alert():
    """Create and broadcast a manual alert."""
    body = get_json_body()
    if body is None:
        return jsonify({"error": "request body must be a JSON object"}), 400
    required = ("type", "message", "area")
    if not all(isinstance(body.get(k), str) and body[k].strip() for k in required):
        return jsonify({"error": "type, message, and area are required"}), 400

    try:
        alert_type = AlertType(body["type"])
        severity = AlertSeverity(body.get("severity") or AlertSeverity.MEDIUM.value)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    source = body.get("source")
    if not isinstance(source, str) or not source.strip():
        source = "system"

    alert = get_database().create_alert(LiveAlert(
        type=alert_type,
        message=body["message"],
        severity=severity,
        area=body["area"],
        source=source,
    ))

    notifier = get_notifier()
    broadcast = False
    if notifier is not None:
        try:
            notifier.send_alert(alert)
            broadcast = True
        except NotifierUnavailable as e:
            logger.warning(f"Live alert stored but not broadcast: {e}")

    data = alert.to_dict()
    data["broadcast"] = broadcast
    return jsonify(data), 201


@live_alert_bp.route("", methods=["GET"])
def list_alerts():
    """Most recent alerts, newest first."""
    limit = request.args.get("limit", 50, type=int)
    alert_type = request.args.get("type")

    try:
        type_filter = AlertType(alert_type) if alert_type else None
    except ValueError:
        return jsonify({"error": f"Unknown alert type: {alert_type}"}), 400

    alerts = get_database().get_recent_alerts(
        limit=max(1, min(limit, 500)),
        alert_type=type_filter,
    )
    return jsonify([a.to_dict() for a in alerts])
