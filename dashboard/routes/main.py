"""Main routes for the outbreak dashboard API."""

from flask import Blueprint, jsonify

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def landing():
    """List the available API sections."""
    return jsonify({
        "service": "outbreak-dashboard",
        "endpoints": [
            "/api/cluster",
            "/api/report",
            "/api/live-alert",
            "/api/proactive/check",
            "/api/stats",
        ],
    })


@main_bp.route("/health")
def health():
    """Liveness check."""
    return jsonify({"status": "ok"})
