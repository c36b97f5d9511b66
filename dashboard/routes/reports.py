"""Routes for citizen symptom reports."""

import logging

from flask import Blueprint, jsonify, request

from preparedness_src.exceptions import InvalidReport, NotifierUnavailable
from preparedness_src.intake import submit_report

from ..services import get_database, get_json_body, get_notifier, get_reporter

logger = logging.getLogger(__name__)

reports_bp = Blueprint("reports", __name__, url_prefix="/api/report")


@reports_bp.route("", methods=["POST"])
def create_report():
    """Submit a symptom report and announce it to subscribers."""
    body = get_json_body()
    if body is None:
        return jsonify({"error": "request body must be a JSON object"}), 400
    user_name, user_id = get_reporter()

    try:
        report = submit_report(
            get_database(),
            location=body.get("location"),
            symptoms=body.get("symptoms"),
            user_name=user_name,
            user_id=user_id,
        )
    except InvalidReport as e:
        return jsonify({"error": str(e)}), 400

    notifier = get_notifier()
    if notifier is not None:
        try:
            notifier.send_report(report)
        except NotifierUnavailable as e:
            logger.warning(f"Report stored but not broadcast: {e}")

    return jsonify({
        "message": "Symptom report submitted successfully",
        "report": report.to_dict(),
    }), 201


@reports_bp.route("", methods=["GET"])
def list_reports():
    """Most recent reports, newest first."""
    limit = request.args.get("limit", 50, type=int)
    reports = get_database().list_reports(limit=max(1, min(limit, 500)))
    return jsonify([r.to_dict() for r in reports])
