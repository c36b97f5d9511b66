"""Outbreak dashboard API.

JSON endpoints for citizen symptom reports, cluster detection, live
alerts and proactive alert checks.
"""

import logging

from flask import Flask, jsonify

from preparedness_src.alerters import BaseNotifier, get_default_notifier
from preparedness_src.db import PreparednessDatabase
from preparedness_src.detector import ClusterDetector
from preparedness_src.enrichment import OutbreakBriefingClient
from preparedness_src.exceptions import DataSourceUnavailable
from preparedness_src.sources import DatabaseReportSource

from .services import EXTENSION_KEY

logger = logging.getLogger(__name__)


def create_app(
    db: PreparednessDatabase | None = None,
    notifier: BaseNotifier | None = None,
    detector: ClusterDetector | None = None,
    briefing_client: OutbreakBriefingClient | None = None,
) -> Flask:
    """Build the dashboard application.

    Args:
        db: Report store / alert sink (default database if None)
        notifier: Broadcast transport (webhook if configured, else console)
        detector: Cluster detector (default rules over db if None)
        briefing_client: LLM briefing client for ?enrich=1
    """
    app = Flask(__name__)

    db = db or PreparednessDatabase()
    app.extensions[EXTENSION_KEY] = {
        "db": db,
        "detector": detector or ClusterDetector(DatabaseReportSource(db)),
        "notifier": notifier or get_default_notifier(),
        "briefing_client": briefing_client or OutbreakBriefingClient(),
    }

    from .routes.alerts import live_alert_bp
    from .routes.clusters import clusters_bp
    from .routes.main import main_bp
    from .routes.proactive import proactive_bp
    from .routes.reports import reports_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(clusters_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(live_alert_bp)
    app.register_blueprint(proactive_bp)

    @app.errorhandler(DataSourceUnavailable)
    def data_source_unavailable(e):
        logger.error(f"Data source unavailable: {e}")
        return jsonify({"error": "data_source_unavailable"}), 503

    return app
