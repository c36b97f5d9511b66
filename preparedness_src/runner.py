#!/usr/bin/env python3
"""CLI runner for outbreak cluster detection and proactive alerts.

Usage:
    python -m preparedness_src.runner --once
    python -m preparedness_src.runner --once --rainfall 60 --humidity 70 --temperature 30 --area chennai
    python -m preparedness_src.runner  # Continuous mode
"""

import argparse
import json
import logging
import sys

from .config import Config
from .db import PreparednessDatabase
from .demo import create_demo_reports
from .exceptions import DataSourceUnavailable
from .intake import purge_expired_reports
from .models import WeatherContext
from .monitor import OutbreakMonitor


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Reduce noise from HTTP libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def show_stats(monitor: OutbreakMonitor) -> None:
    """Display current statistics."""
    stats = monitor.get_stats()

    print("\n=== Outbreak Detection Statistics ===")
    print(f"Reports in window:        {stats['window_reports']}")
    print(f"Total stored reports:     {stats['total_reports']}")
    print(f"Total alerts:             {stats['total_alerts']}")

    if stats["reports_by_location"]:
        print("\nReports by location (window):")
        for location, count in stats["reports_by_location"].items():
            print(f"  {location:20s} {count}")

    if stats["alerts_by_severity"]:
        print("\nAlerts by severity:")
        for severity, count in stats["alerts_by_severity"].items():
            print(f"  {severity:10s} {count}")
    print()


def show_recent(db: PreparednessDatabase, limit: int = 10) -> None:
    """Display recent alerts."""
    alerts = db.get_recent_alerts(limit=limit)

    print(f"\n=== Recent Alerts (last {limit}) ===")
    print("-" * 80)

    if not alerts:
        print("No alerts found.")
        return

    for alert in alerts:
        print(
            f"{alert.created_at.strftime('%Y-%m-%d %H:%M')} | "
            f"{alert.severity.value:8s} | "
            f"{alert.area:15s} | "
            f"{alert.message}"
        )

    print("-" * 80)


def weather_from_args(args: argparse.Namespace) -> WeatherContext | None:
    """Build a weather context from CLI flags, if a temperature was given."""
    if args.temperature is None:
        return None
    return WeatherContext(
        rainfall=args.rainfall or 0.0,
        humidity=args.humidity or 0.0,
        temperature=args.temperature,
        area=args.area,
    )


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Outbreak cluster detection and proactive alerting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Single detection run
    python -m preparedness_src.runner --once

    # Single run with weather context and an AI briefing
    python -m preparedness_src.runner --once --enrich \\
        --rainfall 60 --humidity 70 --temperature 30 --area chennai

    # Seed demo reports, then detect
    python -m preparedness_src.runner --demo --once

    # Continuous monitoring mode
    python -m preparedness_src.runner

    # Show statistics / recent alerts
    python -m preparedness_src.runner --stats
    python -m preparedness_src.runner --recent
        """,
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Run once and exit (default: continuous mode)",
    )

    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help=f"Polling interval in seconds (default: {Config.POLL_INTERVAL})",
    )

    parser.add_argument(
        "--enrich",
        action="store_true",
        help="Request an LLM briefing for detected clusters",
    )

    parser.add_argument("--rainfall", type=float, default=None, help="Rainfall in mm")
    parser.add_argument("--humidity", type=float, default=None, help="Relative humidity in %%")
    parser.add_argument("--temperature", type=float, default=None, help="Temperature in °C")
    parser.add_argument("--area", type=str, default=None, help="Area the weather applies to")

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show current statistics and exit",
    )

    parser.add_argument(
        "--recent",
        type=int,
        nargs="?",
        const=10,
        default=None,
        help="Show recent alerts (default: 10)",
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Insert demo symptom reports before running",
    )

    parser.add_argument(
        "--purge",
        action="store_true",
        help=f"Delete reports older than {Config.REPORT_RETENTION_DAYS} days and exit",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help=f"Path to database (default: {Config.DB_PATH})",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    try:
        db = PreparednessDatabase(args.db_path)
        monitor = OutbreakMonitor(db=db)
    except Exception as e:
        logger.error(f"Failed to initialize monitor: {e}")
        return 1

    if args.purge:
        removed = purge_expired_reports(db)
        print(f"Removed {removed} expired reports")
        return 0

    if args.demo:
        created = create_demo_reports(db)
        logger.info(f"Inserted {created} demo reports")

    if args.stats:
        show_stats(monitor)
        return 0

    if args.recent is not None:
        show_recent(db, args.recent)
        return 0

    weather = weather_from_args(args)

    if args.once:
        logger.info("Running single detection cycle...")
        try:
            result = monitor.run_once(weather=weather, enrich=args.enrich)
        except DataSourceUnavailable as e:
            logger.error(f"Detection failed: {e}")
            return 1

        print(json.dumps(result["detection"], indent=2))
        logger.info(
            f"Completed: {result['detection']['clustersDetected']} clusters, "
            f"{result['alerts_emitted']} alerts "
            f"({result['alerts_persisted']} persisted, {result['alerts_broadcast']} broadcast)"
        )
        return 0
    else:
        logger.info("Starting continuous monitoring mode...")
        try:
            monitor.run_continuous(interval_seconds=args.interval, weather=weather)
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            return 0
        except Exception as e:
            logger.error(f"Monitor failed: {e}", exc_info=True)
            return 1


if __name__ == "__main__":
    sys.exit(main())
