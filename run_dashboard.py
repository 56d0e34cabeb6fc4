#!/usr/bin/env python3
"""
Main orchestration script for the class attendance dashboard.

This script:
1. Loads class sessions from Supabase (or a CSV export)
2. Computes the overview metric cards
3. Ranks classes by average check-ins, with and without empty sessions
4. Builds the class format performance table
5. Builds utilization by time slot, day of week and trainer
6. Reads the summary notes for both ranking views

Usage:
    python run_dashboard.py
    python run_dashboard.py --csv exports/sessions.csv
"""

import argparse
import logging
import sys
from pathlib import Path

from class_analytics.class_performance import build_class_performance, fill_band, ranking_view
from class_analytics.data_extraction import extract_sessions, load_sessions_csv
from class_analytics.database import SupabaseNoteStore, get_supabase_client
from class_analytics.format_performance import build_format_performance
from class_analytics.loading import LoadingState
from class_analytics.metric_cards import build_metric_cards
from class_analytics.notes import InMemoryNoteStore, SummaryNotes, summary_key
from class_analytics.utilization import build_utilization, utilization_band

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute class attendance dashboard aggregates")
    parser.add_argument(
        "--csv",
        type=Path,
        help="Read sessions from a CSV export instead of Supabase",
    )
    parser.add_argument(
        "--table",
        help="Supabase sessions table (default: SESSIONS_TABLE or class_sessions)",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of ranked classes to log per view (default: 10)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function."""
    args = parse_args(argv)
    loading = LoadingState(variant="analytics")

    try:
        logger.info("=" * 60)
        logger.info("Starting Class Attendance Dashboard")
        logger.info("=" * 60)

        # Step 1: Load sessions
        logger.info("\n[Step 1] Loading sessions...")
        with loading.loading("Loading sessions", "Fetching class session records"):
            if args.csv:
                sessions = load_sessions_csv(args.csv)
                notes = SummaryNotes(InMemoryNoteStore())
            else:
                client = get_supabase_client()
                sessions = extract_sessions(client, args.table)
                notes = SummaryNotes(SupabaseNoteStore(client))

        logger.info(f"  Session records: {len(sessions)}")

        if sessions.empty:
            logger.warning("No session data available")
            return 0

        # Step 2: Metric cards
        logger.info("\n[Step 2] Overview metrics...")
        cards = build_metric_cards(sessions)
        logger.info(f"  Total sessions: {cards.total_sessions}")
        logger.info(f"  Total attendance: {cards.total_attendance}")
        logger.info(f"  Avg attendance: {cards.avg_attendance:.1f}")
        logger.info(f"  Fill rate: {cards.fill_rate:.1f}%")
        logger.info(f"  Class formats: {cards.unique_classes}, trainers: {cards.unique_trainers}")
        if cards.best_class:
            logger.info(
                f"  Best class: {cards.best_class.name} "
                f"(avg {cards.best_class.avg_attendance:.1f} attendees)"
            )

        # Step 3: Class performance rankings
        logger.info("\n[Step 3] Class performance rankings...")
        performance = build_class_performance(sessions)
        for exclude_empty in (False, True):
            title = "excluding" if exclude_empty else "including"
            logger.info(f"  Ranked by avg check-ins {title} empty sessions:")
            for row in ranking_view(performance, exclude_empty)[:args.top]:
                logger.info(
                    f"    #{row.rank} {row.class_name}: {row.session_count} sessions, "
                    f"avg {row.avg_check_ins:.1f}, fill {row.fill_percentage:.1f}% "
                    f"({fill_band(row.fill_percentage)}), revenue {row.total_revenue:,.0f}"
                )
            for line in notes.get(summary_key(exclude_empty)).splitlines():
                logger.info(f"    {line}")

        # Step 4: Format performance
        logger.info("\n[Step 4] Class format performance...")
        for row in build_format_performance(sessions):
            logger.info(
                f"  {row.format}: {row.total_sessions} sessions, fill {row.fill_rate:.1f}%, "
                f"show-up {row.show_up_rate:.1f}%, cancellations {row.cancellation_rate:.1f}%"
            )

        # Step 5: Utilization
        logger.info("\n[Step 5] Utilization...")
        views = build_utilization(sessions)
        for view_name, rows in views.items():
            logger.info(f"  By {view_name.replace('_', ' ')}:")
            for row in rows:
                logger.info(
                    f"    {row.key}: {row.total_sessions} sessions, "
                    f"utilization {row.utilization_rate:.1f}% ({utilization_band(row.utilization_rate)}), "
                    f"fill {row.fill_rate:.1f}%, full {row.efficiency:.1f}%"
                )

        logger.info("\n" + "=" * 60)
        logger.info("Dashboard Completed Successfully!")
        logger.info("=" * 60)
        return 0

    except Exception as e:
        logger.error(f"\nDashboard failed with error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
