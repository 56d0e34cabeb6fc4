"""
Overview metric cards for the class attendance dashboard.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from class_analytics.grouping import class_format
from class_analytics.metrics import aggregate, safe_divide
from class_analytics.ranking import rank_by
from class_analytics.records import SessionInput, normalize_sessions, session_revenue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BestClass:
    name: str
    avg_attendance: float


@dataclass(frozen=True)
class OverviewMetrics:
    """Headline numbers shown on the metric cards."""

    total_sessions: int
    total_attendance: int
    total_capacity: int
    total_revenue: float
    avg_attendance: float
    fill_rate: float
    avg_revenue: float
    unique_classes: int
    unique_trainers: int
    best_class: Optional[BestClass]


def build_metric_cards(sessions: SessionInput) -> Optional[OverviewMetrics]:
    """
    Compute the overview metrics.

    Args:
        sessions: Session records

    Returns:
        OverviewMetrics, or None when there are no sessions
    """
    df = normalize_sessions(sessions)
    if df.empty:
        logger.info("No sessions, skipping metric cards")
        return None

    total_sessions = len(df)
    total_attendance = int(df["checked_in_count"].sum())
    total_capacity = int(df["capacity"].sum())
    total_revenue = float(session_revenue(df).sum())

    classes = df["cleaned_class"].where(df["cleaned_class"].notna(), df["class_type"])

    # Best class by average attendance, first-encounter order on ties
    summaries = aggregate(df, class_format)
    best_class = None
    if summaries:
        best_key, _ = rank_by(summaries, "avg_check_ins")[0]
        best = next(s for s in summaries if s.key == best_key)
        best_class = BestClass(name=best.label, avg_attendance=best.avg_check_ins)

    metrics = OverviewMetrics(
        total_sessions=total_sessions,
        total_attendance=total_attendance,
        total_capacity=total_capacity,
        total_revenue=total_revenue,
        avg_attendance=safe_divide(total_attendance, total_sessions),
        fill_rate=safe_divide(total_attendance, total_capacity) * 100,
        avg_revenue=safe_divide(total_revenue, total_sessions),
        unique_classes=int(classes.dropna().nunique()),
        unique_trainers=int(df["trainer_name"].dropna().nunique()),
        best_class=best_class,
    )

    logger.info(
        f"Metric cards: {total_sessions} sessions, {total_attendance} check-ins, "
        f"fill rate {metrics.fill_rate:.1f}%"
    )
    return metrics
