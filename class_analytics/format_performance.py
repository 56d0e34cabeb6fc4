"""
Class format performance table.

Per class format: fill, show-up, cancellation and revenue rates.
"""

import logging
from dataclasses import dataclass
from typing import List

import pandas as pd

from class_analytics.grouping import class_format, group_sessions
from class_analytics.metrics import safe_divide
from class_analytics.records import SessionInput

logger = logging.getLogger(__name__)


# Selectable metrics, in display order
FORMAT_METRICS = [
    "fill_rate",
    "show_up_rate",
    "utilization_rate",
    "avg_revenue",
    "efficiency",
    "cancellation_rate",
    "revenue_efficiency",
    "revenue_per_attendee",
]


@dataclass(frozen=True)
class FormatPerformance:
    """Performance metrics for one class format."""

    format: str
    total_sessions: int
    total_capacity: int
    total_checked_in: int
    total_revenue: float
    total_booked: int
    total_late_cancelled: int
    empty_sessions: int
    revenue_generating_sessions: int
    fill_rate: float
    show_up_rate: float
    utilization_rate: float
    avg_revenue: float
    revenue_per_attendee: float
    efficiency: float
    cancellation_rate: float
    revenue_efficiency: float


def summarize_format(group: pd.DataFrame, name: str) -> FormatPerformance:
    """
    Derive format metrics for one group of normalized sessions.

    Revenue here is total_paid only.
    """
    total_sessions = len(group)
    total_capacity = int(group["capacity"].sum())
    total_checked_in = int(group["checked_in_count"].sum())
    total_revenue = float(group["total_paid"].sum())
    total_booked = int(group["booked_count"].sum())
    total_late_cancelled = int(group["late_cancelled_count"].sum())
    empty_sessions = int((group["checked_in_count"] == 0).sum())
    revenue_generating = int((group["total_paid"] > 0).sum())

    return FormatPerformance(
        format=name,
        total_sessions=total_sessions,
        total_capacity=total_capacity,
        total_checked_in=total_checked_in,
        total_revenue=total_revenue,
        total_booked=total_booked,
        total_late_cancelled=total_late_cancelled,
        empty_sessions=empty_sessions,
        revenue_generating_sessions=revenue_generating,
        fill_rate=safe_divide(total_checked_in, total_capacity) * 100,
        show_up_rate=safe_divide(total_checked_in, total_booked) * 100,
        utilization_rate=safe_divide(total_sessions - empty_sessions, total_sessions) * 100,
        avg_revenue=safe_divide(total_revenue, total_sessions),
        revenue_per_attendee=safe_divide(total_revenue, total_checked_in),
        efficiency=safe_divide(total_revenue, total_capacity),
        cancellation_rate=safe_divide(total_late_cancelled, total_booked) * 100,
        revenue_efficiency=safe_divide(revenue_generating, total_sessions) * 100,
    )


def build_format_performance(sessions: SessionInput) -> List[FormatPerformance]:
    """
    Build per-format performance rows.

    Args:
        sessions: Session records

    Returns:
        FormatPerformance per class format, most sessions first.
        Empty input gives an empty list.
    """
    groups = group_sessions(sessions, class_format)
    rows = [summarize_format(frame, name) for name, frame in groups.items()]
    rows = sorted(rows, key=lambda r: r.total_sessions, reverse=True)

    logger.info(f"Built format performance for {len(rows)} class formats")
    return rows


def metric_band(value: float, metric: str) -> str:
    """
    Band for a metric value: good, warning or poor.

    Cancellation rate is better when low; every other metric when high.

    Raises:
        ValueError: If metric is not one of FORMAT_METRICS
    """
    if metric not in FORMAT_METRICS:
        raise ValueError(f"Unknown metric '{metric}'. Available: {', '.join(FORMAT_METRICS)}")

    if metric == "cancellation_rate":
        if value <= 10:
            return "good"
        if value <= 20:
            return "warning"
        return "poor"

    if value >= 80:
        return "good"
    if value >= 60:
        return "warning"
    return "poor"
