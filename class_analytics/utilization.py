"""
Utilization analysis by time slot, day of week and trainer.

Each view groups sessions by one categorical key and reports capacity fill,
how many sessions ran with attendees and how many were full.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from class_analytics.grouping import KeyFn, day_of_week, group_sessions, time_slot, trainer
from class_analytics.metrics import EMPTY, FULL, LOW_ATTENDANCE, classify_sessions, safe_divide
from class_analytics.records import SessionInput, normalize_sessions

logger = logging.getLogger(__name__)


DAY_ORDER = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


@dataclass(frozen=True)
class UtilizationSummary:
    """Utilization metrics for one time slot, day or trainer."""

    key: str
    total_sessions: int
    total_capacity: int
    total_attendance: int
    empty_sessions: int
    low_attendance_sessions: int
    full_sessions: int
    format_count: int
    fill_rate: float
    utilization_rate: float
    avg_attendance: float
    efficiency: float


def summarize_utilization(group: pd.DataFrame, key: str) -> UtilizationSummary:
    """
    Derive utilization metrics for one group of normalized sessions.

    - fill_rate: attendance / capacity * 100
    - utilization_rate: share of sessions with attendees, in percent
    - efficiency: share of full sessions, in percent
    """
    labels = classify_sessions(group)
    total_sessions = len(group)
    total_capacity = int(group["capacity"].sum())
    total_attendance = int(group["checked_in_count"].sum())
    empty_sessions = int((labels == EMPTY).sum())
    full_sessions = int((labels == FULL).sum())

    formats = group["cleaned_class"].where(group["cleaned_class"].notna(), group["class_type"])

    return UtilizationSummary(
        key=key,
        total_sessions=total_sessions,
        total_capacity=total_capacity,
        total_attendance=total_attendance,
        empty_sessions=empty_sessions,
        low_attendance_sessions=int((labels == LOW_ATTENDANCE).sum()),
        full_sessions=full_sessions,
        format_count=int(formats.dropna().nunique()),
        fill_rate=safe_divide(total_attendance, total_capacity) * 100,
        utilization_rate=safe_divide(total_sessions - empty_sessions, total_sessions) * 100,
        avg_attendance=safe_divide(total_attendance, total_sessions),
        efficiency=safe_divide(full_sessions, total_sessions) * 100,
    )


def utilization_by(sessions: SessionInput, key_fn: KeyFn) -> List[UtilizationSummary]:
    """Utilization summaries grouped by key_fn, in first-encounter order."""
    groups = group_sessions(sessions, key_fn)
    return [summarize_utilization(frame, key) for key, frame in groups.items()]


def day_index(day: str) -> int:
    """Position of a day in DAY_ORDER; -1 for unrecognized values."""
    try:
        return DAY_ORDER.index(day)
    except ValueError:
        return -1


def utilization_by_time_slot(sessions: SessionInput) -> List[UtilizationSummary]:
    """Time slot view, ordered by slot string."""
    return sorted(utilization_by(sessions, time_slot), key=lambda s: s.key)


def utilization_by_day(sessions: SessionInput) -> List[UtilizationSummary]:
    """Day view in Monday..Sunday order; unrecognized days come first."""
    return sorted(utilization_by(sessions, day_of_week), key=lambda s: day_index(s.key))


def utilization_by_trainer(sessions: SessionInput) -> List[UtilizationSummary]:
    """Trainer view, busiest trainer first."""
    return sorted(utilization_by(sessions, trainer), key=lambda s: s.total_sessions, reverse=True)


def build_utilization(sessions: SessionInput) -> Dict[str, List[UtilizationSummary]]:
    """
    Build all three utilization views.

    Args:
        sessions: Session records

    Returns:
        Dictionary with "time_slot", "day_of_week" and "trainer" views.
        Empty input gives three empty lists.
    """
    df = normalize_sessions(sessions)

    views = {
        "time_slot": utilization_by_time_slot(df),
        "day_of_week": utilization_by_day(df),
        "trainer": utilization_by_trainer(df),
    }

    logger.info(
        f"Utilization views: {len(views['time_slot'])} time slots, "
        f"{len(views['day_of_week'])} days, {len(views['trainer'])} trainers"
    )
    return views


def utilization_band(rate: float) -> str:
    """Utilization band: good (>= 90), warning (>= 70) or poor."""
    if rate >= 90:
        return "good"
    if rate >= 70:
        return "warning"
    return "poor"
