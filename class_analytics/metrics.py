"""
Metric derivation for groups of session records.

Reduces one group of sessions to a GroupSummary (sums, averages and fill
percentages) and classifies individual sessions as empty, low attendance
or full.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Hashable, List, Optional

import numpy as np
import pandas as pd

from class_analytics.config import Config
from class_analytics.grouping import KeyFn, group_sessions
from class_analytics.records import SessionInput, session_revenue, to_records

logger = logging.getLogger(__name__)


EMPTY = "empty"
LOW_ATTENDANCE = "low_attendance"
FULL = "full"


@dataclass(frozen=True)
class GroupSummary:
    """Aggregated metrics for one group of sessions."""

    key: Hashable
    label: str
    session_count: int
    total_check_ins: int
    total_capacity: int
    total_revenue: float
    avg_check_ins: float
    avg_check_ins_excluding_empty: float
    fill_percentage: float
    fill_percentage_excluding_empty: float
    empty_sessions: int
    sessions_with_check_ins: int
    individual_sessions: tuple = ()
    rank: int = 0
    rank_excluding_empty: int = 0


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def order_by_date_desc(df: pd.DataFrame) -> pd.DataFrame:
    """
    Order sessions newest first.

    Sessions with a missing or unparseable date go last; equal dates keep
    their input order.
    """
    # Each value parsed on its own; sources mix plain dates and datetimes
    parsed = pd.to_datetime(df["date"], errors="coerce", format="mixed")
    return (
        df.assign(_parsed_date=parsed)
        .sort_values("_parsed_date", ascending=False, kind="mergesort", na_position="last")
        .drop(columns=["_parsed_date"])
    )


def derive_group_summary(
    group: pd.DataFrame,
    key: Optional[Hashable] = None,
    label: Optional[str] = None,
) -> GroupSummary:
    """
    Compute the summary metrics of one group of normalized sessions.

    Every ratio with a zero denominator is 0.

    Args:
        group: Normalized session records belonging to one group
        key: Group key (populated by the caller)
        label: Display label (defaults to the key)

    Returns:
        GroupSummary without ranks
    """
    check_ins = group["checked_in_count"]
    non_empty = group[check_ins > 0]

    session_count = len(group)
    total_check_ins = int(check_ins.sum())
    total_capacity = int(group["capacity"].sum())
    total_revenue = float(session_revenue(group).sum())
    non_empty_count = len(non_empty)
    non_empty_capacity = int(non_empty["capacity"].sum())

    fill_excluding_empty = 0.0
    if non_empty_count > 0 and total_capacity > 0:
        fill_excluding_empty = safe_divide(total_check_ins, non_empty_capacity) * 100

    return GroupSummary(
        key=key,
        label=label if label is not None else str(key),
        session_count=session_count,
        total_check_ins=total_check_ins,
        total_capacity=total_capacity,
        total_revenue=total_revenue,
        avg_check_ins=safe_divide(total_check_ins, session_count),
        avg_check_ins_excluding_empty=safe_divide(total_check_ins, non_empty_count),
        fill_percentage=safe_divide(total_check_ins, total_capacity) * 100,
        fill_percentage_excluding_empty=fill_excluding_empty,
        empty_sessions=session_count - non_empty_count,
        sessions_with_check_ins=non_empty_count,
        individual_sessions=to_records(order_by_date_desc(group)),
    )


def aggregate(
    sessions: SessionInput,
    key_fn: KeyFn,
    label_fn: Optional[Callable] = None,
) -> List[GroupSummary]:
    """
    Group sessions by key_fn and derive one GroupSummary per group.

    Args:
        sessions: Session records
        key_fn: Key selector
        label_fn: Optional selector for the display label, applied to the
            first record of each group

    Returns:
        Unranked summaries in first-encounter order of their keys
    """
    groups = group_sessions(sessions, key_fn)

    summaries = []
    for key, frame in groups.items():
        label = label_fn(frame.iloc[0]) if label_fn is not None else None
        summaries.append(derive_group_summary(frame, key=key, label=label))

    logger.info(f"Aggregated {sum(s.session_count for s in summaries)} sessions into {len(summaries)} groups")
    return summaries


def classify_sessions(df: pd.DataFrame) -> pd.Series:
    """
    Classify each session as empty, low attendance, full, or None.

    Rules are checked in order, first match wins:
    - empty: no check-ins
    - low attendance: capacity > 0 and check-ins / capacity below LOW_ATTENDANCE_THRESHOLD
    - full: capacity > 0 and check-ins / capacity at or above FULL_THRESHOLD

    Args:
        df: Normalized session records

    Returns:
        Series of classification labels aligned to df
    """
    attendance = df["checked_in_count"].to_numpy(dtype=float)
    capacity = df["capacity"].to_numpy(dtype=float)
    has_capacity = capacity > 0
    ratio = np.divide(attendance, capacity, out=np.zeros(len(df)), where=has_capacity)

    empty = attendance == 0
    low = ~empty & has_capacity & (ratio < Config.LOW_ATTENDANCE_THRESHOLD)
    full = ~empty & ~low & has_capacity & (ratio >= Config.FULL_THRESHOLD)

    labels = pd.Series(None, index=df.index, dtype=object)
    labels[empty] = EMPTY
    labels[low] = LOW_ATTENDANCE
    labels[full] = FULL
    return labels