"""
Class performance ranking table.

Groups sessions by class, derives attendance and fill metrics per class and
ranks the classes twice: by average check-ins including empty sessions and
by average check-ins over sessions that actually had attendees.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from class_analytics.grouping import class_identity, class_label
from class_analytics.metrics import GroupSummary, aggregate
from class_analytics.ranking import order_by_rank, rank_summaries
from class_analytics.records import SessionInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingRow:
    """One row of a ranking view."""

    rank: int
    key: str
    class_name: str
    session_count: int
    avg_check_ins: float
    fill_percentage: float
    total_revenue: float
    sessions: tuple


def build_class_performance(sessions: SessionInput) -> List[GroupSummary]:
    """
    Build ranked per-class performance summaries.

    Classes are keyed by unique_id (falling back to the class format) and
    labelled with the class name fallback chain.

    Args:
        sessions: Session records

    Returns:
        Ranked GroupSummary per class, in first-encounter order.
        Empty input gives an empty list.
    """
    summaries = aggregate(sessions, class_identity, label_fn=class_label)
    ranked = rank_summaries(summaries)

    logger.info(f"Built class performance for {len(ranked)} classes")
    return ranked


def ranking_view(summaries: Sequence[GroupSummary], exclude_empty: bool = False) -> List[RankingRow]:
    """
    Rows of one ranking table, ordered by the matching rank.

    With exclude_empty, rows use the metrics computed without empty
    sessions, report only sessions with check-ins and list only those
    sessions in the drill-down.

    Args:
        summaries: Ranked class summaries
        exclude_empty: Which of the two rankings to present

    Returns:
        List of RankingRow in rank order
    """
    rank_field = "rank_excluding_empty" if exclude_empty else "rank"

    rows = []
    for summary in order_by_rank(summaries, rank_field):
        if exclude_empty:
            rows.append(RankingRow(
                rank=summary.rank_excluding_empty,
                key=summary.key,
                class_name=summary.label,
                session_count=summary.sessions_with_check_ins,
                avg_check_ins=summary.avg_check_ins_excluding_empty,
                fill_percentage=summary.fill_percentage_excluding_empty,
                total_revenue=summary.total_revenue,
                sessions=tuple(s for s in summary.individual_sessions if s["checked_in_count"] > 0),
            ))
        else:
            rows.append(RankingRow(
                rank=summary.rank,
                key=summary.key,
                class_name=summary.label,
                session_count=summary.session_count,
                avg_check_ins=summary.avg_check_ins,
                fill_percentage=summary.fill_percentage,
                total_revenue=summary.total_revenue,
                sessions=summary.individual_sessions,
            ))
    return rows


def fill_band(fill_percentage: float) -> str:
    """Fill percentage band: high (>= 80), medium (>= 60) or low."""
    if fill_percentage >= 80:
        return "high"
    if fill_percentage >= 60:
        return "medium"
    return "low"
