"""
Ranking of group summaries by a metric.

Each ranking pass sorts a copy of the summaries descending by one metric and
assigns 1-based ranks. Ties keep the input (first-encounter) order. Ranks are
merged back into copies of the summaries by key, so independent passes never
disturb one another.
"""

import logging
from dataclasses import replace
from operator import attrgetter
from typing import Callable, Hashable, List, Sequence, Tuple, Union

from class_analytics.metrics import GroupSummary

logger = logging.getLogger(__name__)

Selector = Union[str, Callable[[GroupSummary], float]]

RANK_FIELDS = ("rank", "rank_excluding_empty")


def _as_callable(selector: Selector) -> Callable[[GroupSummary], float]:
    if isinstance(selector, str):
        return attrgetter(selector)
    return selector


def rank_by(summaries: Sequence[GroupSummary], selector: Selector) -> List[Tuple[Hashable, int]]:
    """
    Rank summaries descending by a metric.

    Args:
        summaries: Group summaries with unique keys
        selector: Metric attribute name or callable returning the metric

    Returns:
        List of (key, rank) pairs in rank order, ranks 1..N
    """
    metric = _as_callable(selector)
    # sorted() keeps equal items in input order, also with reverse=True
    ordered = sorted(summaries, key=metric, reverse=True)
    return [(summary.key, position) for position, summary in enumerate(ordered, start=1)]


def apply_ranks(
    summaries: Sequence[GroupSummary],
    selector: Selector,
    rank_field: str = "rank",
) -> List[GroupSummary]:
    """
    Attach ranks from one ranking pass to copies of the summaries.

    Args:
        summaries: Group summaries with unique keys
        selector: Metric attribute name or callable
        rank_field: Field receiving the rank ("rank" or "rank_excluding_empty")

    Returns:
        New summaries in the same order as the input
    """
    if rank_field not in RANK_FIELDS:
        raise ValueError(f"rank_field must be one of {', '.join(RANK_FIELDS)}, got '{rank_field}'")

    ranks = dict(rank_by(summaries, selector))
    if len(ranks) != len(summaries):
        raise ValueError("Cannot rank summaries with duplicate keys")

    return [replace(summary, **{rank_field: ranks[summary.key]}) for summary in summaries]


def rank_summaries(summaries: Sequence[GroupSummary]) -> List[GroupSummary]:
    """Apply both standard passes: rank by average check-ins, with and without empty sessions."""
    ranked = apply_ranks(summaries, "avg_check_ins", "rank")
    ranked = apply_ranks(ranked, "avg_check_ins_excluding_empty", "rank_excluding_empty")
    logger.debug(f"Ranked {len(ranked)} groups")
    return ranked


def order_by_rank(summaries: Sequence[GroupSummary], rank_field: str = "rank") -> List[GroupSummary]:
    """Summaries ordered ascending by a rank field."""
    return sorted(summaries, key=attrgetter(rank_field))
