"""
Grouping of session records by a key selector.

Every dashboard widget groups the same session records by a different key:
class identity, class format, time slot, day of week or trainer.
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Hashable, Mapping

import pandas as pd

from class_analytics.records import (
    UNKNOWN,
    UNKNOWN_CLASS,
    SessionInput,
    field,
    normalize_sessions,
    resolve,
)

logger = logging.getLogger(__name__)

KeyFn = Callable[[Any], Hashable]

CLASS_LABEL_CHAIN = (field("cleaned_class"), field("class_type"), field("session_name"))
CLASS_FORMAT_CHAIN = (field("cleaned_class"), field("class_type"))


def class_label(record) -> str:
    """Display name of a class: cleaned_class -> class_type -> session_name."""
    return resolve(record, CLASS_LABEL_CHAIN, UNKNOWN_CLASS)


def class_identity(record) -> str:
    """Class key: unique_id, else a label-derived fallback key."""
    unique_id = record["unique_id"]
    if unique_id:
        return unique_id
    return f"{resolve(record, CLASS_FORMAT_CHAIN, UNKNOWN_CLASS)}-fallback"


def class_format(record) -> str:
    return resolve(record, CLASS_FORMAT_CHAIN, UNKNOWN)


def time_slot(record) -> str:
    return resolve(record, (field("time"),), UNKNOWN)


def day_of_week(record) -> str:
    return resolve(record, (field("day_of_week"),), UNKNOWN)


def trainer(record) -> str:
    return resolve(record, (field("trainer_name"),), UNKNOWN)


KEY_SELECTORS = {
    "class_label": class_label,
    "class_identity": class_identity,
    "class_format": class_format,
    "time_slot": time_slot,
    "day_of_week": day_of_week,
    "trainer": trainer,
}


def get_key_selector(name: str) -> KeyFn:
    """
    Look up a key selector by name.

    Raises:
        ValueError: If the selector name is unknown
    """
    try:
        return KEY_SELECTORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown key selector '{name}'. Available: {', '.join(KEY_SELECTORS)}"
        ) from None


def group_sessions(sessions: SessionInput, key_fn: KeyFn) -> Mapping[Hashable, pd.DataFrame]:
    """
    Group session records by the value of key_fn.

    Args:
        sessions: Session records (raw or normalized)
        key_fn: Callable returning the group key for one record

    Returns:
        Read-only mapping of key -> DataFrame of that key's records, keys in
        first-encounter order. Empty input gives an empty mapping.
    """
    df = normalize_sessions(sessions)

    if df.empty:
        logger.debug("No session records to group")
        return MappingProxyType({})

    keys = pd.Series([key_fn(row) for _, row in df.iterrows()], index=df.index)

    groups = {key: frame for key, frame in df.groupby(keys, sort=False)}

    logger.debug(f"Grouped {len(df)} sessions into {len(groups)} groups")
    return MappingProxyType(groups)
