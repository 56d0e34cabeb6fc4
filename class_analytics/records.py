"""
Session record normalization.

Turns upstream class-session records (camelCase mappings or a DataFrame)
into a snake_case DataFrame with defaulted numeric fields, and provides
the fallback-chain accessors used to label records.
"""

import logging
from operator import itemgetter
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

import pandas as pd

logger = logging.getLogger(__name__)


UNKNOWN_CLASS = "Unknown Class"
UNKNOWN = "Unknown"

# Upstream field names -> normalized column names
FIELD_ALIASES = {
    "uniqueId": "unique_id",
    "cleanedClass": "cleaned_class",
    "classType": "class_type",
    "sessionName": "session_name",
    "dayOfWeek": "day_of_week",
    "trainerName": "trainer_name",
    "checkedInCount": "checked_in_count",
    "bookedCount": "booked_count",
    "lateCancelledCount": "late_cancelled_count",
    "totalPaid": "total_paid",
}

TEXT_COLUMNS = [
    "unique_id", "cleaned_class", "class_type", "session_name",
    "date", "day_of_week", "time", "trainer_name",
]
COUNT_COLUMNS = ["capacity", "checked_in_count", "booked_count", "late_cancelled_count"]
MONEY_COLUMNS = ["revenue", "total_paid"]

SessionInput = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]
Accessor = Callable[[Any], Any]


def field(name: str) -> Accessor:
    """Accessor reading one field from a normalized record (dict or row)."""
    return itemgetter(name)


def resolve(record: Any, accessors: Sequence[Accessor], default: Any) -> Any:
    """
    Return the first non-empty value produced by the accessors, else default.

    Args:
        record: Normalized session record (dict or DataFrame row)
        accessors: Accessors tried in order
        default: Sentinel returned when every accessor yields an empty value

    Returns:
        First truthy accessor result, or default
    """
    for accessor in accessors:
        value = accessor(record)
        if value:
            return value
    return default


def _clean_text(value: Any) -> Optional[str]:
    """Empty strings and missing values become None."""
    if value is None:
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None
    text = str(value)
    return text if text else None


def normalize_sessions(sessions: SessionInput) -> pd.DataFrame:
    """
    Normalize session records into a DataFrame.

    Field names are mapped to snake_case, numeric fields default to 0 and
    missing or empty text fields become None. The input is never modified.

    Args:
        sessions: DataFrame or iterable of mappings with session fields

    Returns:
        DataFrame with one row per session, in input order, containing at
        least TEXT_COLUMNS, COUNT_COLUMNS and MONEY_COLUMNS
    """
    if isinstance(sessions, pd.DataFrame):
        df = sessions.copy()
    else:
        df = pd.DataFrame([dict(record) for record in sessions])

    # Records may mix spellings; keep one column per field, snake_case values first
    for camel, snake in FIELD_ALIASES.items():
        if camel in df.columns and snake in df.columns:
            df[snake] = df[snake].combine_first(df[camel])
            df = df.drop(columns=[camel])

    df = df.rename(columns=FIELD_ALIASES).reset_index(drop=True)

    for col in TEXT_COLUMNS:
        if col not in df.columns:
            df[col] = None
        df[col] = pd.Series([_clean_text(v) for v in df[col]], index=df.index, dtype=object)

    for col in COUNT_COLUMNS:
        if col not in df.columns:
            df[col] = 0
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).astype(int)

    for col in MONEY_COLUMNS:
        if col not in df.columns:
            df[col] = 0.0
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0).astype(float)

    logger.debug(f"Normalized {len(df)} session records")
    return df


def session_revenue(df: pd.DataFrame) -> pd.Series:
    """Per-session revenue: revenue, falling back to total_paid when revenue is 0."""
    return df["revenue"].where(df["revenue"] != 0, df["total_paid"])


def to_records(df: pd.DataFrame) -> tuple:
    """Convert a normalized frame to a tuple of plain dicts."""
    return tuple(df.to_dict("records"))
