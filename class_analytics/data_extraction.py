"""
Session data extraction.

Pulls class-session records from Supabase or a CSV export with column
validation, and normalizes them for aggregation.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from supabase import Client

from class_analytics.config import Config
from class_analytics.database import get_supabase_client, query_table_to_dataframe
from class_analytics.records import FIELD_ALIASES, TEXT_COLUMNS, normalize_sessions

logger = logging.getLogger(__name__)


# Columns a session source must provide (normalized names)
REQUIRED_COLUMNS = ["date", "capacity", "checked_in_count"]


def validate_columns(df: pd.DataFrame, source_name: str) -> None:
    """
    Validate that DataFrame contains all required session columns.

    Upstream camelCase names count as their normalized equivalents.

    Args:
        df: DataFrame to validate
        source_name: Name of the table or file (for error messages)

    Raises:
        ValueError: If required columns are missing
    """
    present = {FIELD_ALIASES.get(col, col) for col in df.columns}
    missing = [col for col in REQUIRED_COLUMNS if col not in present]

    if missing:
        raise ValueError(
            f"Source {source_name} is missing required columns: {', '.join(missing)}. "
            f"Found columns: {', '.join(map(str, df.columns))}"
        )

    logger.info(f"Source {source_name} validation passed ({len(df)} rows)")


def extract_sessions(client: Optional[Client] = None, table_name: Optional[str] = None) -> pd.DataFrame:
    """
    Extract all class sessions from Supabase.

    Args:
        client: Optional Supabase client (creates new one if not provided)
        table_name: Source table (default: Config.SESSIONS_TABLE)

    Returns:
        Normalized session DataFrame
    """
    if client is None:
        client = get_supabase_client()
    table_name = table_name or Config.SESSIONS_TABLE

    logger.info(f"Extracting session data from {table_name}")
    df = query_table_to_dataframe(client, table_name)

    # An empty table has no columns to validate
    if df.empty:
        logger.warning(f"No sessions found in {table_name}")
        return normalize_sessions(df)

    validate_columns(df, table_name)
    return normalize_sessions(df)


def load_sessions_csv(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load class sessions from a CSV export.

    Args:
        path: Path to the CSV file

    Returns:
        Normalized session DataFrame
    """
    path = Path(path)
    logger.info(f"Loading session data from {path}")

    # Keep identifiers and times as text (e.g. "07:00", zero-padded ids)
    text_columns = TEXT_COLUMNS + [k for k, v in FIELD_ALIASES.items() if v in TEXT_COLUMNS]
    df = pd.read_csv(path, dtype={col: str for col in text_columns})
    validate_columns(df, path.name)
    return normalize_sessions(df)
