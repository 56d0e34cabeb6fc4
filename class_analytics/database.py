"""
Database operations for Supabase.

Handles client initialization, table reads and summary note persistence.
"""

import logging
from typing import Optional

import pandas as pd
from supabase import create_client, Client

from class_analytics.config import Config

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """
    Initialize and return a Supabase client.

    Returns:
        Client: Initialized Supabase client

    Raises:
        ValueError: If configuration is invalid
    """
    Config.validate()

    client = create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_ROLE_KEY)
    logger.info("Supabase client initialized successfully")
    return client


def query_table_to_dataframe(client: Client, table_name: str, columns: str = "*") -> pd.DataFrame:
    """
    Query a Supabase table and return as pandas DataFrame.

    Args:
        client: Supabase client
        table_name: Name of the table to query
        columns: Column names to select (default: "*" for all)

    Returns:
        DataFrame containing table data
    """
    try:
        response = client.table(table_name).select(columns).execute()
        df = pd.DataFrame(response.data)
        logger.info(f"Retrieved {len(df)} rows from {table_name}")
        return df
    except Exception as e:
        logger.error(f"Error querying table {table_name}: {e}")
        raise


class SupabaseNoteStore:
    """
    NoteStore backed by a Supabase table.

    The table holds one row per note with columns note_key (unique) and
    note_value.
    """

    def __init__(self, client: Client, table_name: Optional[str] = None):
        self._client = client
        self._table = table_name or Config.NOTES_TABLE

    def get_item(self, key: str) -> Optional[str]:
        try:
            response = (
                self._client.table(self._table)
                .select("note_value")
                .eq("note_key", key)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error reading note {key} from {self._table}: {e}")
            raise

        if not response.data:
            return None
        return response.data[0].get("note_value")

    def set_item(self, key: str, value: str) -> None:
        try:
            self._client.table(self._table).upsert(
                {"note_key": key, "note_value": value},
                on_conflict="note_key"
            ).execute()
            logger.debug(f"Upserted note {key} to {self._table}")
        except Exception as e:
            logger.error(f"Error writing note {key} to {self._table}: {e}")
            raise
