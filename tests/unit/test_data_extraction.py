"""
Unit tests for session extraction and column validation.
"""

from unittest.mock import MagicMock

import pandas as pd
import pytest

from class_analytics.data_extraction import (
    extract_sessions,
    load_sessions_csv,
    validate_columns,
)


class TestValidateColumns:
    """Tests for validate_columns."""

    def test_snake_case_columns_pass(self):
        df = pd.DataFrame(columns=["date", "capacity", "checked_in_count", "trainer_name"])

        validate_columns(df, "class_sessions")

    def test_camel_case_columns_pass(self):
        df = pd.DataFrame(columns=["date", "capacity", "checkedInCount"])

        validate_columns(df, "class_sessions")

    def test_missing_columns_raise(self):
        df = pd.DataFrame(columns=["date", "trainerName"])

        with pytest.raises(ValueError, match="capacity, checked_in_count"):
            validate_columns(df, "class_sessions")


class TestExtractSessions:
    """Tests for extract_sessions with a mocked Supabase client."""

    def _client(self, rows):
        client = MagicMock()
        client.table.return_value.select.return_value.execute.return_value.data = rows
        return client

    def test_returns_normalized_sessions(self, studio_sessions):
        client = self._client(studio_sessions)

        df = extract_sessions(client, "class_sessions")

        client.table.assert_called_with("class_sessions")
        assert len(df) == len(studio_sessions)
        assert df["checked_in_count"].tolist() == [0, 5, 10, 18, 6]

    def test_empty_table(self):
        df = extract_sessions(self._client([]), "class_sessions")

        assert df.empty
        assert "checked_in_count" in df.columns

    def test_invalid_table_raises(self):
        client = self._client([{"date": "2024-03-04"}])

        with pytest.raises(ValueError, match="missing required columns"):
            extract_sessions(client, "class_sessions")


class TestLoadSessionsCsv:
    """Tests for load_sessions_csv."""

    def test_loads_and_normalizes(self, tmp_path):
        path = tmp_path / "sessions.csv"
        path.write_text(
            "uniqueId,cleanedClass,date,dayOfWeek,time,trainerName,capacity,checkedInCount,totalPaid\n"
            "0042,HIIT,2024-03-04,Monday,07:00,Maya Patel,10,5,450\n"
            "0042,HIIT,2024-03-06,Wednesday,07:00,,10,,\n"
        )

        df = load_sessions_csv(path)

        assert df["unique_id"].tolist() == ["0042", "0042"]
        assert df["time"].tolist() == ["07:00", "07:00"]
        assert df["checked_in_count"].tolist() == [5, 0]
        assert df["total_paid"].tolist() == [450.0, 0.0]
        assert df.loc[1, "trainer_name"] is None

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "sessions.csv"
        path.write_text("date,trainerName\n2024-03-04,Maya Patel\n")

        with pytest.raises(ValueError, match="sessions.csv"):
            load_sessions_csv(path)
