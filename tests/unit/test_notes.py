"""
Unit tests for the ranking view summary notes.
"""

import json
from unittest.mock import MagicMock

import pytest

from class_analytics.database import SupabaseNoteStore
from class_analytics.notes import (
    DEFAULT_NOTES,
    SUMMARY_WITH_EMPTY,
    SUMMARY_WITHOUT_EMPTY,
    InMemoryNoteStore,
    SummaryNotes,
    summary_key,
)


class TestSummaryNotes:
    """Tests for SummaryNotes."""

    def test_defaults_when_store_empty(self):
        notes = SummaryNotes(InMemoryNoteStore())

        assert notes.get(SUMMARY_WITH_EMPTY) == DEFAULT_NOTES[SUMMARY_WITH_EMPTY]
        assert notes.get(SUMMARY_WITHOUT_EMPTY) == DEFAULT_NOTES[SUMMARY_WITHOUT_EMPTY]

    def test_set_persists_json_encoded(self):
        store = InMemoryNoteStore()
        notes = SummaryNotes(store)

        notes.set(SUMMARY_WITH_EMPTY, "• Barre leads this month")

        assert store.get_item(SUMMARY_WITH_EMPTY) == json.dumps("• Barre leads this month")
        assert SummaryNotes(store).get(SUMMARY_WITH_EMPTY) == "• Barre leads this month"

    def test_notes_are_independent(self):
        notes = SummaryNotes(InMemoryNoteStore())

        notes.set(SUMMARY_WITHOUT_EMPTY, "custom")

        assert notes.get(SUMMARY_WITHOUT_EMPTY) == "custom"
        assert notes.get(SUMMARY_WITH_EMPTY) == DEFAULT_NOTES[SUMMARY_WITH_EMPTY]

    def test_unknown_key(self):
        notes = SummaryNotes(InMemoryNoteStore())

        with pytest.raises(KeyError):
            notes.get("trainer-summary")
        with pytest.raises(KeyError):
            notes.set("trainer-summary", "text")

    def test_corrupt_value_falls_back_to_default(self):
        store = InMemoryNoteStore({SUMMARY_WITH_EMPTY: "{not json"})

        assert SummaryNotes(store).get(SUMMARY_WITH_EMPTY) == DEFAULT_NOTES[SUMMARY_WITH_EMPTY]

    def test_read_failure_falls_back_to_default(self):
        store = MagicMock()
        store.get_item.side_effect = ConnectionError("offline")

        assert SummaryNotes(store).get(SUMMARY_WITH_EMPTY) == DEFAULT_NOTES[SUMMARY_WITH_EMPTY]

    def test_write_failure_keeps_value_in_process(self):
        store = MagicMock()
        store.get_item.return_value = None
        store.set_item.side_effect = ConnectionError("offline")
        notes = SummaryNotes(store)

        notes.set(SUMMARY_WITH_EMPTY, "draft")

        assert notes.get(SUMMARY_WITH_EMPTY) == "draft"


def test_summary_key():
    assert summary_key(False) == SUMMARY_WITH_EMPTY
    assert summary_key(True) == SUMMARY_WITHOUT_EMPTY


class TestSupabaseNoteStore:
    """Tests for the Supabase-backed note store."""

    def test_get_item(self):
        client = MagicMock()
        query = client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = [{"note_value": '"saved"'}]

        store = SupabaseNoteStore(client, "dashboard_notes")

        assert store.get_item(SUMMARY_WITH_EMPTY) == '"saved"'
        client.table.assert_called_with("dashboard_notes")
        client.table.return_value.select.return_value.eq.assert_called_with(
            "note_key", SUMMARY_WITH_EMPTY
        )

    def test_get_missing_item(self):
        client = MagicMock()
        client.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []

        assert SupabaseNoteStore(client, "dashboard_notes").get_item(SUMMARY_WITH_EMPTY) is None

    def test_set_item_upserts(self):
        client = MagicMock()

        SupabaseNoteStore(client, "dashboard_notes").set_item(SUMMARY_WITH_EMPTY, '"text"')

        client.table.return_value.upsert.assert_called_once_with(
            {"note_key": SUMMARY_WITH_EMPTY, "note_value": '"text"'},
            on_conflict="note_key",
        )

    def test_errors_propagate(self):
        client = MagicMock()
        client.table.return_value.upsert.return_value.execute.side_effect = RuntimeError("denied")

        with pytest.raises(RuntimeError):
            SupabaseNoteStore(client, "dashboard_notes").set_item(SUMMARY_WITH_EMPTY, "x")
