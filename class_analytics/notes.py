"""
Editable summary notes for the class performance ranking views.

One free-text note per ranking view, kept in a key-value string store.
"""

import json
import logging
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


SUMMARY_WITH_EMPTY = "class-performance-summary-with-empty"
SUMMARY_WITHOUT_EMPTY = "class-performance-summary-without-empty"

DEFAULT_NOTES = {
    SUMMARY_WITH_EMPTY: (
        "• Classes are ranked by average check-ins including empty sessions\n"
        "• Higher fill percentages indicate better class popularity\n"
        "• Revenue metrics show financial performance per class"
    ),
    SUMMARY_WITHOUT_EMPTY: (
        "• Classes are ranked by average check-ins excluding empty sessions\n"
        "• This view shows true performance when classes actually run\n"
        "• Better indicator of class engagement when sessions occur"
    ),
}


def summary_key(exclude_empty: bool) -> str:
    """Note key for one of the two ranking views."""
    return SUMMARY_WITHOUT_EMPTY if exclude_empty else SUMMARY_WITH_EMPTY


class NoteStore(Protocol):
    """Key-value store of string values."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class InMemoryNoteStore:
    """NoteStore kept in a dictionary."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class SummaryNotes:
    """
    Summary notes backed by a NoteStore.

    Values are stored JSON-encoded. Read failures fall back to the default
    note; write failures are logged and the new value is still kept for
    this process.
    """

    def __init__(self, store: NoteStore):
        self._store = store
        self._values: Dict[str, str] = {}

    @staticmethod
    def _check_key(key: str) -> None:
        if key not in DEFAULT_NOTES:
            raise KeyError(f"Unknown summary note key: {key}")

    def get(self, key: str) -> str:
        """
        Current note text for key.

        Raises:
            KeyError: If key is not one of the summary note keys
        """
        self._check_key(key)
        if key in self._values:
            return self._values[key]

        value = DEFAULT_NOTES[key]
        try:
            raw = self._store.get_item(key)
            if raw:
                value = json.loads(raw)
        except Exception as e:
            logger.error(f"Error reading summary note {key}: {e}")

        self._values[key] = value
        return value

    def set(self, key: str, text: str) -> None:
        """
        Replace the note text for key.

        Raises:
            KeyError: If key is not one of the summary note keys
        """
        self._check_key(key)
        self._values[key] = text
        try:
            self._store.set_item(key, json.dumps(text))
            logger.info(f"Saved summary note {key}")
        except Exception as e:
            logger.error(f"Error saving summary note {key}: {e}")
