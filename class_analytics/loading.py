"""
Loading state for the dashboard.

Tracks whether data is being fetched and the title/subtitle shown meanwhile.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


DEFAULT_TITLE = "Loading..."
DEFAULT_SUBTITLE = "Please wait while we fetch your data"

LOADER_VARIANTS = ("default", "analytics", "sales", "conversion")


def loader_variant(variant: Optional[str]) -> str:
    """Known loader variant, or "default"."""
    if variant in LOADER_VARIANTS:
        return variant
    return "default"


class LoadingState:
    """
    Loading flag plus the messages shown while loading.

    Title and subtitle persist between loads; set_loading only replaces them
    when new non-empty values are given.
    """

    def __init__(self, variant: str = "default"):
        self.is_loading = False
        self.title = DEFAULT_TITLE
        self.subtitle = DEFAULT_SUBTITLE
        self.variant = loader_variant(variant)

    def set_loading(self, loading: bool, title: Optional[str] = None, subtitle: Optional[str] = None) -> None:
        self.is_loading = loading
        if title:
            self.title = title
        if subtitle:
            self.subtitle = subtitle

        if loading:
            logger.info(f"{self.title} - {self.subtitle}")
        else:
            logger.debug("Loading finished")

    @contextmanager
    def loading(self, title: Optional[str] = None, subtitle: Optional[str] = None) -> Iterator["LoadingState"]:
        """Set loading for the duration of the block, clearing it on exit even on error."""
        self.set_loading(True, title, subtitle)
        try:
            yield self
        finally:
            self.set_loading(False)
