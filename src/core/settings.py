"""
Application settings backed by QSettings.
"""

import json
import logging

from PyQt6.QtCore import QSettings

from editing.mentions import MAX_SUGGESTIONS
from editing.posts import DEFAULT_SITE_BASE_URL

ORGANIZATION = "Inkwell"
APPLICATION = "Editor"

DEFAULT_FONT_FAMILY = "Consolas"
DEFAULT_FONT_SIZE = 12

logger = logging.getLogger(__name__)


class SettingsManager:
    """Manages editor settings and the persisted recent-post list."""

    def __init__(self):
        self.settings = QSettings(ORGANIZATION, APPLICATION)

    # Mentions
    def get_site_base_url(self) -> str:
        """Get the base URL post references link to."""
        value = self.settings.value("site_base_url", DEFAULT_SITE_BASE_URL)
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_SITE_BASE_URL
        return value.strip().rstrip("/")

    def set_site_base_url(self, url: str):
        """Set the base URL post references link to."""
        self.settings.setValue("site_base_url", url.strip().rstrip("/"))

    def get_suggestion_limit(self) -> int:
        """Get how many mention suggestions are shown."""
        try:
            limit = int(self.settings.value("suggestion_limit", MAX_SUGGESTIONS))
        except (ValueError, TypeError):
            return MAX_SUGGESTIONS
        return max(1, min(10, limit))

    def set_suggestion_limit(self, limit: int):
        self.settings.setValue("suggestion_limit", max(1, min(10, int(limit))))

    def get_recent_posts(self) -> list[dict]:
        """Get stored recent-post records, most recent first."""
        value = self.settings.value("recent_posts", "")
        if not value:
            return []
        try:
            records = json.loads(value)
        except (json.JSONDecodeError, TypeError):
            logger.debug("Ignoring corrupt recent_posts setting")
            return []
        if not isinstance(records, list):
            return []
        return [record for record in records if isinstance(record, dict)]

    def set_recent_posts(self, records: list[dict]):
        """Save recent-post records."""
        # Stored as a JSON string; lastUsedAt may be null
        self.settings.setValue("recent_posts", json.dumps(records))

    # Editor font
    def get_font_family(self) -> str:
        """Get the editor font family."""
        return self.settings.value("font_family", DEFAULT_FONT_FAMILY)

    def set_font_family(self, family: str):
        """Set the editor font family."""
        self.settings.setValue("font_family", family)

    def get_font_size(self) -> int:
        """Get the editor font size."""
        try:
            size = self.settings.value("font_size", DEFAULT_FONT_SIZE)
            if size is None:
                return DEFAULT_FONT_SIZE
            size = int(size)
            if size <= 0:
                return DEFAULT_FONT_SIZE
            return max(8, min(72, size))
        except (ValueError, TypeError):
            return DEFAULT_FONT_SIZE

    def set_font_size(self, size: int):
        """Set the editor font size."""
        size = max(8, min(72, int(size)))
        self.settings.setValue("font_size", size)
