"""
Recent posts manager - keeps the mention recency list and persists it.
"""

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from core.settings import SettingsManager
from editing.posts import Post
from editing.recency import RecencyCache

logger = logging.getLogger(__name__)


class RecentPostsManager(QObject):
    """Owns the RecencyCache and writes it to settings after every change."""

    # Signal emitted when the recent posts list changes
    posts_changed = pyqtSignal()

    def __init__(self, settings: SettingsManager | None = None, parent=None):
        super().__init__(parent)
        self._settings = settings or SettingsManager()
        self._cache = RecencyCache()
        self._load()

    def _load(self):
        """Seed the cache from settings."""
        records = self._settings.get_recent_posts()
        self._cache = RecencyCache.from_records(records)
        if len(self._cache) != len(records):
            logger.debug("Dropped %d unusable recent-post records", len(records) - len(self._cache))
            # Save back the cleaned list
            self._save()

    def _save(self):
        """Save recent posts to settings."""
        self._settings.set_recent_posts(self._cache.to_records())

    def use(self, post: Post) -> Post:
        """Mark a post as just referenced."""
        stamped = self._cache.use(post)
        self._save()
        self.posts_changed.emit()
        return stamped

    def merged(self, all_posts: list[Post]) -> list[Post]:
        """Recent posts first, then the rest of ``all_posts``."""
        return self._cache.merged(all_posts)

    def clear(self):
        """Clear all recent posts."""
        self._cache.clear()
        self._save()
        self.posts_changed.emit()

    def get_posts(self) -> list[Post]:
        """Get the list of recent posts."""
        return self._cache.items()
