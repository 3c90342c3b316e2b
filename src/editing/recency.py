"""
Bounded most-recently-used list of posts.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timezone

from editing.posts import Post

MAX_RECENT_POSTS = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecencyCache:
    """Most-recently-used first, unique by post id, at most ``max_items`` long.

    The stored list is the only mutable state. Persisting it is up to the
    owner (see core.recent_posts.RecentPostsManager).
    """

    def __init__(
        self,
        items: Iterable[Post] = (),
        max_items: int = MAX_RECENT_POSTS,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._max_items = max_items
        self._clock = clock
        self._items: list[Post] = []
        seen: set[str] = set()
        for item in items:
            if item.id not in seen:
                seen.add(item.id)
                self._items.append(item)
        self._items = self._items[: self._max_items]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, post_id: object) -> bool:
        return any(item.id == post_id for item in self._items)

    @property
    def max_items(self) -> int:
        return self._max_items

    def items(self) -> list[Post]:
        """Recent posts, most recent first."""
        return self._items.copy()

    def use(self, item: Post) -> Post:
        """Record that ``item`` was just chosen.

        Returns:
            The stored copy, stamped with its last-used time.
        """
        stamped = replace(item, last_used_at=self._clock())
        # Remove if already in list (will be re-added at top)
        self._items = [existing for existing in self._items if existing.id != item.id]
        self._items.insert(0, stamped)
        self._items = self._items[: self._max_items]
        return stamped

    def merged(self, all_items: Iterable[Post]) -> list[Post]:
        """Recent posts first, then every other post in its original order."""
        recent_ids = {item.id for item in self._items}
        rest = [item for item in all_items if item.id not in recent_ids]
        return self._items + rest

    def clear(self) -> None:
        self._items = []

    def to_records(self) -> list[dict]:
        return [item.to_record() for item in self._items]

    @classmethod
    def from_records(cls, records: Iterable[dict], **kwargs) -> "RecencyCache":
        """Build a cache from stored records, skipping malformed ones."""
        posts = [Post.from_record(record) for record in records if isinstance(record, dict)]
        return cls([post for post in posts if post is not None], **kwargs)
