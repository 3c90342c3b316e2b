"""
Post references offered by "@" mentions.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

logger = logging.getLogger(__name__)

DEFAULT_SITE_BASE_URL = "https://example.com/writings"


@dataclass(frozen=True)
class Post:
    """A published post that can be referenced from the document.

    Identity is ``id``; the other fields are display data.
    """

    id: str
    title: str
    slug: str
    last_used_at: datetime | None = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title or slug."""
        needle = query.casefold()
        return needle in self.title.casefold() or needle in self.slug.casefold()

    def to_record(self) -> dict:
        """Serialize for settings storage."""
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "lastUsedAt": self.last_used_at.isoformat() if self.last_used_at else None,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Post | None":
        """Deserialize a stored record, returning None if it is malformed."""
        try:
            last_used = record.get("lastUsedAt")
            return cls(
                id=str(record["id"]),
                title=str(record["title"]),
                slug=str(record["slug"]),
                last_used_at=datetime.fromisoformat(last_used) if last_used else None,
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.debug("Skipping malformed post record: %r", record)
            return None


def canonical_url(slug: str, base_url: str = DEFAULT_SITE_BASE_URL) -> str:
    """Public URL for a post slug."""
    return f"{base_url.rstrip('/')}/{slug}"


def reference_markdown(post: Post, base_url: str = DEFAULT_SITE_BASE_URL) -> str:
    """Markdown link inserted when a mention is committed."""
    return f"[{post.title}]({canonical_url(post.slug, base_url)})"
