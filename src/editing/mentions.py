"""
"@" mention autocomplete.

Typing "@" at the start of the document or after whitespace opens a
session; the characters typed after it become the query used to filter
post suggestions. Committing a suggestion replaces "@query" with a markdown
link to the post.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from editing.buffer import RangeSafeBuffer
from editing.formatting import FormatResult
from editing.posts import DEFAULT_SITE_BASE_URL, Post, reference_markdown
from editing.text_range import TextRange

logger = logging.getLogger(__name__)

TRIGGER = "@"
MAX_SUGGESTIONS = 3


class MentionState(Enum):
    IDLE = auto()
    COMPOSING = auto()


@dataclass
class MentionSession:
    """An in-progress mention: where the "@" sits and what follows it."""

    anchor_offset: int
    query: str = ""
    highlighted: int = 0


class RecentPosts(Protocol):
    """What the engine needs from the recency store."""

    def use(self, item: Post) -> Post: ...

    def merged(self, all_items: list[Post]) -> list[Post]: ...


class MentionEngine:
    """Idle/Composing state machine driven by text and cursor changes."""

    def __init__(
        self,
        recent: RecentPosts,
        site_base_url: str = DEFAULT_SITE_BASE_URL,
        max_suggestions: int = MAX_SUGGESTIONS,
    ):
        self._recent = recent
        self.site_base_url = site_base_url
        self.max_suggestions = max_suggestions
        self._session: MentionSession | None = None
        # Anchor of a session the person dismissed; not re-opened until the caret leaves it
        self._dismissed_anchor: int | None = None

    @property
    def session(self) -> MentionSession | None:
        return self._session

    @property
    def state(self) -> MentionState:
        return MentionState.IDLE if self._session is None else MentionState.COMPOSING

    @property
    def is_composing(self) -> bool:
        return self._session is not None

    @property
    def query(self) -> str:
        return self._session.query if self._session else ""

    def update(self, text: str, cursor: int) -> MentionSession | None:
        """Re-evaluate the session after a text or cursor change.

        Returns:
            The active session, or None when idle.
        """
        if self._session is not None:
            self._refresh(text, cursor)
        if self._session is None:
            self._detect_trigger(text, cursor)
        return self._session

    def _refresh(self, text: str, cursor: int) -> None:
        session = self._session
        start = session.anchor_offset + 1
        if cursor < start or cursor > len(text) or session.anchor_offset >= len(text):
            self._discard("range no longer valid")
            return
        if text[session.anchor_offset] != TRIGGER:
            self._discard("trigger character removed")
            return
        query = text[start:cursor]
        if " " in query or "\n" in query:
            self._discard("query ended by whitespace")
            return
        if query != session.query:
            session.query = query
            session.highlighted = 0

    def _detect_trigger(self, text: str, cursor: int) -> None:
        anchor = cursor - 1
        if anchor < 0 or cursor > len(text) or text[anchor] != TRIGGER:
            self._dismissed_anchor = None
            return
        if anchor == self._dismissed_anchor:
            return
        self._dismissed_anchor = None
        # "@" must open the document or follow whitespace, so "me@host" is not a mention
        if anchor == 0 or text[anchor - 1].isspace():
            self._session = MentionSession(anchor_offset=anchor)

    def _discard(self, reason: str) -> None:
        logger.debug("Discarding mention session: %s", reason)
        self._session = None

    def cancel(self) -> bool:
        """Close the session without touching the buffer (Escape)."""
        if self._session is None:
            return False
        self._dismissed_anchor = self._session.anchor_offset
        self._session = None
        return True

    def candidates(self, all_items: list[Post]) -> list[Post]:
        """Suggestions for the current query, recent posts first."""
        if self._session is None:
            return []
        pool = self._recent.merged(all_items)
        if self._session.query:
            pool = [post for post in pool if post.matches(self._session.query)]
        return pool[: self.max_suggestions]

    def move_highlight(self, delta: int, all_items: list[Post]) -> int:
        """Move the highlighted suggestion, clamped to the visible list."""
        if self._session is None:
            return 0
        count = len(self.candidates(all_items))
        self._session.highlighted = max(0, min(self._session.highlighted + delta, count - 1))
        return self._session.highlighted

    def highlighted_candidate(self, all_items: list[Post]) -> Post | None:
        if self._session is None:
            return None
        candidates = self.candidates(all_items)
        if 0 <= self._session.highlighted < len(candidates):
            return candidates[self._session.highlighted]
        return None

    def commit(self, item: Post, buffer: RangeSafeBuffer, cursor: int) -> FormatResult | None:
        """Replace "@query" with a link to ``item`` and record it as recently used.

        Returns:
            New buffer text and caret, or None when no session is open.
        """
        if self._session is None:
            return None
        anchor = self._session.anchor_offset
        link = reference_markdown(item, self.site_base_url)
        # A caret that raced behind the anchor must not produce a negative range
        target = buffer.clamp(TextRange.between(anchor, max(cursor, anchor)))
        text, length = buffer.replace(target, link)
        self._recent.use(item)
        self._session = None
        self._dismissed_anchor = None
        return FormatResult(text, min(target.offset + len(link), length))
