"""
Review lifecycle for AI-proposed rewrites.

A generation streams partial full-document proposals; each one replaces the
held proposal and refreshes the diff. When the stream ends (or is cancelled)
the last proposal is kept for review until it is accepted or rejected.
"""

import logging
from enum import Enum, auto

from editing.diff import WordDiff, WordDiffEngine

logger = logging.getLogger(__name__)


class ReviewState(Enum):
    IDLE = auto()
    STREAMING = auto()
    REVIEWING = auto()


class ReviewSession:
    """Holds the original document and the latest proposal for one rewrite."""

    def __init__(self, engine: WordDiffEngine | None = None):
        self._engine = engine or WordDiffEngine()
        self._state = ReviewState.IDLE
        self._original = ""
        self._proposed: str | None = None

    @property
    def state(self) -> ReviewState:
        return self._state

    @property
    def original(self) -> str:
        return self._original

    @property
    def proposed(self) -> str | None:
        return self._proposed

    @property
    def is_streaming(self) -> bool:
        return self._state is ReviewState.STREAMING

    @property
    def is_pending(self) -> bool:
        """Whether a finished proposal is waiting for accept or reject."""
        return self._state is ReviewState.REVIEWING

    def begin(self, original: str) -> None:
        """Start holding proposals for ``original``.

        A review still waiting for a decision is invalidated first.
        """
        if self._state is ReviewState.REVIEWING:
            logger.debug("Invalidating pending review for a new generation")
        self._original = original
        self._proposed = None
        self._engine.reset()
        self._state = ReviewState.STREAMING

    def on_token(self, partial: str) -> WordDiff | None:
        """Replace the held proposal and recompute the diff.

        Ignored unless a generation is streaming.
        """
        if self._state is not ReviewState.STREAMING:
            return None
        self._proposed = partial
        return self._engine.diff(self._original, partial)

    def finish(self, final: str | None = None) -> WordDiff | None:
        """End the stream, optionally with a cleaned final proposal.

        Returns:
            The diff to review, or None when there is nothing to show.
        """
        if self._state is not ReviewState.STREAMING:
            return None
        if final is not None:
            self._proposed = final
        return self._settle()

    def cancel(self) -> WordDiff | None:
        """Stop consuming the stream, keeping whatever arrived last."""
        if self._state is not ReviewState.STREAMING:
            return None
        return self._settle()

    def _settle(self) -> WordDiff | None:
        proposed = self._proposed
        if not proposed or not proposed.strip() or proposed == self._original:
            logger.debug("Generation produced no change, skipping review")
            self._clear()
            return None
        self._state = ReviewState.REVIEWING
        return self._engine.diff(self._original, proposed)

    def current_diff(self) -> WordDiff | None:
        if self._proposed is None or self._state is ReviewState.IDLE:
            return None
        return self._engine.diff(self._original, self._proposed)

    def accept(self) -> str | None:
        """Resolve the review into the new document text."""
        if self._state is not ReviewState.REVIEWING:
            return None
        accepted = self._proposed
        self._clear()
        return accepted

    def reject(self) -> bool:
        """Discard the proposal, leaving the document untouched."""
        if self._state is not ReviewState.REVIEWING:
            return False
        self._clear()
        return True

    def _clear(self) -> None:
        self._state = ReviewState.IDLE
        self._original = ""
        self._proposed = None
        self._engine.reset()
