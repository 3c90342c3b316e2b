"""
Range-safe text buffer.

Selection state coming from the editor widget can race with programmatic
text changes (an IME composition finishing mid-edit, an AI edit being
applied). Every read and write here clamps first, so a stale range degrades
to the nearest valid one instead of raising.
"""

import logging

from editing.text_range import TextRange

logger = logging.getLogger(__name__)


class RangeSafeBuffer:
    """Mutable string with clamped range reads and writes."""

    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def set_text(self, text: str) -> None:
        """Replace the whole buffer (host text change)."""
        self._text = text

    def clamp(self, text_range: TextRange) -> TextRange:
        """Clamp a range against the current buffer length."""
        return text_range.clamped(len(self._text))

    def clamp_offset(self, offset: int) -> int:
        return min(max(offset, 0), len(self._text))

    def substring(self, text_range: TextRange) -> str:
        """Return the text under the clamped range.

        A range built from negative values is rejected with an empty result.
        """
        if not text_range.is_valid:
            logger.debug("Rejected invalid range %s", text_range)
            return ""
        safe = self.clamp(text_range)
        return self._text[safe.offset : safe.end]

    def char_at(self, offset: int) -> str:
        """Return the character at ``offset``, or an empty string when out of range."""
        if 0 <= offset < len(self._text):
            return self._text[offset]
        return ""

    def replace(self, text_range: TextRange, replacement: str) -> tuple[str, int]:
        """Splice ``replacement`` over the clamped range.

        Returns:
            Tuple of (new buffer text, new buffer length).
        """
        safe = self.clamp(text_range)
        if safe != text_range:
            logger.debug("Clamped %s to %s (buffer length %d)", text_range, safe, len(self._text))
        self._text = self._text[: safe.offset] + replacement + self._text[safe.end :]
        return self._text, len(self._text)
