"""
Text ranges over a buffer, always clamped before use.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextRange:
    """An (offset, length) pair over a text buffer.

    Offsets are Python string indices. Hosts that count positions differently
    (Qt counts UTF-16 code units) translate before building a range.
    """

    offset: int
    length: int = 0

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def is_empty(self) -> bool:
        return self.length <= 0

    @property
    def is_valid(self) -> bool:
        """Whether the range was built from non-negative values."""
        return self.offset >= 0 and self.length >= 0

    def clamped(self, buffer_length: int) -> "TextRange":
        """Return the nearest range that fits a buffer of ``buffer_length``."""
        size = max(0, buffer_length)
        offset = min(max(self.offset, 0), size)
        length = min(max(self.length, 0), size - offset)
        return TextRange(offset, length)

    @classmethod
    def between(cls, start: int, end: int) -> "TextRange":
        """Build a range from two positions in either order."""
        low, high = sorted((start, end))
        return cls(low, high - low)

    @classmethod
    def caret(cls, offset: int) -> "TextRange":
        return cls(offset, 0)
