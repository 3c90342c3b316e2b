"""
Document statistics shown in the status line.
"""

import math
from typing import NamedTuple

WORDS_PER_MINUTE = 200


class DocumentStats(NamedTuple):
    characters: int
    words: int
    reading_minutes: int

    def summary(self) -> str:
        return f"{self.characters} characters • {self.words} words • {self.reading_minutes} min read"


def compute_stats(text: str) -> DocumentStats:
    """Count characters and words and estimate reading time (rounded up)."""
    words = len(text.split())
    return DocumentStats(
        characters=len(text),
        words=words,
        reading_minutes=math.ceil(words / WORDS_PER_MINUTE),
    )
