"""
Word-level diff for reviewing AI rewrites.

Highlighting runs from the first differing word to the end of each side.
This is not a minimal edit script: a single inserted word near the top
marks the whole remainder as changed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class DiffKind(Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiffSpan:
    """A run of text with its review styling."""

    text: str
    kind: DiffKind = DiffKind.UNCHANGED


class WordDiff(NamedTuple):
    """Spans for both renderings plus the word index where they diverge."""

    original: list[DiffSpan]
    proposed: list[DiffSpan]
    divergence: int


def split_words(text: str) -> list[str]:
    """Split on runs of whitespace, dropping empty tokens."""
    return text.split()


def divergence_index(original_words: list[str], proposed_words: list[str]) -> int:
    """Return the first word position where the two lists differ.

    When one list is a prefix of the other, the divergence is the length of
    the shorter list (the extra trailing words are the change).
    """
    overlap = min(len(original_words), len(proposed_words))
    for index in range(overlap):
        if original_words[index] != proposed_words[index]:
            return index
    return overlap


def render_side(text: str, words: list[str], divergence: int, kind: DiffKind) -> list[DiffSpan]:
    """Build the span list for one side.

    Words before ``divergence`` become unchanged spans carrying the
    whitespace that precedes them; everything from the divergent word to the
    end of the text becomes one ``kind`` span. Word positions are found by
    searching forward from the end of the previous match, so repeated words
    never match backwards.
    """
    spans: list[DiffSpan] = []
    cursor = 0
    for word in words[:divergence]:
        end = text.find(word, cursor) + len(word)
        spans.append(DiffSpan(text[cursor:end]))
        cursor = end

    if divergence < len(words):
        start = text.find(words[divergence], cursor)
        if start > cursor:
            spans.append(DiffSpan(text[cursor:start]))
        spans.append(DiffSpan(text[start:], kind))
    elif cursor < len(text):
        spans.append(DiffSpan(text[cursor:]))
    return spans


def diff_words(original: str, proposed: str) -> WordDiff:
    """Compute review spans for the original and proposed documents."""
    if original == proposed:
        same = [DiffSpan(original)]
        return WordDiff(same, list(same), len(split_words(original)))
    if not proposed:
        return WordDiff([DiffSpan(original, DiffKind.REMOVED)], [], 0)
    if not original:
        return WordDiff([], [DiffSpan(proposed, DiffKind.ADDED)], 0)

    original_words = split_words(original)
    proposed_words = split_words(proposed)
    divergence = divergence_index(original_words, proposed_words)
    return WordDiff(
        render_side(original, original_words, divergence, DiffKind.REMOVED),
        render_side(proposed, proposed_words, divergence, DiffKind.ADDED),
        divergence,
    )


def join_spans(spans: list[DiffSpan]) -> str:
    """Concatenate span text, ignoring styling."""
    return "".join(span.text for span in spans)


class WordDiffEngine:
    """Recomputes review spans as a proposal streams in.

    Streaming delivers the same proposal repeatedly (every token, then the
    final result), so the last computation is reused when inputs match.
    """

    def __init__(self):
        self._last_inputs: tuple[str, str] | None = None
        self._last_result: WordDiff | None = None

    def diff(self, original: str, proposed: str) -> WordDiff:
        if self._last_inputs == (original, proposed) and self._last_result is not None:
            return self._last_result
        result = diff_words(original, proposed)
        self._last_inputs = (original, proposed)
        self._last_result = result
        return result

    def reset(self) -> None:
        self._last_inputs = None
        self._last_result = None
