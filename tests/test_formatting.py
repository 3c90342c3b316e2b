"""Tests for the markdown formatting toggler."""

import pytest

from editing.buffer import RangeSafeBuffer
from editing.formatting import (
    FORMAT_SPECS,
    FormatKind,
    MarkdownToggler,
    insert_image_markdown,
    is_wrapped,
    looks_like_url,
    unwrap,
)
from editing.text_range import TextRange


def _apply(kind, text, selection, clipboard=None):
    buffer = RangeSafeBuffer(text)
    return MarkdownToggler(clipboard).apply(kind, buffer, selection)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    """looks_like_url(), is_wrapped() and unwrap()."""

    @pytest.mark.parametrize(
        "value", ["https://example.com", "http://a.b/c", "www.example.com"]
    )
    def test_url_prefixes(self, value):
        assert looks_like_url(value)

    @pytest.mark.parametrize("value", ["", None, "example.com", "ftp://x", " https://x"])
    def test_not_urls(self, value):
        assert not looks_like_url(value)

    def test_short_text_is_not_wrapped(self):
        """'**' is too short to carry both bold tokens."""
        assert not is_wrapped("**", "**", "**")
        assert not is_wrapped("***", "**", "**")

    def test_wrapped(self):
        assert is_wrapped("**x**", "**", "**")
        assert is_wrapped("****", "**", "**")

    def test_unwrap_strips_one_pair(self):
        assert unwrap("****x****", "**", "**") == "**x**"


# ---------------------------------------------------------------------------
# Empty selection - placeholder insertion
# ---------------------------------------------------------------------------


class TestInsertion:
    """With no selection, the placeholder lands at the caret."""

    @pytest.mark.parametrize(
        "kind, inserted, caret",
        [
            (FormatKind.HEADING, "# ", 2),
            (FormatKind.BOLD, "****", 2),
            (FormatKind.ITALIC, "__", 1),
            (FormatKind.STRIKETHROUGH, "~~~~", 2),
            (FormatKind.CODE, "``", 1),
            (FormatKind.CODE_BLOCK, "```\n\n```", 4),
            (FormatKind.IMAGE, "![]()", 2),
            (FormatKind.LINK, "[]()", 1),
        ],
    )
    def test_placeholder(self, kind, inserted, caret):
        result = _apply(kind, "ab", TextRange.caret(1))
        assert result.text == "a" + inserted + "b"
        assert result.caret == 1 + caret

    def test_every_toggling_kind_has_tokens(self):
        for kind in (
            FormatKind.HEADING,
            FormatKind.BOLD,
            FormatKind.ITALIC,
            FormatKind.STRIKETHROUGH,
            FormatKind.CODE,
            FormatKind.CODE_BLOCK,
            FormatKind.IMAGE,
            FormatKind.LINK,
        ):
            assert kind in FORMAT_SPECS

    def test_stale_caret_inserts_at_end(self):
        result = _apply(FormatKind.BOLD, "abc", TextRange.caret(99))
        assert result.text == "abc****"
        assert result.caret == 5


# ---------------------------------------------------------------------------
# Selection - wrap and unwrap
# ---------------------------------------------------------------------------


class TestToggle:
    """Wrapping a selection, and toggling it back off."""

    @pytest.mark.parametrize(
        "kind, wrapped",
        [
            (FormatKind.HEADING, "# word"),
            (FormatKind.BOLD, "**word**"),
            (FormatKind.ITALIC, "_word_"),
            (FormatKind.STRIKETHROUGH, "~~word~~"),
            (FormatKind.CODE, "`word`"),
            (FormatKind.CODE_BLOCK, "```\nword\n```"),
        ],
    )
    def test_wrap_then_unwrap(self, kind, wrapped):
        first = _apply(kind, "word", TextRange(0, 4))
        assert first.text == wrapped
        assert first.caret == len(wrapped)

        second = _apply(kind, first.text, TextRange(0, len(first.text)))
        assert second.text == "word"
        assert second.caret == 4

    def test_bold_round_trip_in_sentence(self):
        """Bold 'hello', then select the bolded text and toggle it off."""
        buffer = RangeSafeBuffer("hello world")
        toggler = MarkdownToggler()

        result = toggler.apply(FormatKind.BOLD, buffer, TextRange(0, 5))
        assert result.text == "**hello** world"
        assert result.caret == 9

        result = toggler.apply(FormatKind.BOLD, buffer, TextRange(0, 9))
        assert result.text == "hello world"
        assert result.caret == 5

    def test_partial_tokens_are_wrapped_again(self):
        result = _apply(FormatKind.BOLD, "**half", TextRange(0, 6))
        assert result.text == "****half**"

    def test_selection_past_end_is_clamped(self):
        result = _apply(FormatKind.ITALIC, "abc", TextRange(1, 40))
        assert result.text == "a_bc_"
        assert result.caret == 5

    def test_image_never_unwraps(self):
        result = _apply(FormatKind.IMAGE, "![alt]()", TextRange(0, 8))
        assert result.text == "![![alt]()]()"


# ---------------------------------------------------------------------------
# Links and the clipboard
# ---------------------------------------------------------------------------


class TestLink:
    """Link formatting reads a URL from the clipboard or stashes the label."""

    def test_selection_with_url_on_clipboard(self, clipboard):
        clipboard.value = "https://example.com/page"
        result = _apply(FormatKind.LINK, "see docs", TextRange(4, 4), clipboard)
        assert result.text == "see [docs](https://example.com/page)"
        assert result.caret == len(result.text)
        assert clipboard.writes == []

    def test_selection_without_url_copies_label(self, clipboard):
        clipboard.value = "not a url"
        result = _apply(FormatKind.LINK, "see docs", TextRange(4, 4), clipboard)
        assert result.text == "see [docs]()"
        assert clipboard.writes == ["docs"]

    def test_empty_selection_with_url(self, clipboard):
        clipboard.value = "www.example.com"
        result = _apply(FormatKind.LINK, "", TextRange.caret(0), clipboard)
        assert result.text == "[](www.example.com)"
        assert result.caret == len(result.text)

    def test_empty_selection_without_url(self, clipboard):
        result = _apply(FormatKind.LINK, "", TextRange.caret(0), clipboard)
        assert result.text == "[]()"
        assert result.caret == 1
        assert clipboard.writes == []

    def test_other_kinds_leave_clipboard_alone(self, clipboard):
        clipboard.value = "https://example.com"
        _apply(FormatKind.BOLD, "word", TextRange(0, 4), clipboard)
        _apply(FormatKind.IMAGE, "word", TextRange(0, 4), clipboard)
        assert clipboard.writes == []

    def test_no_clipboard(self):
        result = _apply(FormatKind.LINK, "docs", TextRange(0, 4))
        assert result.text == "[docs]()"


# ---------------------------------------------------------------------------
# Kinds without behavior
# ---------------------------------------------------------------------------


class TestNoOpKinds:
    """Block kinds without toggle behavior leave the buffer untouched."""

    @pytest.mark.parametrize(
        "kind",
        [
            FormatKind.TABLE,
            FormatKind.BLOCKQUOTE,
            FormatKind.HORIZONTAL_RULE,
            FormatKind.TASK_LIST,
        ],
    )
    def test_no_op(self, kind):
        result = _apply(kind, "text", TextRange(1, 2))
        assert result.text == "text"
        assert result.caret == 3


# ---------------------------------------------------------------------------
# insert_image_markdown()
# ---------------------------------------------------------------------------


class TestInsertImage:
    def test_replaces_selection(self):
        buffer = RangeSafeBuffer("before PLACEHOLDER after")
        result = insert_image_markdown(
            buffer, TextRange(7, 11), "cat.png", "https://cdn.example.com/cat.png"
        )
        assert result.text == "before ![cat.png](https://cdn.example.com/cat.png) after"
        assert result.caret == 7 + len("![cat.png](https://cdn.example.com/cat.png)")

    def test_inserts_at_caret(self):
        buffer = RangeSafeBuffer("")
        result = insert_image_markdown(buffer, TextRange.caret(5), "a.png", "u")
        assert result.text == "![a.png](u)"
        assert result.caret == len(result.text)
