"""
Markdown formatting toggler.

Turns a format command plus the current selection into a text mutation:
wraps or unwraps a selection, or drops a placeholder token at the caret.
"""

import logging
from enum import Enum, auto
from typing import NamedTuple, Protocol

from editing.buffer import RangeSafeBuffer
from editing.text_range import TextRange

logger = logging.getLogger(__name__)

# Clipboard strings starting with one of these are embedded as link targets
URL_PREFIXES = ("http://", "https://", "www.")


class FormatKind(Enum):
    """Markdown decorations the toolbar and shortcuts can request."""

    HEADING = auto()
    BOLD = auto()
    ITALIC = auto()
    STRIKETHROUGH = auto()
    CODE = auto()
    CODE_BLOCK = auto()
    IMAGE = auto()
    LINK = auto()
    # Block kinds with no toggle or insertion behavior; applying them is a no-op
    TABLE = auto()
    BLOCKQUOTE = auto()
    HORIZONTAL_RULE = auto()
    TASK_LIST = auto()


class FormatSpec(NamedTuple):
    """Wrap tokens and empty-selection placeholder for one kind."""

    prefix: str
    suffix: str
    insertion: str
    caret_offset: int
    # Image and link selections always become a label; there is nothing to unwrap
    toggles: bool = True


FORMAT_SPECS: dict[FormatKind, FormatSpec] = {
    FormatKind.HEADING: FormatSpec("# ", "", "# ", 2),
    FormatKind.BOLD: FormatSpec("**", "**", "****", 2),
    FormatKind.ITALIC: FormatSpec("_", "_", "__", 1),
    FormatKind.STRIKETHROUGH: FormatSpec("~~", "~~", "~~~~", 2),
    FormatKind.CODE: FormatSpec("`", "`", "``", 1),
    FormatKind.CODE_BLOCK: FormatSpec("```\n", "\n```", "```\n\n```", 4),
    FormatKind.IMAGE: FormatSpec("![", "]()", "![]()", 2, toggles=False),
    FormatKind.LINK: FormatSpec("[", "]()", "[]()", 1, toggles=False),
}


class FormatResult(NamedTuple):
    """Buffer text and caret after a formatting operation."""

    text: str
    caret: int


class Clipboard(Protocol):
    """System clipboard as seen by link formatting."""

    def text(self) -> str: ...

    def set_text(self, text: str) -> None: ...


def looks_like_url(value: str | None) -> bool:
    """Check whether a clipboard string can be used as a link target."""
    return bool(value) and value.startswith(URL_PREFIXES)


def is_wrapped(text: str, prefix: str, suffix: str) -> bool:
    """Check whether ``text`` already carries both tokens.

    Text shorter than the two tokens combined is never considered wrapped,
    so ``"**"`` is not read as an empty bold span.
    """
    if len(text) < len(prefix) + len(suffix):
        return False
    return text.startswith(prefix) and text.endswith(suffix)


def unwrap(text: str, prefix: str, suffix: str) -> str:
    """Strip exactly one prefix and one suffix occurrence."""
    return text[len(prefix) : len(text) - len(suffix)]


class MarkdownToggler:
    """Applies markdown formatting to a RangeSafeBuffer.

    This is the only component allowed to read or write the clipboard, and
    only while formatting a link.
    """

    def __init__(self, clipboard: Clipboard | None = None):
        self._clipboard = clipboard

    def apply(self, kind: FormatKind, buffer: RangeSafeBuffer, selection: TextRange) -> FormatResult:
        """Format the selection (or caret) and mutate the buffer.

        Args:
            kind: Requested decoration
            buffer: Buffer to mutate
            selection: Current selection; clamped before use

        Returns:
            FormatResult with the new buffer text and caret offset.
        """
        spec = FORMAT_SPECS.get(kind)
        safe = buffer.clamp(selection)
        if spec is None:
            logger.debug("No formatting behavior for %s, ignoring", kind)
            return FormatResult(buffer.text, safe.end)

        if safe.length > 0:
            formatted = self._format_selection(kind, spec, buffer.substring(safe))
            caret_offset = len(formatted)
        else:
            formatted, caret_offset = self._placeholder(kind, spec)

        text, length = buffer.replace(safe, formatted)
        return FormatResult(text, min(safe.offset + caret_offset, length))

    def _format_selection(self, kind: FormatKind, spec: FormatSpec, selected: str) -> str:
        if kind is FormatKind.LINK:
            return self._format_link(selected)
        if spec.toggles and is_wrapped(selected, spec.prefix, spec.suffix):
            return unwrap(selected, spec.prefix, spec.suffix)
        return f"{spec.prefix}{selected}{spec.suffix}"

    def _format_link(self, label: str) -> str:
        url = self._clipboard_url()
        if url:
            return f"[{label}]({url})"
        # Keep the label around so it can be pasted elsewhere
        if self._clipboard is not None:
            self._clipboard.set_text(label)
        return f"[{label}]()"

    def _placeholder(self, kind: FormatKind, spec: FormatSpec) -> tuple[str, int]:
        if kind is FormatKind.LINK:
            url = self._clipboard_url()
            if url:
                insertion = f"[]({url})"
                return insertion, len(insertion)
        return spec.insertion, spec.caret_offset

    def _clipboard_url(self) -> str | None:
        if self._clipboard is None:
            return None
        value = self._clipboard.text()
        return value if looks_like_url(value) else None


def insert_image_markdown(
    buffer: RangeSafeBuffer, selection: TextRange, file_name: str, url: str
) -> FormatResult:
    """Replace the selection with an image reference, e.g. after an upload."""
    markdown = f"![{file_name}]({url})"
    safe = buffer.clamp(selection)
    text, length = buffer.replace(safe, markdown)
    return FormatResult(text, min(safe.offset + len(markdown), length))
