"""
Editor controller - the typed event channel between the editor widget and
the editing core.

Forwards text and selection changes into the RangeSafeBuffer and
MentionEngine, runs format commands through the MarkdownToggler, and sends
resulting mutations back to the widget via signals.
"""

import contextlib

from PyQt6.QtCore import QObject, pyqtSignal

from core.recent_posts import RecentPostsManager
from core.settings import SettingsManager
from editing.buffer import RangeSafeBuffer
from editing.formatting import (
    Clipboard,
    FormatKind,
    FormatResult,
    MarkdownToggler,
    insert_image_markdown,
)
from editing.mentions import MentionEngine
from editing.posts import Post
from editing.stats import DocumentStats, compute_stats
from editing.text_range import TextRange

# Keys the suggestion list reacts to while a mention is being composed
MENTION_KEYS = ("escape", "up", "down", "enter", "return", "tab")


class EditorController(QObject):
    """Owns the buffer, toggler and mention engine for one editor."""

    # New buffer text and caret after a format or mention commit
    text_mutated = pyqtSignal(str, int)
    # Candidate posts (at most the suggestion limit), query, highlighted row
    suggestions_changed = pyqtSignal(list, str, int)
    suggestions_closed = pyqtSignal()
    stats_changed = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        clipboard: Clipboard | None = None,
        settings: SettingsManager | None = None,
        recent_posts: RecentPostsManager | None = None,
    ):
        super().__init__(parent)
        self._settings = settings or SettingsManager()
        self._recent = recent_posts or RecentPostsManager(self._settings, self)
        self._buffer = RangeSafeBuffer()
        self._selection = TextRange(0, 0)
        self._toggler = MarkdownToggler(clipboard)
        self._mentions = MentionEngine(
            self._recent,
            site_base_url=self._settings.get_site_base_url(),
            max_suggestions=self._settings.get_suggestion_limit(),
        )
        self._posts: list[Post] = []
        self._editor = None
        # Set while an AI review is open; accepting it replaces the whole document
        self._locked = False

    @property
    def buffer(self) -> RangeSafeBuffer:
        return self._buffer

    @property
    def selection(self) -> TextRange:
        return self._selection

    @property
    def mentions(self) -> MentionEngine:
        return self._mentions

    @property
    def recent_posts(self) -> RecentPostsManager:
        return self._recent

    def set_available_posts(self, posts: list[Post]) -> None:
        """Set every post that can be referenced (loaded by the host)."""
        self._posts = list(posts)
        if self._mentions.is_composing:
            self._emit_suggestions()

    @property
    def is_locked(self) -> bool:
        return self._locked

    def set_locked(self, locked: bool) -> None:
        """Block formatting, mentions and image inserts (pending AI review)."""
        self._locked = locked
        if locked and self._mentions.cancel():
            self.suggestions_closed.emit()

    def refresh_settings(self) -> None:
        """Re-read mention settings after they change."""
        self._mentions.site_base_url = self._settings.get_site_base_url()
        self._mentions.max_suggestions = self._settings.get_suggestion_limit()

    def stats(self) -> DocumentStats:
        return compute_stats(self._buffer.text)

    # ─── Inbound events ───

    def on_text_change(self, text: str) -> None:
        """Host text changed (typing, paste, undo)."""
        self._buffer.set_text(text)
        self._selection = self._buffer.clamp(self._selection)
        self._update_mentions()
        self.stats_changed.emit(self.stats().summary())

    def on_selection_change(self, text_range: TextRange) -> None:
        """Host selection or caret moved."""
        self._selection = self._buffer.clamp(text_range)
        self._update_mentions()

    def on_format_command(self, kind: FormatKind) -> None:
        """Apply a markdown format to the current selection."""
        if self._locked:
            return
        before = self._buffer.text
        result = self._toggler.apply(kind, self._buffer, self._selection)
        if result.text == before:
            return
        self._apply(result)

    def on_mention_key(self, key: str, cursor_offset: int) -> bool:
        """Handle a navigation key while a mention is being composed.

        Returns:
            True if the key was consumed.
        """
        key = key.lower()
        if self._locked or not self._mentions.is_composing or key not in MENTION_KEYS:
            return False
        self._selection = self._buffer.clamp(TextRange.caret(cursor_offset))

        if key == "escape":
            self._mentions.cancel()
            self.suggestions_closed.emit()
            return True
        if key in ("up", "down"):
            self._mentions.move_highlight(-1 if key == "up" else 1, self._posts)
            self._emit_suggestions()
            return True

        post = self._mentions.highlighted_candidate(self._posts)
        if post is None:
            return False
        self.select_suggestion(post)
        return True

    def select_suggestion(self, post: Post) -> None:
        """Commit ``post`` as the reference for the open mention."""
        if self._locked:
            return
        result = self._mentions.commit(post, self._buffer, self._selection.end)
        if result is None:
            return
        self.suggestions_closed.emit()
        self._apply(result)

    def insert_image(self, file_name: str, url: str) -> None:
        """Insert an image reference over the current selection."""
        if self._locked:
            return
        self._apply(insert_image_markdown(self._buffer, self._selection, file_name, url))

    def apply_text(self, text: str) -> None:
        """Replace the whole document (accepted AI review) as one mutation."""
        self._buffer.set_text(text)
        self._apply(FormatResult(text, min(self._selection.end, len(text))))

    # ─── Internals ───

    def _apply(self, result: FormatResult) -> None:
        self._selection = TextRange.caret(result.caret)
        self.text_mutated.emit(result.text, result.caret)
        self._update_mentions()
        self.stats_changed.emit(self.stats().summary())

    def _update_mentions(self) -> None:
        if self._locked:
            return
        was_composing = self._mentions.is_composing
        self._mentions.update(self._buffer.text, self._selection.end)
        if self._mentions.is_composing:
            self._emit_suggestions()
        elif was_composing:
            self.suggestions_closed.emit()

    def _emit_suggestions(self) -> None:
        session = self._mentions.session
        self.suggestions_changed.emit(
            self._mentions.candidates(self._posts), session.query, session.highlighted
        )

    # ─── Editor wiring ───

    def connect_editor(self, editor) -> None:
        """Wire a MarkdownEditor to this controller."""
        editor.text_edited.connect(self.on_text_change)
        editor.selection_changed.connect(self.on_selection_change)
        editor.format_requested.connect(self.on_format_command)
        editor.mention_key_pressed.connect(self.on_mention_key)
        editor.suggestion_chosen.connect(self.select_suggestion)
        self.text_mutated.connect(editor.apply_mutation)
        self.suggestions_changed.connect(editor.show_suggestions)
        self.suggestions_closed.connect(editor.hide_suggestions)
        self._editor = editor
        self.on_text_change(editor.toPlainText())
        self.on_selection_change(editor.selection_range())

    def disconnect_editor(self) -> None:
        """Disconnect the previously wired editor, if any."""
        editor = self._editor
        if editor is None:
            return
        for signal, slot in (
            (editor.text_edited, self.on_text_change),
            (editor.selection_changed, self.on_selection_change),
            (editor.format_requested, self.on_format_command),
            (editor.mention_key_pressed, self.on_mention_key),
            (editor.suggestion_chosen, self.select_suggestion),
            (self.text_mutated, editor.apply_mutation),
            (self.suggestions_changed, editor.show_suggestions),
            (self.suggestions_closed, editor.hide_suggestions),
        ):
            with contextlib.suppress(TypeError):
                signal.disconnect(slot)
        editor.hide_suggestions()
        self._editor = None
