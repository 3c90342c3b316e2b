"""
Markdown editor widget - the host surface for the editing core.

Translates Qt cursor state into TextRange values, maps formatting shortcuts
to format requests, and routes navigation keys to the mention suggestions
while they are showing. All text logic lives in the EditorController.
"""

from PyQt6.QtCore import QPoint, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QFont, QFontDatabase, QKeySequence, QTextCursor
from PyQt6.QtWidgets import QPlainTextEdit

from core.settings import DEFAULT_FONT_SIZE, SettingsManager
from editing.formatting import FormatKind
from editing.posts import Post
from editing.text_range import TextRange
from ui.suggestion_popup import SuggestionPopup

FORMAT_SHORTCUTS: dict[FormatKind, str] = {
    FormatKind.HEADING: "Ctrl+H",
    FormatKind.BOLD: "Ctrl+B",
    FormatKind.ITALIC: "Ctrl+I",
    FormatKind.STRIKETHROUGH: "Ctrl+Shift+X",
    FormatKind.CODE: "Ctrl+E",
    FormatKind.CODE_BLOCK: "Ctrl+Shift+C",
    FormatKind.LINK: "Ctrl+K",
    FormatKind.IMAGE: "Ctrl+Shift+I",
}

# Keys forwarded to the suggestion list while it is visible
_MENTION_KEYS = {
    Qt.Key.Key_Escape: "escape",
    Qt.Key.Key_Up: "up",
    Qt.Key.Key_Down: "down",
    Qt.Key.Key_Return: "enter",
    Qt.Key.Key_Enter: "enter",
    Qt.Key.Key_Tab: "tab",
}


def _units(ch: str) -> int:
    return 2 if ord(ch) > 0xFFFF else 1


def qt_to_index(text: str, position: int) -> int:
    """Convert a Qt cursor position (UTF-16 code units) into a string index."""
    if text.isascii():
        return max(0, min(position, len(text)))
    units = 0
    for index, ch in enumerate(text):
        if units >= position:
            return index
        units += _units(ch)
    return len(text)


def index_to_qt(text: str, index: int) -> int:
    """Convert a string index into a Qt cursor position."""
    index = max(0, min(index, len(text)))
    if text.isascii():
        return index
    return sum(_units(ch) for ch in text[:index])


class MarkdownEditor(QPlainTextEdit):
    """Plain-text markdown editor wired to an EditorController."""

    # Full text after every user edit
    text_edited = pyqtSignal(str)
    # Current selection as a TextRange
    selection_changed = pyqtSignal(object)
    # Formatting shortcut pressed (FormatKind)
    format_requested = pyqtSignal(object)
    # Navigation key name and caret offset while suggestions are showing
    mention_key_pressed = pyqtSignal(str, int)
    # Post clicked in the suggestion popup
    suggestion_chosen = pyqtSignal(object)

    def __init__(self, parent=None, settings: SettingsManager | None = None):
        super().__init__(parent)
        self._settings = settings or SettingsManager()
        self._applying = False

        self._setup_editor()
        self._setup_shortcuts()

        self._popup = SuggestionPopup(self)
        self._popup.post_chosen.connect(self.suggestion_chosen.emit)

        self.textChanged.connect(self._on_text_changed)
        self.cursorPositionChanged.connect(self._on_selection_changed)
        self.selectionChanged.connect(self._on_selection_changed)

    def _setup_editor(self):
        """Configure font and wrapping for prose."""
        font_family = self._settings.get_font_family()
        font_size = self._settings.get_font_size()

        if font_family:
            font = QFont(font_family, font_size)
        else:
            font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)

        # Always explicitly set point size after creation to ensure it's valid
        if font.pointSize() <= 0:
            font.setPointSize(DEFAULT_FONT_SIZE)

        self.setFont(font)
        self.document().setDefaultFont(font)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)
        self.setPlaceholderText("Start writing… type @ to reference a post")

    def _setup_shortcuts(self):
        """Register one action per formatting shortcut."""
        self._format_actions: list[QAction] = []
        for kind, sequence in FORMAT_SHORTCUTS.items():
            action = QAction(kind.name.replace("_", " ").title(), self)
            action.setShortcut(QKeySequence(sequence))
            action.setShortcutContext(Qt.ShortcutContext.WidgetShortcut)
            action.triggered.connect(lambda checked=False, k=kind: self.format_requested.emit(k))
            self.addAction(action)
            self._format_actions.append(action)

    def set_format_actions_enabled(self, enabled: bool) -> None:
        for action in self._format_actions:
            action.setEnabled(enabled)

    # ─── Cursor translation ───

    def selection_range(self) -> TextRange:
        """Current selection as string indices."""
        cursor = self.textCursor()
        text = self.toPlainText()
        return TextRange.between(
            qt_to_index(text, cursor.selectionStart()),
            qt_to_index(text, cursor.selectionEnd()),
        )

    def caret_offset(self) -> int:
        return qt_to_index(self.toPlainText(), self.textCursor().position())

    def set_selection_range(self, text_range: TextRange) -> None:
        """Select a TextRange (clamped to the document)."""
        text = self.toPlainText()
        safe = text_range.clamped(len(text))
        cursor = self.textCursor()
        cursor.setPosition(index_to_qt(text, safe.offset))
        cursor.setPosition(index_to_qt(text, safe.end), QTextCursor.MoveMode.KeepAnchor)
        self.setTextCursor(cursor)

    # ─── Controller mutations ───

    def apply_mutation(self, text: str, caret: int) -> None:
        """Replace the document with ``text`` as a single undo step."""
        self._applying = True
        try:
            cursor = self.textCursor()
            cursor.beginEditBlock()
            cursor.select(QTextCursor.SelectionType.Document)
            cursor.insertText(text)
            cursor.endEditBlock()
            cursor.setPosition(index_to_qt(text, caret))
            self.setTextCursor(cursor)
        finally:
            self._applying = False
        self.selection_changed.emit(self.selection_range())

    # ─── Suggestions ───

    def show_suggestions(self, posts: list[Post], query: str, highlighted: int) -> None:
        """Show the suggestion popup under the caret."""
        self._popup.set_suggestions(posts, highlighted)
        anchor = self.viewport().mapToParent(self.cursorRect().bottomLeft())
        self._popup.move(anchor + QPoint(0, 4))
        self._popup.setToolTip(f"@{query}" if query else "")
        self._popup.show()
        self._popup.raise_()

    def hide_suggestions(self) -> None:
        self._popup.hide()

    def suggestions_visible(self) -> bool:
        return not self._popup.isHidden()

    @property
    def suggestion_popup(self) -> SuggestionPopup:
        return self._popup

    # ─── Events ───

    def keyPressEvent(self, event) -> None:
        """Route navigation keys to the suggestions while they are showing."""
        key = _MENTION_KEYS.get(event.key())
        if key and self.suggestions_visible():
            # Enter/Tab with nothing to choose keep their normal meaning
            if key in ("escape", "up", "down") or self._popup.has_suggestions():
                self.mention_key_pressed.emit(key, self.caret_offset())
                event.accept()
                return
        super().keyPressEvent(event)

    def _on_text_changed(self) -> None:
        if self._applying:
            return
        self.text_edited.emit(self.toPlainText())
        # Text and caret must reach the controller together
        self.selection_changed.emit(self.selection_range())

    def _on_selection_changed(self) -> None:
        if self._applying:
            return
        self.selection_changed.emit(self.selection_range())
