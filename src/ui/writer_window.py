"""
Writer window - hosts the markdown editor and the AI review panel.
"""

from PyQt6.QtWidgets import QLabel, QLineEdit, QVBoxLayout, QWidget

from core.settings import SettingsManager
from ui.clipboard import QtClipboard
from ui.editor_controller import EditorController
from ui.markdown_editor import MarkdownEditor
from ui.review_controller import ReviewController, TextGenerator
from ui.review_panel import ReviewPanel


class WriterWindow(QWidget):
    """Editor, AI instruction field, review panel and status line."""

    def __init__(self, parent=None, generator: TextGenerator | None = None):
        super().__init__(parent)
        self.setWindowTitle("Inkwell")
        self.resize(1000, 720)
        settings = SettingsManager()

        self.editor = MarkdownEditor(settings=settings)
        self.instruction_input = QLineEdit()
        self.instruction_input.setPlaceholderText("Ask AI to edit the document…")
        self.review_panel = ReviewPanel()
        self.status_label = QLabel("")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.editor, stretch=3)
        layout.addWidget(self.instruction_input)
        layout.addWidget(self.review_panel, stretch=2)
        layout.addWidget(self.status_label)

        self.editor_controller = EditorController(self, clipboard=QtClipboard(), settings=settings)
        self.review_controller = ReviewController(self, generator=generator)

        self.editor_controller.stats_changed.connect(self.status_label.setText)
        self.editor_controller.connect_editor(self.editor)
        self.review_controller.connect_panel(self.review_panel)
        self.review_controller.text_accepted.connect(self.editor_controller.apply_text)
        self.review_controller.review_started.connect(self._lock_editor)
        self.review_controller.review_closed.connect(self._unlock_editor)
        self.instruction_input.returnPressed.connect(self._on_edit_requested)

    def _on_edit_requested(self) -> None:
        controller = self.editor_controller
        selection = controller.buffer.substring(controller.selection)
        if self.review_controller.request_edit(
            self.instruction_input.text(), controller.buffer.text, selection
        ):
            self.instruction_input.clear()

    def _lock_editor(self) -> None:
        # Accepting replaces the whole document; no edits while a review is open
        self.editor.setReadOnly(True)
        self.editor.set_format_actions_enabled(False)
        self.editor_controller.set_locked(True)

    def _unlock_editor(self) -> None:
        self.editor_controller.set_locked(False)
        self.editor.set_format_actions_enabled(True)
        self.editor.setReadOnly(False)
        self.editor.setFocus()

    def closeEvent(self, event):
        self.review_controller.stop()
        self.editor_controller.disconnect_editor()
        super().closeEvent(event)
