"""
Review panel widget - side-by-side original/proposed view of an AI rewrite.

Removed text is struck through on red in the original pane; added text sits
on green in the proposed pane.
"""

import html

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSplitter,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from editing.diff import DiffKind, DiffSpan

# -- Color constants ---------------------------------------------------------
_GREEN = "#5CB85C"
_RED = "#C45C5C"


def _hex_to_rgba(hex_color: str, alpha: float) -> str:
    """Convert hex color to rgba() CSS string."""
    h = hex_color.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return f"rgba({r},{g},{b},{alpha})"


def spans_to_html(spans: list[DiffSpan]) -> str:
    """Render DiffSpans as HTML, escaping the text."""
    parts = []
    for span in spans:
        text = html.escape(span.text).replace("\n", "<br>")
        if span.kind is DiffKind.ADDED:
            parts.append(f'<span style="background-color: {_hex_to_rgba(_GREEN, 0.25)};">{text}</span>')
        elif span.kind is DiffKind.REMOVED:
            parts.append(
                f'<span style="background-color: {_hex_to_rgba(_RED, 0.25)};'
                f' text-decoration: line-through;">{text}</span>'
            )
        else:
            parts.append(text)
    return f'<div style="white-space: pre-wrap;">{"".join(parts)}</div>'


class ReviewPanel(QWidget):
    """Shows streamed diffs and lets the person accept or reject them."""

    accepted = pyqtSignal()
    rejected = pyqtSignal()
    cancel_requested = pyqtSignal()  # Stop the generation, keep what arrived

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._setup_ui()
        self.hide()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.original_view = self._make_pane(splitter, "Original")
        self.proposed_view = self._make_pane(splitter, "Proposed")
        layout.addWidget(splitter, stretch=1)

        buttons = QHBoxLayout()
        self.status_label = QLabel("")
        buttons.addWidget(self.status_label, stretch=1)

        self.stop_btn = QPushButton("Stop")
        self.stop_btn.clicked.connect(self.cancel_requested.emit)
        buttons.addWidget(self.stop_btn)

        self.reject_btn = QPushButton("Reject")
        self.reject_btn.clicked.connect(self.rejected.emit)
        buttons.addWidget(self.reject_btn)

        self.accept_btn = QPushButton("Accept")
        self.accept_btn.setDefault(True)
        self.accept_btn.clicked.connect(self.accepted.emit)
        buttons.addWidget(self.accept_btn)

        layout.addLayout(buttons)
        self._set_review_ready(False)

    @staticmethod
    def _make_pane(splitter: QSplitter, title: str) -> QTextBrowser:
        pane = QWidget()
        pane_layout = QVBoxLayout(pane)
        pane_layout.setContentsMargins(0, 0, 0, 0)
        pane_layout.addWidget(QLabel(title))
        view = QTextBrowser()
        view.setOpenLinks(False)
        pane_layout.addWidget(view, stretch=1)
        splitter.addWidget(pane)
        return view

    def _set_review_ready(self, ready: bool) -> None:
        self.accept_btn.setEnabled(ready)
        self.reject_btn.setEnabled(ready)
        self.stop_btn.setEnabled(not ready)

    # -- Public API -----------------------------------------------------------

    def set_spans(self, original: list[DiffSpan], proposed: list[DiffSpan]) -> None:
        """Render both sides of the diff."""
        self.original_view.setHtml(spans_to_html(original))
        self.proposed_view.setHtml(spans_to_html(proposed))

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def show_streaming(self) -> None:
        """Show the panel while proposals are still arriving."""
        self.original_view.clear()
        self.proposed_view.clear()
        self._set_review_ready(False)
        self.show()

    def show_review(self) -> None:
        """Enable accept/reject for a finished proposal."""
        self._set_review_ready(True)
        self.show()

    def hide_review(self) -> None:
        self._set_review_ready(False)
        self.hide()
