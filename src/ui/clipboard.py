"""
System clipboard adapter for link formatting.
"""

from PyQt6.QtGui import QClipboard, QGuiApplication


class QtClipboard:
    """Exposes the Qt clipboard as plain text get/set."""

    def __init__(self, clipboard: QClipboard | None = None):
        self._clipboard = clipboard

    def _target(self) -> QClipboard:
        return self._clipboard or QGuiApplication.clipboard()

    def text(self) -> str:
        return self._target().text()

    def set_text(self, text: str) -> None:
        self._target().setText(text)
