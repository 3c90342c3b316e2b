# =============================================================================
# tests/conftest.py - Shared pytest fixtures for Inkwell
# =============================================================================
#
# This file is auto-loaded by pytest before any test module runs.
# It provides:
#   - QApplication lifecycle management (one instance per session)
#   - Settings isolation so tests never touch the real QSettings store
#   - A fake clipboard for link formatting
#   - Sample posts and async stream helpers
#   - A factory for MarkdownEditor widgets
#
# =============================================================================

import sys

import pytest

# ---------------------------------------------------------------------------
# QApplication singleton - PyQt6 requires exactly one per process
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def qapp():
    """
    Create or reuse a QApplication instance for the test session.

    Uses the offscreen platform so no window system is needed.
    """
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([*sys.argv, "-platform", "offscreen"])
        app.setApplicationName("Inkwell-Tests")

    yield app

    # Note: We do NOT call app.quit() here. Destroying QApplication
    # in a session fixture can cause segfaults if other fixtures
    # still hold QObject references. Let the process exit handle it.


# ---------------------------------------------------------------------------
# Settings isolation - prevent tests from reading/writing real settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path):
    """
    Redirect QSettings to a temp directory so tests never touch real config.

    Runs for every test; each test gets a fresh, empty settings store.
    """
    from PyQt6.QtCore import QSettings

    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    for fmt in (QSettings.Format.IniFormat, QSettings.Format.NativeFormat):
        QSettings.setPath(fmt, QSettings.Scope.UserScope, str(tmp_path / "settings"))


# ---------------------------------------------------------------------------
# Clipboard - records writes, returns a configurable string
# ---------------------------------------------------------------------------


class FakeClipboard:
    """In-memory stand-in for the system clipboard."""

    def __init__(self, value: str = ""):
        self.value = value
        self.writes: list[str] = []

    def text(self) -> str:
        return self.value

    def set_text(self, text: str) -> None:
        self.value = text
        self.writes.append(text)


@pytest.fixture
def clipboard():
    return FakeClipboard()


# ---------------------------------------------------------------------------
# Posts - sample data for mention suggestions
# ---------------------------------------------------------------------------


@pytest.fixture
def posts():
    from editing.posts import Post

    return [
        Post(id="1", title="Designing Calm Software", slug="designing-calm-software"),
        Post(id="2", title="Notes on Prototyping", slug="notes-on-prototyping"),
        Post(id="3", title="Why I Write", slug="why-i-write"),
        Post(id="4", title="Product Taste", slug="product-taste"),
        Post(id="5", title="Shipping Small", slug="shipping-small"),
    ]


# ---------------------------------------------------------------------------
# Async streams - stand-ins for the text-generation collaborator
# ---------------------------------------------------------------------------


async def stream_of(*items: str):
    """Async iterator yielding ``items`` in order."""
    for item in items:
        yield item


async def failing_stream(*items: str, error: str = "model unavailable"):
    """Async iterator that yields ``items`` then raises."""
    for item in items:
        yield item
    raise ConnectionError(error)


# ---------------------------------------------------------------------------
# Widget helpers - common patterns for UI testing with qtbot
# ---------------------------------------------------------------------------


@pytest.fixture
def create_editor(qapp):
    """
    Factory fixture that creates MarkdownEditor widgets for testing.

    Usage:
        def test_editor(create_editor, qtbot):
            editor = create_editor(content="Hello")
            qtbot.addWidget(editor)
    """
    editors = []

    def _factory(content: str = ""):
        from ui.markdown_editor import MarkdownEditor

        editor = MarkdownEditor()
        if content:
            editor.setPlainText(content)
        editors.append(editor)
        return editor

    yield _factory

    for editor in editors:
        editor.deleteLater()
