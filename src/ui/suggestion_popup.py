"""
Popup list of post suggestions shown under the caret while composing a mention.
"""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QListWidget, QListWidgetItem, QWidget

from editing.posts import Post


class SuggestionPopup(QListWidget):
    """Lists candidate posts; clicking a row chooses it."""

    post_chosen = pyqtSignal(object)  # Post

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._posts: list[Post] = []
        self.setObjectName("SuggestionPopup")
        # Keep keyboard focus in the editor; it forwards navigation keys
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setMinimumWidth(260)
        self.itemClicked.connect(self._on_item_clicked)
        self.hide()

    def set_suggestions(self, posts: list[Post], highlighted: int = 0) -> None:
        """Replace the listed posts and highlight one row."""
        self._posts = list(posts)
        self.clear()
        if not self._posts:
            item = QListWidgetItem("No posts found")
            item.setFlags(Qt.ItemFlag.NoItemFlags)
            self.addItem(item)
        for post in self._posts:
            item = QListWidgetItem(f"{post.title}\n{post.slug}")
            item.setToolTip(post.slug)
            self.addItem(item)
        if self._posts:
            self.setCurrentRow(max(0, min(highlighted, len(self._posts) - 1)))
        row_height = max(self.sizeHintForRow(0), 2 * self.fontMetrics().height() + 6)
        self.setFixedHeight(max(1, self.count()) * row_height + 4)

    def has_suggestions(self) -> bool:
        return bool(self._posts)

    def posts(self) -> list[Post]:
        return self._posts.copy()

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        row = self.row(item)
        if 0 <= row < len(self._posts):
            self.post_chosen.emit(self._posts[row])
