"""
AI review controller - manages the propose/review/accept lifecycle.

Consumes the generation stream, keeps the held proposal in a ReviewSession,
recomputes the word diff on every partial, and resolves accept/reject into
the document. Communicates with the review panel and editor via signals.
"""

import contextlib
import logging
from collections.abc import AsyncIterator, Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ai.prompts import EDIT_INSTRUCTIONS, build_edit_prompt, clean_response
from ai.stream import GenerationStream, accumulate_deltas
from editing.diff import WordDiff
from editing.review import ReviewSession

logger = logging.getLogger(__name__)

# (prompt, system instructions) -> async iterator of token deltas
TextGenerator = Callable[[str, str], AsyncIterator[str]]


class ReviewController(QObject):
    """Owns the GenerationStream and ReviewSession for AI rewrites."""

    spans_updated = pyqtSignal(list, list)  # original-side spans, proposed-side spans
    review_started = pyqtSignal()  # A generation began streaming proposals
    review_opened = pyqtSignal()  # A proposal is waiting for accept/reject
    review_closed = pyqtSignal()  # Review accepted, rejected, or invalidated
    text_accepted = pyqtSignal(str)  # New full document text
    status_message = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        stream: GenerationStream | None = None,
        generator: TextGenerator | None = None,
    ):
        super().__init__(parent)
        self._session = ReviewSession()
        self._generator = generator

        self._stream = stream or GenerationStream(self)
        self._stream.partial_received.connect(self.on_generation_token)
        self._stream.generation_finished.connect(self.on_generation_finished)
        self._stream.generation_error.connect(self._on_error)
        self._stream.generation_cancelled.connect(self.on_generation_cancelled)

        self._panel = None

    @property
    def session(self) -> ReviewSession:
        return self._session

    @property
    def is_streaming(self) -> bool:
        """Whether a generation is in progress."""
        return self._session.is_streaming

    @property
    def is_pending(self) -> bool:
        """Whether a proposal is waiting for a decision."""
        return self._session.is_pending

    # ─── Panel wiring ───

    def connect_panel(self, panel) -> None:
        """Wire a ReviewPanel to this controller."""
        self.spans_updated.connect(panel.set_spans)
        self.status_message.connect(panel.set_status)
        self.review_started.connect(panel.show_streaming)
        self.review_opened.connect(panel.show_review)
        self.review_closed.connect(panel.hide_review)
        panel.accepted.connect(self.on_accept_review)
        panel.rejected.connect(self.on_reject_review)
        panel.cancel_requested.connect(self.cancel_generation)
        self._panel = panel

    def disconnect_panel(self) -> None:
        """Disconnect the previously wired panel, if any."""
        panel = self._panel
        if panel is None:
            return
        for signal, slot in (
            (self.spans_updated, panel.set_spans),
            (self.status_message, panel.set_status),
            (self.review_started, panel.show_streaming),
            (self.review_opened, panel.show_review),
            (self.review_closed, panel.hide_review),
            (panel.accepted, self.on_accept_review),
            (panel.rejected, self.on_reject_review),
            (panel.cancel_requested, self.cancel_generation),
        ):
            with contextlib.suppress(TypeError):
                signal.disconnect(slot)
        self._panel = None

    # ─── Starting a generation ───

    def request_edit(self, instruction: str, document: str, selection: str = "") -> bool:
        """Ask the configured generator to rewrite ``document``.

        Returns:
            False if no generator is configured or the instruction is blank.
        """
        if not instruction.strip():
            return False
        if self._generator is None:
            self.status_message.emit("No text generator configured")
            return False
        prompt = build_edit_prompt(instruction, document, selection)
        self.start_review(document, accumulate_deltas(self._generator(prompt, EDIT_INSTRUCTIONS)))
        return True

    def start_review(self, original: str, source: AsyncIterator[str]) -> None:
        """Consume ``source`` as partial proposals for ``original``.

        A pending review is invalidated before the new generation starts.
        """
        if self._session.is_pending:
            self.review_closed.emit()
        self._session.begin(original)
        self.review_started.emit()
        self.status_message.emit("Generating…")
        self._stream.start(source)

    def cancel_generation(self) -> bool:
        """Stop the stream; the last partial stays reviewable."""
        return self._stream.cancel()

    # ─── Stream handlers ───

    def on_generation_token(self, partial: str) -> None:
        """Replace the held proposal and push fresh spans."""
        diff = self._session.on_token(partial)
        if diff is not None:
            self._emit_spans(diff)

    def on_generation_finished(self) -> None:
        """Clean the final proposal and open the review if anything changed."""
        if not self._session.is_streaming:
            return
        final = clean_response(self._session.proposed or "")
        self._settle(self._session.finish(final))

    def on_generation_cancelled(self) -> None:
        """Stop recomputing; keep the last partial for review."""
        self._settle(self._session.cancel())

    def _on_error(self, error: str) -> None:
        """Surface the failure and keep whatever arrived before it."""
        self.status_message.emit(error)
        diff = self._session.cancel()
        if diff is None:
            self.review_closed.emit()
            return
        self._emit_spans(diff)
        self.review_opened.emit()

    def _settle(self, diff: WordDiff | None) -> None:
        if diff is None:
            self.status_message.emit("No changes to review")
            self.review_closed.emit()
            return
        self._emit_spans(diff)
        self.status_message.emit("Review changes: accept or reject")
        self.review_opened.emit()

    def _emit_spans(self, diff: WordDiff) -> None:
        self.spans_updated.emit(diff.original, diff.proposed)

    # ─── Resolution ───

    def on_accept_review(self) -> None:
        """Replace the document with the reviewed proposal."""
        text = self._session.accept()
        if text is None:
            return
        self.text_accepted.emit(text)
        self.status_message.emit("Applied AI changes")
        self.review_closed.emit()

    def on_reject_review(self) -> None:
        """Discard the proposal."""
        if self._session.reject():
            self.status_message.emit("Discarded AI changes")
            self.review_closed.emit()

    def stop(self) -> None:
        """Drop any stream and pending review (app shutdown)."""
        self._stream.stop()
        self._session.cancel()
        self._session.reject()
