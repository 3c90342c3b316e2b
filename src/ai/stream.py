"""
Consumes a text-generation stream for the AI review flow.

The generator itself is an injected collaborator: any async iterator of
partial full-document strings. Runs on the qasync event loop, no threads.
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


async def accumulate_deltas(deltas: AsyncIterator[str]) -> AsyncIterator[str]:
    """Turn a stream of token deltas into a stream of growing partial texts."""
    text = ""
    async for delta in deltas:
        text += delta
        yield text


class GenerationStream(QObject):
    """Runs one generation stream at a time and re-emits it as signals.

    Starting a new stream silently drops the previous one. Only an explicit
    cancel() emits generation_cancelled.
    """

    partial_received = pyqtSignal(str)  # Latest full proposal so far
    generation_finished = pyqtSignal()  # Stream ended normally
    generation_error = pyqtSignal(str)  # Collaborator failed
    generation_cancelled = pyqtSignal()  # Stopped by cancel()

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._current_task: asyncio.Task | None = None

    def is_running(self) -> bool:
        """Check if a stream is being consumed."""
        return self._current_task is not None and not self._current_task.done()

    def start(self, source: AsyncIterator[str]) -> None:
        """Start consuming ``source`` on the running event loop.

        Args:
            source: Async iterator yielding partial full-document strings
        """
        self.stop()
        try:
            loop = asyncio.get_event_loop()
            self._current_task = loop.create_task(self.consume(source))
        except RuntimeError:
            logger.debug("No event loop available for generation stream")

    def cancel(self) -> bool:
        """Stop consuming the current stream.

        Returns:
            True if a running stream was cancelled.
        """
        if not self.stop():
            return False
        self.generation_cancelled.emit()
        return True

    def stop(self) -> bool:
        """Drop the current stream without emitting anything."""
        task = self._current_task
        self._current_task = None
        if task is not None and not task.done():
            task.cancel()
            return True
        return False

    async def consume(self, source: AsyncIterator[str]) -> None:
        """Forward every item of ``source`` until it ends or fails."""
        try:
            async for partial in source:
                self.partial_received.emit(partial)
        except asyncio.CancelledError:
            pass  # Expected when cancelled or superseded
        except Exception as e:
            logger.exception("Generation stream failed")
            self.generation_error.emit(str(e))
        else:
            self.generation_finished.emit()
