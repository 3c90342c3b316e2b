"""
Application setup and event loop configuration.
"""

import asyncio
import logging
import sys

from PyQt6.QtCore import QtMsgType, qInstallMessageHandler
from PyQt6.QtWidgets import QApplication
from qasync import QEventLoop

from core.settings import APPLICATION, ORGANIZATION
from ui.review_controller import TextGenerator
from ui.writer_window import WriterWindow

logger = logging.getLogger(__name__)

_QT_LOG_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def qt_message_handler(msg_type: QtMsgType, context, message: str):
    """Route Qt messages into logging."""
    # Cosmetic font warning, doesn't affect functionality
    if "QFont::setPointSize" in message and "Point size <= 0" in message:
        return
    logging.getLogger("qt").log(_QT_LOG_LEVELS.get(msg_type, logging.WARNING), message)


def setup_logging(level: int = logging.INFO):
    """Configure root logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app(generator: TextGenerator | None = None) -> int:
    """Initialize and run the application with async support.

    Args:
        generator: Optional language-model collaborator for AI edits
    """
    setup_logging()
    qInstallMessageHandler(qt_message_handler)

    app = QApplication(sys.argv)
    app.setApplicationName(APPLICATION)
    app.setOrganizationName(ORGANIZATION)

    # Set up async event loop with Qt integration
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    window = WriterWindow(generator=generator)
    window.show()
    logger.info("Editor ready")

    # Run event loop
    with loop:
        return loop.run_forever()
