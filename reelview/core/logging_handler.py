# reelview/core/logging_handler.py
"""
Logging setup: console output plus a Qt signal feeding the in-app Log tab.
"""

import logging
import sys
from typing import Callable, Optional

from PyQt6.QtCore import QObject, pyqtSignal

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class QtLogHandler(logging.Handler, QObject):
    """
    Logging handler that re-emits each formatted record as a Qt signal,
    so records logged from worker threads reach the GUI safely.
    """
    log_updated = pyqtSignal(str)

    def __init__(self, *args, **kwargs):
        logging.Handler.__init__(self, *args, **kwargs)
        QObject.__init__(self)

    def emit(self, record):
        self.log_updated.emit(self.format(record))


_qt_handler: Optional[QtLogHandler] = None


def setup_logging(log_widget_append_slot: Optional[Callable[[str], None]] = None,
                  level: int = logging.INFO) -> logging.Logger:
    """
    Configures the root logger with a console handler and, when a slot is
    given, the Qt handler for GUI display.

    Args:
        log_widget_append_slot: Slot receiving formatted log lines
        level: Root logger level

    Returns:
        Configured root logger
    """
    global _qt_handler

    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    if log_widget_append_slot is not None:
        _qt_handler = QtLogHandler()
        _qt_handler.setFormatter(formatter)
        _qt_handler.log_updated.connect(log_widget_append_slot)
        logger.addHandler(_qt_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger.info("✅ Logging system initialized")
    return logger
