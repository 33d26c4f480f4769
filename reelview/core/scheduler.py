# reelview/core/scheduler.py
"""
Cancellable deferred execution with a single pending slot.
"""

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class DebounceTimer(QObject):
    """
    Runs at most one pending callback. Scheduling a new callback cancels the
    previous one outright; it never runs later.
    """
    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._callback: Optional[Callable[[], None]] = None

    def schedule(self, delay_ms: int, callback: Callable[[], None]):
        if self._timer.isActive():
            logger.debug("Superseding pending debounced call")
        self._callback = callback
        self._timer.start(delay_ms)

    def cancel(self):
        self._timer.stop()
        self._callback = None

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def _fire(self):
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()
