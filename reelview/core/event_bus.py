# reelview/core/event_bus.py
"""
Event bus for decoupled communication between the controller and the shell.
Uses Qt signals for type-safe event publishing and subscription.
"""

import logging
from PyQt6.QtCore import QObject, pyqtSignal
from typing import Callable

logger = logging.getLogger(__name__)


class EventBus(QObject):
    """
    A simple event bus. Each event is a named signal.
    """

    view_changed = pyqtSignal(str)          # view kind value ("home", "details", "favorites")
    search_started = pyqtSignal(str, int)   # search term ("" for popular), page
    favorites_changed = pyqtSignal(int)     # number of saved favorites
    catalog_error = pyqtSignal(str)         # user-facing error message
    settings_changed = pyqtSignal(str)      # section name (or "all")

    def __init__(self):
        super().__init__()
        logger.debug("EventBus initialized")

    def publish(self, event_name: str, *args):
        """
        Publishes an event to the corresponding signal.
        """
        signal = self._signal(event_name)
        if signal is None:
            logger.warning(f"⚠️ Attempted to publish unknown event: {event_name}")
            return
        signal.emit(*args)
        logger.debug(f"📢 Event published: {event_name} with args: {args}")

    def subscribe(self, event_name: str, slot: Callable):
        """
        Subscribes a slot (callback function) to an event signal.
        """
        signal = self._signal(event_name)
        if signal is None:
            logger.warning(f"⚠️ Attempted to subscribe to unknown event: {event_name}")
            return
        signal.connect(slot)
        logger.debug(f"📩 Subscribed to event: {event_name}")

    def unsubscribe(self, event_name: str, slot: Callable):
        signal = self._signal(event_name)
        if signal is None:
            logger.warning(f"⚠️ Attempted to unsubscribe from unknown event: {event_name}")
            return
        try:
            signal.disconnect(slot)
            logger.debug(f"📤 Unsubscribed from event: {event_name}")
        except TypeError as e:
            logger.error(f"Error unsubscribing from event {event_name}: {e}")

    def _signal(self, event_name: str):
        if event_name.startswith("_") or not hasattr(type(self), event_name):
            return None
        if not isinstance(getattr(type(self), event_name), pyqtSignal):
            return None
        return getattr(self, event_name)
