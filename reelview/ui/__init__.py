from .browser import BrowserWidget, DetailPanel, PosterLoader, WidgetRenderer
from .settings_dialog import SettingsDialog

__all__ = ['BrowserWidget', 'DetailPanel', 'PosterLoader', 'WidgetRenderer', 'SettingsDialog']
