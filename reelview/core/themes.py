# reelview/core/themes.py
"""
UI themes and styles for the application.
"""

from PyQt6.QtWidgets import QApplication
from enum import Enum

DARK_STYLESHEET = """
QMainWindow, QDialog, QWidget {
    background-color: #141414;
    color: #e5e5e5;
}
QTabWidget::pane {
    border: 1px solid #2a2a2a;
    background-color: #181818;
}
QTabBar::tab {
    background-color: #1f1f1f;
    color: #e5e5e5;
    padding: 8px 12px;
    border: 1px solid #2a2a2a;
}
QTabBar::tab:selected {
    background-color: #141414;
    border-bottom-color: #e50914;
}
QLabel#heading {
    font-size: 20px;
    font-weight: bold;
    padding: 6px 0;
}
QLabel#message {
    color: #b3b3b3;
    padding: 32px;
}
QLabel#error {
    color: #ff6b6b;
    padding: 32px;
}
QLabel#detailTitle {
    font-size: 22px;
    font-weight: bold;
}
QListWidget#movieGrid {
    background-color: #141414;
    border: none;
}
QListWidget#movieGrid::item {
    border-radius: 4px;
    padding: 4px;
}
QListWidget#movieGrid::item:hover {
    background-color: #2a2a2a;
}
QListWidget#movieGrid::item:selected {
    background-color: #3a0d10;
}
QPushButton {
    background-color: #e50914;
    color: #ffffff;
    border: none;
    padding: 6px 16px;
    border-radius: 3px;
}
QPushButton:hover {
    background-color: #f6121d;
}
QPushButton:disabled {
    background-color: #3c3c3c;
    color: #858585;
}
QPushButton#navButton {
    background-color: transparent;
    color: #e5e5e5;
    font-weight: bold;
}
QPushButton#navButton:hover {
    color: #e50914;
}
QLineEdit, QTextEdit {
    background-color: #2a2a2a;
    color: #e5e5e5;
    border: 1px solid #3c3c3c;
    padding: 4px;
}
QLineEdit:focus, QTextEdit:focus {
    border: 1px solid #e50914;
}
QProgressBar {
    background-color: #2a2a2a;
    border: none;
    max-height: 4px;
}
QProgressBar::chunk {
    background-color: #e50914;
}
QMenuBar, QMenu, QStatusBar {
    background-color: #1f1f1f;
    color: #e5e5e5;
}
QMenu::item:selected {
    background-color: #3a0d10;
}
QScrollBar:vertical {
    background-color: #141414;
    width: 12px;
}
QScrollBar::handle:vertical {
    background-color: #555555;
    border-radius: 6px;
}
"""


class Theme(Enum):
    """Theme selection enumeration."""
    DARK = "Dark"
    SYSTEM = "System"


def apply_theme(app: QApplication, theme: Theme):
    """
    Apply a theme to the entire application.

    Args:
        app: QApplication instance
        theme: Theme enum value
    """
    if theme == Theme.DARK:
        app.setStyleSheet(DARK_STYLESHEET)
    else:
        app.setStyleSheet("")  # Default Qt theme
