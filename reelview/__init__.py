"""
ReelView - a desktop movie catalog browser.
"""

__version__ = "1.0.0"
