# reelview/core/utils.py
"""
Shared utility functions used across the application.
"""

import logging
from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def parse_release_date(date_str: str) -> Optional[datetime]:
    """
    Parse various date formats into datetime object.
    """
    if not date_str:
        return None

    formats = [
        '%Y-%m-%d',
        '%Y-%m-%dT%H:%M:%S',
        '%Y-%m-%dT%H:%M:%SZ',
        '%Y',
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue

    logger.debug(f"Unrecognised release date: {date_str!r}")
    return None


def format_title_with_year(title: str, year: Optional[int]) -> str:
    """'Heat (1995)', or just the title when the year is unknown."""
    return f"{title} ({year})" if year else title


def format_rating(vote_average: float) -> str:
    return f"{vote_average:.1f} / 10"


def validate_url(url: str) -> bool:
    """
    Validate if a string is a valid URL.
    """
    if not url:
        return False

    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except ValueError:
        return False


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate a string to a maximum length, adding suffix if truncated.
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
