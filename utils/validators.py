"""
Input validators for console forms.
Each returns a bool; callers pick the message from utils.messages.
"""

import re
from datetime import datetime

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
TIME_PATTERN = re.compile(r'^([01]?\d|2[0-3]):[0-5]\d$')
HEX_COLOR_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def validate_email(email: str) -> bool:
    """
    Check a contact email address.

    Args:
        email: Address as typed

    Returns:
        True if it looks like user@domain.tld
    """
    if not email or not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.match(email))


def validate_date_format(date_str: str) -> bool:
    """
    Check a calendar day in YYYY-MM-DD form.

    Args:
        date_str: Day string

    Returns:
        True if it parses as a real date
    """
    if not date_str or not isinstance(date_str, str):
        return False
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
    except ValueError:
        return False
    return True


def validate_time_format(time_str: str) -> bool:
    """Check a time of day in 24h H:MM or HH:MM form."""
    if not time_str or not isinstance(time_str, str):
        return False
    return bool(TIME_PATTERN.match(time_str))


def validate_hex_color(color: str) -> bool:
    """Check a #RRGGBB or #RGB color (leading # optional)."""
    if not color or not isinstance(color, str):
        return False
    return bool(HEX_COLOR_PATTERN.match(color))


def validate_month(year, month) -> bool:
    """Check a calendar year/month pair; both may arrive as strings."""
    try:
        year = int(year)
        month = int(month)
    except (TypeError, ValueError):
        return False
    return 1 <= month <= 12 and 1900 <= year <= 9999


def sanitize_input(text, max_length: int = None) -> str:
    """
    Trim a free-text value and cap its length.

    Args:
        text: Submitted value (non-strings are converted)
        max_length: Maximum length (optional)

    Returns:
        Cleaned text, empty for missing values
    """
    if text is None or text == '':
        return ''

    cleaned = str(text).strip()
    if max_length and len(cleaned) > max_length:
        cleaned = cleaned[:max_length]
    return cleaned
