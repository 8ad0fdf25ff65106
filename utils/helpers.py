"""
Formatting helpers for labels and downloads.
"""

from datetime import datetime

from utils.datetime_helpers import get_now

# Indexed by date.weekday() (Monday first)
WEEKDAYS_JA = ('月', '火', '水', '木', '金', '土', '日')


def _parse_day(date_str: str):
    try:
        return datetime.strptime(date_str, '%Y-%m-%d')
    except (ValueError, TypeError):
        return None


def format_date_label(date_str: str) -> str:
    """
    Render a day the way the day list heading shows it.

    Args:
        date_str: Day (YYYY-MM-DD)

    Returns:
        Label like '2024年02月01日'; invalid input is returned unchanged
    """
    day = _parse_day(date_str)
    if day is None:
        return date_str or ''
    return f'{day.year}年{day.month:02d}月{day.day:02d}日'


def get_weekday_name_ja(date_str: str) -> str:
    """One-character Japanese weekday of a YYYY-MM-DD day, empty if invalid."""
    day = _parse_day(date_str)
    return WEEKDAYS_JA[day.weekday()] if day else ''


def format_price(price: int) -> str:
    return f'¥{price:,}'


def timestamped_filename(prefix: str, ext: str) -> str:
    """
    Build a download filename with the current timestamp.

    Args:
        prefix: File name prefix (e.g. 'schedule_2024_02')
        ext: Extension without dot

    Returns:
        Filename like 'schedule_2024_02_20240201_093000.xlsx'
    """
    safe_prefix = ''.join(c if c.isalnum() or c in '-_' else '_' for c in prefix)[:100]
    return f"{safe_prefix}_{get_now().strftime('%Y%m%d_%H%M%S')}.{ext.lower()}"
