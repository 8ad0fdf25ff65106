"""Today and now in the studio's timezone (TIMEZONE setting)."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app


def get_timezone() -> ZoneInfo:
    return ZoneInfo(current_app.config.get('TIMEZONE', 'Asia/Tokyo'))


def get_now() -> datetime:
    """Current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def get_today() -> date:
    """
    Today's date in the configured timezone.

    The past-date rule and the calendar's today marker use this, not the
    server's local date.
    """
    return get_now().date()


def get_current_month() -> tuple:
    """(year, month) of today in the configured timezone."""
    today = get_today()
    return today.year, today.month
