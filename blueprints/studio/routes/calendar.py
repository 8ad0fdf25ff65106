"""
Calendar API routes.
Month grid, day list and snapshot reload.
"""

from flask import request
from flask_login import login_required

from blueprints.studio.services.snapshot_service import get_snapshot
from models.calendar import WEEKDAY_LABELS, build_month, shift_month, slots_on_date
from models.slot import slot_summary
from utils.api_response import api_error, api_success
from utils.datetime_helpers import get_current_month, get_today
from utils.decorators import backend_errors
from utils.helpers import format_date_label, get_weekday_name_ja
from utils.messages import MESSAGES
from utils.validators import validate_date_format, validate_month


def month_from_request():
    """
    Read ?year=&month= (1-12), defaulting to the current month.

    Returns:
        (year, month) tuple, or None if invalid
    """
    default_year, default_month = get_current_month()
    year = request.args.get('year', default_year)
    month = request.args.get('month', default_month)
    if not validate_month(year, month):
        return None
    return int(year), int(month)


def register_routes(bp):
    """Register calendar routes on the blueprint."""

    @bp.route('/calendar')
    @login_required
    @backend_errors
    def month_calendar():
        """
        Get the month grid.

        Query params:
            year: Four-digit year (default: current)
            month: Month 1-12 (default: current)

        Returns:
            JSON with label, navigation, weekday headers and weeks of day cells
        """
        month_args = month_from_request()
        if month_args is None:
            return api_error(MESSAGES['invalid_month'])
        year, month = month_args

        snapshot = get_snapshot()
        grid = build_month(year, month, snapshot.slots, today=get_today())

        unresolved = 0
        weeks = []
        for week in grid.weeks:
            row = []
            for cell in week:
                summaries = [slot_summary(s, snapshot.templates) for s in cell.slots]
                unresolved += sum(1 for s in summaries if s['capacity_unresolved'])
                row.append({
                    'date': cell.date_str,
                    'day': cell.date.day,
                    'in_month': cell.in_month,
                    'is_today': cell.is_today,
                    'slots': summaries,
                })
            weeks.append(row)

        prev_year, prev_month = shift_month(year, month, -1)
        next_year, next_month = shift_month(year, month, 1)

        return api_success(
            data={
                'year': year,
                'month': month,
                'label': grid.label,
                'start': grid.start.isoformat(),
                'end': grid.end.isoformat(),
                'weekdays': list(WEEKDAY_LABELS),
                'weeks': weeks,
                'prev': {'year': prev_year, 'month': prev_month},
                'next': {'year': next_year, 'month': next_month},
            },
            warning=MESSAGES['capacity_unresolved'] if unresolved else None,
        )

    @bp.route('/days/<date_str>')
    @login_required
    @backend_errors
    def day_slots(date_str):
        """Get the slots of one day, sorted by start time."""
        if not validate_date_format(date_str):
            return api_error(MESSAGES['invalid_date'])

        snapshot = get_snapshot()
        slots = [slot_summary(s, snapshot.templates) for s in slots_on_date(snapshot.slots, date_str)]

        return api_success(
            data={
                'date': date_str,
                'label': format_date_label(date_str),
                'weekday': get_weekday_name_ja(date_str),
                'slots': slots,
            },
            message=None if slots else MESSAGES['no_slots'],
        )

    @bp.route('/snapshot/reload', methods=['POST'])
    @login_required
    @backend_errors
    def snapshot_reload():
        """Force a full reload from the backend."""
        snapshot = get_snapshot(force=True)
        return api_success(data={
            'slots': len(snapshot.slots),
            'packages': len(snapshot.templates),
            'customers': len(snapshot.customers),
            'loaded_at': snapshot.loaded_at.isoformat() if snapshot.loaded_at else None,
        })
