"""
Slot view models and backend payloads.

Payload keys follow the backend's wire names (lessonName, startTime, ...);
incoming form data uses the console's snake_case names.
"""

import logging
from datetime import date
from typing import Dict, Iterable, Optional

from models.capacity import effective_capacity, resolve_capacity, template_capacity
from models.gating import (
    COLOR_PALETTE, ensure_can_delete, ensure_not_past,
    ensure_price_unchanged, needs_border, text_color_for,
)
from models.guest import tally
from models.records import DELETED_STATUS, Slot, Template, to_clock, to_non_negative_int
from utils.messages import MESSAGES
from utils.validators import validate_hex_color, validate_time_format

logger = logging.getLogger(__name__)

UNNAMED_LESSON = '(名称未設定)'


# =============================================================================
# VIEW MODELS
# =============================================================================

def slot_summary(slot: Slot, templates: Iterable[Template]) -> Dict:
    """
    Summary of a slot for calendar tags and the day list.

    Args:
        slot: Slot to summarize
        templates: Templates used for capacity inheritance

    Returns:
        Dict with display fields, reservation counts and resolved capacity
    """
    resolution = resolve_capacity(slot, templates)
    if not resolution.is_resolved:
        logger.info("%s", resolution.warning)

    counts = tally(slot.guests)
    return {
        'id': slot.id,
        'date': slot.date,
        'lesson_name': slot.name or UNNAMED_LESSON,
        'teacher_name': slot.teacher,
        'start_time': slot.start,
        'end_time': slot.end,
        'price': slot.price,
        'capacity': resolution.value,
        'capacity_source': resolution.source,
        'capacity_unresolved': not resolution.is_resolved,
        'reserved': counts.reserved,
        'waitlist': counts.waitlist,
        'has_waitlist': counts.waitlist > 0,
        'stats_label': f'予約: {counts.reserved}/{resolution.value} (待: {counts.waitlist})',
        'color': slot.color,
        'text_color': text_color_for(slot.color),
        'bordered': needs_border(slot.color),
        'is_public': slot.is_public,
    }


# =============================================================================
# PAYLOADS
# =============================================================================

def _require_times(data: Dict) -> tuple:
    start = to_clock(data.get('start_time'))
    end = to_clock(data.get('end_time'))
    if not start or not end:
        raise ValueError(MESSAGES['time_required'])
    if not (validate_time_format(start) and validate_time_format(end)):
        raise ValueError(MESSAGES['invalid_time'])
    return start, end


def _color(data: Dict, default: str) -> str:
    """Submitted color, validated; the default is used as is."""
    color = data.get('color')
    if not color:
        return default
    if not validate_hex_color(color):
        raise ValueError(MESSAGES['invalid_color'])
    return color


def _number(data: Dict, key: str, default: int) -> int:
    value = data.get(key)
    if value is None or value == '':
        return default
    return to_non_negative_int(value)


def _public_flag(data: Dict, default: bool = True) -> int:
    value = data.get('is_public')
    if value is None or value == '':
        value = default
    if isinstance(value, str):
        value = value.lower() in ('1', 'true', 'on', 'yes')
    return 1 if value else 0


def build_new_slot_payload(
    date_str: str,
    data: Dict,
    template: Optional[Template] = None,
    today: Optional[date] = None
) -> Dict:
    """
    Build the save payload for a new slot.

    Args:
        date_str: Selected day (YYYY-MM-DD)
        data: Form data (start_time, end_time, price, capacity, color,
            is_public; lesson_name and teacher_name in manual mode)
        template: Template the slot is created from, or None for manual entry
        today: Reference day for the past-date rule

    Returns:
        Payload for the slot save action

    Raises:
        PastDateError: date_str is before today
        ValueError: Missing day, times or lesson name
    """
    if not date_str:
        raise ValueError(MESSAGES['date_not_selected'])
    ensure_not_past(date_str, today)
    start, end = _require_times(data)

    # Fields left out of the form come from the template, if any.
    if template is not None:
        price, capacity = template.price, template_capacity(template)
        color, is_public = template.color or COLOR_PALETTE[0], template.is_public
    else:
        price, capacity, color, is_public = 0, 0, COLOR_PALETTE[0], True

    payload = {
        'slotId': '',
        'date': date_str,
        'startTime': start,
        'endTime': end,
        'price': _number(data, 'price', price),
        'capacity': _number(data, 'capacity', capacity),
        'color': _color(data, color),
        'isPublic': _public_flag(data, is_public),
    }

    if template is not None:
        payload['lessonName'] = template.name
        payload['teacherName'] = template.teacher
        payload['description'] = template.description
        payload['packageId'] = template.id
    else:
        lesson_name = (data.get('lesson_name') or '').strip()
        if not lesson_name:
            raise ValueError(MESSAGES['lesson_name_required'])
        payload['lessonName'] = lesson_name
        payload['teacherName'] = (data.get('teacher_name') or '').strip()
        payload['description'] = ''

    return payload


def build_update_payload(slot: Slot, data: Dict, templates: Iterable[Template]) -> Dict:
    """
    Build the save payload for an existing slot.

    Name, teacher, description and template reference are kept from the
    stored slot; the editor does not change them.

    Raises:
        HasReservationsError: Price changed while reservations exist
        ValueError: Missing times
    """
    start, end = _require_times(data)

    price = to_non_negative_int(data['price']) if data.get('price') not in (None, '') else slot.price
    ensure_price_unchanged(slot, price)

    if data.get('capacity') not in (None, ''):
        capacity = to_non_negative_int(data['capacity'])
    else:
        capacity = effective_capacity(slot, templates)

    return {
        'slotId': slot.id,
        'date': slot.date,
        'startTime': start,
        'endTime': end,
        'price': price,
        'capacity': capacity,
        'color': _color(data, slot.color),
        'isPublic': _public_flag(data, slot.is_public),
        'lessonName': slot.name,
        'teacherName': slot.teacher,
        'description': slot.description,
        'packageId': slot.template_id,
    }


def build_delete_payload(slot: Slot) -> Dict:
    """Soft-delete payload; refused while the slot has reservations."""
    ensure_can_delete(slot)
    return {'slotId': slot.id, 'status': DELETED_STATUS}
