"""
Gating rules for slot editing.

Pure predicates (past date, active reservations, color contrast) plus the
refusals raised when staff try something the rules forbid, and the slot
editor state derived from them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

from models.capacity import effective_capacity, template_capacity
from models.guest import guest_to_view, tally, visible_guests
from models.records import Slot, Template, to_date_string
from utils.messages import MESSAGES


# =============================================================================
# ERRORS
# =============================================================================

class PastDateError(ValueError):
    """A slot was to be created on a day that has already passed."""

    def __init__(self, date_str: str):
        self.date = date_str
        super().__init__(MESSAGES['past_date'])


class HasReservationsError(ValueError):
    """Price edit or deletion attempted on a slot that has active reservations."""

    def __init__(self, slot_id: str, action: str):
        self.slot_id = slot_id
        self.action = action
        key = 'slot_delete_locked' if action == 'delete' else 'price_locked'
        super().__init__(MESSAGES[key])


# =============================================================================
# PREDICATES
# =============================================================================

def parse_day(date_str) -> Optional[date]:
    """Parse a YYYY-MM-DD (or ISO datetime) string; None when invalid."""
    try:
        return datetime.strptime(to_date_string(date_str), '%Y-%m-%d').date()
    except (TypeError, ValueError):
        return None


def is_past_date(date_str: str, today: Optional[date] = None) -> bool:
    """
    Check whether a calendar day is strictly before today.

    Args:
        date_str: Day as YYYY-MM-DD
        today: Reference day (defaults to the local date)

    Returns:
        True if the day is earlier than today; unparseable input is not past
    """
    day = parse_day(date_str)
    if day is None:
        return False
    return day < (today or date.today())


def has_active_reservation(slot: Slot) -> bool:
    """A slot with any reserved or waitlisted guest is locked."""
    return tally(slot.guests).active > 0


# =============================================================================
# COLORS
# =============================================================================

COLOR_PALETTE = (
    '#ffffff', '#000000',
    '#e57373', '#f06292', '#ba68c8', '#9575cd', '#7986cb',
    '#64b5f6', '#4fc3f7', '#4dd0e1', '#4db6ac', '#81c784',
    '#aed581', '#dce775', '#fff176', '#ffd54f', '#ffb74d',
    '#ff8a65', '#a1887f', '#e0e0e0', '#90a4ae',
)

LIGHT_BACKGROUND_TEXT = '#442c2e'
DARK_BACKGROUND_TEXT = '#fff'
BRIGHTNESS_THRESHOLD = 155


def _rgb(hex_color: str):
    digits = hex_color.strip()
    if digits.startswith('#'):
        digits = digits[1:]
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def is_light_color(hex_color: str) -> bool:
    """
    Decide whether a background color is light enough for dark text.

    Brightness is 0.299r + 0.587g + 0.114b; light means above 155. A missing
    color counts as light (the calendar falls back to a light gray) and an
    unparseable one as dark.
    """
    if not hex_color:
        return True
    try:
        r, g, b = _rgb(hex_color)
    except ValueError:
        return False
    return (r * 299 + g * 587 + b * 114) / 1000 > BRIGHTNESS_THRESHOLD


def text_color_for(hex_color: str) -> str:
    return LIGHT_BACKGROUND_TEXT if is_light_color(hex_color) else DARK_BACKGROUND_TEXT


def needs_border(hex_color: str) -> bool:
    """White tags and swatches get a thin border to stay visible."""
    return (hex_color or '').lower() == '#ffffff'


# =============================================================================
# REFUSALS
# =============================================================================

def ensure_not_past(date_str: str, today: Optional[date] = None) -> None:
    """Raise PastDateError when creating on an elapsed day."""
    if is_past_date(date_str, today):
        raise PastDateError(date_str)


def ensure_can_delete(slot: Slot) -> None:
    if has_active_reservation(slot):
        raise HasReservationsError(slot.id, 'delete')


def ensure_price_unchanged(slot: Slot, new_price: int) -> None:
    """Price is frozen once anyone holds a place on the slot."""
    if new_price != slot.price and has_active_reservation(slot):
        raise HasReservationsError(slot.id, 'price')


# =============================================================================
# SLOT EDITOR
# =============================================================================

class EditorMode(Enum):
    NEW_VIA_TEMPLATE = 'new_via_template'
    NEW_MANUAL = 'new_manual'
    EXISTING = 'existing'


@dataclass(frozen=True)
class SlotEditor:
    """What the slot editor may show and allow for one slot."""

    mode: EditorMode
    date: str
    title: str
    fields: Dict
    slot_id: str = ''
    template_id: str = ''
    price_locked: bool = False
    can_delete: bool = False
    delete_message: str = ''
    guests: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'mode': self.mode.value,
            'date': self.date,
            'title': self.title,
            'slot_id': self.slot_id,
            'template_id': self.template_id,
            'fields': self.fields,
            'price_locked': self.price_locked,
            'can_delete': self.can_delete,
            'delete_message': self.delete_message,
            'guests': self.guests,
            'show_guests': self.mode is EditorMode.EXISTING,
            'show_manual_inputs': self.mode is EditorMode.NEW_MANUAL,
        }


def open_new_slot_editor(
    date_str: str,
    template: Optional[Template] = None,
    today: Optional[date] = None
) -> SlotEditor:
    """
    Prepare the editor for a new slot.

    Args:
        date_str: Selected calendar day (required)
        template: Template to copy defaults from, or None for manual entry
        today: Reference day for the past-date rule

    Returns:
        SlotEditor in NEW_VIA_TEMPLATE or NEW_MANUAL mode

    Raises:
        ValueError: No day selected
        PastDateError: The day has already passed
    """
    if not date_str:
        raise ValueError(MESSAGES['date_not_selected'])
    ensure_not_past(date_str, today)

    if template is not None:
        return SlotEditor(
            mode=EditorMode.NEW_VIA_TEMPLATE,
            date=date_str,
            title='レッスン枠 追加',
            template_id=template.id,
            fields={
                'label': f'雛形: {template.name} ({template.teacher})',
                'start_time': '10:00',
                'end_time': '11:00',
                'price': template.price,
                'capacity': template_capacity(template),
                'is_public': template.is_public,
                'color': template.color,
            },
        )

    # Manual entry starts blank so every field has to be filled in.
    return SlotEditor(
        mode=EditorMode.NEW_MANUAL,
        date=date_str,
        title='レッスン枠 追加',
        fields={
            'lesson_name': '',
            'teacher_name': '',
            'start_time': '',
            'end_time': '',
            'price': '',
            'capacity': '',
            'is_public': True,
            'color': COLOR_PALETTE[0],
        },
    )


def open_existing_slot_editor(slot: Slot, templates: Iterable[Template]) -> SlotEditor:
    """Prepare the editor for an existing slot, applying the reservation locks."""
    locked = has_active_reservation(slot)
    return SlotEditor(
        mode=EditorMode.EXISTING,
        date=slot.date,
        title='レッスン枠 編集',
        slot_id=slot.id,
        template_id=slot.template_id,
        fields={
            'label': f'{slot.name} ({slot.teacher})',
            'start_time': slot.start,
            'end_time': slot.end,
            'price': slot.price,
            'capacity': effective_capacity(slot, templates),
            'is_public': slot.is_public,
            'color': slot.color,
        },
        price_locked=locked,
        can_delete=not locked,
        delete_message=MESSAGES['slot_delete_locked'] if locked else MESSAGES['slot_delete_confirm'],
        guests=[guest_to_view(g) for g in visible_guests(slot.guests)],
    )
