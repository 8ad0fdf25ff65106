"""
Canonical record types and field normalization.

The backend stores its data in spreadsheets whose column names changed over
time (English keys, Japanese headers, a few legacy names). Every raw record is
mapped once, at snapshot ingestion, into one of the immutable dataclasses
below so the rest of the application never probes aliases again.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union
from zoneinfo import ZoneInfo


# =============================================================================
# FIELD ALIASES
# =============================================================================
# Current key names first, then legacy and Japanese headers.

SLOT_ID = ('slotId', '枠ID', 'id')
TEMPLATE_ID = ('id', 'packageId', 'パッケージID')
TEMPLATE_REF = ('templateId', 'packageId', 'パッケージID')
LESSON_NAME = ('lessonName', 'レッスン名', 'title')
TEACHER_NAME = ('teacherName', '先生名')
DESCRIPTION = ('description', 'レッスン内容')
DATE = ('date', '日付')
START_TIME = ('startTime', '開始時刻', 'start')
END_TIME = ('endTime', '終了時刻', 'end')
PRICE = ('price', '料金')
CAPACITY = ('capacity', '定員')
COLOR = ('color', 'カレンダー色', '標準色')
IS_PUBLIC = ('isPublic', '公開設定', '公開状態')
STATUS = ('status', '状態')

GUEST_ID = ('reservationId', '予約ID', 'bookingId', 'id')
GUEST_NAME = ('name', '氏名', 'userName')
PHONE = ('phone', '電話', '電話番号')
EMAIL = ('email', 'Email')
CUSTOMER_ID = ('customerId', '顧客ID')

CUSTOMER_KEY = ('customerId', '顧客ID', 'id')
CUSTOMER_NAME = ('name', '氏名')
VISIT_COUNT = ('visitCount', '来店回数')
MEMO = ('memo', '備考')

STUDIO_NAME = ('studioName', 'スタジオ名')
CONCEPT = ('concept', '紹介文')
ADDRESS = ('address', '住所')
CONTACT_EMAIL = ('contactEmail', 'お問い合わせメール')
FACILITIES = ('facilities', '設備・サービス')

DEFAULT_COLOR = '#ccc'
DEFAULT_TIMEZONE = 'Asia/Tokyo'
DELETED_STATUS = '削除'
PUBLIC_TEXT_VALUES = ('1', '公開', '表示')

_DATE_PREFIX = re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})')
_CLOCK = re.compile(r'^(\d{1,2}):(\d{2})')


# =============================================================================
# FIELD ACCESSOR
# =============================================================================

def resolve(record: Optional[Dict], aliases: Union[str, Sequence[str]], default: Any = '') -> Any:
    """
    Get a field value from a record that may use any of several key names.

    Args:
        record: Raw record dict (may be None or empty)
        aliases: Candidate keys in priority order, or a single key
        default: Value returned when no alias holds a usable value

    Returns:
        The first value that is neither None nor an empty string, else default
    """
    if not record:
        return default
    if isinstance(aliases, str):
        aliases = (aliases,)
    for key in aliases:
        value = record.get(key)
        if value is not None and value != '':
            return value
    return default


# =============================================================================
# COERCION HELPERS
# =============================================================================

def to_non_negative_int(value: Any, default: int = 0) -> int:
    """Coerce a numeric-like value to an int >= 0; garbage becomes default."""
    if isinstance(value, bool):
        return int(value)
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(number, 0)


def to_optional_capacity(value: Any) -> Optional[int]:
    """Capacity is None when absent; a present value is coerced to an int."""
    if value is None or value == '':
        return None
    return to_non_negative_int(value)


def to_public_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return value in PUBLIC_TEXT_VALUES


def to_id(value: Any) -> str:
    """Ids are compared as strings; spreadsheet numbers may arrive as 12.0."""
    if value is None or value == '':
        return ''
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _local(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Move an aware datetime into the studio timezone; naive ones are already local."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz or ZoneInfo(DEFAULT_TIMEZONE))


def _parse_iso(text: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        return None


def to_date_string(value: Any, tz: Optional[tzinfo] = None) -> str:
    """
    Normalize a calendar day to YYYY-MM-DD.

    Timestamps with an offset (the backend serializes date cells as UTC,
    e.g. "2024-01-31T15:00:00.000Z") are converted to tz, the studio
    timezone, before the day is taken. Values that do not look like a date
    are returned unchanged (as a string) so they simply never match a
    calendar cell.
    """
    if value is None or value == '':
        return ''
    if isinstance(value, datetime):
        return _local(value, tz).strftime('%Y-%m-%d')
    if hasattr(value, 'strftime'):
        return value.strftime('%Y-%m-%d')
    text = str(value).strip()
    if 'T' in text:
        moment = _parse_iso(text)
        if moment is not None:
            return _local(moment, tz).strftime('%Y-%m-%d')
    match = _DATE_PREFIX.match(text)
    if not match:
        return text
    year, month, day = match.groups()
    return f'{year}-{int(month):02d}-{int(day):02d}'


def to_clock(value: Any, tz: Optional[tzinfo] = None) -> str:
    """
    Normalize a time of day to zero-padded HH:MM.

    Accepts "9:00", "10:00:00", time/datetime objects and ISO datetime
    strings; timestamps with an offset are read in tz like to_date_string.
    Anything else is cut to its first five characters.
    """
    if value is None or value == '':
        return ''
    if isinstance(value, datetime):
        return _local(value, tz).strftime('%H:%M')
    if hasattr(value, 'strftime'):
        return value.strftime('%H:%M')
    text = str(value).strip()
    match = _CLOCK.match(text)
    if match:
        hour, minute = match.groups()
        return f'{int(hour):02d}:{minute}'
    moment = _parse_iso(text)
    if moment is None:
        return text[:5]
    return _local(moment, tz).strftime('%H:%M')


# =============================================================================
# CANONICAL RECORDS
# =============================================================================

@dataclass(frozen=True)
class Guest:
    """One reservation entry on a slot."""

    id: str
    name: str
    phone: str
    email: str
    status: str
    customer_id: str

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'email': self.email,
            'status': self.status,
            'customer_id': self.customer_id,
        }


@dataclass(frozen=True)
class Template:
    """A reusable lesson configuration ("package")."""

    id: str
    name: str
    teacher: str
    description: str
    price: int
    capacity: Optional[int]
    color: str
    is_public: bool
    status: str

    @property
    def is_active(self) -> bool:
        return self.status != DELETED_STATUS

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'lesson_name': self.name,
            'teacher_name': self.teacher,
            'description': self.description,
            'price': self.price,
            'capacity': self.capacity,
            'color': self.color,
            'is_public': self.is_public,
        }


@dataclass(frozen=True)
class Slot:
    """One schedulable lesson instance on a specific date and time."""

    id: str
    name: str
    teacher: str
    description: str
    date: str
    start: str
    end: str
    price: int
    capacity: Optional[int]
    color: str
    is_public: bool
    status: str
    template_id: str = ''
    guests: Tuple[Guest, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.status != DELETED_STATUS


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    phone: str
    email: str
    visit_count: int
    memo: str

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'email': self.email,
            'visit_count': self.visit_count,
            'memo': self.memo,
        }


@dataclass(frozen=True)
class StudioSettings:
    studio_name: str = ''
    concept: str = ''
    address: str = ''
    contact_email: str = ''
    facilities: str = ''

    def to_dict(self) -> Dict:
        return {
            'studio_name': self.studio_name,
            'concept': self.concept,
            'address': self.address,
            'contact_email': self.contact_email,
            'facilities': self.facilities,
        }


# =============================================================================
# NORMALIZATION
# =============================================================================

def _text(record: Optional[Dict], aliases: Sequence[str], default: str = '') -> str:
    value = resolve(record, aliases, default)
    return value if isinstance(value, str) else str(value)


def normalize_guest(raw: Optional[Dict]) -> Guest:
    """Map a raw guest record to a Guest."""
    return Guest(
        id=to_id(resolve(raw, GUEST_ID)),
        name=_text(raw, GUEST_NAME),
        phone=_text(raw, PHONE),
        email=_text(raw, EMAIL),
        status=_text(raw, STATUS),
        customer_id=to_id(resolve(raw, CUSTOMER_ID)),
    )


def normalize_template(raw: Optional[Dict]) -> Template:
    """Map a raw package record to a Template."""
    return Template(
        id=to_id(resolve(raw, TEMPLATE_ID)),
        name=_text(raw, LESSON_NAME),
        teacher=_text(raw, TEACHER_NAME),
        description=_text(raw, DESCRIPTION),
        price=to_non_negative_int(resolve(raw, PRICE, 0)),
        capacity=to_optional_capacity(resolve(raw, CAPACITY, None)),
        color=_text(raw, COLOR, DEFAULT_COLOR),
        is_public=to_public_flag(resolve(raw, IS_PUBLIC)),
        status=_text(raw, STATUS),
    )


def normalize_slot(raw: Optional[Dict], tz: Optional[tzinfo] = None) -> Slot:
    """
    Map a raw lesson record to a Slot.

    Args:
        raw: Lesson dict as returned by the backend, guests under 'guests'
        tz: Studio timezone for timestamp-valued dates and times

    Returns:
        Slot with its guests normalized in their original order
    """
    raw_guests = (raw or {}).get('guests') or []
    return Slot(
        id=to_id(resolve(raw, SLOT_ID)),
        name=_text(raw, LESSON_NAME),
        teacher=_text(raw, TEACHER_NAME),
        description=_text(raw, DESCRIPTION),
        date=to_date_string(resolve(raw, DATE), tz),
        start=to_clock(resolve(raw, START_TIME), tz),
        end=to_clock(resolve(raw, END_TIME), tz),
        price=to_non_negative_int(resolve(raw, PRICE, 0)),
        capacity=to_optional_capacity(resolve(raw, CAPACITY, None)),
        color=_text(raw, COLOR, DEFAULT_COLOR),
        is_public=to_public_flag(resolve(raw, IS_PUBLIC)),
        status=_text(raw, STATUS),
        template_id=to_id(resolve(raw, TEMPLATE_REF)),
        guests=tuple(normalize_guest(g) for g in raw_guests if isinstance(g, dict)),
    )


def normalize_customer(raw: Optional[Dict]) -> Customer:
    return Customer(
        id=to_id(resolve(raw, CUSTOMER_KEY)),
        name=_text(raw, CUSTOMER_NAME),
        phone=_text(raw, PHONE),
        email=_text(raw, EMAIL),
        visit_count=to_non_negative_int(resolve(raw, VISIT_COUNT, 0)),
        memo=_text(raw, MEMO),
    )


def normalize_settings(raw: Optional[Dict]) -> StudioSettings:
    return StudioSettings(
        studio_name=_text(raw, STUDIO_NAME),
        concept=_text(raw, CONCEPT),
        address=_text(raw, ADDRESS),
        contact_email=_text(raw, CONTACT_EMAIL),
        facilities=_text(raw, FACILITIES),
    )


def normalize_all(raws: Optional[Iterable], normalizer) -> Tuple:
    """Normalize a raw list, skipping entries that are not dicts."""
    return tuple(normalizer(r) for r in (raws or []) if isinstance(r, dict))
