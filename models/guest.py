"""
Guest status classification and reservation tallies.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from models.records import Guest

logger = logging.getLogger(__name__)


class GuestStatus(Enum):
    RESERVED = 'reserved'
    WAITLISTED = 'waitlisted'
    CANCELLED = 'cancelled'
    UNKNOWN = 'unknown'


# =============================================================================
# STATUS VOCABULARY
# =============================================================================
# Every status value the backend can emit must be listed here. Anything else
# classifies as UNKNOWN and is never counted as a reservation.

STATUS_RESERVED = '予約'
STATUS_WAITLISTED = 'キャンセル待ち'
STATUS_CANCELLED = 'キャンセル'

STATUS_VOCABULARY = {
    STATUS_RESERVED: GuestStatus.RESERVED,
    STATUS_WAITLISTED: GuestStatus.WAITLISTED,
    STATUS_CANCELLED: GuestStatus.CANCELLED,
    'reserved': GuestStatus.RESERVED,
    'waitlisted': GuestStatus.WAITLISTED,
    'cancelled': GuestStatus.CANCELLED,
}

STATUS_LABELS = {
    GuestStatus.RESERVED: '予約',
    GuestStatus.WAITLISTED: '待ち',
    GuestStatus.CANCELLED: 'キャンセル',
    GuestStatus.UNKNOWN: '不明',
}


def classify_status(raw_status: str) -> GuestStatus:
    """
    Classify a raw status string.

    Args:
        raw_status: Status as stored by the backend

    Returns:
        GuestStatus member, UNKNOWN for values outside the vocabulary
    """
    status = STATUS_VOCABULARY.get((raw_status or '').strip())
    if status is None:
        if raw_status:
            logger.debug("Unmapped guest status: %r", raw_status)
        return GuestStatus.UNKNOWN
    return status


# =============================================================================
# AGGREGATION
# =============================================================================

@dataclass(frozen=True)
class GuestTally:
    reserved: int = 0
    waitlist: int = 0

    @property
    def active(self) -> int:
        return self.reserved + self.waitlist

    def to_dict(self) -> dict:
        return {'reserved': self.reserved, 'waitlist': self.waitlist}


def tally(guests: Iterable[Guest]) -> GuestTally:
    """
    Count reserved and waitlisted guests in a single pass.

    Cancelled and unmapped statuses are ignored.
    """
    reserved = 0
    waitlist = 0
    for guest in guests or ():
        status = classify_status(guest.status)
        if status is GuestStatus.RESERVED:
            reserved += 1
        elif status is GuestStatus.WAITLISTED:
            waitlist += 1
    return GuestTally(reserved=reserved, waitlist=waitlist)


def visible_guests(guests: Iterable[Guest]) -> List[Guest]:
    """Guests shown in the slot's guest list: everyone except cancellations."""
    return [g for g in guests or () if classify_status(g.status) is not GuestStatus.CANCELLED]


def guest_to_view(guest: Guest) -> dict:
    """Guest dict for the guest list, with a display badge."""
    status = classify_status(guest.status)
    view = guest.to_dict()
    view['status_label'] = STATUS_LABELS[status]
    view['is_waitlisted'] = status is GuestStatus.WAITLISTED
    view['display_name'] = guest.name or '不明'
    view['display_phone'] = guest.phone or '--'
    return view
