"""
Customer lookups and booking history.

Customers are an independent list; guests point at them by customer id and
the join happens here, at read time.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from models.records import Customer, Guest, Slot


@dataclass(frozen=True)
class HistoryEntry:
    date: str
    time: str
    lesson_name: str
    status: str

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'time': self.time,
            'lesson_name': self.lesson_name,
            'status': self.status,
        }


def history_for_contact(email: str, slots: Iterable[Slot]) -> List[HistoryEntry]:
    """
    Collect the booking history of one contact email.

    One entry is produced per guest entry whose email matches exactly
    (case-sensitive), across every slot. Most recent first: date descending,
    then start time descending.

    Args:
        email: Contact email of the guest
        slots: All slots of the snapshot

    Returns:
        List of HistoryEntry, empty when email is blank
    """
    if not email:
        return []

    history = []
    for slot in slots or ():
        for guest in slot.guests:
            if guest.email == email:
                history.append(HistoryEntry(
                    date=slot.date,
                    time=slot.start,
                    lesson_name=slot.name,
                    status=guest.status,
                ))

    history.sort(key=lambda h: (h.date, h.time), reverse=True)
    return history


def find_customer(customers: Iterable[Customer], customer_id) -> Optional[Customer]:
    if customer_id is None or customer_id == '':
        return None
    wanted = str(customer_id)
    for customer in customers or ():
        if customer.id == wanted:
            return customer
    return None


def customer_for_guest(guest: Guest, customers: Iterable[Customer]) -> Optional[Customer]:
    return find_customer(customers, guest.customer_id)


def search_customers(customers: Iterable[Customer], query: str = '') -> List[Customer]:
    """Filter customers whose name or phone contains the query."""
    query = (query or '').strip()
    if not query:
        return list(customers or ())
    return [
        c for c in customers or ()
        if query in c.name or query in c.phone
    ]


def guest_detail(guest: Guest, customers: Iterable[Customer]) -> dict:
    """
    Guest detail view: the guest's own fields plus the linked customer's
    visit count and memo.
    """
    customer = customer_for_guest(guest, customers)
    return {
        'reservation_id': guest.id,
        'name': guest.name,
        'phone': guest.phone,
        'email': guest.email,
        'status': guest.status,
        'customer_id': guest.customer_id or '-',
        'visit_count': customer.visit_count if customer else 0,
        'visit_count_label': f'{customer.visit_count if customer else 0}回',
        'memo': customer.memo if customer else '',
    }
