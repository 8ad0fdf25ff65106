"""
Immutable snapshot of the studio data.

The backend returns lessons, packages, customers and settings in one init
call. That response is normalized once into a Snapshot; callers never mutate
it. After any change is sent to the backend the whole snapshot is fetched
again and replaced.
"""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from functools import partial
from typing import Dict, List, Optional, Tuple

from models.records import (
    Customer, Guest, Slot, StudioSettings, Template,
    normalize_all, normalize_customer, normalize_settings,
    normalize_slot, normalize_template,
)


@dataclass(frozen=True)
class Snapshot:
    slots: Tuple[Slot, ...] = ()
    templates: Tuple[Template, ...] = ()
    customers: Tuple[Customer, ...] = ()
    settings: StudioSettings = field(default_factory=StudioSettings)
    loaded_at: Optional[datetime] = None

    def find_slot(self, slot_id) -> Optional[Slot]:
        wanted = str(slot_id)
        return next((s for s in self.slots if s.id == wanted), None)

    def find_template(self, template_id) -> Optional[Template]:
        wanted = str(template_id)
        return next((t for t in self.templates if t.id == wanted), None)

    def find_guest(self, reservation_id) -> Optional[Tuple[Slot, Guest]]:
        """Locate a guest entry and its slot by reservation id."""
        wanted = str(reservation_id)
        for slot in self.slots:
            for guest in slot.guests:
                if guest.id == wanted:
                    return slot, guest
        return None

    def active_templates(self) -> List[Template]:
        return [t for t in self.templates if t.is_active]


def build_snapshot(
    payload: Optional[Dict],
    loaded_at: Optional[datetime] = None,
    tz: Optional[tzinfo] = None
) -> Snapshot:
    """
    Normalize the backend init response.

    Args:
        payload: Response of the init action with 'lessons', 'packages',
            'customers' and 'settings' keys (any of them may be missing)
        loaded_at: When the payload was fetched
        tz: Studio timezone; lesson dates sent as UTC timestamps are read in it

    Returns:
        Snapshot
    """
    payload = payload or {}
    return Snapshot(
        slots=normalize_all(payload.get('lessons'), partial(normalize_slot, tz=tz)),
        templates=normalize_all(payload.get('packages'), normalize_template),
        customers=normalize_all(payload.get('customers'), normalize_customer),
        settings=normalize_settings(payload.get('settings') or {}),
        loaded_at=loaded_at,
    )
