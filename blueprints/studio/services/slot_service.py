"""
Slot mutations.

Every mutation follows the same path: check the gating rules against the
current snapshot, send the change to the backend, then reload the whole
snapshot. Nothing is changed locally.
"""

import logging
from typing import Dict, Optional

from backend import ACTION_FORCE_CANCEL, ACTION_SAVE_SLOT, get_backend
from blueprints.studio.services import NotFoundError
from blueprints.studio.services.snapshot_service import get_snapshot, reload_snapshot
from models.slot import build_delete_payload, build_new_slot_payload, build_update_payload
from models.snapshot import Snapshot
from utils.datetime_helpers import get_today
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)


def _active_slot(snapshot: Snapshot, slot_id: str):
    """The slot with slot_id; soft-deleted slots count as missing."""
    slot = snapshot.find_slot(slot_id)
    if slot is None or not slot.is_active:
        raise NotFoundError(MESSAGES['slot_not_found'])
    return slot


def create_slot(date_str: str, data: Dict, template_id: Optional[str] = None) -> Snapshot:
    """
    Create a slot, from a template or by manual entry.

    Args:
        date_str: Day of the new slot (YYYY-MM-DD)
        data: Form data
        template_id: Template to copy from; None for manual entry

    Returns:
        The reloaded snapshot

    Raises:
        NotFoundError: template_id does not exist
        PastDateError: date_str is before today
        ValueError: Missing required fields
        BackendError: The backend refused or failed
    """
    snapshot = get_snapshot()
    template = None
    if template_id:
        template = snapshot.find_template(template_id)
        if template is None or not template.is_active:
            raise NotFoundError(MESSAGES['package_not_found'])

    payload = build_new_slot_payload(date_str, data, template=template, today=get_today())
    get_backend().call(ACTION_SAVE_SLOT, payload)
    logger.info("Slot created on %s (%s)", date_str, payload['lessonName'])
    return reload_snapshot()


def update_slot(slot_id: str, data: Dict) -> Snapshot:
    """
    Update an existing slot.

    Raises:
        NotFoundError: Unknown or deleted slot
        HasReservationsError: Price changed while reservations exist
        ValueError: Missing times
    """
    snapshot = get_snapshot()
    slot = _active_slot(snapshot, slot_id)

    payload = build_update_payload(slot, data, snapshot.templates)
    get_backend().call(ACTION_SAVE_SLOT, payload)
    logger.info("Slot %s updated", slot_id)
    return reload_snapshot()


def delete_slot(slot_id: str) -> Snapshot:
    """
    Soft-delete a slot.

    Raises:
        NotFoundError: Unknown or deleted slot
        HasReservationsError: The slot still has reservations
    """
    # Decide on fresh data: a reservation may have arrived since the last load.
    snapshot = get_snapshot(force=True)
    slot = _active_slot(snapshot, slot_id)

    payload = build_delete_payload(slot)
    get_backend().call(ACTION_SAVE_SLOT, payload)
    logger.info("Slot %s deleted", slot_id)
    return reload_snapshot()


def force_cancel(reservation_id: str) -> Snapshot:
    """
    Cancel a guest's reservation on behalf of the studio.

    The backend notifies the guest and promotes the waitlist; the console
    only asks for the cancellation and reloads.

    Raises:
        ValueError: No reservation id
        NotFoundError: Unknown reservation
    """
    if not reservation_id:
        raise ValueError(MESSAGES['reservation_id_missing'])

    snapshot = get_snapshot()
    if snapshot.find_guest(reservation_id) is None:
        raise NotFoundError(MESSAGES['guest_not_found'])

    get_backend().call(ACTION_FORCE_CANCEL, {'id': reservation_id})
    logger.info("Reservation %s force-cancelled", reservation_id)
    return reload_snapshot()
