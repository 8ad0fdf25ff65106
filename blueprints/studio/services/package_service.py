"""
Package (lesson template) and studio settings mutations.
"""

import logging
from typing import Dict

from backend import ACTION_SAVE_PACKAGE, ACTION_SAVE_SETTINGS, get_backend
from blueprints.studio.services import NotFoundError
from blueprints.studio.services.snapshot_service import get_snapshot, reload_snapshot
from models.package import build_package_delete_payload, build_package_payload
from models.settings import build_settings_payload
from models.snapshot import Snapshot
from utils.messages import MESSAGES
from utils.validators import validate_email

logger = logging.getLogger(__name__)


def save_package(data: Dict, package_id: str = '') -> Snapshot:
    """
    Create or update a package.

    Args:
        data: Package form data
        package_id: Existing package id; empty to create

    Returns:
        The reloaded snapshot

    Raises:
        NotFoundError: package_id does not exist
        ValueError: Invalid package data
    """
    if package_id and get_snapshot().find_template(package_id) is None:
        raise NotFoundError(MESSAGES['package_not_found'])

    payload = build_package_payload(data, package_id)
    get_backend().call(ACTION_SAVE_PACKAGE, payload)
    logger.info("Package %s saved", package_id or '(new)')
    return reload_snapshot()


def delete_package(package_id: str) -> Snapshot:
    """Soft-delete a package. Slots created from it keep their own data."""
    if get_snapshot().find_template(package_id) is None:
        raise NotFoundError(MESSAGES['package_not_found'])

    get_backend().call(ACTION_SAVE_PACKAGE, build_package_delete_payload(package_id))
    logger.info("Package %s deleted", package_id)
    return reload_snapshot()


def save_settings(data: Dict) -> Snapshot:
    """
    Save the studio settings.

    Raises:
        ValueError: Contact email present but malformed
    """
    payload = build_settings_payload(data)
    if payload['contactEmail'] and not validate_email(payload['contactEmail']):
        raise ValueError(MESSAGES['invalid_email'])

    get_backend().call(ACTION_SAVE_SETTINGS, payload)
    logger.info("Studio settings saved")
    return reload_snapshot()
