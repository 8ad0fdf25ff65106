"""
Slot API routes.
Slot editor data and create/update/delete.
"""

from flask import request
from flask_login import login_required

from blueprints.studio.services import NotFoundError
from blueprints.studio.services.slot_service import create_slot, delete_slot, update_slot
from blueprints.studio.services.snapshot_service import get_snapshot
from models.gating import (
    HasReservationsError,
    open_existing_slot_editor, open_new_slot_editor,
)
from utils.api_response import api_error, api_refused, api_success
from utils.datetime_helpers import get_today
from utils.decorators import backend_errors, json_body_required
from utils.messages import MESSAGES
from utils.validators import validate_date_format


def register_routes(bp):
    """Register slot routes on the blueprint."""

    @bp.route('/slots/new')
    @login_required
    @backend_errors
    def new_slot_editor():
        """
        Get editor defaults for a new slot.

        Query params:
            date: Selected day (YYYY-MM-DD, required)
            template_id: Package to create from (optional; manual entry if absent)

        Returns:
            JSON editor state
        """
        date_str = request.args.get('date', '')
        template_id = request.args.get('template_id', '')

        if date_str and not validate_date_format(date_str):
            return api_error(MESSAGES['invalid_date'])

        template = None
        if template_id:
            template = get_snapshot().find_template(template_id)
            if template is None or not template.is_active:
                return api_error(MESSAGES['package_not_found'], status=404)

        try:
            editor = open_new_slot_editor(date_str, template, today=get_today())
        except ValueError as e:
            return api_refused(e)

        return api_success(data=editor.to_dict())

    @bp.route('/slots/<slot_id>')
    @login_required
    @backend_errors
    def slot_editor(slot_id):
        """Get editor state for an existing slot, with its locks and guests."""
        snapshot = get_snapshot()
        slot = snapshot.find_slot(slot_id)
        if slot is None or not slot.is_active:
            return api_error(MESSAGES['slot_not_found'], status=404)

        editor = open_existing_slot_editor(slot, snapshot.templates)
        return api_success(
            data=editor.to_dict(),
            message=None if editor.guests else MESSAGES['no_guests'],
        )

    @bp.route('/slots', methods=['POST'])
    @login_required
    @json_body_required
    @backend_errors
    def slot_create():
        """
        Create a slot.

        Request body:
            date: Day (YYYY-MM-DD, required)
            template_id: Package id (optional)
            start_time, end_time: HH:MM (required)
            price, capacity, color, is_public
            lesson_name, teacher_name: required/optional in manual mode

        Returns:
            JSON success message
        """
        data = request.get_json()
        date_str = data.get('date', '')
        if date_str and not validate_date_format(date_str):
            return api_error(MESSAGES['invalid_date'])

        try:
            create_slot(date_str, data, template_id=data.get('template_id') or None)
        except NotFoundError as e:
            return api_error(str(e), status=404)
        except ValueError as e:
            return api_refused(e)

        return api_success(message=MESSAGES['slot_saved'], status=201)

    @bp.route('/slots/<slot_id>', methods=['PUT'])
    @login_required
    @json_body_required
    @backend_errors
    def slot_update(slot_id):
        """Update start/end time, price, capacity, color and visibility."""
        try:
            update_slot(slot_id, request.get_json())
        except NotFoundError as e:
            return api_error(str(e), status=404)
        except HasReservationsError as e:
            return api_refused(e, status=409)
        except ValueError as e:
            return api_refused(e)

        return api_success(message=MESSAGES['slot_saved'])

    @bp.route('/slots/<slot_id>', methods=['DELETE'])
    @login_required
    @backend_errors
    def slot_delete(slot_id):
        """Soft-delete a slot; refused while it has reservations."""
        try:
            delete_slot(slot_id)
        except NotFoundError as e:
            return api_error(str(e), status=404)
        except HasReservationsError as e:
            return api_refused(e, status=409)

        return api_success(message=MESSAGES['slot_deleted'])
