"""
Guest API routes.
"""

from flask_login import login_required

from blueprints.studio.services import NotFoundError
from blueprints.studio.services.slot_service import force_cancel
from blueprints.studio.services.snapshot_service import get_snapshot
from models.customer import guest_detail
from utils.api_response import api_error, api_refused, api_success
from utils.decorators import backend_errors
from utils.messages import MESSAGES


def register_routes(bp):
    """Register guest routes on the blueprint."""

    @bp.route('/guests/<reservation_id>')
    @login_required
    @backend_errors
    def guest_info(reservation_id):
        """Guest detail with the linked customer's visit count and memo."""
        snapshot = get_snapshot()
        found = snapshot.find_guest(reservation_id)
        if found is None:
            return api_error(MESSAGES['guest_not_found'], status=404)

        slot, guest = found
        detail = guest_detail(guest, snapshot.customers)
        detail['slot_id'] = slot.id
        return api_success(data=detail)

    @bp.route('/guests/<reservation_id>/cancel', methods=['POST'])
    @login_required
    @backend_errors
    def guest_force_cancel(reservation_id):
        """
        Force-cancel a reservation.

        The backend sends the cancellation notice and promotes the first
        waitlisted guest when the lesson is far enough away.
        """
        try:
            force_cancel(reservation_id)
        except NotFoundError as e:
            return api_error(str(e), status=404)
        except ValueError as e:
            return api_refused(e)
        return api_success(message=MESSAGES['force_cancel_done'])
