"""
Customer API routes.
"""

from flask import request
from flask_login import login_required

from blueprints.studio.services.snapshot_service import get_snapshot
from models.customer import history_for_contact, search_customers
from utils.api_response import api_success
from utils.decorators import backend_errors
from utils.messages import MESSAGES


def register_routes(bp):
    """Register customer routes on the blueprint."""

    @bp.route('/customers')
    @login_required
    @backend_errors
    def customers_list():
        """
        Get customers, optionally filtered.

        Query params:
            q: Substring of name or phone

        Returns:
            JSON list of customers with visit counts
        """
        customers = search_customers(get_snapshot().customers, request.args.get('q', ''))
        return api_success(
            data={'customers': [c.to_dict() for c in customers]},
            message=None if customers else MESSAGES['no_customers'],
        )

    @bp.route('/customers/history')
    @login_required
    @backend_errors
    def customer_history():
        """
        Get the booking history of a contact email.

        Query params:
            email: Guest email (exact match)
            name: Display name for the heading (optional)
        """
        email = request.args.get('email', '')
        name = request.args.get('name', '')
        history = history_for_contact(email, get_snapshot().slots)

        return api_success(
            data={
                'title': f'{name} 様' if name else '',
                'entries': [h.to_dict() for h in history],
            },
            message=None if history else MESSAGES['no_history'],
        )
