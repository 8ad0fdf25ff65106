"""
Studio settings API routes.
"""

from flask import request
from flask_login import login_required

from blueprints.studio.services.package_service import save_settings
from blueprints.studio.services.snapshot_service import get_snapshot
from utils.api_response import api_refused, api_success
from utils.decorators import backend_errors, json_body_required
from utils.messages import MESSAGES


def register_routes(bp):
    """Register settings routes on the blueprint."""

    @bp.route('/settings')
    @login_required
    @backend_errors
    def settings_get():
        return api_success(data=get_snapshot().settings.to_dict())

    @bp.route('/settings', methods=['PUT'])
    @login_required
    @json_body_required
    @backend_errors
    def settings_save():
        """
        Save studio name, concept, address, contact email and facilities.
        """
        try:
            snapshot = save_settings(request.get_json())
        except ValueError as e:
            return api_refused(e)
        return api_success(data=snapshot.settings.to_dict(), message=MESSAGES['settings_saved'])
