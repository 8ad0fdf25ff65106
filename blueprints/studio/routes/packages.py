"""
Package API routes.
Lesson templates used as defaults for new slots.
"""

from flask import request
from flask_login import login_required

from blueprints.studio.services import NotFoundError
from blueprints.studio.services.package_service import delete_package, save_package
from blueprints.studio.services.snapshot_service import get_snapshot
from models.gating import COLOR_PALETTE, needs_border
from models.package import package_form, package_list
from utils.api_response import api_error, api_refused, api_success
from utils.decorators import backend_errors, json_body_required
from utils.messages import MESSAGES


def register_routes(bp):
    """Register package routes on the blueprint."""

    @bp.route('/packages')
    @login_required
    @backend_errors
    def packages_list():
        """Get active packages for the package list and picker."""
        return api_success(data={'packages': package_list(get_snapshot().templates)})

    @bp.route('/packages/<package_id>')
    @login_required
    @backend_errors
    def package_detail(package_id):
        """Get a package's form values."""
        template = get_snapshot().find_template(package_id)
        if template is None:
            return api_error(MESSAGES['package_not_found'], status=404)
        return api_success(data=package_form(template))

    @bp.route('/packages', methods=['POST'])
    @login_required
    @json_body_required
    @backend_errors
    def package_create():
        """Create a package."""
        try:
            save_package(request.get_json())
        except ValueError as e:
            return api_refused(e)
        return api_success(message=MESSAGES['package_saved'], status=201)

    @bp.route('/packages/<package_id>', methods=['PUT'])
    @login_required
    @json_body_required
    @backend_errors
    def package_update(package_id):
        """Update a package."""
        try:
            save_package(request.get_json(), package_id)
        except NotFoundError as e:
            return api_error(str(e), status=404)
        except ValueError as e:
            return api_refused(e)
        return api_success(message=MESSAGES['package_saved'])

    @bp.route('/packages/<package_id>', methods=['DELETE'])
    @login_required
    @backend_errors
    def package_delete(package_id):
        """Soft-delete a package."""
        try:
            delete_package(package_id)
        except NotFoundError as e:
            return api_error(str(e), status=404)
        return api_success(message=MESSAGES['package_deleted'])

    @bp.route('/palette')
    @login_required
    def color_palette():
        """Colors offered by the color pickers."""
        return api_success(data={
            'colors': [{'value': c, 'bordered': needs_border(c)} for c in COLOR_PALETTE],
            'default': COLOR_PALETTE[0],
        })
