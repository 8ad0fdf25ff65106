"""
Authentication routes: login, logout, session status.
"""

import logging

from flask import Blueprint
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm
from blueprints.studio.services.snapshot_service import get_store
from models.user import AdminUser, check_admin_password
from utils.api_response import api_error, api_success
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """
    Login route with form handling.

    GET: Return the CSRF token the login form must send
    POST: Check the administrator password (form or JSON body)
    """
    if current_user.is_authenticated:
        return api_success(data={'authenticated': True})

    form = LoginForm()

    if form.validate_on_submit():
        if not check_admin_password(form.password.data):
            logger.warning("Failed administrator login")
            return api_error(MESSAGES['invalid_credentials'], status=401)

        login_user(AdminUser(), remember=form.remember_me.data)
        return api_success(data={'authenticated': True}, message=MESSAGES['login_success'])

    if form.errors:
        first_error = next(iter(form.errors.values()))[0]
        return api_error(first_error, status=400)

    return api_success(data={'authenticated': False, 'csrf_token': generate_csrf()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user and drop the cached snapshot."""
    logout_user()
    get_store().clear()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/session')
def session_status():
    """Whether the current browser session is logged in."""
    return api_success(data={'authenticated': current_user.is_authenticated})
