"""
Shared extension objects, bound to the app in create_app().
"""

from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

from utils.api_response import api_error
from utils.messages import MESSAGES

login_manager = LoginManager()
login_manager.login_message = MESSAGES['login_required']
login_manager.login_message_category = 'warning'

csrf = CSRFProtect()


@login_manager.user_loader
def load_user(user_id):
    """Resolve the session's user id to the single administrator."""
    from models.user import get_user_by_id

    return get_user_by_id(user_id)


@login_manager.unauthorized_handler
def unauthorized():
    """Answer 401 as JSON; the console has no login page to redirect to."""
    return api_error(MESSAGES['login_required'], status=401)
