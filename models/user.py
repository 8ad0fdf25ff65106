"""
Administrator account for Flask-Login.

The console has a single administrator. Its password comes from the
ADMIN_PASSWORD setting and is kept only as a Werkzeug hash.
"""

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

ADMIN_USER_ID = 'admin'


class AdminUser:
    """
    User class for Flask-Login integration.
    """

    def __init__(self, user_id: str = ADMIN_USER_ID):
        self.id = user_id
        self.username = user_id

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login. Returns user ID as string."""
        return str(self.id)


def get_user_by_id(user_id: str):
    """
    Get the administrator by ID.

    Args:
        user_id: User ID from the session

    Returns:
        AdminUser or None if the ID is not the administrator's
    """
    if user_id == ADMIN_USER_ID:
        return AdminUser()
    return None


def hash_admin_password(password: str) -> str:
    return generate_password_hash(password) if password else ''


def check_admin_password(password: str) -> bool:
    """
    Check a login password against the configured administrator password.

    Args:
        password: Submitted password

    Returns:
        True if it matches; always False when no password is configured
    """
    password_hash = current_app.config.get('ADMIN_PASSWORD_HASH', '')
    if not password_hash or not password:
        return False
    return check_password_hash(password_hash, password)
