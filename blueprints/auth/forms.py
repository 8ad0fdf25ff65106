"""
Authentication forms using Flask-WTF.
Provides the administrator login form with CSRF protection.
"""

from flask_wtf import FlaskForm
from wtforms import BooleanField, PasswordField
from wtforms.validators import DataRequired


class LoginForm(FlaskForm):
    """Login form with the administrator password."""

    password = PasswordField('パスワード', validators=[
        DataRequired(message='パスワードを入力してください')
    ])

    remember_me = BooleanField('ログイン状態を保持')
