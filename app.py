"""
Lesson Studio admin console.

create_app() builds the Flask application: configuration, login and CSRF,
the snapshot cache, blueprints, JSON error pages and the CLI commands.
"""

import logging
import os

import click
from dotenv import load_dotenv
from flask import Flask

load_dotenv()

from backend import close_backend
from config import config
from extensions import csrf, login_manager


def create_app(config_name=None):
    """
    Build a configured application.

    Args:
        config_name: 'development', 'production' or 'test'. Defaults to
            FLASK_ENV, then to development.

    Returns:
        Flask application instance
    """
    from models.user import hash_admin_password

    config_class = config.get(config_name or os.environ.get('FLASK_ENV', 'development'),
                              config['default'])
    if hasattr(config_class, 'validate'):
        config_class.validate()

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config['ADMIN_PASSWORD_HASH'] = hash_admin_password(app.config.get('ADMIN_PASSWORD', ''))

    for setup in (initialize_extensions, register_blueprints, register_error_handlers,
                  register_cli_commands, register_teardown_handlers, configure_logging):
        setup(app)

    return app


def initialize_extensions(app):
    from blueprints.studio.services.snapshot_service import init_snapshot_store

    login_manager.init_app(app)
    csrf.init_app(app)
    init_snapshot_store(app)


def register_blueprints(app):
    """Mount auth at the root, the console under /studio and status under /api."""
    from flask_login import current_user

    from blueprints.api.routes import api_bp
    from blueprints.auth.routes import auth_bp
    from blueprints.studio import studio_bp
    from utils.api_response import api_success

    app.register_blueprint(auth_bp)
    app.register_blueprint(studio_bp, url_prefix='/studio')
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/')
    def index():
        signed_in = current_user.is_authenticated
        return api_success(data={
            'authenticated': signed_in,
            'next': '/studio/calendar' if signed_in else '/login',
        })


def register_error_handlers(app):
    """Every error page is a JSON envelope."""
    from utils.api_response import api_error
    from utils.messages import MESSAGES

    @app.errorhandler(403)
    def forbidden(error):
        return api_error(MESSAGES['permission_denied'], status=403)

    @app.errorhandler(404)
    def not_found(error):
        return api_error(MESSAGES['not_found'], status=404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return api_error(str(error.description), status=405)

    @app.errorhandler(500)
    def server_error(error):
        app.logger.error(f"Unhandled error: {error}")
        return api_error(MESSAGES['server_error'], status=500)


def register_cli_commands(app):
    """Operator commands run with `flask --app app <command>`."""

    @app.cli.command('show-month')
    @click.argument('year', type=int)
    @click.argument('month', type=int)
    def show_month_command(year, month):
        """Print the lessons of YEAR/MONTH day by day."""
        from blueprints.studio.services.snapshot_service import reload_snapshot
        from models.calendar import build_month
        from models.slot import slot_summary
        from utils.helpers import get_weekday_name_ja
        from utils.validators import validate_month

        if not validate_month(year, month):
            raise click.BadParameter(f'invalid month: {year}-{month}')

        with app.app_context():
            snapshot = reload_snapshot()
            grid = build_month(year, month, snapshot.slots)

            click.echo(grid.label)
            for cell in grid.cells():
                if not (cell.in_month and cell.slots):
                    continue
                click.echo(f'{cell.date_str} ({get_weekday_name_ja(cell.date_str)})')
                for slot in cell.slots:
                    summary = slot_summary(slot, snapshot.templates)
                    click.echo(
                        f"  {summary['start_time']}-{summary['end_time']} "
                        f"{summary['lesson_name']} {summary['stats_label']}"
                    )

    @app.cli.command('check-backend')
    def check_backend_command():
        """Fetch one snapshot and print what it contains."""
        from backend import BackendError
        from blueprints.studio.services.snapshot_service import reload_snapshot

        with app.app_context():
            try:
                snapshot = reload_snapshot()
            except BackendError as e:
                click.echo(f'Backend error: {e}', err=True)
                raise SystemExit(1)

            click.echo(f'Slots: {len(snapshot.slots)}')
            click.echo(f'Templates: {len(snapshot.templates)}')
            click.echo(f'Customers: {len(snapshot.customers)}')
            click.echo(f'Studio: {snapshot.settings.studio_name or "-"}')


def register_teardown_handlers(app):
    app.teardown_appcontext(close_backend)


def configure_logging(app):
    """Log to logs/studio.log outside debug and test runs."""
    if app.debug or app.testing:
        app.logger.setLevel(logging.DEBUG)
        return

    os.makedirs('logs', exist_ok=True)
    file_handler = logging.FileHandler('logs/studio.log')
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
    app.logger.info('Lesson Studio startup')


if __name__ == '__main__':
    create_app().run(host='0.0.0.0', debug=True)
