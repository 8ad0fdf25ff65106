"""
API routes for JSON endpoints.
Provides service status for monitoring and the console header.
"""

from flask import current_app, jsonify, Blueprint
from flask_login import login_required

from blueprints.studio.services.snapshot_service import get_store

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status and version
    """
    return jsonify({
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'Lesson Studio')
    })


@api_bp.route('/status')
@login_required
def api_status():
    """
    Snapshot cache status.

    Does not contact the backend; reports what the console currently holds.

    Returns:
        JSON with loaded flag, load time and record counts
    """
    store = get_store()
    snapshot = store.current

    if snapshot is None:
        return jsonify({'success': True, 'loaded': False})

    return jsonify({
        'success': True,
        'loaded': True,
        'stale': store.is_stale(),
        'loaded_at': snapshot.loaded_at.isoformat() if snapshot.loaded_at else None,
        'slots': len(snapshot.slots),
        'templates': len(snapshot.templates),
        'customers': len(snapshot.customers)
    })
