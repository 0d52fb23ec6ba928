import logging
from flask import jsonify, request, current_app
from . import health_bp
from ..auth import admin_required
from ...core.database import DocumentStoreError
from ...core.logging_service import LoggingService

logger = logging.getLogger(__name__)


def _build_health_response():
    """Returns (data, status) where status is ok / warning / critical"""
    ext = current_app.extensions['ravenscroft']
    checks = {}
    status = 'ok'

    try:
        ext.store.get('users', '__health__')
        checks['store'] = 'ok'
    except DocumentStoreError as e:
        logger.error(f"Health check: document store unavailable: {e}")
        checks['store'] = 'unavailable'
        status = 'critical'

    if ext.gateway.is_configured:
        checks['mailchimp'] = 'configured'
    else:
        checks['mailchimp'] = 'missing'
        if status == 'ok':
            status = 'warning'

    return {'status': status, 'checks': checks}, status


@health_bp.route('/')
@health_bp.route('')
def health_check():
    """Public health endpoint for uptime monitors."""
    data, status = _build_health_response()
    code = 503 if status == 'critical' else 200
    return jsonify(data), code


@health_bp.route('/errors')
@admin_required
def recent_errors():
    """Recent ERROR entries from appLogs"""
    limit = request.args.get('limit', 50, type=int)
    if limit < 1:
        limit = 50
    errors = LoggingService.recent(limit=min(limit, 200), level='ERROR')
    return jsonify({'errors': errors, 'count': len(errors)})
