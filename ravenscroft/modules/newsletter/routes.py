"""
Newsletter Routes
=================

Callable-style endpoints: the request body is {"data": {...}} (a bare JSON
object is accepted too), the response is {"result": {...}}. Failures are
CallableErrors rendered by core.errors.

Provides:
- POST /subscribe -- {email, firstName?} -> {success, message}
- POST /stats -- admin only -> {success, member_count?, ..., message}
"""

import logging
from flask import request, jsonify, current_app
from . import newsletter_bp
from .handlers import subscribe_to_newsletter, get_newsletter_stats
from ..auth import get_caller_uid
from ...core.errors import InvalidArgument
from ...core.logging_service import db_log

logger = logging.getLogger(__name__)


def _extension():
    return current_app.extensions['ravenscroft']


def _callable_data():
    """Unwrap the callable payload"""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if isinstance(body, dict) and 'data' in body:
        body = body['data']
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidArgument('Request data must be an object')
    return body


@newsletter_bp.route('/subscribe', methods=['POST'])
def subscribe():
    """Subscribe an email address to the newsletter"""
    data = _callable_data()
    result = subscribe_to_newsletter(data, _extension().gateway)

    if result['success']:
        db_log('info', 'newsletter', 'New newsletter subscription', {'email': data.get('email')})
    else:
        db_log('info', 'newsletter', 'Repeat newsletter subscription', {'email': data.get('email')})

    return jsonify({'result': result}), 200


@newsletter_bp.route('/stats', methods=['GET', 'POST'])
def stats():
    """Mailchimp list statistics for the admin dashboard"""
    ext = _extension()
    uid = get_caller_uid()
    result = get_newsletter_stats(uid, ext.store, ext.gateway)
    logger.info(f"Newsletter stats served to {uid}")
    return jsonify({'result': result}), 200
