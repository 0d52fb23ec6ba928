"""
Contact Routes
==============

POST /api/contact with {name, email, message}. The message is saved to
contactSubmissions first, then relayed by email via FormSubmit.
"""

import logging
from flask import request, jsonify, current_app
from . import contact_bp
from ..newsletter.handlers import is_valid_email
from ...core.config import Config
from ...core.errors import InvalidArgument, Internal
from ...core.logging_service import db_log

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


def validate_contact(data):
    """Trimmed (name, email, message) or InvalidArgument"""
    data = data or {}
    if not isinstance(data, dict):
        raise InvalidArgument('Please fill out all fields')
    name = str(data.get('name') or '').strip()
    email = str(data.get('email') or '').strip()
    message = str(data.get('message') or '').strip()

    if not name or not email or not message:
        raise InvalidArgument('Please fill out all fields')
    if not is_valid_email(email):
        raise InvalidArgument('Please enter a valid email address')
    if len(message) > MAX_MESSAGE_LENGTH:
        raise InvalidArgument(f'Message must be at most {MAX_MESSAGE_LENGTH} characters')
    return name, email, message


@contact_bp.route('', methods=['POST'])
def submit_contact():
    """Handle a contact form submission"""
    body = request.get_json(silent=True)
    if body is None:
        body = request.form.to_dict()
    name, email, message = validate_contact(body)

    ext = current_app.extensions['ravenscroft']
    submission = ext.store.create(Config.CONTACT_COLLECTION, {
        'name': name,
        'email': email,
        'message': message,
        'read': False,
    })

    site_name = current_app.config.get('SITE_NAME', Config.SITE_NAME)
    result = ext.contact_relay.post({
        'name': name,
        'email': email,
        'message': message,
        '_subject': f'New Contact Form Submission from {site_name}',
        '_captcha': 'false',
        '_template': 'table',
    })

    if result.is_err:
        logger.error(f"Contact relay failed for submission {submission['id']}: {result!r}")
        db_log('error', 'contact', 'Contact relay failed', {'id': submission['id'], 'error': result.detail})
        raise Internal('Failed to send message')

    db_log('info', 'contact', 'Contact message received', {'id': submission['id'], 'email': email})
    return jsonify({
        'success': True,
        'id': submission['id'],
        'message': "Thank you for your message. I'll get back to you soon!",
    }), 201
