"""
Ravenscroft - Site backend for Ravenscroft Design
=================================================

Flask extension serving the JSON side of the jewelry site:
- Newsletter subscription and Mailchimp list statistics (callable endpoints)
- Public gallery / events / about content from the document store
- Contact form relay
- Health endpoint

Usage:
    from flask import Flask
    from ravenscroft import Ravenscroft

    app = Flask(__name__)
    Ravenscroft(app)
"""

import logging
import os

from flask_cors import CORS

from .core.config import Config, config_defaults
from .core.database import DocumentStore
from .core.errors import register_error_handlers
from .modules.newsletter.gateway import MailchimpConfig, MailingListGateway
from .modules.newsletter.fallback import FormRelayClient

__version__ = '0.1.0'

logger = logging.getLogger(__name__)


class Ravenscroft:
    """
    Wires store, gateway, blueprints and CLI into a Flask app.

    Args:
        app: Flask app (or call init_app later)
        config: {'features': {'newsletter': bool, 'content': bool, 'contact': bool, 'health': bool},
                 'site_name': str}
        store: DocumentStore to use instead of one built from CONTENT_DB
        gateway: MailingListGateway to use instead of one built from MAILCHIMP_* keys
    """

    DEFAULT_FEATURES = {
        'newsletter': True,
        'content': True,
        'contact': True,
        'health': True,
    }

    def __init__(self, app=None, config=None, store=None, gateway=None):
        self._config = config or {}
        self._registered = []
        self.store = store
        self.gateway = gateway
        self.contact_relay = None

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)

        if self.store is None:
            self.store = DocumentStore(app.config['CONTENT_DB'])

        if self.gateway is None:
            self.gateway = MailingListGateway(MailchimpConfig.from_mapping(app.config))

        self.contact_relay = FormRelayClient(
            app.config['FORM_RELAY_URL'],
            subject=f"New Contact Form Submission from {app.config['SITE_NAME']}",
        )

        register_error_handlers(app)
        origins = app.config['CORS_ORIGINS']
        CORS(app, resources={r"/api/*": {"origins": origins}},
             supports_credentials=origins != ['*'])

        self._register_modules(app)

        from .cli import ravenscroft_cli
        app.cli.add_command(ravenscroft_cli)

        app.extensions['ravenscroft'] = self

    def _apply_config(self, app):
        """app.config wins, then Config (environment); CONTENT_DB follows DB_DIR"""
        for key, value in config_defaults().items():
            if key == 'CONTENT_DB':
                continue
            if app.config.get(key) is None:
                app.config[key] = value

        if not app.config.get('CONTENT_DB'):
            app.config['CONTENT_DB'] = (
                os.getenv('CONTENT_DB') or os.path.join(app.config['DB_DIR'], 'content.db')
            )

        if self._config.get('site_name'):
            app.config['SITE_NAME'] = self._config['site_name']

        if not app.config.get('SECRET_KEY'):
            logger.warning("FLASK_SECRET_KEY is not set; admin sessions will not work")

    def _features(self):
        features = dict(self.DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def _register_modules(self, app):
        features = self._features()

        if features['newsletter']:
            from .modules.newsletter import newsletter_bp
            app.register_blueprint(newsletter_bp)
            self._registered.append('newsletter')

        if features['content']:
            from .modules.content import content_bp
            app.register_blueprint(content_bp)
            self._registered.append('content')

        if features['contact']:
            from .modules.contact import contact_bp
            app.register_blueprint(contact_bp)
            self._registered.append('contact')

        if features['health']:
            from .modules.health import health_bp
            app.register_blueprint(health_bp)
            self._registered.append('health')

    def get_registered_modules(self):
        return list(self._registered)


__all__ = ['Ravenscroft', 'Config', '__version__']
