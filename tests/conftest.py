"""
Shared fixtures for the Ravenscroft test suite.

Run with: pytest tests/ -v
(pytest is listed under extras_require["dev"] in setup.py.)
"""

import json
import os
import shutil
import tempfile

import pytest
import requests
from flask import Flask

from ravenscroft import Ravenscroft
from ravenscroft.core.database import DocumentStore
from ravenscroft.modules.auth import grant_admin
from ravenscroft.modules.newsletter.gateway import Ok, Err, ListStatistics, MEMBER_EXISTS


class FakeGateway:
    """In-process stand-in for MailingListGateway that remembers subscribers"""

    def __init__(self, configured=True):
        self.is_configured = configured
        self.subscribers = set()
        self.add_calls = []
        self.stats_calls = 0
        self.add_result = None
        self.stats_result = Ok(ListStatistics(
            member_count=42,
            total_contacts=50,
            unsubscribe_count=3,
            cleaned_count=1,
            campaign_count=7,
            avg_sub_rate=0.0325,
            avg_unsub_rate=0.01,
        ))

    def add_subscriber(self, email, first_name=''):
        self.add_calls.append((email, first_name))
        if self.add_result is not None:
            return self.add_result
        if email in self.subscribers:
            return Err(MEMBER_EXISTS, f"{email} is already a list member.")
        self.subscribers.add(email)
        return Ok({'email_address': email, 'status': 'pending'})

    def get_list_statistics(self):
        self.stats_calls += 1
        return self.stats_result


def make_response(status_code, body=None, url='https://us21.api.mailchimp.com/3.0/lists/abc123'):
    """Real requests.Response with a JSON (or raw bytes) body"""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = 'utf-8'
    if isinstance(body, bytes):
        response._content = body
    elif body is not None:
        response._content = json.dumps(body).encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
    else:
        response._content = b''
    return response


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="ravenscroft-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def store(tmp_db_dir):
    return DocumentStore(os.path.join(tmp_db_dir, "content.db"))


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(tmp_db_dir, store, gateway):
    """Flask app with the Ravenscroft extension, a temp store and a fake gateway."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["CONTENT_DB"] = store.path
    app.config["FORM_RELAY_URL"] = "https://formsubmit.co/test@example.com"
    app.config["SITE_NAME"] = "Test Studio"
    Ravenscroft(app, store=store, gateway=gateway)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client, store):
    """Test client whose session belongs to an admin user."""
    grant_admin(store, 'admin-uid', email='owner@example.com')
    with client.session_transaction() as sess:
        sess['uid'] = 'admin-uid'
    return client
