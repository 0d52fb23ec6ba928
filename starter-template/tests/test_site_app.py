"""
Critical tests for the Ravenscroft site app.
Run with: pytest tests/test_site_app.py -v
"""

import os
import sys
import pytest

# Add parent directory to path so we can import main
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def app():
    """Create application for testing."""
    from main import app
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def test_app_starts(app):
    """App should start without errors."""
    assert app is not None
    assert 'ravenscroft' in app.extensions


def test_health_endpoint(client):
    """Health endpoint answers 200 (ok, or warning without Mailchimp keys)."""
    response = client.get('/health')
    assert response.status_code == 200


def test_homepage(client):
    """API index should list the registered modules."""
    response = client.get('/')
    assert response.status_code == 200
    assert 'newsletter' in response.get_json()['modules']
