"""Caller-side subscription with FormSubmit fallback."""

from unittest.mock import MagicMock

import pytest
import requests

from ravenscroft.modules.newsletter.fallback import (
    FormRelayClient, NewsletterClient, PrimaryUnavailable, subscribe_with_fallback,
    BOTH_FAILED_MESSAGE, FALLBACK_SUCCESS_MESSAGE, INVALID_EMAIL_MESSAGE,
)
from ravenscroft.modules.newsletter.gateway import Ok, Err
from conftest import make_response

RELAY_URL = "https://formsubmit.co/melissa@ravenscroftdesign.com"
SITE_URL = "https://ravenscroftdesign.com"


@pytest.fixture
def relay_session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def site_session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def newsletter_client(site_session, relay_session):
    relay = FormRelayClient(RELAY_URL, session=relay_session)
    return NewsletterClient(SITE_URL, relay, session=site_session)


# ---------------------------------------------------------------------------
# FormRelayClient
# ---------------------------------------------------------------------------

def test_relay_posts_multipart_fields(relay_session):
    relay_session.post.return_value = make_response(200, {"success": "true"})
    relay = FormRelayClient(RELAY_URL, subject="New Newsletter Subscription", session=relay_session)

    result = relay.submit("jane@example.com", "Jane")

    assert result.is_ok
    args, kwargs = relay_session.post.call_args
    assert args == (RELAY_URL,)
    assert kwargs["files"] == {
        "email": (None, "jane@example.com"),
        "firstName": (None, "Jane"),
        "_subject": (None, "New Newsletter Subscription"),
        "_captcha": (None, "false"),
    }


@pytest.mark.parametrize("status", [200, 201, 204])
def test_relay_any_2xx_is_success(relay_session, status):
    relay_session.post.return_value = make_response(status)
    assert FormRelayClient(RELAY_URL, session=relay_session).submit("a@example.com") == Ok(status)


@pytest.mark.parametrize("status", [302, 400, 500])
def test_relay_non_2xx_is_failure(relay_session, status):
    relay_session.post.return_value = make_response(status)
    result = FormRelayClient(RELAY_URL, session=relay_session).submit("a@example.com")
    assert result == Err("relay", f"HTTP {status}")


def test_relay_network_failure(relay_session):
    relay_session.post.side_effect = requests.ConnectionError("offline")
    result = FormRelayClient(RELAY_URL, session=relay_session).submit("a@example.com")
    assert result.is_err
    assert result.kind == "network"


# ---------------------------------------------------------------------------
# subscribe_with_fallback (strategy only)
# ---------------------------------------------------------------------------

def _unavailable():
    raise PrimaryUnavailable("network unreachable")


def test_primary_success_skips_fallback():
    fallback = MagicMock()
    outcome = subscribe_with_fallback(
        lambda: Ok({"success": True, "message": "Check your email"}), fallback)

    assert outcome.success is True
    assert outcome.via == "primary"
    assert outcome.message == "Check your email"
    fallback.assert_not_called()


def test_primary_negative_result_is_final():
    fallback = MagicMock()
    outcome = subscribe_with_fallback(
        lambda: Ok({"success": False, "message": "This email is already subscribed."}), fallback)

    assert outcome.success is False
    assert outcome.both_failed is False
    assert outcome.message == "This email is already subscribed."
    fallback.assert_not_called()


def test_primary_rejection_is_final():
    fallback = MagicMock()
    outcome = subscribe_with_fallback(lambda: Err("invalid-argument", "Valid email required"), fallback)

    assert outcome.success is False
    assert outcome.message == "Valid email required"
    fallback.assert_not_called()


def test_unavailable_primary_uses_fallback():
    outcome = subscribe_with_fallback(_unavailable, lambda: Ok(200))

    assert outcome.success is True
    assert outcome.via == "fallback"
    assert outcome.message == FALLBACK_SUCCESS_MESSAGE
    assert outcome.both_failed is False


def test_both_failed():
    outcome = subscribe_with_fallback(_unavailable, lambda: Err("relay", "HTTP 500"))

    assert outcome.success is False
    assert outcome.both_failed is True
    assert outcome.message == BOTH_FAILED_MESSAGE


# ---------------------------------------------------------------------------
# NewsletterClient
# ---------------------------------------------------------------------------

def test_client_primary_success(newsletter_client, site_session, relay_session):
    site_session.post.return_value = make_response(200, {
        "result": {"success": True, "message": "Subscription successful!"}})

    outcome = newsletter_client.subscribe("jane@example.com", "Jane")

    assert outcome.success is True
    assert outcome.via == "primary"
    args, kwargs = site_session.post.call_args
    assert args == (f"{SITE_URL}/api/newsletter/subscribe",)
    assert kwargs["json"] == {"data": {"email": "jane@example.com", "firstName": "Jane"}}
    relay_session.post.assert_not_called()


def test_client_network_error_falls_back_to_relay(newsletter_client, site_session, relay_session):
    site_session.post.side_effect = requests.ConnectionError("unreachable")
    relay_session.post.return_value = make_response(200)

    outcome = newsletter_client.subscribe("jane@example.com", "Jane")

    assert outcome.success is True
    assert outcome.via == "fallback"
    relay_session.post.assert_called_once()


def test_client_reports_both_methods_failed(newsletter_client, site_session, relay_session):
    site_session.post.side_effect = requests.ConnectionError("unreachable")
    relay_session.post.return_value = make_response(500)

    outcome = newsletter_client.subscribe("jane@example.com", "Jane")

    assert outcome.success is False
    assert outcome.both_failed is True
    assert "both methods failed" in outcome.message


def test_client_internal_error_falls_back(newsletter_client, site_session, relay_session):
    site_session.post.return_value = make_response(500, {
        "error": {"status": "INTERNAL", "code": "internal", "message": "Subscription failed. Please try again."}})
    relay_session.post.return_value = make_response(200)

    outcome = newsletter_client.subscribe("jane@example.com")

    assert outcome.via == "fallback"
    assert outcome.success is True


def test_client_html_error_page_falls_back(newsletter_client, site_session, relay_session):
    site_session.post.return_value = make_response(502, b"<html>Bad Gateway</html>")
    relay_session.post.return_value = make_response(200)

    outcome = newsletter_client.subscribe("jane@example.com")

    assert outcome.via == "fallback"


def test_client_already_subscribed_does_not_fall_back(newsletter_client, site_session, relay_session):
    site_session.post.return_value = make_response(200, {
        "result": {"success": False, "message": "This email is already subscribed."}})

    outcome = newsletter_client.subscribe("jane@example.com")

    assert outcome.success is False
    assert outcome.via == "primary"
    relay_session.post.assert_not_called()


def test_client_invalid_argument_does_not_fall_back(newsletter_client, site_session, relay_session):
    site_session.post.return_value = make_response(400, {
        "error": {"status": "INVALID_ARGUMENT", "code": "invalid-argument", "message": "Valid email required"}})

    outcome = newsletter_client.subscribe("jane@example.com")

    assert outcome.message == "Valid email required"
    relay_session.post.assert_not_called()


def test_client_validates_email_locally(newsletter_client, site_session, relay_session):
    outcome = newsletter_client.subscribe("not-an-email")

    assert outcome.success is False
    assert outcome.message == INVALID_EMAIL_MESSAGE
    site_session.post.assert_not_called()
    relay_session.post.assert_not_called()


def test_call_subscribe_raises_when_unreachable(newsletter_client, site_session):
    site_session.post.side_effect = requests.Timeout("slow")
    with pytest.raises(PrimaryUnavailable):
        newsletter_client.call_subscribe("jane@example.com")


def test_client_non_object_result_falls_back(newsletter_client, site_session, relay_session):
    site_session.post.return_value = make_response(200, {"result": ["unexpected"]})
    relay_session.post.return_value = make_response(200)

    outcome = newsletter_client.subscribe("jane@example.com")

    assert outcome.success is True
    assert outcome.via == "fallback"
    relay_session.post.assert_called_once()


def test_primary_non_object_result_is_a_failure():
    fallback = MagicMock()
    outcome = subscribe_with_fallback(lambda: Ok(["unexpected"]), fallback)

    assert outcome.success is False
    assert outcome.via == "primary"
    assert outcome.message == "Subscription failed. Please try again."
    fallback.assert_not_called()
