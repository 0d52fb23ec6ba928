"""
Newsletter Fallback Submission
==============================

Caller-side helpers for the public site. A subscription first goes to our
own /api/newsletter/subscribe callable; if that cannot be reached the same
fields are posted once to a FormSubmit relay, which forwards them by email.

There is no retry and no de-duplication: a user who resubmits after a
false failure can end up submitted twice.
"""

import logging
from typing import Callable, Optional

import requests

from .gateway import Ok, Err
from .handlers import is_valid_email

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = 'New Newsletter Subscription - Ravenscroft Design'

FALLBACK_SUCCESS_MESSAGE = 'Thank you for subscribing to our newsletter!'
BOTH_FAILED_MESSAGE = 'Subscription failed: both methods failed. Please try again later.'
INVALID_EMAIL_MESSAGE = 'Please enter a valid email address'
GENERIC_FAILURE_MESSAGE = 'Subscription failed. Please try again.'


class PrimaryUnavailable(Exception):
    """The subscription callable could not produce a usable answer"""


class SubmissionOutcome:
    """What the site tells the visitor after a subscription attempt"""

    def __init__(self, success, via, message, both_failed=False):
        self.success = success
        self.via = via
        self.message = message
        self.both_failed = both_failed

    def as_dict(self):
        return {
            'success': self.success,
            'via': self.via,
            'message': self.message,
            'both_failed': self.both_failed,
        }

    def __repr__(self):
        return f"SubmissionOutcome({self.as_dict()!r})"


class FormRelayClient:
    """Posts multipart form data to a FormSubmit style endpoint"""

    def __init__(self, endpoint_url, subject=DEFAULT_SUBJECT, session=None, timeout=15):
        self.endpoint_url = endpoint_url
        self.subject = subject
        self.session = session or requests.Session()
        self.timeout = timeout

    def post(self, fields):
        """Send `fields` as multipart/form-data; Ok(status) on any 2xx"""
        files = {name: (None, str(value)) for name, value in fields.items()}
        try:
            response = self.session.post(
                self.endpoint_url,
                files=files,
                headers={'Accept': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Form relay unreachable: {e}")
            return Err('network', str(e))

        if 200 <= response.status_code < 300:
            return Ok(response.status_code)

        logger.warning(f"Form relay returned HTTP {response.status_code}")
        return Err('relay', f"HTTP {response.status_code}")

    def submit(self, email, first_name=''):
        return self.post({
            'email': email,
            'firstName': first_name or '',
            '_subject': self.subject,
            '_captcha': 'false',
        })


def subscribe_with_fallback(attempt_primary: Callable[[], object],
                            attempt_fallback: Callable[[], object]) -> SubmissionOutcome:
    """
    Two-step strategy: the primary attempt returns Ok(result) / Err(code, message)
    or raises PrimaryUnavailable. Only the latter triggers the single fallback
    attempt, whose Ok/Err decides the outcome.
    """
    try:
        primary = attempt_primary()
    except PrimaryUnavailable as e:
        logger.warning(f"Newsletter callable unavailable ({e}), trying form relay")
        fallback = attempt_fallback()
        if fallback.is_ok:
            return SubmissionOutcome(True, 'fallback', FALLBACK_SUCCESS_MESSAGE)
        logger.error(f"Form relay fallback failed: {fallback!r}")
        return SubmissionOutcome(False, 'fallback', BOTH_FAILED_MESSAGE, both_failed=True)

    if primary.is_ok:
        result = primary.value or {}
        if not isinstance(result, dict):
            return SubmissionOutcome(False, 'primary', GENERIC_FAILURE_MESSAGE)
        return SubmissionOutcome(bool(result.get('success')), 'primary', result.get('message', ''))

    return SubmissionOutcome(False, 'primary', primary.detail or GENERIC_FAILURE_MESSAGE)


class NewsletterClient:
    """
    Calls the site's subscription callable with a FormSubmit fallback.

    Usage:
        client = NewsletterClient('https://ravenscroftdesign.com',
                                  FormRelayClient('https://formsubmit.co/me@example.com'))
        outcome = client.subscribe('jane@example.com', 'Jane')
    """

    def __init__(self, base_url, relay: FormRelayClient, session: Optional[requests.Session] = None, timeout=15):
        self.base_url = base_url.rstrip('/')
        self.relay = relay
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def subscribe_url(self):
        return f"{self.base_url}/api/newsletter/subscribe"

    def call_subscribe(self, email, first_name=''):
        """
        Ok(result) for a handled request, Err(code, message) for a rejected
        one. Network failures, unparseable replies and internal errors raise
        PrimaryUnavailable.
        """
        payload = {'data': {'email': email, 'firstName': first_name or ''}}
        try:
            response = self.session.post(self.subscribe_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise PrimaryUnavailable(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise PrimaryUnavailable(f"HTTP {response.status_code}: unexpected response")

        if response.status_code == 200 and 'result' in body:
            if not isinstance(body['result'], dict):
                raise PrimaryUnavailable(f"HTTP {response.status_code}: unexpected result")
            return Ok(body['result'])

        error = body.get('error') or {}
        code = error.get('code', 'internal')
        message = error.get('message') or GENERIC_FAILURE_MESSAGE
        if code == 'internal':
            raise PrimaryUnavailable(message)
        return Err(code, message)

    def subscribe(self, email, first_name=''):
        if not is_valid_email(email):
            return SubmissionOutcome(False, None, INVALID_EMAIL_MESSAGE)
        email = email.strip()
        return subscribe_with_fallback(
            lambda: self.call_subscribe(email, first_name),
            lambda: self.relay.submit(email, first_name),
        )
