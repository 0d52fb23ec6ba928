"""
Mailchimp Gateway
=================

Wraps the Mailchimp Marketing API v3 (https://mailchimp.com/developer/marketing/api/).
Every call returns Ok(value) or Err(kind, detail); raw provider failures are
only ever inspected by translate_error().
"""

import logging
from collections import namedtuple
from typing import Any, Dict, Optional

import requests

from ...core.logging_service import LoggingService

logger = logging.getLogger(__name__)

API_BASE = "https://{server_prefix}.api.mailchimp.com/3.0"

# Title Mailchimp puts in the 400 body when the address is already on the list
MEMBER_EXISTS_TITLE = 'Member Exists'

# Err kinds
MEMBER_EXISTS = 'member-exists'
PROVIDER = 'provider'
NETWORK = 'network'
CONFIGURATION = 'configuration'


class MailchimpConfig(namedtuple('MailchimpConfig', 'api_key server_prefix audience_id timeout',
                                 defaults=(None, None, None, 15))):
    """Credentials and list identifier, fixed at construction time"""

    __slots__ = ()

    @classmethod
    def from_mapping(cls, mapping):
        """Build from app.config / Config style keys"""
        return cls(
            api_key=mapping.get('MAILCHIMP_API_KEY') or None,
            server_prefix=mapping.get('MAILCHIMP_SERVER_PREFIX') or None,
            audience_id=mapping.get('MAILCHIMP_AUDIENCE_ID') or None,
            timeout=int(mapping.get('MAILCHIMP_TIMEOUT') or 15),
        )

    def missing_keys(self):
        names = {
            'api_key': 'MAILCHIMP_API_KEY',
            'server_prefix': 'MAILCHIMP_SERVER_PREFIX',
            'audience_id': 'MAILCHIMP_AUDIENCE_ID',
        }
        return [env for field, env in names.items() if not getattr(self, field)]

    def is_complete(self):
        return not self.missing_keys()

    def __repr__(self):
        # Never print the API key
        masked = '***' if self.api_key else None
        return (f"MailchimpConfig(api_key={masked!r}, server_prefix={self.server_prefix!r}, "
                f"audience_id={self.audience_id!r}, timeout={self.timeout!r})")


class Ok:
    __slots__ = ('value',)

    is_ok = True
    is_err = False

    def __init__(self, value=None):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Ok) and other.value == self.value

    def __repr__(self):
        return f"Ok({self.value!r})"


class Err:
    __slots__ = ('kind', 'detail')

    is_ok = False
    is_err = True

    def __init__(self, kind, detail=None):
        self.kind = kind
        self.detail = detail

    def __eq__(self, other):
        return isinstance(other, Err) and (other.kind, other.detail) == (self.kind, self.detail)

    def __repr__(self):
        return f"Err({self.kind!r}, {self.detail!r})"


class ListStatistics:
    """Snapshot of list stats; fields the provider omitted stay None"""

    FIELDS = (
        'member_count',
        'total_contacts',
        'unsubscribe_count',
        'cleaned_count',
        'campaign_count',
        'avg_sub_rate',
        'avg_unsub_rate',
    )

    def __init__(self, **values):
        unknown = set(values) - set(self.FIELDS)
        if unknown:
            raise TypeError(f"Unknown statistics fields: {sorted(unknown)}")
        for field in self.FIELDS:
            setattr(self, field, values.get(field))

    @classmethod
    def from_response(cls, body: Dict[str, Any]) -> 'ListStatistics':
        stats = body.get('stats') or {}
        values = {field: stats.get(field) for field in cls.FIELDS}
        if values['campaign_count'] is None:
            values['campaign_count'] = body.get('campaign_count')
        return cls(**values)

    def as_dict(self):
        """Present fields only; absence means "not available", not zero"""
        return {
            field: getattr(self, field)
            for field in self.FIELDS
            if getattr(self, field) is not None
        }

    def __eq__(self, other):
        return isinstance(other, ListStatistics) and self.as_dict() == other.as_dict()

    def __repr__(self):
        return f"ListStatistics({self.as_dict()!r})"


def _response_body(response) -> Optional[Dict[str, Any]]:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def translate_error(error) -> Err:
    """Map a failed provider call to Err(kind, detail)"""
    response = getattr(error, 'response', None)
    if isinstance(error, requests.HTTPError) and response is not None:
        body = _response_body(response)
        if body is None:
            return Err(PROVIDER, None)
        title = str(body.get('title') or '').strip()
        if title.lower() == MEMBER_EXISTS_TITLE.lower():
            return Err(MEMBER_EXISTS, body.get('detail'))
        return Err(PROVIDER, body.get('detail') or None)
    return Err(NETWORK, None)


class MailingListGateway:
    """
    Mailchimp list operations for the configured audience.

    The config is read-only after construction; calls made while it is
    incomplete return Err('configuration') without any network traffic.
    """

    def __init__(self, config: MailchimpConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

        if not config.is_complete():
            logger.error(
                "Mailchimp configuration is incomplete, missing: "
                + ", ".join(config.missing_keys())
            )

    @property
    def is_configured(self):
        return self.config.is_complete()

    @property
    def base_url(self):
        return API_BASE.format(server_prefix=self.config.server_prefix)

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        response = self.session.request(
            method,
            url,
            auth=('anystring', self.config.api_key),
            headers={'Accept': 'application/json'},
            timeout=self.config.timeout,
            **kwargs
        )
        LoggingService.log_api_call('mailchimp', path, method, response.status_code)
        response.raise_for_status()
        return _response_body(response) or {}

    def _configuration_error(self):
        return Err(CONFIGURATION, "Missing " + ", ".join(self.config.missing_keys()))

    def add_subscriber(self, email, first_name=''):
        """Add `email` to the list as pending (double opt-in)"""
        if not self.is_configured:
            return self._configuration_error()

        payload = {
            'email_address': email,
            'status': 'pending',
            'merge_fields': {
                'FNAME': first_name or '',
            },
        }
        try:
            ack = self._request('POST', f"/lists/{self.config.audience_id}/members", json=payload)
        except (requests.RequestException, ValueError) as e:
            result = translate_error(e)
            logger.warning(f"Mailchimp addListMember failed: {result!r}")
            return result

        logger.info(f"Mailchimp addListMember accepted {email} (status: {ack.get('status')})")
        return Ok(ack)

    def get_list_statistics(self):
        """Fetch the list and extract subscriber counts and rates"""
        if not self.is_configured:
            return self._configuration_error()

        try:
            body = self._request('GET', f"/lists/{self.config.audience_id}")
        except (requests.RequestException, ValueError) as e:
            result = translate_error(e)
            logger.warning(f"Mailchimp getList failed: {result!r}")
            return result

        return Ok(ListStatistics.from_response(body))
