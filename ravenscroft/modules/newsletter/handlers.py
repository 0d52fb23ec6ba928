"""
Newsletter Handlers
===================

Request handlers behind the newsletter callables. They validate input,
make a single gateway call and turn its Ok/Err result into either a
response dict or a CallableError.
"""

import logging

from ...core.errors import InvalidArgument, Internal
from ..auth import verify_admin
from .gateway import MEMBER_EXISTS, PROVIDER, CONFIGURATION, ListStatistics

logger = logging.getLogger(__name__)

SUBSCRIBE_SUCCESS_MESSAGE = 'Subscription successful! Please check your email to confirm your subscription.'
ALREADY_SUBSCRIBED_MESSAGE = 'This email is already subscribed.'
STATS_SUCCESS_MESSAGE = 'Stats fetched successfully.'

MIN_EMAIL_LENGTH = 5


def is_valid_email(email):
    """Loose check: a string with an "@" and more than a couple of characters"""
    if not isinstance(email, str):
        return False
    email = email.strip()
    return '@' in email and len(email) >= MIN_EMAIL_LENGTH


def subscribe_to_newsletter(data, gateway):
    """
    Add the caller's email to the mailing list.

    Returns {"success": True, ...} on acceptance and {"success": False, ...}
    when the address is already on the list. Raises InvalidArgument for a
    bad email and Internal for configuration or provider failures.
    """
    data = data or {}
    email = data.get('email')
    first_name = str(data.get('firstName') or '')

    if not is_valid_email(email):
        raise InvalidArgument('Valid email required')
    email = email.strip()

    if not gateway.is_configured:
        logger.error("Mailchimp configuration is incomplete. Make sure API key, server prefix, and audience ID are set.")
        raise Internal('Mailchimp configuration error. Please contact support.')

    result = gateway.add_subscriber(email, first_name)

    if result.is_ok:
        return {
            'success': True,
            'message': SUBSCRIBE_SUCCESS_MESSAGE,
        }

    if result.kind == MEMBER_EXISTS:
        return {
            'success': False,
            'message': ALREADY_SUBSCRIBED_MESSAGE,
        }

    if result.detail:
        raise Internal(result.detail)
    if result.kind == PROVIDER:
        raise Internal('Subscription failed due to an API error.')
    if result.kind == CONFIGURATION:
        raise Internal('Mailchimp configuration error. Please contact support.')
    raise Internal('Subscription failed. Please try again.')


def get_newsletter_stats(uid, store, gateway):
    """Admin-only: current list statistics, with absent fields left out"""
    verify_admin(uid, store)

    if not gateway.is_configured:
        logger.error("Mailchimp configuration is incomplete for get_newsletter_stats.")
        raise Internal('Mailchimp configuration error.')

    result = gateway.get_list_statistics()

    if result.is_err:
        if result.detail and result.kind != CONFIGURATION:
            raise Internal(result.detail)
        if result.kind == PROVIDER:
            raise Internal('Failed to retrieve statistics due to an API error.')
        raise Internal('Failed to retrieve statistics.')

    response = {'success': True}
    response.update(result.value.as_dict())
    response['message'] = STATS_SUCCESS_MESSAGE
    return response


# Display order and labels for the admin newsletter dashboard
STAT_CARDS = (
    ('Total Subscribers', 'member_count'),
    ('Total Contacts', 'total_contacts'),
    ('Unsubscribe Count', 'unsubscribe_count'),
    ('Cleaned Count', 'cleaned_count'),
    ('Campaigns', 'campaign_count'),
    ('Avg. Subscription Rate', 'avg_sub_rate'),
    ('Avg. Unsubscribe Rate', 'avg_unsub_rate'),
)

RATE_FIELDS = ('avg_sub_rate', 'avg_unsub_rate')


def format_rate(value):
    """0.0325 -> '3.25%'; None -> 'N/A'"""
    if value is None:
        return 'N/A'
    return f"{value * 100:.2f}%"


def format_stat_cards(stats):
    """(title, display value) pairs; absent fields show as N/A, zero stays zero"""
    if isinstance(stats, ListStatistics):
        stats = stats.as_dict()

    cards = []
    for title, field in STAT_CARDS:
        value = stats.get(field)
        if field in RATE_FIELDS:
            display = format_rate(value)
        else:
            display = 'N/A' if value is None else str(value)
        cards.append((title, display))
    return cards
