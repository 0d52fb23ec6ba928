"""
Newsletter Module
=================

Provides:
- POST /api/newsletter/subscribe -- add an email to the Mailchimp list (double opt-in)
- POST /api/newsletter/stats -- Mailchimp list statistics (admin only)
- NewsletterClient -- caller-side helper with FormSubmit fallback
"""

from flask import Blueprint

newsletter_bp = Blueprint(
    'newsletter',
    __name__,
    url_prefix='/api/newsletter'
)

from . import routes
from .gateway import MailchimpConfig, MailingListGateway, ListStatistics, Ok, Err
from .fallback import FormRelayClient, NewsletterClient, subscribe_with_fallback

__all__ = [
    'newsletter_bp', 'MailchimpConfig', 'MailingListGateway', 'ListStatistics',
    'Ok', 'Err', 'FormRelayClient', 'NewsletterClient', 'subscribe_with_fallback',
]
