"""Sample content for a fresh install (about text, one artwork, one event)."""

import logging
from datetime import date

from ...core.config import Config

logger = logging.getLogger(__name__)


def seed_sample_content(store, today=None):
    """Write the sample documents. Safe to run repeatedly: fixed ids are overwritten."""
    today = today or date.today()

    store.set(Config.SITE_CONTENT_COLLECTION, 'aboutMe', {
        'title': 'About Me',
        'description': (
            'My journey into jewelry making began over a decade ago when I discovered '
            'the meditative joy of working with metals and gemstones. What started as a '
            'creative outlet quickly evolved into a passionate pursuit of mastering '
            'traditional techniques while developing my unique artistic voice.'
        ),
        'imageUrl': 'https://images.unsplash.com/photo-1613042729592-34cd5fe588e1?auto=format&fit=crop&q=80',
    })

    store.set(Config.ARTWORKS_COLLECTION, 'sample1', {
        'title': 'Golden Twist Earrings',
        'description': 'Hand-forged gold-filled wire with a gentle twist design and freshwater pearl accents.',
        'imageUrl': 'https://images.unsplash.com/photo-1599643478518-a784e5dc4c8f?auto=format&fit=crop&q=80',
        'category': 'Earrings',
        'isHighlighted': True,
        'isFeatured': False,
    })

    # Next year, June 15th
    store.set(Config.EVENTS_COLLECTION, 'sample1', {
        'title': 'Spring Collection Launch',
        'address': 'Art Gallery East, 123 Main Street, Portland',
        'description': (
            'Join us for the launch of our Spring Collection featuring live music, '
            'refreshments, and exclusive first access to new designs.'
        ),
        'dates': [
            {
                'date': date(today.year + 1, 6, 15).isoformat(),
                'time': '6:00 PM - 9:00 PM',
            }
        ],
    })

    logger.info("Seeded sample about, artwork and event documents")
    return 3
