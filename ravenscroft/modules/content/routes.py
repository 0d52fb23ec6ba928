"""
Content Routes
==============

Read-only JSON endpoints for the public pages.
"""

import logging
from datetime import date
from flask import request, jsonify, current_app
from . import content_bp
from ...core.config import Config
from ...core.errors import NotFound

logger = logging.getLogger(__name__)

ABOUT_DOC_ID = 'aboutMe'


def _store():
    return current_app.extensions['ravenscroft'].store


def _flag(name):
    """Query-string boolean: None when absent"""
    value = request.args.get(name)
    if value is None or value == '':
        return None
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def event_dates(event):
    """ISO day strings (YYYY-MM-DD) of an event, sorted"""
    days = []
    for entry in event.get('dates') or []:
        value = entry.get('date') if isinstance(entry, dict) else entry
        if value:
            days.append(str(value)[:10])
    return sorted(days)


def sort_events(events, upcoming_only=False, today=None):
    """Order events by their earliest date; optionally drop past events"""
    today = (today or date.today()).isoformat()
    if upcoming_only:
        events = [e for e in events if any(d >= today for d in event_dates(e))]
    dated = [e for e in events if event_dates(e)]
    undated = [e for e in events if not event_dates(e)]
    dated.sort(key=lambda e: event_dates(e)[0])
    return dated + undated


@content_bp.route('/artworks', methods=['GET'])
def list_artworks():
    """Gallery listing, newest first"""
    where = []
    category = request.args.get('category', '').strip()
    if category:
        where.append(('category', '==', category))

    featured = _flag('featured')
    if featured is not None:
        where.append(('isFeatured', '==', featured))

    highlighted = _flag('highlighted')
    if highlighted is not None:
        where.append(('isHighlighted', '==', highlighted))

    artworks = _store().query(Config.ARTWORKS_COLLECTION, where=where,
                              order_by='createdAt', descending=True)
    return jsonify({'artworks': artworks, 'total_count': len(artworks)}), 200


@content_bp.route('/artworks/<artwork_id>', methods=['GET'])
def get_artwork(artwork_id):
    artwork = _store().get(Config.ARTWORKS_COLLECTION, artwork_id)
    if not artwork:
        raise NotFound('Artwork not found')
    return jsonify({'artwork': artwork}), 200


@content_bp.route('/events', methods=['GET'])
def list_events():
    """Events ordered by first date; ?upcoming=1 hides past events"""
    events = _store().list(Config.EVENTS_COLLECTION)
    events = sort_events(events, upcoming_only=bool(_flag('upcoming')))
    return jsonify({'events': events, 'total_count': len(events)}), 200


@content_bp.route('/about', methods=['GET'])
def get_about():
    about = _store().get(Config.SITE_CONTENT_COLLECTION, ABOUT_DOC_ID)
    if not about:
        raise NotFound('About content not found')
    return jsonify({'about': about}), 200
