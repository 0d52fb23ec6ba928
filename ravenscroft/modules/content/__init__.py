"""
Content Module
==============

Public, read-only API over the document store for the gallery, events and
about pages.

Provides:
- /api/content/artworks -- gallery listing (category / featured / highlighted filters)
- /api/content/artworks/<id> -- single artwork
- /api/content/events -- events ordered by their first date
- /api/content/about -- about page text
"""

from flask import Blueprint

content_bp = Blueprint(
    'content',
    __name__,
    url_prefix='/api/content'
)

from . import routes
from .seed import seed_sample_content

__all__ = ['content_bp', 'seed_sample_content']
