"""
Contact Module
==============

Provides:
- POST /api/contact -- store a contact message and forward it through the form relay
"""

from flask import Blueprint

contact_bp = Blueprint(
    'contact',
    __name__,
    url_prefix='/api/contact'
)

from . import routes

__all__ = ['contact_bp']
