"""
Health Module
=============

- GET /health -- public health endpoint for uptime monitors (no auth)
- GET /health/errors -- recent error log entries (admin only)
"""

from flask import Blueprint

health_bp = Blueprint(
    'health',
    __name__,
    url_prefix='/health'
)

from . import routes

__all__ = ['health_bp']
