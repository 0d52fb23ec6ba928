"""
Ravenscroft Modules
===================

Flask blueprint modules for the site backend.
"""

__all__ = ['auth', 'newsletter', 'content', 'contact', 'health']
