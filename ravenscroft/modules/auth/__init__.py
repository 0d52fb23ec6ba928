"""
Ravenscroft Auth Module

Admin authorization for callable endpoints:
- Caller identity lookup from the session
- users/{uid}.role == "admin" check, evaluated on every call
- Admin grant helper for the CLI
"""

from .utils import ADMIN_ROLE, get_caller_uid, verify_admin, admin_required, grant_admin

__all__ = ['ADMIN_ROLE', 'get_caller_uid', 'verify_admin', 'admin_required', 'grant_admin']
