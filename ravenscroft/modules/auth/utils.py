import logging
from functools import wraps
from flask import session, current_app

from ...core.config import Config
from ...core.errors import CallableError, Unauthenticated, PermissionDenied, Internal

logger = logging.getLogger(__name__)

ADMIN_ROLE = 'admin'


def get_caller_uid():
    """Identity of the caller, set in the session by the identity provider integration"""
    return session.get('uid') or None


def verify_admin(uid, store):
    """
    Check that `uid` belongs to an admin.

    Reads users/{uid} on every call; raises Unauthenticated when there is no
    identity, PermissionDenied when the document is missing or its role is
    not exactly "admin", and Internal for any other lookup failure.
    """
    if not uid:
        logger.info("Admin verification failed: no authentication context.")
        raise Unauthenticated('Authentication required. You must be logged in to call this function.')

    try:
        user_doc = store.get(Config.USERS_COLLECTION, uid)
        if user_doc and user_doc.get('role') == ADMIN_ROLE:
            logger.info(f"Admin verification successful for UID: {uid}")
            return True

        logger.info(f"Admin verification failed for UID: {uid}. User is not an admin.")
        raise PermissionDenied('Admin access required. You do not have permission to perform this action.')

    except CallableError:
        raise
    except Exception as e:
        logger.error(f"Error during admin verification for UID: {uid}: {e}")
        raise Internal('Error verifying admin status.') from e


def admin_required(f):
    """Decorator for callable views: rejects non-admin callers before the view runs"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        store = current_app.extensions['ravenscroft'].store
        verify_admin(get_caller_uid(), store)
        return f(*args, **kwargs)
    return decorated_function


def grant_admin(store, uid, email=None):
    """Give `uid` the admin role, keeping any other fields of the user document"""
    existing = store.get(Config.USERS_COLLECTION, uid) or {}
    existing.pop('id', None)
    existing['role'] = ADMIN_ROLE
    if email:
        existing['email'] = email
    return store.set(Config.USERS_COLLECTION, uid, existing)
