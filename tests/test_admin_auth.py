"""Admin authorization check tests."""

from unittest.mock import MagicMock

import pytest

from ravenscroft.core.database import DocumentStoreError
from ravenscroft.core.errors import Unauthenticated, PermissionDenied, Internal
from ravenscroft.modules.auth import verify_admin, grant_admin


@pytest.mark.parametrize("uid", [None, ""])
def test_no_identity_is_unauthenticated(store, uid):
    with pytest.raises(Unauthenticated):
        verify_admin(uid, store)


def test_missing_user_document_is_denied(store):
    with pytest.raises(PermissionDenied):
        verify_admin("ghost", store)


@pytest.mark.parametrize("role", ["editor", "ADMIN", "admin ", None, True])
def test_role_must_be_exactly_admin(store, role):
    store.set("users", "uid-1", {"role": role})
    with pytest.raises(PermissionDenied):
        verify_admin("uid-1", store)


def test_admin_passes(store):
    store.set("users", "uid-1", {"role": "admin"})
    assert verify_admin("uid-1", store) is True


def test_store_failure_is_internal():
    broken = MagicMock()
    broken.get.side_effect = DocumentStoreError("disk I/O error")

    with pytest.raises(Internal) as exc_info:
        verify_admin("uid-1", broken)

    assert exc_info.value.message == "Error verifying admin status."


def test_check_is_not_cached(store):
    grant_admin(store, "uid-1")
    assert verify_admin("uid-1", store) is True

    store.update("users", "uid-1", {"role": "member"})
    with pytest.raises(PermissionDenied):
        verify_admin("uid-1", store)


def test_grant_admin_keeps_other_fields(store):
    store.set("users", "uid-2", {"email": "old@example.com", "displayName": "Mel"})

    grant_admin(store, "uid-2")

    user = store.get("users", "uid-2")
    assert user["role"] == "admin"
    assert user["displayName"] == "Mel"
    assert user["email"] == "old@example.com"


def test_admin_required_guards_error_feed(client, store):
    assert client.get("/health/errors").status_code == 401

    grant_admin(store, "admin-uid")
    with client.session_transaction() as sess:
        sess["uid"] = "admin-uid"
    response = client.get("/health/errors")
    assert response.status_code == 200
    assert response.get_json()["count"] == 0
