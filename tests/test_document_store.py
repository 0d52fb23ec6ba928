"""Tests for the SQLite-backed document store."""

import pytest

from ravenscroft.core.database import DocumentStore, DocumentNotFound


def test_create_assigns_id_and_timestamps(store):
    doc = store.create("artworks", {"title": "Silver Leaf Ring"})

    assert doc["id"]
    assert doc["title"] == "Silver Leaf Ring"
    assert doc["createdAt"] == doc["updatedAt"]

    fetched = store.get("artworks", doc["id"])
    assert fetched == doc


def test_get_missing_returns_none(store):
    assert store.get("users", "nobody") is None


def test_collections_are_isolated(store):
    store.set("users", "same-id", {"role": "admin"})
    store.set("artworks", "same-id", {"title": "Brooch"})

    assert store.get("users", "same-id")["role"] == "admin"
    assert "role" not in store.get("artworks", "same-id")
    assert len(store.list("users")) == 1


def test_set_keeps_original_created_at(store):
    first = store.set("siteContent", "aboutMe", {"title": "About"})
    second = store.set("siteContent", "aboutMe", {"title": "About Me"})

    assert second["createdAt"] == first["createdAt"]
    assert store.get("siteContent", "aboutMe")["title"] == "About Me"


def test_update_merges_fields(store):
    doc = store.create("contactSubmissions", {"name": "Jane", "read": False})
    updated = store.update("contactSubmissions", doc["id"], {"read": True})

    assert updated["name"] == "Jane"
    assert updated["read"] is True
    assert store.get("contactSubmissions", doc["id"])["read"] is True


def test_update_missing_raises(store):
    with pytest.raises(DocumentNotFound):
        store.update("events", "missing", {"title": "x"})


def test_delete(store):
    doc = store.create("events", {"title": "Open Studio"})

    assert store.delete("events", doc["id"]) is True
    assert store.get("events", doc["id"]) is None
    assert store.delete("events", doc["id"]) is False


def test_query_filters_sorts_and_limits(store):
    store.set("artworks", "a", {"category": "Rings", "price": 120, "tags": ["silver"]})
    store.set("artworks", "b", {"category": "Earrings", "price": 80, "tags": ["gold"]})
    store.set("artworks", "c", {"category": "Rings", "price": 200, "tags": ["gold", "pearl"]})
    store.set("artworks", "d", {"category": "Rings"})

    rings = store.query("artworks", where=[("category", "==", "Rings")], order_by="price")
    assert [d["id"] for d in rings] == ["a", "c", "d"]

    expensive_first = store.query("artworks", order_by="price", descending=True, limit=2)
    assert [d["id"] for d in expensive_first] == ["c", "a"]

    gold = store.query("artworks", where=[("tags", "array-contains", "gold")])
    assert {d["id"] for d in gold} == {"b", "c"}

    cheap = store.query("artworks", where=[("price", "<", 150)])
    assert {d["id"] for d in cheap} == {"a", "b"}

    chosen = store.query("artworks", where=[("category", "in", ["Earrings"])])
    assert [d["id"] for d in chosen] == ["b"]


def test_query_rejects_unknown_operator(store):
    with pytest.raises(ValueError):
        store.query("artworks", where=[("price", "~", 1)])


def test_store_creates_parent_directory(tmp_db_dir):
    import os
    path = os.path.join(tmp_db_dir, "nested", "dir", "content.db")
    DocumentStore(path)
    assert os.path.exists(path)
