"""
Document Store
==============

Schemaless collection-of-documents storage on top of SQLite. Each row holds
one JSON document; filtering and ordering are applied in Python so any
field of any document can be queried.
"""

import json
import os
import sqlite3
import threading
import uuid
from datetime import datetime

# Supported comparison operators for query(where=[(field, op, value), ...])
_OPERATORS = {
    '==': lambda a, b: a == b,
    '!=': lambda a, b: a != b,
    '<': lambda a, b: a is not None and a < b,
    '<=': lambda a, b: a is not None and a <= b,
    '>': lambda a, b: a is not None and a > b,
    '>=': lambda a, b: a is not None and a >= b,
    'in': lambda a, b: a in b,
    'array-contains': lambda a, b: isinstance(a, list) and b in a,
}


class DocumentStoreError(Exception):
    """Raised when the underlying database fails"""


class DocumentNotFound(DocumentStoreError):
    """Raised when updating a document that does not exist"""

    def __init__(self, collection, doc_id):
        super().__init__(f"{collection}/{doc_id} does not exist")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore:
    # Serialises read-modify-write in update()
    _lock = threading.Lock()

    def __init__(self, path):
        self.path = path
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._ensure_table()

    def connect(self):
        return sqlite3.connect(self.path)

    def _ensure_table(self):
        """Ensure the documents table exists"""
        try:
            with self.connect() as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS documents (
                        collection TEXT NOT NULL,
                        id TEXT NOT NULL,
                        data TEXT NOT NULL,
                        PRIMARY KEY (collection, id)
                    )
                """)
                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_documents_collection
                    ON documents(collection)
                """)
                conn.commit()
        except sqlite3.Error as e:
            raise DocumentStoreError(f"Failed to initialise document store: {e}") from e

    @staticmethod
    def _now():
        return datetime.now().isoformat()

    @staticmethod
    def _with_id(doc_id, data):
        doc = dict(data)
        doc['id'] = doc_id
        return doc

    def _write(self, collection, doc_id, data):
        payload = {k: v for k, v in data.items() if k != 'id'}
        try:
            with self.connect() as conn:
                conn.execute("""
                    INSERT OR REPLACE INTO documents (collection, id, data)
                    VALUES (?, ?, ?)
                """, (collection, doc_id, json.dumps(payload, default=str)))
                conn.commit()
        except sqlite3.Error as e:
            raise DocumentStoreError(f"Failed to write {collection}/{doc_id}: {e}") from e
        return self._with_id(doc_id, payload)

    def create(self, collection, data):
        """Add a new document with a generated id and timestamps"""
        now = self._now()
        doc = dict(data, createdAt=now, updatedAt=now)
        return self._write(collection, uuid.uuid4().hex[:20], doc)

    def set(self, collection, doc_id, data):
        """Create or fully replace the document with a known id"""
        now = self._now()
        existing = self.get(collection, doc_id)
        created = existing.get('createdAt', now) if existing else now
        doc = dict(data)
        doc.setdefault('createdAt', created)
        doc['updatedAt'] = now
        return self._write(collection, doc_id, doc)

    def get(self, collection, doc_id):
        try:
            with self.connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT data FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id)
                )
                row = cursor.fetchone()
        except sqlite3.Error as e:
            raise DocumentStoreError(f"Failed to read {collection}/{doc_id}: {e}") from e
        if not row:
            return None
        return self._with_id(doc_id, json.loads(row[0]))

    def list(self, collection):
        try:
            with self.connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT id, data FROM documents WHERE collection = ? ORDER BY rowid",
                    (collection,)
                )
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise DocumentStoreError(f"Failed to list {collection}: {e}") from e
        return [self._with_id(row[0], json.loads(row[1])) for row in rows]

    def query(self, collection, where=None, order_by=None, descending=False, limit=None):
        """
        Filter and sort a collection.

        Args:
            where: list of (field, op, value) triples, all of which must match
            order_by: field name to sort on; documents missing it sort last
            descending: reverse the sort order
            limit: maximum number of documents to return
        """
        docs = self.list(collection)

        for field, op, value in where or []:
            if op not in _OPERATORS:
                raise ValueError(f"Unsupported query operator: {op}")
            compare = _OPERATORS[op]
            docs = [doc for doc in docs if compare(doc.get(field), value)]

        if order_by:
            present = [doc for doc in docs if doc.get(order_by) is not None]
            missing = [doc for doc in docs if doc.get(order_by) is None]
            present.sort(key=lambda doc: doc[order_by], reverse=descending)
            docs = present + missing

        if limit is not None:
            docs = docs[:limit]
        return docs

    def update(self, collection, doc_id, data):
        """Merge fields into an existing document"""
        with self._lock:
            existing = self.get(collection, doc_id)
            if existing is None:
                raise DocumentNotFound(collection, doc_id)
            existing.update(data)
            existing['updatedAt'] = self._now()
            return self._write(collection, doc_id, existing)

    def delete(self, collection, doc_id):
        """Delete a document. Returns True if something was removed."""
        try:
            with self.connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "DELETE FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id)
                )
                conn.commit()
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise DocumentStoreError(f"Failed to delete {collection}/{doc_id}: {e}") from e
