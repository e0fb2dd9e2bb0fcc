"""Firestore implementation of the document store.

Documents live at ``users/{namespace}/{collection}/{doc_id}``, one subtree
per account.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from google.api_core.exceptions import GoogleAPICallError

from charity_console.exceptions import DocumentStoreError
from charity_console.logging_config import get_logger
from charity_console.repositories.interfaces import DocumentStore, Record

if TYPE_CHECKING:
    from google.cloud.firestore_v1 import Client, CollectionReference

logger = get_logger(__name__)

ROOT_COLLECTION = "users"


class FirestoreDocumentStore(DocumentStore):
    def __init__(self, client: Client, root_collection: str = ROOT_COLLECTION) -> None:
        self._client = client
        self._root = root_collection

    def _collection(self, namespace: str, collection: str) -> CollectionReference:
        return (
            self._client.collection(self._root)
            .document(namespace)
            .collection(collection)
        )

    def list(self, namespace: str, collection: str) -> list[Record]:
        try:
            snapshots = list(self._collection(namespace, collection).stream())
        except GoogleAPICallError as e:
            raise DocumentStoreError("list", collection, str(e)) from e
        records: list[Record] = []
        for snapshot in snapshots:
            data = snapshot.to_dict() or {}
            data.setdefault("id", snapshot.id)
            records.append(data)
        return records

    def get(self, namespace: str, collection: str, doc_id: str) -> Record | None:
        try:
            snapshot = self._collection(namespace, collection).document(doc_id).get()
        except GoogleAPICallError as e:
            raise DocumentStoreError("get", collection, str(e)) from e
        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        data.setdefault("id", snapshot.id)
        return data

    def put(self, namespace: str, collection: str, doc_id: str, record: Record) -> None:
        try:
            self._collection(namespace, collection).document(doc_id).set(record)
        except GoogleAPICallError as e:
            raise DocumentStoreError("put", collection, str(e)) from e
        logger.debug("firestore_document_written", collection=collection, doc_id=doc_id)

    def delete(self, namespace: str, collection: str, doc_id: str) -> None:
        try:
            self._collection(namespace, collection).document(doc_id).delete()
        except GoogleAPICallError as e:
            raise DocumentStoreError("delete", collection, str(e)) from e
