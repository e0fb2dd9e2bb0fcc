"""In-process document store used for tests and local experiments."""

from __future__ import annotations

import copy

from charity_console.repositories.interfaces import DocumentStore, Record


class InMemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self._data: dict[tuple[str, str], dict[str, Record]] = {}

    def list(self, namespace: str, collection: str) -> list[Record]:
        docs = self._data.get((namespace, collection), {})
        return [copy.deepcopy(record) for record in docs.values()]

    def get(self, namespace: str, collection: str, doc_id: str) -> Record | None:
        record = self._data.get((namespace, collection), {}).get(doc_id)
        return copy.deepcopy(record) if record is not None else None

    def put(self, namespace: str, collection: str, doc_id: str, record: Record) -> None:
        docs = self._data.setdefault((namespace, collection), {})
        docs[doc_id] = copy.deepcopy(record)

    def delete(self, namespace: str, collection: str, doc_id: str) -> None:
        self._data.get((namespace, collection), {}).pop(doc_id, None)
