from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]

FAMILIES = "families"
CAMPAIGNS = "campaigns"
PACKAGES = "packages"
EVENTS = "events"
LOCATIONS = "locations"
BANK_INFO = "bank_info"
SETTINGS = "settings"


class DocumentStore(ABC):
    """Key-value document service with collections scoped by namespace.

    Records are flat JSON-serializable dicts; the store attaches no meaning
    to their contents.
    """

    @abstractmethod
    def list(self, namespace: str, collection: str) -> list[Record]:
        pass

    @abstractmethod
    def get(self, namespace: str, collection: str, doc_id: str) -> Record | None:
        pass

    @abstractmethod
    def put(self, namespace: str, collection: str, doc_id: str, record: Record) -> None:
        pass

    @abstractmethod
    def delete(self, namespace: str, collection: str, doc_id: str) -> None:
        pass

    def close(self) -> None:  # noqa: B027
        """Release connections held by the store."""
