from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Protocol


class DocumentStore(Protocol):
    """
    Minimal document-store contract the registry depends on.

    ``put`` receives the flat record without its id; ``get`` and ``scan``
    return records carrying the id under ``_id``.
    """

    async def put(self, doc_id: str, record: Dict[str, Any]) -> None:
        ...

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        ...

    async def scan(self) -> List[Dict[str, Any]]:
        ...


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self._docs: Dict[str, Dict[str, Any]] = {}

    async def put(self, doc_id: str, record: Dict[str, Any]) -> None:
        self._docs[doc_id] = copy.deepcopy(record)

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._docs.get(doc_id)
        if doc is None:
            return None
        return {"_id": doc_id, **copy.deepcopy(doc)}

    async def scan(self) -> List[Dict[str, Any]]:
        return [{"_id": k, **copy.deepcopy(v)} for k, v in list(self._docs.items())]

    def __len__(self) -> int:
        return len(self._docs)


class MongoDocumentStore:
    def __init__(self, collection):
        self.collection = collection

    async def put(self, doc_id: str, record: Dict[str, Any]) -> None:
        await self.collection.replace_one({"_id": doc_id}, record, upsert=True)

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"_id": doc_id})

    async def scan(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort("_id", 1)
        return await cursor.to_list(length=None)
