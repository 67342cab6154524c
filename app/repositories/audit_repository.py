from app.models.common import new_object_id
from app.utils.mongo import serialize_mongo


class AuditRepository:
    def __init__(self, store):
        self.store = store

    async def list(self):
        out = []
        for doc in await self.store.scan():
            doc["id"] = str(doc.pop("_id"))
            out.append(doc)

        out.sort(key=lambda d: (d["time"], d["id"]), reverse=True)
        return [serialize_mongo(r) for r in out]

    async def create(self, data: dict) -> str:
        event_id = new_object_id()
        await self.store.put(event_id, data)
        return event_id
