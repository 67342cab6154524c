from datetime import datetime
from typing import Any, Dict, List, Optional

from app.repositories.audit_repository import AuditRepository


class AuditService:
    """Append-only log of delivery request lifecycle events."""

    def __init__(self, repo: AuditRepository):
        self.repo = repo

    async def list_logs(self) -> List[Dict[str, Any]]:
        return await self.repo.list()

    async def log_event(
        self,
        time: datetime,
        event_type: str,
        actor: Dict[str, Any],
        request_id: str,
        message: str,
        meta: Optional[Dict[str, Any]] = None,
    ) -> str:
        return await self.repo.create({
            "time": time,
            "type": event_type,
            "actor": actor,
            "entity": {"type": "delivery_request", "id": request_id},
            "message": message,
            "meta": meta or {},
        })
