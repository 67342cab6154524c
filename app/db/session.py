# app/db/session.py
from functools import lru_cache

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.db.mongo import get_db
from app.repositories.audit_repository import AuditRepository
from app.repositories.requests import InMemoryDocumentStore, MongoDocumentStore
from app.services.audit_service import AuditService
from app.services.registry import RequestRegistry


def build_registry(settings: Settings) -> RequestRegistry:
    if settings.store_backend == "mongo":
        db = get_db()
        requests_store = MongoDocumentStore(db[settings.requests_collection])
        audit_store = MongoDocumentStore(db[settings.audit_collection])
    else:
        requests_store = InMemoryDocumentStore()
        audit_store = InMemoryDocumentStore()

    return RequestRegistry(requests_store, audit=AuditService(AuditRepository(audit_store)))


@lru_cache
def get_registry() -> RequestRegistry:
    """
    FastAPI dependency that returns the process-wide request registry
    """
    return build_registry(get_settings())


def get_audit_service(registry: RequestRegistry = Depends(get_registry)) -> AuditService:
    return registry.audit
