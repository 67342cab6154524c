"""
Shared fixtures: an in-memory registry with a deterministic clock, and an
HTTP client wired to it through FastAPI dependency overrides.
"""
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from app.db.session import get_registry
from app.main import app
from app.repositories.audit_repository import AuditRepository
from app.repositories.requests import InMemoryDocumentStore
from app.services.audit_service import AuditService
from app.services.registry import RequestRegistry


class StepClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start: datetime = datetime(2026, 1, 6, 9, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + timedelta(seconds=1)
        return now


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def audit_store():
    return InMemoryDocumentStore()


@pytest.fixture
def audit_service(audit_store):
    return AuditService(AuditRepository(audit_store))


@pytest.fixture
def registry(store, audit_service, clock):
    return RequestRegistry(store, audit=audit_service, clock=clock)


@pytest.fixture
async def client(registry):
    app.dependency_overrides[get_registry] = lambda: registry

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
