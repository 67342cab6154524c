from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.enums import Priority, RequestStatus
from app.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    RegistryError,
    ValidationError,
)
from app.models.common import new_object_id
from app.models.delivery_requests import DeliveryRequest, DeliveryRequestCreate, GeoPoint
from app.repositories.requests import DocumentStore
from app.services.audit_service import AuditService
from app.services.workflow import INITIAL_STATE, validate_transition

log = logging.getLogger(__name__)

LocationInput = Union[GeoPoint, dict, Tuple[float, float]]


def utc_now() -> datetime:
    now = datetime.now(timezone.utc)
    # BSON datetimes only keep milliseconds
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def dispatch_order(request: DeliveryRequest) -> Tuple[int, datetime, str]:
    """Sort key: higher priority first, then oldest first."""
    return (-request.priority.rank, request.created_at, request.id)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "request"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class RequestRegistry:
    """
    Holds delivery requests, enforces the waiting -> delivering -> completed
    lifecycle and answers dispatch-ordered queries.

    ``claim`` and ``complete`` are read-modify-write against the store and run
    under one lock, so two deliverers racing for the same request cannot both
    win.
    """

    def __init__(
        self,
        store: DocumentStore,
        audit: Optional[AuditService] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_object_id,
    ):
        self.store = store
        self.audit = audit
        self._clock = clock
        self._new_id = id_factory
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Create (status = waiting)
    # ------------------------------------------------------------------
    async def create(
        self,
        item: str,
        requester_name: str,
        location: LocationInput,
        priority: Union[Priority, str],
        phone: Optional[str] = None,
    ) -> DeliveryRequest:
        if isinstance(location, GeoPoint):
            location = location.model_dump()
        try:
            payload = DeliveryRequestCreate.model_validate(
                {
                    "item": item,
                    "requester_name": requester_name,
                    "location": location,
                    "priority": priority,
                    "phone": phone,
                }
            )
        except PydanticValidationError as exc:
            log.warning("Rejected delivery request: %s", _describe(exc))
            raise ValidationError(_describe(exc)) from exc

        async with self._lock:
            request_id = self._new_id()
            if await self.store.get(request_id) is not None:
                raise RegistryError(f"Request id {request_id} is already in use")

            request = DeliveryRequest(
                id=request_id,
                item=payload.item,
                requester_name=payload.requester_name,
                location=payload.location,
                created_at=self._clock(),
                status=INITIAL_STATE,
                priority=payload.priority,
                delivery_person_id=None,
                phone=payload.phone,
            )
            await self.store.put(request.id, request.to_document())

        log.info("Created request %s (%s priority)", request.id, request.priority.value)
        await self._audit(
            "request.create", request, {"role": "system"}, "Delivery request created"
        )
        return request

    # ------------------------------------------------------------------
    # Get by ID
    # ------------------------------------------------------------------
    async def get(self, request_id: str) -> DeliveryRequest:
        doc = await self.store.get(request_id)
        if doc is None:
            raise NotFoundError(request_id)
        return DeliveryRequest.from_document(doc)

    # ------------------------------------------------------------------
    # Claim (waiting -> delivering)
    # ------------------------------------------------------------------
    async def claim(self, request_id: str, delivery_person_id: str) -> DeliveryRequest:
        delivery_person_id = self._require_person(delivery_person_id)

        async with self._lock:
            request = await self.get(request_id)
            try:
                validate_transition(request.status, RequestStatus.delivering)
            except InvalidTransitionError:
                log.warning(
                    "Claim of %s by %s rejected: request is %s (held by %s)",
                    request_id, delivery_person_id, request.status.value,
                    request.delivery_person_id,
                )
                raise
            updated = request.with_status(RequestStatus.delivering, delivery_person_id)
            await self.store.put(updated.id, updated.to_document())

        log.info("Request %s claimed by %s", request_id, delivery_person_id)
        await self._audit(
            "request.claim",
            updated,
            {"role": "deliverer", "id": delivery_person_id},
            "Delivery request claimed",
            {"from": RequestStatus.waiting.value, "to": RequestStatus.delivering.value},
        )
        return updated

    # ------------------------------------------------------------------
    # Complete (delivering -> completed)
    # ------------------------------------------------------------------
    async def complete(self, request_id: str, delivery_person_id: str) -> DeliveryRequest:
        delivery_person_id = self._require_person(delivery_person_id)

        async with self._lock:
            request = await self.get(request_id)
            try:
                validate_transition(request.status, RequestStatus.completed)
            except InvalidTransitionError:
                log.warning(
                    "Completion of %s rejected: request is %s", request_id, request.status.value
                )
                raise
            if request.delivery_person_id != delivery_person_id:
                log.warning(
                    "Completion of %s rejected: %s is not the assigned deliverer",
                    request_id, delivery_person_id,
                )
                raise AuthorizationError(request_id, delivery_person_id)
            updated = request.with_status(RequestStatus.completed, delivery_person_id)
            await self.store.put(updated.id, updated.to_document())

        log.info("Request %s completed by %s", request_id, delivery_person_id)
        await self._audit(
            "request.complete",
            updated,
            {"role": "deliverer", "id": delivery_person_id},
            "Delivery request completed",
            {"from": RequestStatus.delivering.value, "to": RequestStatus.completed.value},
        )
        return updated

    # ------------------------------------------------------------------
    # Dispatch queries
    # ------------------------------------------------------------------
    async def list_by_status(self, status: Union[RequestStatus, str]) -> List[DeliveryRequest]:
        try:
            status = RequestStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown status {status!r}") from exc

        docs = await self.store.scan()
        matching = [
            DeliveryRequest.from_document(doc)
            for doc in docs
            if doc.get("status") == status.value
        ]
        return sorted(matching, key=dispatch_order)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _require_person(delivery_person_id: Any) -> str:
        if not isinstance(delivery_person_id, str) or not delivery_person_id.strip():
            raise ValidationError("delivery_person_id must be a non-empty string")
        return delivery_person_id.strip()

    async def _audit(
        self,
        event_type: str,
        request: DeliveryRequest,
        actor: dict,
        message: str,
        meta: Optional[dict] = None,
    ) -> None:
        if self.audit is None:
            return
        # the state change is already committed; a failed audit write must not
        # turn it into an error for the caller
        try:
            await self.audit.log_event(self._clock(), event_type, actor, request.id, message, meta)
        except Exception:
            log.exception("Failed to record %s for request %s", event_type, request.id)
