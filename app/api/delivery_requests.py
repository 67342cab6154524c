from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.enums import RequestStatus
from app.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    RegistryError,
    ValidationError,
)
from app.db.session import get_registry
from app.models.delivery_requests import (
    DeliveryPersonBody,
    DeliveryRequest,
    DeliveryRequestCreate,
)
from app.services.registry import RequestRegistry

router = APIRouter(prefix="/delivery-requests", tags=["Delivery Requests"])

_HTTP_STATUS = {
    ValidationError: 422,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
}


def _http_error(exc: RegistryError) -> HTTPException:
    code = next(
        (_HTTP_STATUS[cls] for cls in type(exc).__mro__ if cls in _HTTP_STATUS),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return HTTPException(status_code=code, detail=str(exc))


@router.get("", response_model=List[DeliveryRequest])
async def list_delivery_requests(
    status: RequestStatus = Query(RequestStatus.waiting),
    registry: RequestRegistry = Depends(get_registry),
) -> List[DeliveryRequest]:
    return await registry.list_by_status(status)


@router.post("", response_model=DeliveryRequest, status_code=status.HTTP_201_CREATED)
async def create_delivery_request(
    payload: DeliveryRequestCreate,
    registry: RequestRegistry = Depends(get_registry),
) -> DeliveryRequest:
    try:
        return await registry.create(
            item=payload.item,
            requester_name=payload.requester_name,
            location=payload.location,
            priority=payload.priority,
            phone=payload.phone,
        )
    except RegistryError as exc:
        raise _http_error(exc) from exc


@router.get("/{request_id}", response_model=DeliveryRequest)
async def get_delivery_request(
    request_id: str,
    registry: RequestRegistry = Depends(get_registry),
) -> DeliveryRequest:
    try:
        return await registry.get(request_id)
    except RegistryError as exc:
        raise _http_error(exc) from exc


@router.post("/{request_id}/claim", response_model=DeliveryRequest)
async def claim_delivery_request(
    request_id: str,
    payload: DeliveryPersonBody,
    registry: RequestRegistry = Depends(get_registry),
) -> DeliveryRequest:
    try:
        return await registry.claim(request_id, payload.delivery_person_id)
    except RegistryError as exc:
        raise _http_error(exc) from exc


@router.post("/{request_id}/complete", response_model=DeliveryRequest)
async def complete_delivery_request(
    request_id: str,
    payload: DeliveryPersonBody,
    registry: RequestRegistry = Depends(get_registry),
) -> DeliveryRequest:
    try:
        return await registry.complete(request_id, payload.delivery_person_id)
    except RegistryError as exc:
        raise _http_error(exc) from exc
