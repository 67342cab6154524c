from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator

from app.core.enums import Priority, RequestStatus
from app.models.common import RegistryBaseModel


class GeoPoint(RegistryBaseModel):
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


def _coerce_location(value: Any) -> Any:
    # (latitude, longitude) pairs are accepted alongside mappings
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ValueError("location must be a (latitude, longitude) pair")
        return {"latitude": value[0], "longitude": value[1]}
    return value


class DeliveryRequestCreate(RegistryBaseModel):
    item: str = Field(..., min_length=1)
    requester_name: str = Field(..., alias="name", min_length=1)
    location: GeoPoint
    priority: Priority
    phone: Optional[str] = None

    @field_validator("location", mode="before")
    @classmethod
    def _location_pair(cls, v):
        return _coerce_location(v)


class DeliveryRequest(RegistryBaseModel):
    """
    One unit of aid to be delivered.

    Field aliases are the keys of the persisted document, so
    ``model_dump(by_alias=True)`` and the HTTP payloads share one shape.
    """

    id: str
    item: str = Field(..., min_length=1)
    requester_name: str = Field(..., alias="name", min_length=1)
    location: GeoPoint
    created_at: datetime = Field(..., alias="timestamp")
    status: RequestStatus = RequestStatus.waiting
    priority: Priority
    delivery_person_id: Optional[str] = Field(None, alias="deliveryPersonId")
    phone: Optional[str] = None

    @field_validator("location", mode="before")
    @classmethod
    def _location_pair(cls, v):
        return _coerce_location(v)

    @model_validator(mode="after")
    def _assignment_matches_status(self) -> "DeliveryRequest":
        if self.status == RequestStatus.waiting and self.delivery_person_id is not None:
            raise ValueError("a waiting request cannot have a delivery person")
        if self.status != RequestStatus.waiting and not self.delivery_person_id:
            raise ValueError(f"a {self.status.value} request requires a delivery person")
        return self

    def with_status(
        self, status: RequestStatus, delivery_person_id: Optional[str]
    ) -> "DeliveryRequest":
        data = self.model_dump()
        data.update(status=status, delivery_person_id=delivery_person_id)
        return DeliveryRequest.model_validate(data)

    def to_document(self) -> Dict[str, Any]:
        return {
            "item": self.item,
            "name": self.requester_name,
            "location": {
                "latitude": self.location.latitude,
                "longitude": self.location.longitude,
            },
            "timestamp": self.created_at,
            "status": self.status.value,
            "priority": self.priority.value,
            "deliveryPersonId": self.delivery_person_id,
            "phone": self.phone,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "DeliveryRequest":
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc["_id"])
        return cls.model_validate(data)


class DeliveryPersonBody(RegistryBaseModel):
    delivery_person_id: str = Field(..., alias="deliveryPersonId", min_length=1)
