# app/models/common.py
from __future__ import annotations

from bson import ObjectId
from pydantic import BaseModel, ConfigDict


def new_object_id() -> str:
    """Opaque, unique, roughly time-ordered identifier (ObjectId hex)."""
    return str(ObjectId())


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
    )
