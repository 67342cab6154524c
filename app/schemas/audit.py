from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime


class AuditActorOut(BaseModel):
    role: str
    id: Optional[str] = None


class AuditEntityOut(BaseModel):
    type: str
    id: str


class AuditLogOut(BaseModel):
    id: str
    time: datetime
    type: str

    actor: AuditActorOut
    entity: AuditEntityOut

    message: str
    meta: Optional[Dict[str, Any]] = Field(default_factory=dict)
