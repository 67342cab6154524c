from typing import List

from fastapi import APIRouter, Depends

from app.db.session import get_audit_service
from app.schemas.audit import AuditLogOut
from app.services.audit_service import AuditService

router = APIRouter(prefix="/admin/audit", tags=["Admin - Audit"])


@router.get("", response_model=List[AuditLogOut])
async def list_audit_logs(service: AuditService = Depends(get_audit_service)):
    return await service.list_logs()
