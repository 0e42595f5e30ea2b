from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.errors import ErrorCode, ErrorCodeException
from app.core.security import get_current_admin
from app.modules.admins.models import AdminUser
from app.modules.audit.schemas import AuditEventOut
from app.modules.audit.service import AuditEventService

router = APIRouter()

@router.get("/audit-events", response_model=list[AuditEventOut])
async def list_audit_events(
    admin: AdminUser = Depends(get_current_admin),
    session: AsyncSession = Depends(get_session),
    limit: int = Query(50, ge=1, le=200),
    event_code: str | None = Query(None, alias="eventCode"),
    user_id: str | None = Query(None, alias="userId"),
):
    if not admin.super_admin:
        raise ErrorCodeException(ErrorCode.AUDIT_ACCESS_DENIED)
    return await AuditEventService(session).list_events(limit, event_code, user_id)
