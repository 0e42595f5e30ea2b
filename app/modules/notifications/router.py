from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.errors import MessageCode
from app.modules.audit.mapper import from_http_request
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.notifications.schemas import NotificationForm, NotificationResponse
from app.modules.notifications.service import NotificationService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> NotificationService:
    return NotificationService(session)

@router.post("/sendNotification", response_model=NotificationResponse, response_model_exclude_none=True)
async def send_notification(
    payload: NotificationForm,
    audit_request: AuditLogEventRequest = Depends(from_http_request),
    service: NotificationService = Depends(svc),
):
    reply = await service.send_notifications(payload.notifications, audit_request)
    return NotificationResponse.of(MessageCode.NOTIFICATION_SENT, response=reply)
