import logging
import httpx
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.errors import ErrorCode, ErrorCodeException
from app.modules.audit.events import AuditLogEvent
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.audit.service import AuditEventService
from app.modules.notifications.schemas import NotificationBean, NotificationType
from app.modules.participants.models import EnrollmentStatus
from app.modules.participants.repository import AppUserRepository, ParticipantStudyRepository
from app.modules.studies.repository import StudyRepository
from app.platform.ports.push_notifications import PushNotificationPort
from app.platform.provider_registry import registry

log = logging.getLogger(__name__)

def merge_replies(replies: list[dict]) -> dict | None:
    if not replies:
        return None
    return {
        "multicast_id": replies[0].get("multicast_id"),
        "success": sum(r.get("success", 0) for r in replies),
        "failure": sum(r.get("failure", 0) for r in replies),
        "results": [res for r in replies for res in r.get("results", [])],
    }

class NotificationService:
    def __init__(self, session: AsyncSession, push: PushNotificationPort | None = None):
        self.session = session
        self.push = push or registry.push_notifications()
        self.studies = StudyRepository(session)
        self.app_users = AppUserRepository(session)
        self.enrollments = ParticipantStudyRepository(session)
        self.audit = AuditEventService(session)

    async def device_tokens(self, notification: NotificationBean) -> list[str]:
        app = await self.studies.get_app_by_custom_id(notification.app_id)
        if app is None:
            return []
        users = await self.app_users.list_active_with_device(app.id)
        if notification.notification_type == NotificationType.STUDY_LEVEL:
            study = await self.studies.get_study_by_custom_id(notification.custom_study_id or notification.study_id or "")
            if study is None:
                return []
            enrolled = {
                e.app_user_id
                for e in await self.enrollments.find_by_app_id_and_user_id([study.id], [u.id for u in users])
                if e.status == EnrollmentStatus.IN_PROGRESS.value
            }
            users = [u for u in users if u.id in enrolled]
        return list(dict.fromkeys(u.device_token for u in users))

    async def send_notifications(self, notifications: list[NotificationBean], audit_request: AuditLogEventRequest) -> dict | None:
        replies: list[dict] = []
        for n in notifications:
            tokens = await self.device_tokens(n)
            data = {
                "type": n.notification_type.value,
                "subtype": n.notification_sub_type,
                "studyId": n.custom_study_id,
                "appId": n.app_id,
                "title": n.notification_title,
                "message": n.notification_text,
            }
            batch = max(1, settings.PUSH_BATCH_SIZE)
            try:
                for i in range(0, len(tokens), batch):
                    replies.append(await self.push.send(tokens[i:i + batch], data))
            except httpx.HTTPError as e:
                log.error(f"push provider failed for app {n.app_id}: {e}")
                await self.audit.log_event(
                    AuditLogEvent.PUSH_NOTIFICATION_FAILED, audit_request,
                    notification_type=n.notification_type.value, app_id=n.app_id,
                )
                await self.audit.commit()
                raise ErrorCodeException(ErrorCode.PUSH_NOTIFICATION_FAILED) from e
            await self.audit.log_event(
                AuditLogEvent.PUSH_NOTIFICATION_SENT, audit_request,
                notification_type=n.notification_type.value, app_id=n.app_id, recipients=len(tokens),
            )
        await self.audit.commit()
        return merge_replies(replies)
