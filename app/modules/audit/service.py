import logging
from typing import Sequence
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.modules.audit.events import AuditLogEvent
from app.modules.audit.mapper import from_audit_log_event
from app.modules.audit.models import AuditEvent
from app.modules.audit.schemas import AuditLogEventRequest
from app.platform.provider_registry import registry

log = logging.getLogger(__name__)

class AuditEventService:
    def __init__(self, session: AsyncSession):
        self.session = session
        # assembled records waiting for the transaction to commit
        self.pending: list[AuditLogEventRequest] = []

    async def log_event(self, event: AuditLogEvent, audit_request: AuditLogEventRequest, **placeholders) -> AuditLogEventRequest:
        record = from_audit_log_event(event, settings, audit_request, **placeholders)
        await self.post_audit_log_event(record)
        return record

    async def post_audit_log_event(self, record: AuditLogEventRequest) -> None:
        self.session.add(AuditEvent(**record.model_dump()))
        await self.session.flush()
        self.pending.append(record)

    async def commit(self) -> None:
        """Commit the business transaction, then hand its audit records to the sink."""
        await self.session.commit()
        await self.publish_pending()

    async def publish_pending(self) -> None:
        records, self.pending = self.pending, []
        sink = registry.audit_sink()
        for record in records:
            try:
                await sink.publish(record.model_dump(by_alias=True, mode="json"))
            except Exception:
                # the local audit row is already committed
                log.exception(f"Publish failed for audit event {record.event_code}")

    async def list_events(self, limit: int = 50, event_code: str | None = None, user_id: str | None = None) -> Sequence[AuditEvent]:
        q = select(AuditEvent)
        if event_code:
            q = q.where(AuditEvent.event_code == event_code)
        if user_id:
            q = q.where(AuditEvent.user_id == user_id)
        res = await self.session.execute(q.order_by(desc(AuditEvent.occurred)).limit(limit))
        return res.scalars().all()
