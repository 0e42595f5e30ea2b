import logging
import httpx
from app.core.config import settings
from app.modules.audit.mapper import add_audit_event_header_params
from app.modules.audit.schemas import AuditLogEventRequest
from app.platform.ports.audit_sink import AuditSinkPort

log = logging.getLogger("audit.sink.http")

class HttpAuditSink(AuditSinkPort):
    """Forwards audit records to a remote audit-log service."""

    def __init__(self, url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.url = url or settings.AUDIT_LOG_URL
        if not self.url:
            raise RuntimeError("AUDIT_LOG_URL not configured")
        self.transport = transport

    async def publish(self, event: dict) -> None:
        headers = httpx.Headers({"Content-Type": "application/json"})
        add_audit_event_header_params(headers, AuditLogEventRequest.model_validate(event))
        async with httpx.AsyncClient(transport=self.transport, timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
            response = await client.post(self.url, json=event, headers=headers)
            response.raise_for_status()
        log.debug(f"[HTTP AUDIT] POST {self.url} event_code={event.get('eventCode')} status={response.status_code}")
