import json
import logging
from app.platform.ports.audit_sink import AuditSinkPort

log = logging.getLogger("audit.sink.noop")

class NoopAuditSink(AuditSinkPort):
    async def publish(self, event: dict) -> None:
        log.info(f"[NOOP AUDIT] {json.dumps(event, default=str)}")
