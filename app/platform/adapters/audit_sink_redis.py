import json
import logging
from redis.asyncio import from_url as redis_from_url
from app.platform.ports.audit_sink import AuditSinkPort
from app.core.config import settings

log = logging.getLogger("audit.sink.redis")

class RedisAuditSink(AuditSinkPort):
    def __init__(self, redis=None):
        if redis is None:
            if not settings.REDIS_URL:
                raise RuntimeError("REDIS_URL not configured")
            redis = redis_from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
        self.redis = redis
        self.stream = settings.REDIS_STREAM or "studies.audit"

    async def publish(self, event: dict) -> None:
        payload = {
            "event_code": event.get("eventCode") or "-",
            "value": json.dumps(event, default=str),
        }
        await self.redis.xadd(self.stream, payload, maxlen=settings.REDIS_STREAM_MAXLEN, approximate=True)
        log.debug(f"[REDIS AUDIT] XADD stream={self.stream} event_code={payload['event_code']}")
