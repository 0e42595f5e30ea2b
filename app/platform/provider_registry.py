from app.core.config import settings
from app.platform.ports.audit_sink import AuditSinkPort
from app.platform.adapters.audit_sink_noop import NoopAuditSink
from app.platform.adapters.audit_sink_redis import RedisAuditSink
from app.platform.adapters.audit_sink_http import HttpAuditSink
from app.platform.ports.push_notifications import PushNotificationPort
from app.platform.adapters.push_noop import NoopPushProvider
from app.platform.adapters.push_fcm import FcmPushProvider

class ProviderRegistry:
    _audit_sink: AuditSinkPort | None = None
    _push: PushNotificationPort | None = None

    @classmethod
    def audit_sink(cls) -> AuditSinkPort:
        if cls._audit_sink is None:
            prov = (settings.AUDIT_SINK_PROVIDER or "noop").lower()
            if prov == "redis":
                cls._audit_sink = RedisAuditSink()
            elif prov == "http":
                cls._audit_sink = HttpAuditSink()
            else:
                cls._audit_sink = NoopAuditSink()
        return cls._audit_sink

    @classmethod
    def push_notifications(cls) -> PushNotificationPort:
        if cls._push is None:
            prov = (settings.PUSH_PROVIDER or "noop").lower()
            if prov == "fcm":
                cls._push = FcmPushProvider()
            else:
                cls._push = NoopPushProvider()
        return cls._push

    @classmethod
    def reset(cls) -> None:
        cls._audit_sink = None
        cls._push = None

registry = ProviderRegistry()
