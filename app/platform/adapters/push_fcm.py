import logging
import httpx
from app.core.config import settings
from app.platform.ports.push_notifications import PushNotificationPort

log = logging.getLogger("push.fcm")

class FcmPushProvider(PushNotificationPort):
    def __init__(self, server_key: str | None = None, url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.server_key = server_key or settings.FCM_SERVER_KEY
        if not self.server_key:
            raise RuntimeError("FCM_SERVER_KEY not configured")
        self.url = url or settings.FCM_URL
        self.transport = transport

    async def send(self, device_tokens: list[str], data: dict) -> dict:
        headers = {"Authorization": f"key={self.server_key}"}
        body = {"registration_ids": device_tokens, "priority": "high", "data": data}
        async with httpx.AsyncClient(transport=self.transport, timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
            response = await client.post(self.url, json=body, headers=headers)
            response.raise_for_status()
            reply = response.json()
        log.info(f"FCM multicast_id={reply.get('multicast_id')} success={reply.get('success')} failure={reply.get('failure')}")
        return reply
