import logging
import random
import uuid
from app.platform.ports.push_notifications import PushNotificationPort

log = logging.getLogger("push.noop")

class NoopPushProvider(PushNotificationPort):
    async def send(self, device_tokens: list[str], data: dict) -> dict:
        log.info(f"[NOOP PUSH] devices={len(device_tokens)} data={data}")
        return {
            "multicast_id": random.randint(1, 2**53),
            "success": len(device_tokens),
            "failure": 0,
            "results": [{"message_id": f"noop:{uuid.uuid4().hex}"} for _ in device_tokens],
        }
