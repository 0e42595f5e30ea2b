from typing import Protocol, runtime_checkable

@runtime_checkable
class PushNotificationPort(Protocol):
    async def send(self, device_tokens: list[str], data: dict) -> dict:
        """Deliver one message to many devices; returns the provider reply
        ({"multicast_id", "success", "failure", "results": [...]})."""
        ...
