from typing import Protocol, runtime_checkable

@runtime_checkable
class AuditSinkPort(Protocol):
    async def publish(self, event: dict) -> None: ...
