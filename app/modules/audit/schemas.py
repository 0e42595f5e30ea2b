import uuid
from datetime import datetime
from pydantic import ConfigDict
from app.core.schemas import CamelModel

class AuditLogEventRequest(CamelModel):
    model_config = ConfigDict(frozen=True)

    # from the inbound request
    app_id: str | None = None
    app_version: str | None = None
    correlation_id: str | None = None
    user_id: str | None = None
    source: str | None = None
    mobile_platform: str | None = None
    user_ip: str | None = None

    # from the event definition
    event_code: str | None = None
    destination: str | None = None
    user_access_level: str | None = None
    resource_server: str | None = None
    description: str | None = None

    # from application config
    source_application_version: str | None = None
    destination_application_version: str | None = None
    platform_version: str | None = None
    occurred: datetime | None = None

class AuditEventOut(CamelModel):
    id: uuid.UUID
    event_code: str
    description: str | None
    app_id: str | None
    user_id: str | None
    correlation_id: str | None
    source: str | None
    destination: str | None
    user_access_level: str | None
    resource_server: str | None
    mobile_platform: str | None
    user_ip: str | None
    platform_version: str | None
    occurred: datetime
