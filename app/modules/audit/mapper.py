"""Builds audit records from inbound HTTP requests and event definitions."""
from datetime import datetime, timezone
from string import Template
from typing import Callable, MutableMapping
from fastapi import Request
from app.core.config import Settings
from app.core.errors import ErrorCode, ErrorCodeException
from app.modules.audit.events import AuditLogEvent, MobilePlatform, PlatformComponent
from app.modules.audit.schemas import AuditLogEventRequest

APP_ID = "appId"
MOBILE_PLATFORM = "mobilePlatform"
CORRELATION_ID = "correlationId"
USER_ID = "userId"
APP_VERSION = "appVersion"
SOURCE = "source"

FORWARDED_FOR = "X-FORWARDED-FOR"

# canonical header name -> AuditLogEventRequest field
HEADER_FIELDS = {
    USER_ID: "user_id",
    APP_VERSION: "app_version",
    SOURCE: "source",
    CORRELATION_ID: "correlation_id",
    MOBILE_PLATFORM: "mobile_platform",
    APP_ID: "app_id",
}

def _from_header(request: Request, name: str) -> str | None:
    return request.headers.get(name)

def _from_cookie(request: Request, name: str) -> str | None:
    return request.cookies.get(name)

# tried in order until one yields a non-empty value
LOOKUP_STRATEGIES: tuple[Callable[[Request, str], str | None], ...] = (_from_header, _from_cookie)

def get_value(request: Request, name: str) -> str | None:
    for lookup in LOOKUP_STRATEGIES:
        value = lookup(request, name)
        if value:
            return value
    return None

def get_user_ip(request: Request) -> str | None:
    forwarded = request.headers.get(FORWARDED_FOR)
    if forwarded:
        return forwarded
    return request.client.host if request.client else None

def from_http_request(request: Request) -> AuditLogEventRequest:
    source = get_value(request, SOURCE)
    if source and PlatformComponent.from_value(source) is None:
        raise ErrorCodeException(ErrorCode.INVALID_SOURCE_NAME)

    return AuditLogEventRequest(
        app_id=get_value(request, APP_ID),
        app_version=get_value(request, APP_VERSION),
        correlation_id=get_value(request, CORRELATION_ID),
        user_id=get_value(request, USER_ID),
        source=source or None,
        user_ip=get_user_ip(request),
        mobile_platform=MobilePlatform.from_value(get_value(request, MOBILE_PLATFORM)).value,
    )

def add_audit_event_header_params(headers: MutableMapping[str, str], audit_request: AuditLogEventRequest) -> None:
    for name, field in HEADER_FIELDS.items():
        value = getattr(audit_request, field)
        if name not in headers and value is not None:
            headers[name] = value

def from_audit_log_event(
    event: AuditLogEvent,
    settings: Settings,
    audit_request: AuditLogEventRequest,
    **placeholders,
) -> AuditLogEventRequest:
    update = {
        "event_code": event.event_code,
        "destination": event.destination.value,
        "description": Template(event.description).safe_substitute({k: str(v) for k, v in placeholders.items()}),
        "source_application_version": settings.APPLICATION_VERSION,
        "destination_application_version": settings.APPLICATION_VERSION,
        "platform_version": settings.APPLICATION_VERSION,
        "occurred": datetime.now(timezone.utc),
    }
    # definition value where specified, otherwise whatever the request carried
    if event.source is not None:
        update["source"] = event.source.value
    if event.user_access_level is not None:
        update["user_access_level"] = event.user_access_level.value
    if event.resource_server is not None:
        update["resource_server"] = event.resource_server.value
    return audit_request.model_copy(update=update)
