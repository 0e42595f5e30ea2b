from enum import Enum
from typing import Any
from pydantic import Field
from app.core.schemas import CamelModel, BaseResponse

class NotificationType(str, Enum):
    STUDY_LEVEL = "ST"
    GATEWAY_LEVEL = "GT"

class NotificationBean(CamelModel):
    study_id: str | None = None
    custom_study_id: str | None = None
    app_id: str = Field(..., min_length=1)
    notification_type: NotificationType
    notification_sub_type: str | None = None  # Announcement | Activity | Resource | Study
    notification_title: str | None = None
    notification_text: str | None = None

class NotificationForm(CamelModel):
    notifications: list[NotificationBean] = Field(..., min_length=1)

class NotificationResponse(BaseResponse):
    response: dict[str, Any] | None = None
