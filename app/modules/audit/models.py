from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, TIMESTAMP, Text
from app.core.base import Base, TimestampedMixin

class AuditEvent(Base, TimestampedMixin):
    # what happened
    event_code: Mapped[str] = mapped_column(String(64), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # who / where from
    app_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    app_version: Mapped[str | None] = mapped_column(String(32), nullable=True)
    correlation_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    mobile_platform: Mapped[str | None] = mapped_column(String(16), nullable=True)
    user_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    # routing
    source: Mapped[str | None] = mapped_column(String(48), nullable=True)
    destination: Mapped[str | None] = mapped_column(String(48), nullable=True)
    user_access_level: Mapped[str | None] = mapped_column(String(32), nullable=True)
    resource_server: Mapped[str | None] = mapped_column(String(48), nullable=True)
    # versions
    source_application_version: Mapped[str | None] = mapped_column(String(32), nullable=True)
    destination_application_version: Mapped[str | None] = mapped_column(String(32), nullable=True)
    platform_version: Mapped[str | None] = mapped_column(String(32), nullable=True)
    occurred: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True))
