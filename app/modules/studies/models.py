import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Text
from app.core.base import Base, TimestampedMixin

class App(Base, TimestampedMixin):
    custom_app_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    org_id: Mapped[str] = mapped_column(String(64))

class Study(Base, TimestampedMixin):
    custom_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    app_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("app.id"))
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    version: Mapped[str] = mapped_column(String(16))
    type: Mapped[str | None] = mapped_column(String(32), nullable=True)  # GT gateway | SD standalone
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)  # Active | Paused | Deactivated | Upcoming
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    tagline: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sponsor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    enrolling: Mapped[str | None] = mapped_column(String(8), nullable=True)  # Yes | No
