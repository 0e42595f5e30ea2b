import uuid
from enum import IntEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Integer, Text
from app.core.base import Base, TimestampedMixin

class LocationStatus(IntEnum):
    INACTIVE = 0
    ACTIVE = 1

class Location(Base, TimestampedMixin):
    custom_id: Mapped[str] = mapped_column(String(15), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    status: Mapped[int] = mapped_column(Integer, default=LocationStatus.ACTIVE)
    is_default: Mapped[bool] = mapped_column(default=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    updated_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

class Site(Base, TimestampedMixin):
    # a study running at a location
    location_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("location.id"))
    study_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("study.id"))
    status: Mapped[int] = mapped_column(Integer, default=1)  # 1 active | 0 deactivated
    target_enrollment: Mapped[int | None] = mapped_column(Integer, nullable=True)
