import uuid
from enum import IntEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Integer, UniqueConstraint
from app.core.base import Base, TimestampedMixin

class Permission(IntEnum):
    NO_PERMISSION = 0
    READ_VIEW = 1
    READ_EDIT = 2

class AdminUser(Base, TimestampedMixin):
    email: Mapped[str] = mapped_column(String(320), unique=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    super_admin: Mapped[bool] = mapped_column(default=False)
    manage_locations: Mapped[int] = mapped_column(Integer, default=Permission.NO_PERMISSION)
    status: Mapped[int] = mapped_column(Integer, default=1)  # 1 active | 0 deactivated

class AppPermission(Base, TimestampedMixin):
    __table_args__ = (UniqueConstraint("admin_id", "app_id"),)
    admin_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("adminuser.id"))
    app_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("app.id"))
    edit: Mapped[int] = mapped_column(Integer, default=Permission.READ_VIEW)
    created_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

class StudyPermission(Base, TimestampedMixin):
    __table_args__ = (UniqueConstraint("admin_id", "study_id"),)
    admin_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("adminuser.id"))
    study_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("study.id"))
    app_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("app.id"), nullable=True)
    edit: Mapped[int] = mapped_column(Integer, default=Permission.READ_VIEW)
    created_by: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
