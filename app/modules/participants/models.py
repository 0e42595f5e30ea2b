import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Integer, TIMESTAMP, UniqueConstraint
from app.core.base import Base, TimestampedMixin

class OnboardingStatus(str, Enum):
    NEW = "N"
    INVITED = "I"
    ENROLLED = "E"
    DISABLED = "D"

class EnrollmentStatus(str, Enum):
    YET_TO_ENROLL = "yetToEnroll"
    IN_PROGRESS = "inProgress"  # enrolled
    WITHDRAWN = "withdrawn"
    NOT_ELIGIBLE = "notEligible"

class AppUser(Base, TimestampedMixin):
    # mobile app account
    app_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("app.id"))
    email: Mapped[str] = mapped_column(String(320))
    status: Mapped[int] = mapped_column(Integer, default=1)  # 1 active | 0 deactivated
    device_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    device_type: Mapped[str | None] = mapped_column(String(16), nullable=True)  # android | ios

class ParticipantRegistrySite(Base, TimestampedMixin):
    site_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("site.id"))
    study_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("study.id"))
    email: Mapped[str] = mapped_column(String(320))
    onboarding_status: Mapped[str] = mapped_column(String(1), default=OnboardingStatus.NEW.value)
    invitation_count: Mapped[int] = mapped_column(Integer, default=0)
    invitation_date: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    enrollment_token: Mapped[str | None] = mapped_column(String(64), nullable=True)
    enrollment_token_expiry: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

class ParticipantStudy(Base, TimestampedMixin):
    # enrollment of a participant in a study
    participant_id: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    app_user_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("appuser.id"), nullable=True)
    study_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("study.id"))
    site_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("site.id"), nullable=True)
    participant_registry_site_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("participantregistrysite.id"), nullable=True)
    status: Mapped[str] = mapped_column(String(32), default=EnrollmentStatus.YET_TO_ENROLL.value)
    enrolled_date: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

class ParticipantActivity(Base, TimestampedMixin):
    __table_args__ = (UniqueConstraint("participant_id", "study_id", "activity_id"),)
    participant_id: Mapped[str] = mapped_column(String(64), index=True)
    study_id: Mapped[str] = mapped_column(String(64))  # custom study id
    activity_id: Mapped[str] = mapped_column(String(64))
    activity_version: Mapped[str | None] = mapped_column(String(16), nullable=True)
    activity_state: Mapped[str | None] = mapped_column(String(32), nullable=True)  # start | inProgress | completed | abandoned
    activity_run_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    bookmarked: Mapped[bool] = mapped_column(default=False)
    total: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    missed: Mapped[int | None] = mapped_column(Integer, nullable=True)
