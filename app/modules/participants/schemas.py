import uuid
from datetime import datetime
from pydantic import Field
from app.core.schemas import CamelModel, BaseResponse

class InviteParticipantRequest(CamelModel):
    ids: list[uuid.UUID] = Field(..., min_length=1)

class InviteParticipantResponse(BaseResponse):
    ids: list[str] = []
    success_ids: list[str] = []
    failed_invitations: list[str] = []

class ParticipantDetail(CamelModel):
    id: uuid.UUID
    email: str
    onboarding_status: str
    enrollment_status: str | None = None
    invitation_count: int
    invitation_date: datetime | None = None

class SiteParticipantsResponse(BaseResponse):
    site_id: uuid.UUID
    study_id: str
    enrolled_count: int = 0
    participants: list[ParticipantDetail] = []

class ParticipantActivityBean(CamelModel):
    activity_id: str = Field(..., min_length=1)
    activity_version: str | None = None
    activity_state: str | None = None
    activity_run_id: str | None = None
    bookmarked: bool | None = None
    total: int | None = None
    completed: int | None = None
    missed: int | None = None

class ActivityStateRequest(CamelModel):
    participant_id: str = Field(..., min_length=1)
    study_id: str = Field(..., min_length=1)
    activity: list[ParticipantActivityBean] = []

class ActivityStateResponse(BaseResponse):
    activities: list[ParticipantActivityBean] = []
