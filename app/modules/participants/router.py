import uuid
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.errors import ErrorCode, MessageCode, error_body
from app.core.security import get_current_admin
from app.modules.admins.models import AdminUser
from app.modules.audit.mapper import from_http_request
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.participants.models import OnboardingStatus
from app.modules.participants.schemas import (
    ActivityStateRequest, ActivityStateResponse, InviteParticipantRequest, InviteParticipantResponse, SiteParticipantsResponse
)
from app.modules.participants.service import ParticipantService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> ParticipantService:
    return ParticipantService(session)

@router.post("/sites/{site_id}/participants/invite", response_model=InviteParticipantResponse, response_model_exclude_none=True)
async def invite_participants(
    site_id: uuid.UUID,
    payload: InviteParticipantRequest,
    admin: AdminUser = Depends(get_current_admin),
    audit_request: AuditLogEventRequest = Depends(from_http_request),
    service: ParticipantService = Depends(svc),
):
    response, any_sent = await service.invite_participants(site_id, payload.ids, admin, audit_request)
    if not any_sent:
        return JSONResponse(
            status_code=ErrorCode.PARTICIPANTS_INVITATION_FAILED.status,
            content={**error_body(ErrorCode.PARTICIPANTS_INVITATION_FAILED), **response.model_dump(by_alias=True, exclude_none=True)},
        )
    return response

@router.get("/sites/{site_id}/participants", response_model=SiteParticipantsResponse, response_model_exclude_none=True)
async def get_site_participants(
    site_id: uuid.UUID,
    onboarding_status: OnboardingStatus | None = Query(None, alias="onboardingStatus"),
    admin: AdminUser = Depends(get_current_admin),
    service: ParticipantService = Depends(svc),
):
    return await service.get_site_participants(site_id, admin, onboarding_status.value if onboarding_status else None)

@router.post("/participant/update-activity-state", response_model=ActivityStateResponse, response_model_exclude_none=True)
async def update_activity_state(
    payload: ActivityStateRequest,
    audit_request: AuditLogEventRequest = Depends(from_http_request),
    service: ParticipantService = Depends(svc),
):
    await service.save_activity_state(payload, audit_request)
    return ActivityStateResponse.of(MessageCode.ACTIVITY_STATE_SAVED)

@router.get("/participant/get-activity-state", response_model=ActivityStateResponse, response_model_exclude_none=True)
async def get_activity_state(
    study_id: str = Query(..., alias="studyId", min_length=1),
    participant_id: str = Query(..., alias="participantId", min_length=1),
    service: ParticipantService = Depends(svc),
):
    activities = await service.get_activity_state(participant_id, study_id)
    return ActivityStateResponse.of(MessageCode.GET_ACTIVITY_STATE_SUCCESS, activities=activities)
