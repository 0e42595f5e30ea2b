from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.errors import MessageCode
from app.core.security import get_optional_admin
from app.modules.admins.models import AdminUser
from app.modules.audit.mapper import from_http_request
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.studies.schemas import StudyMetadataBean, StudyMetadataResponse
from app.modules.studies.service import StudyService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> StudyService:
    return StudyService(session)

@router.post("/studymetadata", response_model=StudyMetadataResponse, response_model_exclude_none=True)
async def add_update_study_metadata(
    payload: StudyMetadataBean,
    admin: AdminUser | None = Depends(get_optional_admin),
    audit_request: AuditLogEventRequest = Depends(from_http_request),
    service: StudyService = Depends(svc),
):
    await service.add_update_study_metadata(payload, admin, audit_request)
    return StudyMetadataResponse.of(MessageCode.STUDY_METADATA_SAVED)
