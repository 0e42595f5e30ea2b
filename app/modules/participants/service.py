import uuid
import secrets
import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.errors import ErrorCode, ErrorCodeException, MessageCode
from app.modules.admins.models import AdminUser, Permission
from app.modules.admins.repository import AdminRepository
from app.modules.audit.events import AuditLogEvent
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.audit.service import AuditEventService
from app.modules.locations.models import Site
from app.modules.participants.models import EnrollmentStatus, OnboardingStatus
from app.modules.participants.repository import (
    ParticipantActivityRepository, ParticipantRegistryRepository, ParticipantStudyRepository
)
from app.modules.participants.schemas import (
    ActivityStateRequest, InviteParticipantResponse, ParticipantActivityBean, ParticipantDetail, SiteParticipantsResponse
)
from app.modules.studies.repository import StudyRepository

log = logging.getLogger(__name__)

INVITABLE = {OnboardingStatus.NEW.value, OnboardingStatus.INVITED.value}

def _now() -> datetime:
    return datetime.now(timezone.utc)

class ParticipantService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.registry = ParticipantRegistryRepository(session)
        self.enrollments = ParticipantStudyRepository(session)
        self.activities = ParticipantActivityRepository(session)
        self.studies = StudyRepository(session)
        self.admins = AdminRepository(session)
        self.audit = AuditEventService(session)

    async def _get_site_for(self, site_id: uuid.UUID, admin: AdminUser, level: Permission) -> Site:
        site = await self.session.get(Site, site_id)
        if site is None:
            raise ErrorCodeException(ErrorCode.SITE_NOT_FOUND)
        if not admin.super_admin:
            perm = await self.admins.get_study_permission(admin.id, site.study_id)
            if perm is None or perm.edit < level:
                raise ErrorCodeException(ErrorCode.MANAGE_SITE_PERMISSION_ACCESS_DENIED)
        return site

    async def invite_participants(
        self, site_id: uuid.UUID, ids: list[uuid.UUID], admin: AdminUser, audit_request: AuditLogEventRequest
    ) -> tuple[InviteParticipantResponse, bool]:
        site = await self._get_site_for(site_id, admin, Permission.READ_EDIT)
        requested = list(dict.fromkeys(ids))
        found = {r.id: r for r in await self.registry.find_by_ids(site.id, requested)}

        # enrolled or withdrawn registry entries cannot be re-invited
        blocked = {
            e.participant_registry_site_id
            for e in await self.enrollments.find_participants_by_registry_sites(list(found))
            if e.status in (EnrollmentStatus.IN_PROGRESS.value, EnrollmentStatus.WITHDRAWN.value)
        }

        success_ids: list[str] = []
        failed_ids: list[str] = []
        now = _now()
        for rid in requested:
            entry = found.get(rid)
            if entry is None or entry.onboarding_status not in INVITABLE or rid in blocked:
                failed_ids.append(str(rid))
                await self.audit.log_event(
                    AuditLogEvent.PARTICIPANT_INVITATION_FAILED, audit_request, participant_id=rid, site_id=site.id
                )
                continue
            entry.onboarding_status = OnboardingStatus.INVITED.value
            entry.invitation_count = (entry.invitation_count or 0) + 1
            entry.invitation_date = now
            entry.enrollment_token = secrets.token_urlsafe(24)
            entry.enrollment_token_expiry = now + timedelta(hours=settings.ENROLLMENT_TOKEN_EXPIRY_HOURS)
            success_ids.append(str(rid))
            await self.audit.log_event(
                AuditLogEvent.PARTICIPANT_INVITATION_SENT, audit_request, participant_id=rid, site_id=site.id
            )
        await self.session.flush()
        await self.audit.commit()
        log.info(f"site {site.id}: invited {len(success_ids)}, failed {len(failed_ids)}")

        status = MessageCode.PARTICIPANTS_INVITED if success_ids else ErrorCode.PARTICIPANTS_INVITATION_FAILED
        response = InviteParticipantResponse.of(
            status, ids=[str(i) for i in requested], success_ids=success_ids, failed_invitations=failed_ids
        )
        return response, bool(success_ids)

    async def get_site_participants(self, site_id: uuid.UUID, admin: AdminUser, onboarding_status: str | None = None) -> SiteParticipantsResponse:
        site = await self._get_site_for(site_id, admin, Permission.READ_VIEW)
        study = await self.studies.get_study(site.study_id)
        entries = await self.registry.list_for_site(site.id, onboarding_status)
        enrollment_by_registry = {
            e.participant_registry_site_id: e.status
            for e in await self.enrollments.find_participants_by_registry_sites([r.id for r in entries])
        }
        enrolled = await self.enrollments.count_by_study_id_and_status([EnrollmentStatus.IN_PROGRESS.value], site.study_id)
        return SiteParticipantsResponse.of(
            MessageCode.GET_PARTICIPANTS_SUCCESS,
            site_id=site.id,
            study_id=study.custom_id,
            enrolled_count=enrolled,
            participants=[
                ParticipantDetail(
                    id=r.id,
                    email=r.email,
                    onboarding_status=r.onboarding_status,
                    enrollment_status=enrollment_by_registry.get(r.id),
                    invitation_count=r.invitation_count or 0,
                    invitation_date=r.invitation_date,
                )
                for r in entries
            ],
        )

    async def save_activity_state(self, payload: ActivityStateRequest, audit_request: AuditLogEventRequest) -> None:
        enrollment = await self.enrollments.find_by_participant_id(payload.participant_id)
        study = await self.studies.get_study_by_custom_id(payload.study_id)
        if enrollment is None or study is None or enrollment.study_id != study.id:
            raise ErrorCodeException(ErrorCode.PARTICIPANT_NOT_FOUND)
        for a in payload.activity:
            await self.activities.upsert(
                payload.participant_id, payload.study_id, a.activity_id,
                **a.model_dump(exclude={"activity_id"}, exclude_none=True),
            )
        await self.audit.log_event(
            AuditLogEvent.ACTIVITY_STATE_SAVED, audit_request,
            participant_id=payload.participant_id, study_id=payload.study_id,
        )
        await self.audit.commit()

    async def get_activity_state(self, participant_id: str, study_id: str) -> list[ParticipantActivityBean]:
        rows = await self.activities.list_for_participant(participant_id, study_id)
        return [ParticipantActivityBean.model_validate(r) for r in rows]
