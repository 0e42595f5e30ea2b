import logging
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.admins.models import AdminUser, Permission
from app.modules.admins.repository import AdminRepository
from app.modules.audit.events import AuditLogEvent
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.audit.service import AuditEventService
from app.modules.studies.models import App, Study
from app.modules.studies.repository import StudyRepository
from app.modules.studies.schemas import StudyMetadataBean

log = logging.getLogger(__name__)

class StudyService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = StudyRepository(session)
        self.admins = AdminRepository(session)
        self.audit = AuditEventService(session)

    async def add_update_study_metadata(self, payload: StudyMetadataBean, acting_admin: AdminUser | None, audit_request: AuditLogEventRequest) -> Study:
        app, _ = await self.repo.upsert_app(
            payload.app_id, name=payload.app_name, description=payload.app_description, org_id=payload.org_id
        )
        study, created = await self.repo.upsert_study(
            payload.study_id,
            app_id=app.id,
            name=payload.study_title,
            version=payload.study_version,
            type=payload.study_type,
            status=payload.study_status,
            category=payload.study_category,
            tagline=payload.study_tagline,
            sponsor=payload.study_sponsor,
            enrolling=payload.study_enrolling,
        )
        log.info(f"study {payload.study_id} {'created' if created else 'updated'} under app {payload.app_id}")

        grantees: list[AdminUser] = []
        if acting_admin is not None:
            grantees.append(acting_admin)
        grantees.extend(a for a in await self.admins.list_super_admins() if a not in grantees)
        for admin in grantees:
            granted_by = acting_admin.id if acting_admin is not None else admin.id
            await self._grant_edit(admin, app, study, granted_by)

        await self.audit.log_event(
            AuditLogEvent.STUDY_METADATA_RECEIVED, audit_request,
            study_id=payload.study_id, study_version=payload.study_version,
        )
        await self.audit.commit()
        return study

    async def _grant_edit(self, admin: AdminUser, app: App, study: Study, granted_by) -> None:
        # existing rows are upgraded in place and keep their original creator
        app_perm = await self.admins.get_app_permission(admin.id, app.id)
        if app_perm is None:
            await self.admins.add_app_permission(admin_id=admin.id, app_id=app.id, edit=Permission.READ_EDIT, created_by=granted_by)
        else:
            app_perm.edit = Permission.READ_EDIT

        study_perm = await self.admins.get_study_permission(admin.id, study.id)
        if study_perm is None:
            await self.admins.add_study_permission(
                admin_id=admin.id, study_id=study.id, app_id=app.id, edit=Permission.READ_EDIT, created_by=granted_by
            )
        else:
            study_perm.edit = Permission.READ_EDIT
            study_perm.app_id = app.id
        await self.session.flush()
