import uuid
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.errors import ErrorCode, ErrorCodeException, MessageCode
from app.modules.admins.models import AdminUser
from app.modules.audit.events import AuditLogEvent
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.audit.service import AuditEventService
from app.modules.locations.models import Location, LocationStatus
from app.modules.locations.repository import LocationRepository
from app.modules.locations.schemas import LocationDetails, LocationRequest, UpdateLocationRequest
from app.modules.participants.models import EnrollmentStatus
from app.modules.participants.repository import ParticipantStudyRepository

log = logging.getLogger(__name__)

class LocationService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = LocationRepository(session)
        self.enrollments = ParticipantStudyRepository(session)
        self.audit = AuditEventService(session)

    async def add_new_location(self, payload: LocationRequest, admin: AdminUser, audit_request: AuditLogEventRequest) -> Location:
        if await self.repo.get_by_custom_id(payload.custom_id):
            raise ErrorCodeException(ErrorCode.CUSTOM_ID_EXISTS)
        obj = await self.repo.create(
            custom_id=payload.custom_id,
            name=payload.name,
            description=payload.description,
            status=payload.status,
            is_default=False,
            created_by=admin.id,
        )
        await self.audit.log_event(AuditLogEvent.NEW_LOCATION_ADDED, audit_request, location_id=obj.custom_id)
        await self.audit.commit()
        return obj

    async def update_location(
        self, location_id: str, payload: UpdateLocationRequest, admin: AdminUser, audit_request: AuditLogEventRequest
    ) -> tuple[Location, MessageCode]:
        obj = await self._get_or_404(location_id)
        await self._validate_update(obj, payload)

        if payload.name and payload.name.strip():
            obj.name = payload.name.strip()
        if payload.description and payload.description.strip():
            obj.description = payload.description.strip()
        if payload.status is not None:
            obj.status = payload.status
        obj.updated_by = admin.id
        await self.session.flush()

        if payload.status == LocationStatus.ACTIVE:
            message, event = MessageCode.REACTIVATE_SUCCESS, AuditLogEvent.LOCATION_ACTIVATED
        elif payload.status == LocationStatus.INACTIVE:
            message, event = MessageCode.DECOMMISSION_SUCCESS, AuditLogEvent.LOCATION_DECOMMISSIONED
        else:
            message, event = MessageCode.LOCATION_UPDATE_SUCCESS, AuditLogEvent.LOCATION_EDITED
        await self.audit.log_event(event, audit_request, location_id=obj.custom_id)
        await self.audit.commit()
        return obj, message

    async def _validate_update(self, obj: Location, payload: UpdateLocationRequest) -> None:
        if obj.is_default:
            raise ErrorCodeException(ErrorCode.DEFAULT_SITE_MODIFY_DENIED)
        if payload.status == LocationStatus.ACTIVE and obj.status == LocationStatus.ACTIVE:
            raise ErrorCodeException(ErrorCode.CANNOT_REACTIVATE)
        if payload.status == LocationStatus.INACTIVE:
            if obj.status == LocationStatus.INACTIVE:
                raise ErrorCodeException(ErrorCode.ALREADY_DECOMMISSIONED)
            site_ids = await self.repo.active_site_ids(obj.id)
            if site_ids:
                enrollments = await self.enrollments.find_participants_enrollments_of_sites(site_ids)
                if any(e.status == EnrollmentStatus.IN_PROGRESS.value for e in enrollments):
                    log.info(f"location {obj.custom_id} still hosts enrolled participants")
                    raise ErrorCodeException(ErrorCode.CANNOT_DECOMMISSION_LOCATION_IN_USE)

    async def _get_or_404(self, location_id: str) -> Location:
        # ids are opaque strings to callers
        try:
            key = uuid.UUID(location_id)
        except ValueError:
            raise ErrorCodeException(ErrorCode.LOCATION_NOT_FOUND) from None
        obj = await self.repo.get(key)
        if obj is None:
            raise ErrorCodeException(ErrorCode.LOCATION_NOT_FOUND)
        return obj

    async def get_locations(self, status: LocationStatus | None = None) -> list[LocationDetails]:
        rows = await self.repo.find_all(status)
        return await self._details(rows)

    async def get_location(self, location_id: str) -> LocationDetails:
        obj = await self._get_or_404(location_id)
        return (await self._details([obj]))[0]

    async def _details(self, rows) -> list[LocationDetails]:
        studies = await self.repo.study_names_by_location([r.id for r in rows])
        return [
            LocationDetails(
                location_id=r.id,
                custom_id=r.custom_id,
                name=r.name,
                description=r.description,
                status=r.status,
                is_default=r.is_default,
                studies=studies.get(r.id, []),
            )
            for r in rows
        ]
