from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.errors import MessageCode
from app.core.security import require_manage_locations
from app.modules.admins.models import AdminUser, Permission
from app.modules.audit.mapper import from_http_request
from app.modules.audit.schemas import AuditLogEventRequest
from app.modules.locations.models import LocationStatus
from app.modules.locations.schemas import LocationListResponse, LocationRequest, LocationResponse, UpdateLocationRequest
from app.modules.locations.service import LocationService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> LocationService:
    return LocationService(session)

@router.post("", response_model=LocationResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def add_new_location(
    payload: LocationRequest,
    admin: AdminUser = Depends(require_manage_locations(Permission.READ_EDIT)),
    audit_request: AuditLogEventRequest = Depends(from_http_request),
    service: LocationService = Depends(svc),
):
    obj = await service.add_new_location(payload, admin, audit_request)
    return LocationResponse.of(MessageCode.ADD_LOCATION_SUCCESS, location_id=obj.id)

@router.put("/{location_id}", response_model=LocationResponse, response_model_exclude_none=True)
async def update_location(
    location_id: str,
    payload: UpdateLocationRequest,
    admin: AdminUser = Depends(require_manage_locations(Permission.READ_EDIT)),
    audit_request: AuditLogEventRequest = Depends(from_http_request),
    service: LocationService = Depends(svc),
):
    obj, message = await service.update_location(location_id, payload, admin, audit_request)
    return LocationResponse.of(message, location_id=obj.id)

@router.get("", response_model=LocationListResponse, response_model_exclude_none=True)
async def get_locations(
    location_status: LocationStatus | None = Query(None, alias="status"),
    admin: AdminUser = Depends(require_manage_locations(Permission.READ_VIEW)),
    service: LocationService = Depends(svc),
):
    locations = await service.get_locations(location_status)
    return LocationListResponse.of(MessageCode.GET_LOCATION_SUCCESS, locations=locations)

@router.get("/{location_id}", response_model=LocationListResponse, response_model_exclude_none=True)
async def get_location(
    location_id: str,
    admin: AdminUser = Depends(require_manage_locations(Permission.READ_VIEW)),
    service: LocationService = Depends(svc),
):
    location = await service.get_location(location_id)
    return LocationListResponse.of(MessageCode.GET_LOCATION_SUCCESS, locations=[location])
