import uuid
from typing import Annotated
from pydantic import AfterValidator, Field
from app.core.schemas import CamelModel, BaseResponse
from app.modules.locations.models import LocationStatus

def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be blank")
    return v.strip()

NonBlankStr = Annotated[str, AfterValidator(_not_blank)]

class LocationRequest(CamelModel):
    custom_id: NonBlankStr = Field(..., max_length=15)
    name: NonBlankStr = Field(..., max_length=255)
    description: NonBlankStr = Field(..., max_length=2000)
    status: LocationStatus = LocationStatus.ACTIVE

class UpdateLocationRequest(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    status: LocationStatus | None = None

class LocationResponse(BaseResponse):
    location_id: uuid.UUID

class LocationDetails(CamelModel):
    location_id: uuid.UUID
    custom_id: str
    name: str
    description: str
    status: LocationStatus
    is_default: bool
    studies: list[str] = []

class LocationListResponse(BaseResponse):
    locations: list[LocationDetails] = []
