from pydantic import Field
from app.core.schemas import CamelModel, BaseResponse

class StudyMetadataBean(CamelModel):
    study_id: str = Field(..., min_length=1, max_length=64)
    study_title: str | None = None
    study_version: str = Field(..., min_length=1, max_length=16)
    study_type: str | None = None
    study_status: str | None = None
    study_category: str | None = None
    study_tagline: str | None = None
    study_sponsor: str | None = None
    study_enrolling: str | None = None
    app_id: str = Field(..., min_length=1, max_length=64)
    app_name: str | None = None
    app_description: str | None = None
    org_id: str = Field(..., min_length=1, max_length=64)

class StudyMetadataResponse(BaseResponse):
    pass
