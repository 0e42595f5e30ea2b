from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from app.core.errors import ErrorCode, MessageCode

class CamelModel(BaseModel):
    # wire format is camelCase; python side stays snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class BaseResponse(CamelModel):
    code: int | None = None
    message: str | None = None
    error_description: str | None = Field(default=None, alias="error_description")

    @classmethod
    def of(cls, status: MessageCode | ErrorCode, **data):
        if isinstance(status, ErrorCode):
            return cls(code=status.status, error_description=status.description, **data)
        return cls(code=status.status, message=status.message, **data)
