import logging
from enum import Enum
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class ErrorCode(Enum):
    BAD_REQUEST = (400, "BAD_REQUEST", "Bad request")
    INVALID_SOURCE_NAME = (400, "INVALID_SOURCE_NAME", "Invalid 'source' value")
    USER_NOT_FOUND = (401, "USER_NOT_FOUND", "User not found")

    LOCATION_ACCESS_DENIED = (403, "LOCATION_ACCESS_DENIED", "You do not have permission to view or add or update locations")
    LOCATION_NOT_FOUND = (404, "LOCATION_NOT_FOUND", "No locations found")
    CUSTOM_ID_EXISTS = (400, "CUSTOM_ID_EXISTS", "Location ID already exists")
    DEFAULT_SITE_MODIFY_DENIED = (400, "DEFAULT_SITE_MODIFY_DENIED", "Default location can't be modified")
    CANNOT_REACTIVATE = (400, "CANNOT_REACTIVATE", "Can't reactivate an already active location")
    ALREADY_DECOMMISSIONED = (400, "ALREADY_DECOMMISSIONED", "This location is already decommissioned")
    CANNOT_DECOMMISSION_LOCATION_IN_USE = (
        400,
        "CANNOT_DECOMMISSION_LOCATION_IN_USE",
        "This location is being used as an active site with enrolled participants and cannot be decommissioned",
    )

    SITE_NOT_FOUND = (404, "SITE_NOT_FOUND", "Site not found")
    MANAGE_SITE_PERMISSION_ACCESS_DENIED = (403, "MANAGE_SITE_PERMISSION_ACCESS_DENIED", "You do not have permission to manage this site")
    PARTICIPANTS_INVITATION_FAILED = (400, "PARTICIPANTS_INVITATION_FAILED", "None of the selected participants could be invited")
    PARTICIPANT_NOT_FOUND = (404, "PARTICIPANT_NOT_FOUND", "Participant not found")

    AUDIT_ACCESS_DENIED = (403, "AUDIT_ACCESS_DENIED", "Only super admins can view audit events")
    PUSH_NOTIFICATION_FAILED = (502, "PUSH_NOTIFICATION_FAILED", "Push notification provider rejected the request")

    def __init__(self, status: int, code: str, description: str):
        self.status = status
        self.code = code
        self.description = description

class MessageCode(Enum):
    ADD_LOCATION_SUCCESS = (201, "New location added successfully")
    LOCATION_UPDATE_SUCCESS = (200, "Location updated successfully")
    REACTIVATE_SUCCESS = (200, "Location reactivated successfully")
    DECOMMISSION_SUCCESS = (200, "Location decommissioned successfully")
    GET_LOCATION_SUCCESS = (200, "Get locations success")
    STUDY_METADATA_SAVED = (200, "Study metadata saved successfully")
    NOTIFICATION_SENT = (200, "SUCCESS")
    PARTICIPANTS_INVITED = (200, "Participants invited successfully")
    GET_PARTICIPANTS_SUCCESS = (200, "Get participants success")
    ACTIVITY_STATE_SAVED = (200, "Activity state saved successfully")
    GET_ACTIVITY_STATE_SUCCESS = (200, "Get activity state success")

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message

class ErrorCodeException(Exception):
    def __init__(self, error_code: ErrorCode):
        super().__init__(error_code.description)
        self.error_code = error_code

def error_body(error_code: ErrorCode) -> dict:
    return {
        "status": error_code.status,
        "error_code": error_code.code,
        "error_description": error_code.description,
    }

def _violations(exc: RequestValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        out.append({"path": ".".join(loc) or "body", "message": err.get("msg", "invalid value")})
    return out

def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ErrorCodeException)
    async def error_code_exception_handler(request: Request, exc: ErrorCodeException):
        logger.info(f"{request.method} {request.url.path} failed with {exc.error_code.code}")
        return JSONResponse(status_code=exc.error_code.status, content=error_body(exc.error_code))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        content = error_body(ErrorCode.BAD_REQUEST)
        content["violations"] = _violations(exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.critical(f"Unhandled exception for request {request.method} {request.url.path}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An internal server error occurred."},
        )
