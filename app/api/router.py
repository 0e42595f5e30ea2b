from fastapi import APIRouter
from app.modules.locations.router import router as locations_router
from app.modules.studies.router import router as studies_router
from app.modules.notifications.router import router as notifications_router
from app.modules.participants.router import router as participants_router
from app.modules.audit.router import router as audit_router

api_router = APIRouter()
api_router.include_router(locations_router, prefix="/locations", tags=["locations"])
api_router.include_router(studies_router, prefix="/studies", tags=["studies"])
api_router.include_router(notifications_router, prefix="/studies", tags=["notifications"])
api_router.include_router(participants_router, tags=["participants"])
# audit router exposes /audit-events
api_router.include_router(audit_router, tags=["audit"])

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
