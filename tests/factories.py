"""Test data builders"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.admins.models import AdminUser, Permission, StudyPermission
from app.modules.locations.models import Location, LocationStatus, Site
from app.modules.participants.models import (
    AppUser,
    EnrollmentStatus,
    OnboardingStatus,
    ParticipantRegistrySite,
    ParticipantStudy,
)
from app.modules.studies.models import App, Study


def headers_for(admin: AdminUser | None = None, **extra: str) -> dict[str, str]:
    """Gateway headers for a request made on behalf of ``admin``"""
    h = {"correlationId": "corr-1", "appId": "PARTICIPANT MANAGER", "mobilePlatform": "UNKNOWN"}
    if admin is not None:
        h["userId"] = str(admin.id)
    h.update(extra)
    return h


async def _save(session: AsyncSession, obj: Any) -> Any:
    session.add(obj)
    await session.commit()
    return obj


async def create_admin(session: AsyncSession, email: str = "admin@example.com", **kw: Any) -> AdminUser:
    kw.setdefault("manage_locations", Permission.READ_EDIT)
    return await _save(session, AdminUser(email=email, **kw))


async def create_location(session: AsyncSession, custom_id: str = "LOC-1", **kw: Any) -> Location:
    kw.setdefault("name", f"Location {custom_id}")
    kw.setdefault("description", "Downtown clinic")
    kw.setdefault("status", LocationStatus.ACTIVE)
    return await _save(session, Location(custom_id=custom_id, **kw))


async def create_app(session: AsyncSession, custom_app_id: str = "APP-1") -> App:
    return await _save(session, App(custom_app_id=custom_app_id, name="Study App", org_id="ORG-1"))


async def create_study(session: AsyncSession, app: App, custom_id: str = "STUDY-1", **kw: Any) -> Study:
    kw.setdefault("name", f"Study {custom_id}")
    return await _save(session, Study(custom_id=custom_id, app_id=app.id, version="1.0", **kw))


async def create_site(session: AsyncSession, location: Location, study: Study, status: int = 1) -> Site:
    return await _save(session, Site(location_id=location.id, study_id=study.id, status=status))


async def grant_study(session: AsyncSession, admin: AdminUser, study: Study, edit: Permission) -> StudyPermission:
    return await _save(session, StudyPermission(admin_id=admin.id, study_id=study.id, app_id=study.app_id, edit=edit))


async def create_registry_entry(
    session: AsyncSession, site: Site, email: str, status: OnboardingStatus = OnboardingStatus.NEW
) -> ParticipantRegistrySite:
    return await _save(
        session,
        ParticipantRegistrySite(site_id=site.id, study_id=site.study_id, email=email, onboarding_status=status.value),
    )


async def create_app_user(session: AsyncSession, app: App, email: str, device_token: str | None = None, status: int = 1) -> AppUser:
    return await _save(
        session, AppUser(app_id=app.id, email=email, device_token=device_token, device_type="android", status=status)
    )


async def enroll(
    session: AsyncSession,
    study: Study,
    site: Site | None = None,
    app_user: AppUser | None = None,
    registry: ParticipantRegistrySite | None = None,
    participant_id: str | None = None,
    status: EnrollmentStatus = EnrollmentStatus.IN_PROGRESS,
) -> ParticipantStudy:
    return await _save(
        session,
        ParticipantStudy(
            participant_id=participant_id,
            study_id=study.id,
            site_id=site.id if site else None,
            app_user_id=app_user.id if app_user else None,
            participant_registry_site_id=registry.id if registry else None,
            status=status.value,
            enrolled_date=datetime.now(timezone.utc),
        ),
    )
