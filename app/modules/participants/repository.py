import uuid
from typing import Sequence
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.participants.models import AppUser, ParticipantActivity, ParticipantRegistrySite, ParticipantStudy

class ParticipantStudyRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_participants_enrollments_of_sites(self, site_ids: list[uuid.UUID]) -> Sequence[ParticipantStudy]:
        res = await self.session.execute(select(ParticipantStudy).where(ParticipantStudy.site_id.in_(site_ids)))
        return res.scalars().all()

    async def find_participants_by_study(self, study_id: uuid.UUID) -> Sequence[ParticipantStudy]:
        res = await self.session.execute(select(ParticipantStudy).where(ParticipantStudy.study_id == study_id))
        return res.scalars().all()

    async def count_by_study_id_and_status(self, statuses: list[str], study_id: uuid.UUID) -> int:
        q = select(func.count(ParticipantStudy.id)).where(
            ParticipantStudy.status.in_(statuses),
            ParticipantStudy.study_id == study_id,
        )
        return (await self.session.execute(q)).scalar_one()

    async def find_by_site_id_and_status(self, site_id: uuid.UUID, status: str) -> Sequence[ParticipantStudy]:
        res = await self.session.execute(
            select(ParticipantStudy).where(ParticipantStudy.site_id == site_id, ParticipantStudy.status == status)
        )
        return res.scalars().all()

    async def find_enrollment_by_registry_site(self, registry_site_id: uuid.UUID) -> ParticipantStudy | None:
        res = await self.session.execute(
            select(ParticipantStudy).where(ParticipantStudy.participant_registry_site_id == registry_site_id).limit(1)
        )
        return res.scalars().first()

    async def find_participants_enrollment(self, registry_site_id: uuid.UUID) -> Sequence[ParticipantStudy]:
        res = await self.session.execute(
            select(ParticipantStudy).where(ParticipantStudy.participant_registry_site_id == registry_site_id)
        )
        return res.scalars().all()

    async def find_participants_by_registry_sites(self, registry_ids: list[uuid.UUID]) -> Sequence[ParticipantStudy]:
        res = await self.session.execute(
            select(ParticipantStudy).where(ParticipantStudy.participant_registry_site_id.in_(registry_ids))
        )
        return res.scalars().all()

    async def find_by_app_id_and_user_id(self, study_ids: list[uuid.UUID], user_ids: list[uuid.UUID]) -> Sequence[ParticipantStudy]:
        res = await self.session.execute(
            select(ParticipantStudy).where(
                ParticipantStudy.study_id.in_(study_ids),
                ParticipantStudy.app_user_id.in_(user_ids),
            )
        )
        return res.scalars().all()

    async def find_by_participant_id(self, participant_id: str) -> ParticipantStudy | None:
        res = await self.session.execute(select(ParticipantStudy).where(ParticipantStudy.participant_id == participant_id))
        return res.scalar_one_or_none()

class ParticipantRegistryRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_ids(self, site_id: uuid.UUID, ids: list[uuid.UUID]) -> Sequence[ParticipantRegistrySite]:
        res = await self.session.execute(
            select(ParticipantRegistrySite).where(
                ParticipantRegistrySite.site_id == site_id,
                ParticipantRegistrySite.id.in_(ids),
            )
        )
        return res.scalars().all()

    async def list_for_site(self, site_id: uuid.UUID, onboarding_status: str | None = None) -> Sequence[ParticipantRegistrySite]:
        q = select(ParticipantRegistrySite).where(ParticipantRegistrySite.site_id == site_id)
        if onboarding_status:
            q = q.where(ParticipantRegistrySite.onboarding_status == onboarding_status)
        res = await self.session.execute(q.order_by(ParticipantRegistrySite.created_at, ParticipantRegistrySite.email))
        return res.scalars().all()

class AppUserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active_with_device(self, app_id: uuid.UUID) -> Sequence[AppUser]:
        q = select(AppUser).where(
            AppUser.app_id == app_id,
            AppUser.status == 1,
            AppUser.device_token.is_not(None),
        )
        res = await self.session.execute(q.order_by(AppUser.created_at))
        return res.scalars().all()

class ParticipantActivityRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, participant_id: str, study_id: str, activity_id: str) -> ParticipantActivity | None:
        res = await self.session.execute(
            select(ParticipantActivity).where(
                ParticipantActivity.participant_id == participant_id,
                ParticipantActivity.study_id == study_id,
                ParticipantActivity.activity_id == activity_id,
            )
        )
        return res.scalar_one_or_none()

    async def list_for_participant(self, participant_id: str, study_id: str) -> Sequence[ParticipantActivity]:
        res = await self.session.execute(
            select(ParticipantActivity).where(
                ParticipantActivity.participant_id == participant_id,
                ParticipantActivity.study_id == study_id,
            ).order_by(ParticipantActivity.activity_id)
        )
        return res.scalars().all()

    async def upsert(self, participant_id: str, study_id: str, activity_id: str, **data) -> ParticipantActivity:
        obj = await self.get(participant_id, study_id, activity_id)
        if obj is None:
            obj = ParticipantActivity(participant_id=participant_id, study_id=study_id, activity_id=activity_id)
            self.session.add(obj)
        for k, v in data.items():
            if v is not None:
                setattr(obj, k, v)
        await self.session.flush()
        return obj
