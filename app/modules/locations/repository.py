import uuid
from typing import Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.locations.models import Location, Site
from app.modules.studies.models import Study

class LocationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **data) -> Location:
        obj = Location(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get(self, location_id: uuid.UUID) -> Location | None:
        return await self.session.get(Location, location_id)

    async def get_by_custom_id(self, custom_id: str) -> Location | None:
        res = await self.session.execute(select(Location).where(Location.custom_id == custom_id))
        return res.scalar_one_or_none()

    async def find_all(self, status: int | None = None) -> Sequence[Location]:
        q = select(Location)
        if status is not None:
            q = q.where(Location.status == status)
        res = await self.session.execute(q.order_by(Location.created_at, Location.custom_id))
        return res.scalars().all()

    async def active_site_ids(self, location_id: uuid.UUID) -> list[uuid.UUID]:
        res = await self.session.execute(select(Site.id).where(Site.location_id == location_id, Site.status == 1))
        return list(res.scalars().all())

    async def study_names_by_location(self, location_ids: list[uuid.UUID]) -> dict[uuid.UUID, list[str]]:
        q = (
            select(Site.location_id, Study.name, Study.custom_id)
            .join(Study, Study.id == Site.study_id)
            .where(Site.location_id.in_(location_ids))
            .order_by(Study.custom_id)
        )
        out: dict[uuid.UUID, list[str]] = {lid: [] for lid in location_ids}
        for location_id, name, custom_id in (await self.session.execute(q)).all():
            out[location_id].append(name or custom_id)
        return out
