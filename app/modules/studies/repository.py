import uuid
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.studies.models import App, Study

class StudyRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_app_by_custom_id(self, custom_app_id: str) -> App | None:
        res = await self.session.execute(select(App).where(App.custom_app_id == custom_app_id))
        return res.scalar_one_or_none()

    async def get_study(self, study_id: uuid.UUID) -> Study | None:
        return await self.session.get(Study, study_id)

    async def get_study_by_custom_id(self, custom_id: str) -> Study | None:
        res = await self.session.execute(select(Study).where(Study.custom_id == custom_id))
        return res.scalar_one_or_none()

    async def upsert_app(self, custom_app_id: str, **data) -> tuple[App, bool]:
        obj = await self.get_app_by_custom_id(custom_app_id)
        created = obj is None
        if created:
            obj = App(custom_app_id=custom_app_id)
            self.session.add(obj)
        for k, v in data.items():
            if v is not None:
                setattr(obj, k, v)
        await self.session.flush()
        return obj, created

    async def upsert_study(self, custom_id: str, **data) -> tuple[Study, bool]:
        obj = await self.get_study_by_custom_id(custom_id)
        created = obj is None
        if created:
            obj = Study(custom_id=custom_id)
            self.session.add(obj)
        for k, v in data.items():
            if v is not None:
                setattr(obj, k, v)
        await self.session.flush()
        return obj, created
