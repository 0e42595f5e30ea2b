import uuid
from typing import Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.admins.models import AdminUser, AppPermission, StudyPermission

class AdminRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, admin_id: uuid.UUID) -> AdminUser | None:
        return await self.session.get(AdminUser, admin_id)

    async def list_super_admins(self) -> Sequence[AdminUser]:
        res = await self.session.execute(select(AdminUser).where(AdminUser.super_admin.is_(True)).order_by(AdminUser.created_at))
        return res.scalars().all()

    async def get_app_permission(self, admin_id: uuid.UUID, app_id: uuid.UUID) -> AppPermission | None:
        res = await self.session.execute(select(AppPermission).where(AppPermission.admin_id == admin_id, AppPermission.app_id == app_id))
        return res.scalar_one_or_none()

    async def get_study_permission(self, admin_id: uuid.UUID, study_id: uuid.UUID) -> StudyPermission | None:
        res = await self.session.execute(select(StudyPermission).where(StudyPermission.admin_id == admin_id, StudyPermission.study_id == study_id))
        return res.scalar_one_or_none()

    async def add_app_permission(self, **data) -> AppPermission:
        obj = AppPermission(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def add_study_permission(self, **data) -> StudyPermission:
        obj = StudyPermission(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj
