import uuid
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.errors import ErrorCode, ErrorCodeException
from app.modules.admins.models import AdminUser, Permission
from app.modules.admins.repository import AdminRepository

# Authentication happens upstream; the gateway forwards the admin id as `userId`.

async def _load_admin(user_id: str | None, session: AsyncSession) -> AdminUser | None:
    if not user_id:
        return None
    try:
        admin_id = uuid.UUID(user_id)
    except ValueError:
        return None
    return await AdminRepository(session).get(admin_id)

async def get_optional_admin(
    user_id: str | None = Header(None, alias="userId"),
    session: AsyncSession = Depends(get_session),
) -> AdminUser | None:
    return await _load_admin(user_id, session)

async def get_current_admin(
    user_id: str | None = Header(None, alias="userId"),
    session: AsyncSession = Depends(get_session),
) -> AdminUser:
    admin = await _load_admin(user_id, session)
    if admin is None or admin.status != 1:
        raise ErrorCodeException(ErrorCode.USER_NOT_FOUND)
    return admin

def require_manage_locations(level: Permission):
    def dep(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
        if (admin.manage_locations or Permission.NO_PERMISSION) < level:
            raise ErrorCodeException(ErrorCode.LOCATION_ACCESS_DENIED)
        return admin
    return dep
