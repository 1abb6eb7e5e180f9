"""Per-account salary component defaults."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_user, get_db_session, require_roles
from ..enums import Role
from ..models import SystemSettings, User
from ..schemas import SystemSettingsBase, SystemSettingsRead

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


async def load_system_settings(session: AsyncSession, account_id: str) -> SystemSettings:
    """Return the account's settings row, creating it with defaults on first use."""

    result = await session.execute(select(SystemSettings).where(SystemSettings.account_id == account_id))
    row = result.scalar_one_or_none()
    if row is None:
        row = SystemSettings(account_id=account_id, **SystemSettingsBase().model_dump())
        session.add(row)
        await session.commit()
    return row


@router.get("/system", response_model=SystemSettingsRead)
async def get_system_settings(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> SystemSettings:
    return await load_system_settings(session, current_user.account_id)


@router.put("/system", response_model=SystemSettingsRead)
async def update_system_settings(
    payload: SystemSettingsBase,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> SystemSettings:
    """Replace the salary component defaults (admin or developer)."""

    require_roles(current_user, (Role.ADMIN, Role.DEVELOPER), "change system settings")
    row = await load_system_settings(session, current_user.account_id)
    for key, value in payload.model_dump().items():
        setattr(row, key, value)
    await session.commit()
    await session.refresh(row)
    _logger.info("System settings updated for account %s by %s", current_user.account_id, current_user.username)
    return row
