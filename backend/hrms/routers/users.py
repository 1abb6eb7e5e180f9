"""User administration: roles, employee links and activation."""
import logging
from typing import Sequence

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import (
    get_current_user,
    get_db_session,
    get_tenant_employee,
    require_admin,
    require_roles,
)
from ..enums import HR_ADMIN_ROLES
from ..errors import ConflictError, NotFoundError
from ..models import User
from ..schemas import UserRead, UserUpdate

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserRead])
async def list_users(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[User]:
    require_roles(current_user, HR_ADMIN_ROLES, "list users")
    result = await session.execute(
        select(User).where(User.account_id == current_user.account_id).order_by(User.username)
    )
    return list(result.scalars().all())


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Change a user's role, employee link or active flag (admin only)."""

    require_admin(current_user)
    user = await session.scalar(
        select(User).where(User.id == user_id, User.account_id == current_user.account_id)
    )
    if user is None:
        raise NotFoundError(f"User {user_id} not found")

    changes = payload.model_dump(exclude_unset=True)
    if user.id == current_user.id and (changes.get("is_active") is False or changes.get("role", user.role) != user.role):
        raise ConflictError("Administrators cannot demote or disable themselves")
    if changes.get("employee_id") is not None:
        await get_tenant_employee(session, current_user.account_id, changes["employee_id"])

    for key, value in changes.items():
        if key == "role" and value is not None:
            value = value.value
        if value is None and key != "employee_id":
            continue
        setattr(user, key, value)
    await session.commit()
    await session.refresh(user)
    _logger.info("User %s updated by %s: %s", user.username, current_user.username, sorted(changes))
    return user
