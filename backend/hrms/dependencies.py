"""Reusable FastAPI dependencies."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any, Dict, Iterable

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import get_session
from .enums import APPROVER_ROLES, HR_ADMIN_ROLES, Role
from .errors import NotFoundError, PermissionDenied
from .models import Employee, User
from .schemas import TokenData

# Load settings once
settings = get_settings()

# Use simple Bearer auth instead of OAuth2 password flow
bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an AsyncSession."""
    async for session in get_session():
        yield session


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """
    Return the authenticated user from a JWT access token
    taken from the Authorization: Bearer <token> header.
    """

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    token = credentials.credentials

    try:
        token_data = decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from exc

    result = await session.execute(
        select(User).where(
            User.username == token_data.username,
            User.account_id == token_data.account_id,
        )
    )
    user = result.scalar_one_or_none()
    if user is None or not getattr(user, "is_active", True):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Inactive or missing user",
        )

    return user


def has_role(user: User, roles: Iterable[Role]) -> bool:
    return user.role in {r.value for r in roles}


def require_roles(user: User, roles: Iterable[Role], action: str = "perform this action") -> None:
    """Raise PermissionDenied unless the user holds one of ``roles``."""

    if not has_role(user, roles):
        raise PermissionDenied(f"Your role does not allow you to {action}")


def require_admin(user: User) -> None:
    """Ensure the current user has the admin role."""

    if user.role != Role.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required",
        )


def require_hr_admin(user: User) -> None:
    require_roles(user, HR_ADMIN_ROLES, "maintain employee records")


def is_approver(user: User) -> bool:
    return has_role(user, APPROVER_ROLES)


async def get_tenant_employee(session: AsyncSession, account_id: str, employee_id: int) -> Employee:
    """Load an employee of the tenant or raise NotFoundError."""

    result = await session.execute(
        select(Employee).where(Employee.id == employee_id, Employee.account_id == account_id)
    )
    employee = result.scalar_one_or_none()
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return employee


def require_self_or_approver(user: User, employee_id: int) -> None:
    """Plain employees may only touch their own HR record."""

    if is_approver(user) or user.employee_id == employee_id:
        return
    raise PermissionDenied("You can only access your own records")


def own_employee_id(user: User) -> int:
    if user.employee_id is None:
        raise PermissionDenied("Your account is not linked to an employee record")
    return user.employee_id


def decode_access_token(token: str) -> TokenData:
    """Decode a JWT access token and return its payload."""

    payload: Dict[str, Any] = jwt.decode(
        token,
        settings.secret_key,
        algorithms=["HS256"],
    )
    return TokenData(**payload)


def token_payload(user: User) -> dict[str, Any]:
    """
    Generate the JWT payload for a given user.

    auth.login() will add "exp" on top of this.
    """
    return {
        "username": user.username,
        "account_id": user.account_id,
        "role": user.role,
        "iat": int(datetime.utcnow().timestamp()),
    }
