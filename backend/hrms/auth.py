"""Authentication routes and helpers."""
import logging

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from passlib.context import CryptContext
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import get_session
from .dependencies import token_payload
from .enums import Role
from .models import User
from .schemas import Token, UserCreate, UserLogin, UserRead, compute_expiry

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Use PBKDF2-SHA256 instead of bcrypt to avoid bcrypt backend issues
password_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return password_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against the stored hash."""
    return password_context.verify(password, password_hash)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: UserCreate, session: AsyncSession = Depends(get_session)
) -> User:
    """Create a tenant-scoped user account.

    The first account registered for a tenant becomes its administrator.
    """

    existing = await session.execute(
        select(User).where(User.username == payload.username, User.account_id == payload.account_id)
    )
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )

    count = await session.scalar(
        select(func.count()).select_from(User).where(User.account_id == payload.account_id)
    )
    role = Role.ADMIN if not count else Role.EMPLOYEE

    user = User(
        username=payload.username,
        account_id=payload.account_id,
        email=payload.email or "",
        role=role.value,
        password_hash=hash_password(payload.password),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    _logger.info("Registered %s for account %s as %s", user.username, user.account_id, user.role)
    return user


@router.post("/login", response_model=Token)
async def login(
    payload: UserLogin, session: AsyncSession = Depends(get_session)
) -> Token:
    """Authenticate a user and return a JWT access token."""

    settings = get_settings()
    result = await session.execute(
        select(User).where(
            User.username == payload.username,
            User.account_id == payload.account_id,
        )
    )
    user = result.scalar_one_or_none()
    if user is None or not verify_password(payload.password, user.password_hash):
        _logger.warning("Rejected login for %s on account %s", payload.username, payload.account_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is disabled",
        )

    expires_at = compute_expiry(settings.access_token_expires_minutes)
    encoded = jwt.encode(
        {**token_payload(user), "exp": int(expires_at.timestamp())},
        settings.secret_key,
        algorithm="HS256",
    )
    return Token(access_token=encoded, expires_at=expires_at)
