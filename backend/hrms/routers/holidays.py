"""Company holiday calendar."""
from typing import Sequence

from fastapi import APIRouter, Depends, status
from sqlalchemy import extract, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_user, get_db_session, require_hr_admin
from ..errors import ConflictError
from ..models import Holiday, User
from ..schemas import HolidayCreate, HolidayRead

router = APIRouter(prefix="/holidays", tags=["holidays"])


@router.get("/", response_model=list[HolidayRead])
async def list_holidays(
    year: int | None = None,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Holiday]:
    query = select(Holiday).where(Holiday.account_id == current_user.account_id)
    if year is not None:
        query = query.where(extract("year", Holiday.date) == year)
    result = await session.execute(query.order_by(Holiday.date))
    return list(result.scalars().all())


@router.post("/", response_model=HolidayRead, status_code=status.HTTP_201_CREATED)
async def create_holiday(
    payload: HolidayCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Holiday:
    require_hr_admin(current_user)
    duplicate = await session.scalar(
        select(Holiday.id).where(
            Holiday.account_id == current_user.account_id,
            Holiday.date == payload.date,
            Holiday.name == payload.name,
        )
    )
    if duplicate is not None:
        raise ConflictError(f"Holiday '{payload.name}' on {payload.date} already exists")

    holiday = Holiday(account_id=current_user.account_id, **payload.model_dump())
    session.add(holiday)
    await session.commit()
    return holiday
