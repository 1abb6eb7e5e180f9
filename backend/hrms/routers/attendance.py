"""Daily attendance marks and self-service check-in/out."""
from datetime import date, datetime
import logging
from typing import Sequence

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import (
    get_current_user,
    get_db_session,
    get_tenant_employee,
    is_approver,
    own_employee_id,
    require_roles,
)
from ..enums import APPROVER_ROLES, AttendanceStatus
from ..errors import ConflictError
from ..models import Attendance, User
from ..schemas import AttendanceCreate, AttendanceRead

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attendance", tags=["attendance"])


async def _record_for(session: AsyncSession, account_id: str, employee_id: int, day: date) -> Attendance | None:
    return await session.scalar(
        select(Attendance).where(
            Attendance.account_id == account_id,
            Attendance.employee_id == employee_id,
            Attendance.date == day,
        )
    )


@router.get("/", response_model=list[AttendanceRead])
async def list_attendance(
    on_date: date | None = Query(default=None, alias="date"),
    employee_id: int | None = Query(default=None),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Attendance]:
    if not is_approver(current_user):
        employee_id = own_employee_id(current_user)
    query = select(Attendance).where(Attendance.account_id == current_user.account_id)
    if on_date is not None:
        query = query.where(Attendance.date == on_date)
    if employee_id is not None:
        query = query.where(Attendance.employee_id == employee_id)
    result = await session.execute(query.order_by(Attendance.date.desc(), Attendance.employee_id))
    return list(result.scalars().all())


@router.post("/", response_model=AttendanceRead, status_code=status.HTTP_201_CREATED)
async def mark_attendance(
    payload: AttendanceCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Attendance:
    """Record a mark for an employee; one per employee per day."""

    require_roles(current_user, APPROVER_ROLES, "mark attendance")
    await get_tenant_employee(session, current_user.account_id, payload.employee_id)
    if await _record_for(session, current_user.account_id, payload.employee_id, payload.date) is not None:
        raise ConflictError(f"Attendance for employee {payload.employee_id} on {payload.date} already exists")

    data = payload.model_dump()
    data["status"] = payload.status.value
    record = Attendance(account_id=current_user.account_id, **data)
    session.add(record)
    await session.commit()
    return record


@router.post("/check-in", response_model=AttendanceRead, status_code=status.HTTP_201_CREATED)
async def check_in(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Attendance:
    employee_id = own_employee_id(current_user)
    now = datetime.now()
    if await _record_for(session, current_user.account_id, employee_id, now.date()) is not None:
        raise ConflictError("Already checked in today")

    record = Attendance(
        account_id=current_user.account_id,
        employee_id=employee_id,
        date=now.date(),
        check_in_time=now,
        status=AttendanceStatus.PRESENT.value,
    )
    session.add(record)
    await session.commit()
    _logger.info("Employee %s checked in at %s", employee_id, now.isoformat(timespec="minutes"))
    return record


@router.post("/check-out", response_model=AttendanceRead)
async def check_out(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Attendance:
    employee_id = own_employee_id(current_user)
    now = datetime.now()
    record = await _record_for(session, current_user.account_id, employee_id, now.date())
    if record is None or record.check_in_time is None:
        raise ConflictError("No check-in recorded for today")
    if record.check_out_time is not None:
        raise ConflictError("Already checked out today")

    record.check_out_time = now
    await session.commit()
    return record
