"""Dashboard summary for the signed-in user."""
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_user, get_db_session, is_approver
from ..enums import LeaveStatus
from ..models import Attendance, Employee, Holiday, LeaveRequest, User
from ..services.dashboard import dashboard_stats, personal_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/")
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    today = date.today()
    account_id = current_user.account_id

    employees = (await session.execute(select(Employee).where(Employee.account_id == account_id))).scalars().all()
    today_records = (
        await session.execute(select(Attendance).where(Attendance.account_id == account_id, Attendance.date == today))
    ).scalars().all()
    leaves = (
        await session.execute(
            select(LeaveRequest).where(
                LeaveRequest.account_id == account_id,
                LeaveRequest.status.in_([LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value]),
            )
        )
    ).scalars().all()
    holidays = (
        await session.execute(select(Holiday).where(Holiday.account_id == account_id, Holiday.date >= today))
    ).scalars().all()

    stats = dashboard_stats(employees, today_records, leaves, holidays, today)
    if not is_approver(current_user):
        stats.pop("pending_approvals")
    if current_user.employee_id is not None:
        own = (
            await session.execute(
                select(Attendance).where(
                    Attendance.account_id == account_id,
                    Attendance.employee_id == current_user.employee_id,
                )
            )
        ).scalars().all()
        stats["personal"] = personal_stats(own, today)
    return stats
