"""Attendance reports for a unit/department and for one employee."""
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..dependencies import (
    get_current_user,
    get_db_session,
    get_tenant_employee,
    require_roles,
    require_self_or_approver,
)
from ..enums import APPROVER_ROLES, ExportFormat, LeaveStatus
from ..exports import documents
from ..exports.responses import export_response
from ..models import Attendance, LeaveRequest, User
from ..services.attendance_summary import attendance_export_rows, attendance_report
from ..services.periods import ReportPeriod
from .common import ReportParams, load_employees, period_dict, report_params

router = APIRouter(prefix="/reports", tags=["reports"])


async def _period_activity(
    session: AsyncSession, account_id: str, period: ReportPeriod, employee_ids: list[int]
) -> tuple[list[Attendance], list[LeaveRequest]]:
    records = await session.execute(
        select(Attendance).where(
            Attendance.account_id == account_id,
            Attendance.employee_id.in_(employee_ids),
            Attendance.date >= period.start,
            Attendance.date <= period.end,
        )
    )
    leaves = await session.execute(
        select(LeaveRequest).where(
            LeaveRequest.account_id == account_id,
            LeaveRequest.employee_id.in_(employee_ids),
            LeaveRequest.status == LeaveStatus.APPROVED.value,
            LeaveRequest.start_date >= period.start,
            LeaveRequest.start_date <= period.end,
        )
    )
    return list(records.scalars().all()), list(leaves.scalars().all())


def _json_rows(rows: list[dict]) -> list[dict]:
    return [
        {
            **row,
            "last_check_in": row["last_check_in"].isoformat() if row["last_check_in"] else None,
            "last_check_out": row["last_check_out"].isoformat() if row["last_check_out"] else None,
        }
        for row in rows
    ]


@router.get("/attendance")
async def get_attendance_report(
    params: ReportParams = Depends(report_params),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Per-employee attendance counts and payable days."""

    require_roles(current_user, APPROVER_ROLES, "view attendance reports")
    period = params.resolve_period()
    employees = await load_employees(
        session, current_user.account_id, params.unit_id, params.department_id, params.search
    )
    records, leaves = await _period_activity(session, current_user.account_id, period, [e.id for e in employees])
    rows = attendance_report(employees, records, leaves, period)

    if params.format is ExportFormat.JSON:
        return {"period": period_dict(period), "rows": _json_rows(rows)}
    return export_response(
        params.format,
        attendance_export_rows(rows),
        filename=f"attendance_report_{period.start:%Y%m%d}_{period.end:%Y%m%d}",
        title=f"Attendance Report {period.label()}",
        pdf=lambda: documents.attendance_report_pdf(rows, period, get_settings()),
        sheet_name="Attendance",
    )


@router.get("/attendance/{employee_id}")
async def get_individual_attendance(
    employee_id: int,
    params: ReportParams = Depends(report_params),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    require_self_or_approver(current_user, employee_id)
    employee = await get_tenant_employee(session, current_user.account_id, employee_id)
    period = params.resolve_period()
    records, leaves = await _period_activity(session, current_user.account_id, period, [employee.id])
    row = attendance_report([employee], records, leaves, period)[0]

    if params.format is ExportFormat.JSON:
        return {"period": period_dict(period), **_json_rows([row])[0]}
    return export_response(
        params.format,
        attendance_export_rows([row]),
        filename=f"attendance_{employee.first_name}_{employee.last_name}".rstrip("_"),
        title=f"Attendance Report - {employee.full_name}",
        pdf=lambda: documents.individual_attendance_pdf(row, period, get_settings()),
        sheet_name="Attendance",
        fallback_filename=f"attendance_{employee.code}",
    )
