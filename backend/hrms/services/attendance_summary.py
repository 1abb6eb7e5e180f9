"""Attendance counts and payable days over a report period."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..enums import AttendanceStatus, LeaveStatus
from .periods import ReportPeriod


@dataclass
class AttendanceSummary:
    present: int = 0
    absent: int = 0
    halfday: int = 0
    late: int = 0
    total: int = 0
    leaves: int = 0
    payable_days: int = 0
    last_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None


def summarize(records: Iterable, leaves: Iterable, employee_id: int, period: ReportPeriod) -> AttendanceSummary:
    """Count one employee's marks in the period.

    Approved leaves are counted when they start inside the period, and
    payable days are present plus half days less those leaves, never below zero.
    """

    summary = AttendanceSummary()
    latest = None
    for rec in records:
        if rec.employee_id != employee_id or not period.contains(rec.date):
            continue
        summary.total += 1
        if rec.status == AttendanceStatus.PRESENT.value:
            summary.present += 1
        elif rec.status == AttendanceStatus.ABSENT.value:
            summary.absent += 1
        elif rec.status == AttendanceStatus.HALFDAY.value:
            summary.halfday += 1
        elif rec.status == AttendanceStatus.LATE.value:
            summary.late += 1
        if latest is None or rec.date > latest.date:
            latest = rec

    if latest is not None:
        summary.last_check_in = latest.check_in_time
        summary.last_check_out = latest.check_out_time

    summary.leaves = sum(
        1
        for req in leaves
        if req.employee_id == employee_id
        and req.status == LeaveStatus.APPROVED.value
        and period.contains(req.start_date)
    )
    summary.payable_days = max(0, summary.present + summary.halfday - summary.leaves)
    return summary


def attendance_report(employees: Iterable, records: Iterable, leaves: Iterable, period: ReportPeriod) -> list[dict]:
    """One summary row per employee, in the order given."""

    records = list(records)
    leaves = list(leaves)
    rows = []
    for emp in employees:
        summary = summarize(records, leaves, emp.id, period)
        row = {
            "employee_id": emp.id,
            "employee_code": emp.code,
            "name": emp.full_name,
            "department": emp.department_name,
            "unit": emp.unit_name,
        }
        row.update(asdict(summary))
        rows.append(row)
    return rows


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else "-"


def attendance_export_rows(rows: list[dict]) -> list[dict]:
    return [
        {
            "Employee ID": r["employee_code"],
            "Name": r["name"],
            "Department": r["department"],
            "Present": r["present"],
            "Absent": r["absent"],
            "Half Day": r["halfday"],
            "Late": r["late"],
            "Leaves": r["leaves"],
            "Payable Days": r["payable_days"],
            "Check In": _fmt_time(r["last_check_in"]),
            "Check Out": _fmt_time(r["last_check_out"]),
        }
        for r in rows
    ]
