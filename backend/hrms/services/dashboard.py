"""Headline numbers for the dashboard."""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..enums import AttendanceStatus, LeaveStatus

UPCOMING_HOLIDAYS = 3


def dashboard_stats(
    employees: Iterable,
    today_records: Iterable,
    leaves: Iterable,
    holidays: Iterable,
    today: Optional[date] = None,
) -> dict:
    """Headline counts over active employees; present and on-leave ignore everyone else."""

    today = today or date.today()
    active_ids = {emp.id for emp in employees if emp.is_active}
    total = len(active_ids)
    present = sum(
        1
        for rec in today_records
        if rec.date == today
        and rec.employee_id in active_ids
        and rec.status in (AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value, AttendanceStatus.HALFDAY.value)
    )

    leaves = list(leaves)
    on_leave = sum(
        1
        for req in leaves
        if req.status == LeaveStatus.APPROVED.value
        and req.employee_id in active_ids
        and req.start_date <= today <= req.end_date
    )
    pending = sum(1 for req in leaves if req.status == LeaveStatus.PENDING.value)

    upcoming = sorted((h for h in holidays if h.date >= today), key=lambda h: h.date)
    return {
        "total_employees": total,
        "present_today": present,
        "on_leave": on_leave,
        "absent_today": max(0, total - present - on_leave),
        "pending_approvals": pending,
        "upcoming_holidays": [
            {"id": h.id, "name": h.name, "date": h.date.isoformat()} for h in upcoming[:UPCOMING_HOLIDAYS]
        ],
    }


def personal_stats(records: Iterable, today: Optional[date] = None) -> dict:
    """Present/absent/late counts for one employee in the current month."""

    today = today or date.today()
    stats = {"present": 0, "absent": 0, "late": 0}
    for rec in records:
        if (rec.date.year, rec.date.month) != (today.year, today.month):
            continue
        if rec.status in stats:
            stats[rec.status] += 1
    return stats
