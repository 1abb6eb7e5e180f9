"""Leave rules: day counting, the monthly paid-leave cap, balances and approvals.

Functions here take plain request objects (anything with ``employee_id``,
``type``, ``status``, ``start_date`` and ``end_date``) so the routers can feed
them ORM rows and the tests can feed them simple namespaces.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
import logging
from typing import Iterable, Optional

from ..enums import PAID_LEAVE_TYPES, LeaveStatus, LeaveType
from ..errors import ConflictError, ValidationError
from .periods import iter_months, month_bounds

_logger = logging.getLogger(__name__)

MONTHLY_PAID_LIMIT = 1.5

YEARLY_ALLOWANCE = {
    LeaveType.ANNUAL: 20,
    LeaveType.SICK: 10,
    LeaveType.PERSONAL: 5,
    LeaveType.HALFDAY: 12,
}


@dataclass
class PaidUsage:
    used: float
    limit: float = MONTHLY_PAID_LIMIT

    @property
    def remaining(self) -> float:
        return max(0.0, self.limit - self.used)

    def to_dict(self) -> dict:
        return {"used": self.used, "limit": self.limit, "remaining": self.remaining}


def _leave_type(value) -> LeaveType:
    try:
        return LeaveType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown leave type '{value}'") from exc


def business_days(start: date, end: date) -> int:
    """Monday-Friday dates in [start, end]."""

    if end < start:
        return 0
    count = 0
    cursor = start
    while cursor <= end:
        if cursor.weekday() < 5:
            count += 1
        cursor += timedelta(days=1)
    return count


def request_days(leave_type, start: date, end: date) -> float:
    """Days a request consumes; a half day is worth 0.5."""

    if _leave_type(leave_type) is LeaveType.HALFDAY:
        return 0.5 if business_days(start, start) else 0.0
    return float(business_days(start, end))


def _days_in_window(req, window_start: date, window_end: date) -> float:
    start = max(req.start_date, window_start)
    end = min(req.end_date, window_end)
    if end < start:
        return 0.0
    return request_days(req.type, start, end)


def monthly_paid_usage(requests: Iterable, employee_id: int, month_start: date) -> PaidUsage:
    """Approved paid leave an employee has taken in the month of ``month_start``."""

    first, last = month_bounds(month_start.year, month_start.month)
    used = 0.0
    for req in requests:
        if req.employee_id != employee_id or req.status != LeaveStatus.APPROVED.value:
            continue
        if _leave_type(req.type) not in PAID_LEAVE_TYPES:
            continue
        used += _days_in_window(req, first, last)
    return PaidUsage(used=used)


def would_exceed_paid_limit(
    requests: Iterable, employee_id: int, leave_type, start: date, end: date
) -> bool:
    """True when the new request pushes any month it spans over the paid cap."""

    kind = _leave_type(leave_type)
    if kind not in PAID_LEAVE_TYPES:
        return False
    requests = list(requests)
    for month_start in iter_months(start, end):
        first, last = month_bounds(month_start.year, month_start.month)
        requested = request_days(kind, max(start, first), min(end, last))
        used = monthly_paid_usage(requests, employee_id, month_start).used
        if used + requested > MONTHLY_PAID_LIMIT:
            return True
    return False


def leave_balance(requests: Iterable, year: Optional[int] = None) -> dict[str, dict]:
    """Allowance, usage and remaining days per leave type for one calendar year.

    A request belongs to the year it starts in; ``year`` defaults to the current one.
    """

    year = year or date.today().year
    used = {kind: 0 for kind in YEARLY_ALLOWANCE}
    for req in requests:
        if req.status != LeaveStatus.APPROVED.value or req.start_date.year != year:
            continue
        kind = _leave_type(req.type)
        if kind not in used:
            continue
        if kind is LeaveType.HALFDAY:
            used[kind] += 1
        else:
            used[kind] += business_days(req.start_date, req.end_date)
    return {
        kind.value: {
            "total": total,
            "used": used[kind],
            "remaining": max(0, total - used[kind]),
        }
        for kind, total in YEARLY_ALLOWANCE.items()
    }


def leave_analytics(requests: Iterable, today: Optional[date] = None) -> dict[str, int]:
    today = today or date.today()
    stats = {
        "total": 0,
        "pending": 0,
        "approved": 0,
        "rejected": 0,
        "this_month": 0,
        "work_from_home": 0,
    }
    for req in requests:
        stats["total"] += 1
        if req.status in stats:
            stats[req.status] += 1
        created = getattr(req, "created_at", None)
        ref = created.date() if isinstance(created, datetime) else req.start_date
        if (ref.year, ref.month) == (today.year, today.month):
            stats["this_month"] += 1
        if req.type == LeaveType.WORK_FROM_HOME.value:
            stats["work_from_home"] += 1
    return stats


def validate_request(leave_type, start: date, end: date) -> LeaveType:
    kind = _leave_type(leave_type)
    if end < start:
        raise ValidationError("End date cannot be before start date")
    if kind is LeaveType.HALFDAY and start != end:
        raise ValidationError("A half day leave must start and end on the same date")
    return kind


def decide(request, status, approver_id: Optional[int] = None, now: Optional[datetime] = None):
    """Approve or reject a pending request in place."""

    try:
        status = LeaveStatus(status)
    except ValueError as exc:
        raise ValidationError(f"Unknown leave status '{status}'") from exc
    if status is LeaveStatus.PENDING:
        raise ValidationError("A decision must approve or reject the request")
    if request.status != LeaveStatus.PENDING.value:
        raise ConflictError(f"Leave request is already {request.status}")

    request.status = status.value
    request.approved_by_id = approver_id
    request.decided_at = now or datetime.utcnow()
    _logger.info("Leave request %s %s by user %s", getattr(request, "id", None), status.value, approver_id)
    return request
