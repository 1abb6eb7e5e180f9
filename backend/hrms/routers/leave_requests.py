"""Leave applications, approvals and leave analytics."""
from datetime import date
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import (
    get_current_user,
    get_db_session,
    get_tenant_employee,
    has_role,
    is_approver,
    own_employee_id,
    require_roles,
    require_self_or_approver,
)
from ..enums import APPROVER_ROLES, HR_ADMIN_ROLES, PAID_LEAVE_TYPES, LeaveStatus, LeaveType
from ..errors import ConflictError, NotFoundError, PermissionDenied
from ..models import LeaveRequest, User
from ..schemas import LeaveDecision, LeaveRequestCreate, LeaveRequestRead
from ..services import leave_policy

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leave-requests", tags=["leave"])


async def _tenant_requests(session: AsyncSession, account_id: str, employee_id: int | None = None) -> list[LeaveRequest]:
    query = select(LeaveRequest).where(LeaveRequest.account_id == account_id)
    if employee_id is not None:
        query = query.where(LeaveRequest.employee_id == employee_id)
    result = await session.execute(query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()))
    return list(result.scalars().all())


async def _get_request(session: AsyncSession, account_id: str, request_id: int) -> LeaveRequest:
    req = await session.scalar(
        select(LeaveRequest).where(LeaveRequest.id == request_id, LeaveRequest.account_id == account_id)
    )
    if req is None:
        raise NotFoundError(f"Leave request {request_id} not found")
    return req


def _with_paid_flag(req: LeaveRequest, history: list[LeaveRequest]) -> LeaveRequestRead:
    others = [r for r in history if r.id != req.id]
    exceeds = leave_policy.would_exceed_paid_limit(others, req.employee_id, req.type, req.start_date, req.end_date)
    item = LeaveRequestRead.model_validate(req)
    item.paid = not exceeds and LeaveType(req.type) in PAID_LEAVE_TYPES
    return item


@router.get("/", response_model=list[LeaveRequestRead])
async def list_leave_requests(
    employee_id: int | None = Query(default=None),
    status_filter: LeaveStatus | None = Query(default=None, alias="status"),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> list[LeaveRequestRead]:
    """Approvers see every request; employees only their own."""

    if not is_approver(current_user):
        if current_user.employee_id is None:
            return []
        employee_id = current_user.employee_id
    requests = await _tenant_requests(session, current_user.account_id, employee_id)
    selected = [r for r in requests if status_filter is None or r.status == status_filter.value]
    return [_with_paid_flag(r, requests) for r in selected]


@router.get("/analytics")
async def get_leave_analytics(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    employee_id = None if is_approver(current_user) else own_employee_id(current_user)
    requests = await _tenant_requests(session, current_user.account_id, employee_id)
    return leave_policy.leave_analytics(requests)


@router.get("/paid-usage")
async def get_paid_usage(
    employee_id: int | None = Query(default=None),
    month: date | None = Query(default=None, description="Any date inside the month"),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    """Paid leave used against the monthly cap."""

    employee_id = employee_id or own_employee_id(current_user)
    require_self_or_approver(current_user, employee_id)
    requests = await _tenant_requests(session, current_user.account_id, employee_id)
    usage = leave_policy.monthly_paid_usage(requests, employee_id, month or date.today())
    return usage.to_dict()


@router.post("/", response_model=LeaveRequestRead, status_code=status.HTTP_201_CREATED)
async def create_leave_request(
    payload: LeaveRequestCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> LeaveRequestRead:
    employee_id = payload.employee_id or own_employee_id(current_user)
    require_self_or_approver(current_user, employee_id)
    await get_tenant_employee(session, current_user.account_id, employee_id)
    kind = leave_policy.validate_request(payload.type, payload.start_date, payload.end_date)

    history = await _tenant_requests(session, current_user.account_id, employee_id)
    req = LeaveRequest(
        account_id=current_user.account_id,
        employee_id=employee_id,
        type=kind.value,
        start_date=payload.start_date,
        end_date=payload.end_date,
        reason=payload.reason,
        status=LeaveStatus.PENDING.value,
    )
    session.add(req)
    await session.commit()
    await session.refresh(req)
    _logger.info("Leave request %s filed for employee %s (%s)", req.id, employee_id, kind.value)
    return _with_paid_flag(req, history)


@router.put("/{request_id}", response_model=LeaveRequestRead)
async def decide_leave_request(
    request_id: int,
    payload: LeaveDecision,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> LeaveRequestRead:
    """Approve or reject a pending request."""

    require_roles(current_user, APPROVER_ROLES, "approve or reject leave")
    req = await _get_request(session, current_user.account_id, request_id)
    leave_policy.decide(req, payload.status, approver_id=current_user.id)
    await session.commit()
    await session.refresh(req)
    history = await _tenant_requests(session, current_user.account_id, req.employee_id)
    return _with_paid_flag(req, history)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_leave_request(
    request_id: int,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> None:
    """Owners may withdraw pending requests; HR and admins may remove any."""

    req = await _get_request(session, current_user.account_id, request_id)
    if not has_role(current_user, HR_ADMIN_ROLES):
        if current_user.employee_id != req.employee_id:
            raise PermissionDenied("You can only cancel your own leave requests")
        if req.status != LeaveStatus.PENDING.value:
            raise ConflictError(f"Leave request is already {req.status}")
    await session.delete(req)
    await session.commit()
    _logger.info("Leave request %s cancelled by %s", request_id, current_user.username)
