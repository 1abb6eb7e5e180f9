"""Employee endpoints for the FastAPI backend."""
import logging
from typing import Sequence

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import (
    get_current_user,
    get_db_session,
    get_tenant_employee,
    require_hr_admin,
    require_self_or_approver,
)
from ..errors import NotFoundError
from ..models import Department, Employee, LeaveRequest, User
from ..schemas import EmployeeCreate, EmployeeRead, EmployeeUpdate
from ..services.leave_policy import leave_balance

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])

NULLABLE_FIELDS = {"department_id", "join_date", "exit_date"}


async def _check_department(session: AsyncSession, account_id: str, department_id: int | None) -> None:
    if department_id is None:
        return
    found = await session.scalar(
        select(Department.id).where(Department.id == department_id, Department.account_id == account_id)
    )
    if found is None:
        raise NotFoundError(f"Department {department_id} not found")


async def _ensure_unique_code(session: AsyncSession, account_id: str, code: str, exclude_id: int | None = None) -> None:
    query = select(Employee.id).where(Employee.account_id == account_id, Employee.code == code)
    if exclude_id is not None:
        query = query.where(Employee.id != exclude_id)
    if await session.scalar(query) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Employee code already exists")


@router.get("/", response_model=list[EmployeeRead])
async def list_employees(
    search: str | None = Query(default=None),
    department_id: int | None = Query(default=None),
    active: bool | None = Query(default=None),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Employee]:
    """Return employees of the authenticated tenant, optionally filtered."""

    query = select(Employee).where(Employee.account_id == current_user.account_id)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Employee.first_name.ilike(pattern),
                Employee.last_name.ilike(pattern),
                Employee.code.ilike(pattern),
                Employee.email.ilike(pattern),
            )
        )
    if department_id is not None:
        query = query.where(Employee.department_id == department_id)
    if active is not None:
        query = query.where(Employee.is_active == active)
    result = await session.execute(query.order_by(Employee.first_name, Employee.last_name))
    return list(result.scalars().unique().all())


@router.post("/", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Employee:
    """Create an employee scoped to the authenticated tenant."""

    require_hr_admin(current_user)
    await _ensure_unique_code(session, current_user.account_id, payload.code)
    await _check_department(session, current_user.account_id, payload.department_id)

    data = payload.model_dump()
    for key in ("email", "contact_number", "position"):
        data[key] = data[key] or ""
    employee = Employee(account_id=current_user.account_id, **data)
    session.add(employee)
    await session.commit()
    _logger.info("Created employee %s for account %s", employee.code, current_user.account_id)
    session.expunge(employee)
    return await get_tenant_employee(session, current_user.account_id, employee.id)


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: int,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Employee:
    require_self_or_approver(current_user, employee_id)
    return await get_tenant_employee(session, current_user.account_id, employee_id)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Employee:
    require_hr_admin(current_user)
    employee = await get_tenant_employee(session, current_user.account_id, employee_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("code"):
        await _ensure_unique_code(session, current_user.account_id, changes["code"], exclude_id=employee_id)
    if "department_id" in changes:
        await _check_department(session, current_user.account_id, changes["department_id"])
    for key, value in changes.items():
        if value is None and key in ("email", "contact_number", "position", "last_name"):
            value = ""
        elif value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(employee, key, value)
    await session.commit()
    session.expunge(employee)
    return await get_tenant_employee(session, current_user.account_id, employee_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> None:
    require_hr_admin(current_user)
    employee = await get_tenant_employee(session, current_user.account_id, employee_id)
    await session.delete(employee)
    await session.commit()
    _logger.info("Deleted employee %s for account %s", employee.code, current_user.account_id)


@router.get("/{employee_id}/leave-balance")
async def get_leave_balance(
    employee_id: int,
    year: int | None = Query(default=None, description="Calendar year, defaults to the current one"),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    """Leave allowance and usage per type for a calendar year."""

    require_self_or_approver(current_user, employee_id)
    await get_tenant_employee(session, current_user.account_id, employee_id)
    result = await session.execute(
        select(LeaveRequest).where(
            LeaveRequest.account_id == current_user.account_id,
            LeaveRequest.employee_id == employee_id,
        )
    )
    return leave_balance(result.scalars().all(), year)
