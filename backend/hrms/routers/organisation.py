"""Departments and the units (sites) they belong to."""
from typing import Sequence

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_user, get_db_session, require_hr_admin
from ..errors import ConflictError, NotFoundError
from ..models import Department, Unit, User
from ..schemas import DepartmentBase, DepartmentRead, UnitBase, UnitRead

router = APIRouter(prefix="/departments", tags=["organisation"])
units_router = APIRouter(prefix="/masters/units", tags=["organisation"])


@router.get("/", response_model=list[DepartmentRead])
async def list_departments(
    unit_id: int | None = None,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Department]:
    query = select(Department).where(Department.account_id == current_user.account_id)
    if unit_id is not None:
        query = query.where(Department.unit_id == unit_id)
    result = await session.execute(query.order_by(Department.name))
    return list(result.scalars().all())


@router.post("/", response_model=DepartmentRead, status_code=status.HTTP_201_CREATED)
async def create_department(
    payload: DepartmentBase,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Department:
    require_hr_admin(current_user)
    account_id = current_user.account_id
    if payload.unit_id is not None:
        unit = await session.scalar(select(Unit.id).where(Unit.id == payload.unit_id, Unit.account_id == account_id))
        if unit is None:
            raise NotFoundError(f"Unit {payload.unit_id} not found")
    duplicate = await session.scalar(
        select(Department.id).where(Department.account_id == account_id, Department.name == payload.name)
    )
    if duplicate is not None:
        raise ConflictError(f"Department '{payload.name}' already exists")

    department = Department(account_id=account_id, name=payload.name, unit_id=payload.unit_id)
    session.add(department)
    await session.commit()
    return department


@units_router.get("/", response_model=list[UnitRead])
async def list_units(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Unit]:
    result = await session.execute(
        select(Unit).where(Unit.account_id == current_user.account_id).order_by(Unit.name)
    )
    return list(result.scalars().all())


@units_router.post("/", response_model=UnitRead, status_code=status.HTTP_201_CREATED)
async def create_unit(
    payload: UnitBase,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Unit:
    require_hr_admin(current_user)
    duplicate = await session.scalar(
        select(Unit.id).where(Unit.account_id == current_user.account_id, Unit.name == payload.name)
    )
    if duplicate is not None:
        raise ConflictError(f"Unit '{payload.name}' already exists")

    unit = Unit(account_id=current_user.account_id, name=payload.name, code=payload.code or "")
    session.add(unit)
    await session.commit()
    return unit
