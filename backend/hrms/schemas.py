"""Pydantic schemas used across the backend API."""
from datetime import date, datetime, timedelta

from pydantic import BaseModel, EmailStr, Field

from .enums import AttendanceStatus, LeaveStatus, LeaveType, Role, TaxRegime


class Token(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class TokenData(BaseModel):
    """Information encoded into JWTs."""

    username: str
    account_id: str


class UserLogin(BaseModel):
    """Credentials supplied during login."""

    username: str
    password: str
    account_id: str


class UserCreate(UserLogin):
    """Payload for user registration."""

    email: EmailStr | None = None


class UserRead(BaseModel):
    """Public representation of a user."""

    id: int
    username: str
    account_id: str
    email: EmailStr | str | None = Field(default=None)
    role: Role
    is_active: bool = True
    employee_id: int | None = None

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    role: Role | None = None
    employee_id: int | None = None
    is_active: bool | None = None


class UnitBase(BaseModel):
    name: str = Field(min_length=1)
    code: str | None = None


class UnitRead(UnitBase):
    id: int

    model_config = {"from_attributes": True}


class DepartmentBase(BaseModel):
    name: str = Field(min_length=1)
    unit_id: int | None = None


class DepartmentRead(DepartmentBase):
    id: int

    model_config = {"from_attributes": True}


class EmployeeBase(BaseModel):
    """Shared properties for employee operations."""

    code: str
    first_name: str
    last_name: str = ""
    email: EmailStr | None = None
    contact_number: str | None = None
    position: str | None = None
    department_id: int | None = None
    join_date: date | None = None
    exit_date: date | None = None
    salary: float = Field(default=0.0, ge=0)
    is_active: bool = True


class EmployeeCreate(EmployeeBase):
    """Employee payload for creation."""


class EmployeeUpdate(BaseModel):
    """Partial employee update; omitted fields are left alone."""

    code: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    contact_number: str | None = None
    position: str | None = None
    department_id: int | None = None
    join_date: date | None = None
    exit_date: date | None = None
    salary: float | None = Field(default=None, ge=0)
    is_active: bool | None = None


class EmployeeRead(EmployeeBase):
    """Employee representation returned by the API."""

    id: int
    email: EmailStr | str | None = None
    full_name: str
    department_name: str
    unit_name: str

    model_config = {"from_attributes": True}


class LeaveRequestCreate(BaseModel):
    employee_id: int | None = None
    type: LeaveType
    start_date: date
    end_date: date
    reason: str = ""


class LeaveDecision(BaseModel):
    status: LeaveStatus


class LeaveRequestRead(BaseModel):
    id: int
    employee_id: int
    type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    approved_by_id: int | None = None
    decided_at: datetime | None = None
    created_at: datetime
    paid: bool | None = None

    model_config = {"from_attributes": True}


class AttendanceCreate(BaseModel):
    employee_id: int
    date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    notes: str = ""


class AttendanceRead(BaseModel):
    id: int
    employee_id: int
    date: date
    status: AttendanceStatus
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    notes: str

    model_config = {"from_attributes": True}


class HolidayCreate(BaseModel):
    name: str = Field(min_length=1)
    date: date
    description: str = ""


class HolidayRead(HolidayCreate):
    id: int

    model_config = {"from_attributes": True}


class SystemSettingsBase(BaseModel):
    basic_salary_percentage: float = Field(default=50.0, ge=0, le=100)
    hra_percentage: float = Field(default=20.0, ge=0, le=100)
    da_percentage: float = Field(default=10.0, ge=0, le=100)
    epf_percentage: float = Field(default=12.0, ge=0, le=100)
    esic_percentage: float = Field(default=0.75, ge=0, le=100)
    professional_tax: float = Field(default=200.0, ge=0)


class SystemSettingsRead(SystemSettingsBase):
    id: int

    model_config = {"from_attributes": True}


class ComponentPercentagesIn(BaseModel):
    basic: float = 50
    hra: float = 20
    da: float = 10
    lta: float = 5
    special: float = 10
    performance: float = 5


class DeductionOptionsIn(BaseModel):
    epf: bool = True
    prof_tax: bool = True
    esi: bool = True
    mlwf: bool = True
    metro_city: bool = True


class CTCRequest(BaseModel):
    amount: float = 50000
    is_yearly: bool = False
    tax_regime: TaxRegime = TaxRegime.NEW
    percentages: ComponentPercentagesIn = Field(default_factory=ComponentPercentagesIn)
    options: DeductionOptionsIn = Field(default_factory=DeductionOptionsIn)
    month: int | None = None


def compute_expiry(minutes: int) -> datetime:
    """Return an absolute expiration timestamp for tokens."""

    return datetime.utcnow() + timedelta(minutes=minutes)
