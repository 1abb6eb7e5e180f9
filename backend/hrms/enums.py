"""String enumerations shared by models, schemas and policy code."""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorisation."""

    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    DEVELOPER = "developer"


# Roles that see every employee's records and decide on leave.
APPROVER_ROLES = frozenset({Role.ADMIN, Role.HR, Role.MANAGER})
# Roles that maintain employee master data.
HR_ADMIN_ROLES = frozenset({Role.ADMIN, Role.HR})


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    HALFDAY = "halfday"
    UNPAID = "unpaid"
    WORK_FROM_HOME = "workfromhome"
    OTHER = "other"


PAID_LEAVE_TYPES = frozenset(
    {LeaveType.ANNUAL, LeaveType.SICK, LeaveType.PERSONAL, LeaveType.HALFDAY, LeaveType.OTHER}
)


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALFDAY = "halfday"
    LATE = "late"


class TaxRegime(str, Enum):
    OLD = "old"
    NEW = "new"


class PeriodKind(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class ExportFormat(str, Enum):
    JSON = "json"
    XLSX = "xlsx"
    CSV = "csv"
    TXT = "txt"
    PDF = "pdf"
