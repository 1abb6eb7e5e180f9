"""SQLAlchemy models exposed by the backend."""
from .attendance import Attendance
from .base import Base
from .employee import Employee
from .holiday import Holiday
from .leave_request import LeaveRequest
from .organisation import Department, Unit
from .system_settings import SystemSettings
from .user import User

__all__ = [
    "Attendance",
    "Base",
    "Department",
    "Employee",
    "Holiday",
    "LeaveRequest",
    "SystemSettings",
    "Unit",
    "User",
]
