"""FastAPI application entry point."""
from contextlib import asynccontextmanager
import logging

from fastapi import APIRouter, FastAPI

from .auth import router as auth_router
from .config import get_settings
from .database import create_schema
from .errors import register_error_handlers
from .logging_config import configure_logging
from .routers.attendance import router as attendance_router
from .routers.compliance import router as compliance_router
from .routers.dashboard import router as dashboard_router
from .routers.employees import router as employees_router
from .routers.holidays import router as holidays_router
from .routers.leave_requests import router as leave_router
from .routers.organisation import router as departments_router
from .routers.organisation import units_router
from .routers.payroll import router as payroll_router
from .routers.reports import router as reports_router
from .routers.settings import router as settings_router
from .routers.users import router as users_router

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure database tables exist before serving requests."""

    configure_logging(get_settings().log_level)
    await create_schema()
    _logger.info("HRMS API started")
    yield


app = FastAPI(title="ASN HRMS Backend", version="0.1.0", lifespan=lifespan)
register_error_handlers(app)

api = APIRouter(prefix="/api")
for router in (
    auth_router,
    users_router,
    employees_router,
    departments_router,
    units_router,
    leave_router,
    attendance_router,
    holidays_router,
    settings_router,
    payroll_router,
    compliance_router,
    reports_router,
    dashboard_router,
):
    api.include_router(router)
app.include_router(api)


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple readiness probe for uptime checks."""

    return {"status": "ok"}
