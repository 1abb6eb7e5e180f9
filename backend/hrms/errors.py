"""Domain exceptions and their HTTP mapping."""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class HRMSError(Exception):
    """Base exception for business rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HRMSError):
    """Input is well-formed but breaks a payroll or leave rule."""

    status_code = 422


class NotFoundError(HRMSError):
    """A referenced record does not exist for the tenant."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(HRMSError):
    """The record is in a state that does not allow the change."""

    status_code = status.HTTP_409_CONFLICT


class PermissionDenied(HRMSError):
    """The authenticated user's role does not allow the action."""

    status_code = status.HTTP_403_FORBIDDEN


async def _handle_hrms_error(request: Request, exc: HRMSError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    """Render every HRMSError as ``{"detail": ...}`` with its status code."""

    app.add_exception_handler(HRMSError, _handle_hrms_error)
