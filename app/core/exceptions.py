"""
Domain error taxonomy

Services and the computation engine raise these; app.core.errors renders them
with the same JSON shape as HTTPException.
"""
from fastapi import status


class DomainError(Exception):
    """Base class for attendance domain failures"""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(DomainError):
    """Missing or inconsistent input (e.g. start_date after end_date)"""
    status_code = status.HTTP_400_BAD_REQUEST


class PermissionDeniedError(DomainError):
    """Caller or employee is not allowed to perform the operation"""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(DomainError):
    """Employee, record or schedule absent where it is required"""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    """State conflict, e.g. clocking in while a record is still open"""
    status_code = status.HTTP_409_CONFLICT


class ComputationError(DomainError):
    """Inputs cannot produce a meaningful result (clock-out before clock-in)"""
    status_code = 422


class ParseError(ComputationError):
    """Malformed HH:MM time or YYYY-MM-DD date string"""
