"""
Exception hierarchy and FastAPI error handlers for the Vitals Service API.

Error taxonomy:
    ValidationError  - malformed or out-of-range input (400)
    NotFoundError    - required profile/metric does not exist (404)
    StorageError     - persistence failure (500), never retried

Usage:
    from core.exceptions import ValidationError, ProfileNotFoundError

    # In service layer - raise domain exceptions
    raise ValidationError("Heart rate must be between 30 and 250 bpm", field="heartRate")

    # In FastAPI - register handlers via setup_exception_handlers(app)
"""
import logging
import math
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION CLASS
# =============================================================================

class VitalsServiceError(Exception):
    """
    Base exception for all Vitals Service domain errors.

    Carries an HTTP status code, a human-readable detail message and
    optional context that is echoed back in the error response.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        self.detail = detail or self.__class__.detail
        self.status_code = status_code or self.__class__.status_code
        self.context = kwargs
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result = {"detail": self.detail}
        if self.context:
            # JSON has no NaN/Infinity; echo such inputs as strings
            result["context"] = {
                key: str(value) if isinstance(value, float) and not math.isfinite(value) else value
                for key, value in self.context.items()
            }
        return result


# =============================================================================
# INPUT EXCEPTIONS
# =============================================================================

class ValidationError(VitalsServiceError):
    """Raised when input fails validation. Nothing is written."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid input"


# =============================================================================
# LOOKUP EXCEPTIONS
# =============================================================================

class NotFoundError(VitalsServiceError):
    """Raised when a required record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class ProfileNotFoundError(NotFoundError):
    """Raised when a client has no profile yet."""

    detail = "Profile not found"

    def __init__(self, client_id: Optional[str] = None, detail: Optional[str] = None, **kwargs: Any):
        super().__init__(detail=detail, client_id=client_id, **kwargs)


# =============================================================================
# STORAGE EXCEPTIONS
# =============================================================================

class StorageError(VitalsServiceError):
    """Raised when a storage operation fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Storage operation failed"

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        detail = f"Storage error during {operation}" if operation else self.detail
        super().__init__(detail=detail, operation=operation, **kwargs)


class StorageConnectionError(StorageError):
    """Raised when the storage backend cannot be reached."""

    detail = "Failed to connect to storage"


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def vitals_service_exception_handler(
    request: Request,
    exc: VitalsServiceError
) -> JSONResponse:
    """Log a domain error and return it as a JSON response."""
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        f"VitalsServiceError: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Convert FastAPI body/query validation failures into 400 responses.

    Malformed input is the client's fault and shares the ValidationError
    response shape instead of FastAPI's default 422.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": errors}
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": ValidationError.detail, "context": {"errors": errors}}
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(VitalsServiceError, vitals_service_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
