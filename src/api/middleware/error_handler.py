"""
Error handling for the viewer API

Converts exceptions raised while serving a request into ErrorResponse JSON:
- Validation errors (bad request format)       → 422
- Unknown color scheme / base style keys       → 422
- DomainError subclasses                        → their own status code
- Anything else                                 → 500
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from datetime import datetime, timezone
import uuid
from typing import Optional

from api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from models.enums import ColorScheme, LayerClass, LogCategory
from models.errors import UnknownColorSchemeError, UnknownBaseStyleError
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

# Literal: starlette renamed the 422 constant across releases
HTTP_422_UNPROCESSABLE = 422


class DomainError(Exception):
    """Base class for API-level domain errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class LayerClassNotFoundError(DomainError):
    """Layer name in the URL is not an overlay class"""
    def __init__(self, layer: str):
        super().__init__(
            code="LAYER_NOT_FOUND",
            message=f"Layer '{layer}' not found",
            details={
                "layer": layer,
                "valid_values": [c.name.lower() for c in LayerClass] + ["cloud"]
            },
            status_code=404
        )


def _error_response(status_code: int, code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    request_id = str(uuid.uuid4())
    log.warn(f"{code} ({request_id}): {message}")

    response = ErrorResponse(
        error=ErrorDetail(
            code=code,
            message=message,
            details=details,
            timestamp=datetime.now(timezone.utc)
        ),
        request_id=request_id
    )
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad JSON structure)"""
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error ({request_id}): {len(errors)} errors", path=request.url.path)

        validation_errors = []
        for error in errors:
            field = ".".join(str(x) for x in error["loc"][1:])  # Skip "body"
            validation_errors.append({
                "field": field,
                "message": error["msg"],
                "type": error["type"]
            })

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
                timestamp=datetime.now(timezone.utc)
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )

        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE,
            content=response.model_dump(mode="json")
        )

    @app.exception_handler(UnknownColorSchemeError)
    async def color_scheme_exception_handler(request: Request, exc: UnknownColorSchemeError):
        return _error_response(
            HTTP_422_UNPROCESSABLE,
            "INVALID_COLOR_SCHEME",
            f"Unknown color scheme: {exc.scheme!r}",
            {"value": str(exc.scheme), "valid_values": [s.key for s in ColorScheme]}
        )

    @app.exception_handler(UnknownBaseStyleError)
    async def base_style_exception_handler(request: Request, exc: UnknownBaseStyleError):
        return _error_response(
            HTTP_422_UNPROCESSABLE,
            "INVALID_BASE_STYLE",
            f"Unknown base style: {exc.style!r}",
            {"value": exc.style}
        )

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        return _error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            path=request.url.path
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred. Please try again."
        )
