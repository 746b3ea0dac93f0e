# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where it helps, a
# suggestion telling the caller how to fix the request.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class RealTrustException(Exception):
    """
    Base exception for the RealTrust API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "REALTRUST_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordValidationError(RealTrustException):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion="Provide a non-empty value for every required field",
            details={"fields": fields} if fields else None,
        )
        self.fields = fields or []


class RecordNotFoundError(RealTrustException):
    """Raised when a record ID doesn't exist or is not a valid identifier."""

    def __init__(self, label: str, record_id: str):
        super().__init__(
            message=f"{label} not found",
            code="NOT_FOUND",
            status_code=404,
            suggestion="Check that the id is correct and the record hasn't been deleted",
            details={"id": record_id},
        )


class DuplicateEmailError(RealTrustException):
    """Raised when a contact or subscriber already exists for an email."""

    def __init__(self, message: str, email: str, suggestion: str | None = None):
        super().__init__(
            message=message,
            code="DUPLICATE_EMAIL",
            status_code=400,
            suggestion=suggestion,
            details={"email": email},
        )


class StorageUnavailableError(RealTrustException):
    """Raised when the record store backend cannot be reached."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Record store unavailable: {error}",
            code="STORAGE_UNAVAILABLE",
            status_code=500,
            suggestion="Try again later or check the database connection settings",
            details={"error": error},
        )


# =============================================================================
# Image Exceptions
# =============================================================================

class MissingImageError(RealTrustException):
    """Raised when a create request has no image file."""

    def __init__(self):
        super().__init__(
            message="Image is required",
            code="MISSING_IMAGE",
            status_code=400,
            suggestion="Attach the image as a multipart file field named 'image'",
        )


class UnsupportedImageTypeError(RealTrustException):
    """Raised when the image extension or content type is not allowed."""

    def __init__(self, filename: str, reason: str, allowed: list[str]):
        super().__init__(
            message=f"Unsupported image type: {reason}",
            code="UNSUPPORTED_IMAGE_TYPE",
            status_code=400,
            suggestion=f"Only these are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed": allowed},
        )


class ImageTooLargeError(RealTrustException):
    """Raised when an uploaded image exceeds the size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"Image too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="IMAGE_TOO_LARGE",
            status_code=400,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb},
        )


class MalformedUploadError(RealTrustException):
    """Raised when the multipart image part cannot be used."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Malformed upload: {error}",
            code="MALFORMED_UPLOAD",
            status_code=400,
            suggestion="Send the image as a file part with a filename",
            details={"error": error},
        )


# =============================================================================
# Transport Exceptions
# =============================================================================

class RequestTooLargeError(RealTrustException):
    """Raised when a request body exceeds the configured ceiling."""

    def __init__(self, size_bytes: int, max_mb: int):
        super().__init__(
            message=f"Request body too large (max: {max_mb}MB)",
            code="REQUEST_TOO_LARGE",
            status_code=413,
            suggestion="Compress the image or switch to a smaller file",
            details={"size_bytes": size_bytes, "max_mb": max_mb},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def realtrust_exception_handler(
    request: Request,
    exc: RealTrustException
) -> JSONResponse:
    """
    Convert RealTrustException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    Malformed bodies are client errors, so they share the 400 status of
    RecordValidationError.
    """
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": {"fields": [f for f in fields if f], "errors": str(exc)},
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Report unknown routes with the requested method and path."""
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "detail": "Endpoint not found",
                "code": "ENDPOINT_NOT_FOUND",
                "details": {"requested": f"{request.method} {request.url.path}"},
            }
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions. The underlying message is attached."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Something went wrong!",
            "code": "INTERNAL_ERROR",
            "details": {"error": str(exc)},
        }
    )
