# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the form relay.
# Every error reaches the client as {"success": false, "message": ...};
# the underlying cause is kept in `details` and only ever logged.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FormRelayException(Exception):
    """
    Base exception for the form relay.

    All custom exceptions inherit from this class.

    Attributes:
        message: Public, human-readable message returned to the caller
        code: Machine-readable error code (logs only)
        status_code: HTTP status returned to the caller
        details: Diagnostic context (logs only)
    """

    def __init__(
        self,
        message: str,
        code: str = "FORM_RELAY_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} {self.details}"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "success": False,
            "message": self.message,
        }


# =============================================================================
# Client Errors
# =============================================================================

class SubmissionValidationError(FormRelayException):
    """Raised when a required field or attachment is missing."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"missing": missing or []},
        )


class MalformedBodyError(FormRelayException):
    """Raised when the request body cannot be decoded."""

    def __init__(self, content_type: str, error: str):
        super().__init__(
            message="Malformed request body.",
            code="MALFORMED_BODY",
            status_code=400,
            details={"content_type": content_type, "error": error},
        )


class AttachmentTooLargeError(FormRelayException):
    """Raised when an uploaded file exceeds the size limit."""

    def __init__(self, filename: str, max_mb: int):
        super().__init__(
            message=f"File too large (max: {max_mb}MB).",
            code="ATTACHMENT_TOO_LARGE",
            status_code=413,
            details={"filename": filename, "max_mb": max_mb},
        )


class OriginNotAllowedError(FormRelayException):
    """Raised when a request carries an Origin outside the allowlist."""

    def __init__(self, origin: str):
        super().__init__(
            message="Origin not allowed.",
            code="ORIGIN_NOT_ALLOWED",
            status_code=403,
            details={"origin": origin},
        )


# =============================================================================
# Server / Dependency Errors
# =============================================================================

class StorageError(FormRelayException):
    """Raised when the scratch directory cannot be written or read."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message="Error storing the uploaded file.",
            code="STORAGE_ERROR",
            status_code=500,
            details={"path": path, "error": error},
        )


class RelayError(FormRelayException):
    """Raised when the mail relay rejects or fails to accept a message."""

    def __init__(self, error: str):
        super().__init__(
            message="Error sending email.",
            code="RELAY_ERROR",
            status_code=500,
            details={"error": error},
        )

    @property
    def error(self) -> str:
        return self.details["error"]


class SubmissionFailedError(FormRelayException):
    """Raised by a form endpoint when its submission could not be delivered."""

    def __init__(self, message: str, error: str):
        super().__init__(
            message=message,
            code="SUBMISSION_FAILED",
            status_code=500,
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def form_relay_exception_handler(
    request: Request,
    exc: FormRelayException
) -> JSONResponse:
    """Convert FormRelayException to its JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle anything that escaped the routers."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "An unexpected error occurred.",
        }
    )
