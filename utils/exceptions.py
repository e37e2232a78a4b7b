"""
Error taxonomy shared by routes and services.
Every error knows its HTTP status and how to render itself as a JSON body.
"""
from typing import Any, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from utils.constants import ErrorMessages


class GatewayError(Exception):
    """Base class for errors that are reported to the caller as JSON."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_content(self) -> dict:
        return {"error": self.message}

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.to_content())


class InvalidRequestError(GatewayError):
    """Caller payload failed shape or presence validation."""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamError(GatewayError):
    """The completion API call failed or returned an unexpected shape."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, diagnostic: Optional[Any] = None):
        super().__init__(message)
        self.diagnostic = diagnostic if diagnostic not in (None, "", {}) else message

    def to_content(self) -> dict:
        return {"error": self.message, "details": self.diagnostic}


class InternalFault(GatewayError):
    """Any other unexpected failure while handling a request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = ErrorMessages.SERVER_ERROR):
        super().__init__(message)
