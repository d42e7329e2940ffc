from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

SWAPPED_CONTENT = "SWAPPED_CONTENT"
ACCESS_REQUIRED = "ACCESS_REQUIRED"
NOT_FOUND = "NOT_FOUND"


class ToolsError(RuntimeError):
    """Base for every failure that is reported back to the client.

    ``code`` is a stable machine identifier when the client needs to branch on
    the failure; otherwise only the human readable message is sent.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str | None = None

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    @property
    def message(self) -> str:
        return str(self)

    def to_payload(self) -> dict[str, str]:
        if self.code:
            return {"error": self.code, "message": self.message}
        return {"error": self.message}


class InputValidationError(ToolsError):
    pass


class InputTooLong(ToolsError):
    pass


class SwapDetected(ToolsError):
    code = SWAPPED_CONTENT

    def __init__(self, message: str, *, field: str, detected_as: str):
        super().__init__(message)
        self.field = field
        self.detected_as = detected_as


class AccessBlocked(ToolsError):
    code = ACCESS_REQUIRED

    def __init__(self, message: str, *, reason: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message, code=code, status_code=status_code)
        self.reason = reason


class ExtractionFailed(ToolsError):
    pass


class ContentTooLong(ToolsError):
    pass


class PdfExtractionError(ToolsError):
    pass


class FetchTimeout(ToolsError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT


class FetchFailed(ToolsError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class LLMError(ToolsError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, reason: str = "llm_unavailable", status_code: int | None = None):
        super().__init__(message, status_code=status_code)
        self.reason = reason


async def tools_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, ToolsError):  # pragma: no cover - registered for ToolsError only
        raise exc
    log = logger.warning if exc.status_code >= 500 else logger.info
    log(
        "tools_error path=%s type=%s code=%s status=%s: %s",
        request.url.path,
        type(exc).__name__,
        exc.code,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


# Messages the client already knows for fields it sends.
FIELD_ERROR_MESSAGES = {
    "url": "Valid URL is required.",
}


def validation_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[-1] if loc else ""
    if field in FIELD_ERROR_MESSAGES:
        return FIELD_ERROR_MESSAGES[field]
    detail = first.get("msg") or "invalid value"
    return f"Invalid request: {field}: {detail}" if field else f"Invalid request: {detail}"


async def request_validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):  # pragma: no cover - registered for RequestValidationError only
        raise exc
    message = validation_error_message(exc)
    logger.info("request_validation_failed path=%s errors=%s", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})
