# pathwise/core/errors.py
"""
Error taxonomy shared by services and routes.

- Validation failures -> 400 with field-level detail.
- Not-found / auth failures are raised as HTTPException directly in routes.
- UpstreamServiceError -> 500 with a generic message; the underlying cause is logged, never returned.
"""

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PathwiseError(Exception):
    pass


class UpstreamServiceError(PathwiseError):
    """An external AI/data provider failed or returned something unusable."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message


class StockAPIErrorType(str, Enum):
    API_KEY_MISSING = "api_key_missing"
    API_KEY_INVALID = "api_key_invalid"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    INVALID_SYMBOL = "invalid_symbol"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NETWORK_ERROR = "network_error"
    UNKNOWN_ERROR = "unknown_error"


class StockAPIError(UpstreamServiceError):
    def __init__(self, message: str, error_type: StockAPIErrorType = StockAPIErrorType.UNKNOWN_ERROR):
        super().__init__("alpha_vantage", message)
        self.error_type = error_type


# user-facing messages per upstream service
_UPSTREAM_MESSAGES = {
    "llm": "The AI service failed to respond. Please try again later.",
    "magic_loops": "The premium assistant is unavailable. Please try again later.",
    "alpha_vantage": "Failed to fetch stock data",
}


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=jsonable_encoder({"detail": "Validation failed", "errors": errors}))


async def upstream_exception_handler(request: Request, exc: UpstreamServiceError):
    logger.error("Upstream %s failed on %s %s: %s", exc.service, request.method, request.url.path, exc.message)
    detail = _UPSTREAM_MESSAGES.get(exc.service, "Upstream service error")
    return JSONResponse(status_code=500, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UpstreamServiceError, upstream_exception_handler)
