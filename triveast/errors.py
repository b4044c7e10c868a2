from __future__ import annotations

import logging
from enum import Enum

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from triveast.schemas import VALID_CATEGORY_IDS, ErrorCode, ErrorDetail, ErrorResponse

logger = logging.getLogger("triveast.errors")


class TriveastError(Exception):
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    hint: str | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownCategory(TriveastError):
    code = ErrorCode.UNKNOWN_CATEGORY
    http_status = status.HTTP_404_NOT_FOUND
    hint = "Use one of: " + ", ".join(VALID_CATEGORY_IDS)

    def __init__(self, category_id: str):
        super().__init__(f"Unknown category: {category_id}")
        self.category_id = category_id


class UpstreamReason(str, Enum):
    NO_RESULTS = "no-results"
    INVALID_PARAMETER = "invalid-parameter"
    TOKEN_NOT_FOUND = "token-not-found"
    TOKEN_EMPTY = "token-empty"
    RATE_LIMITED = "rate-limited"
    EMPTY_RESULTS = "empty-results"
    UNKNOWN = "unknown"


_REASON_MESSAGES = {
    UpstreamReason.NO_RESULTS: "Could not return results, not enough questions for the query",
    UpstreamReason.INVALID_PARAMETER: "Request contained an invalid parameter",
    UpstreamReason.TOKEN_NOT_FOUND: "Session token does not exist",
    UpstreamReason.TOKEN_EMPTY: "Session token has returned all possible questions",
    UpstreamReason.RATE_LIMITED: "Too many requests have been sent",
    UpstreamReason.EMPTY_RESULTS: "Provider returned no questions",
}


class UpstreamError(TriveastError):
    code = ErrorCode.UPSTREAM_ERROR
    http_status = status.HTTP_502_BAD_GATEWAY

    def __init__(self, reason: UpstreamReason, response_code: int | None = None):
        msg = _REASON_MESSAGES.get(reason)
        if msg is None:
            msg = f"Unknown error code: {response_code}"
        elif response_code is not None:
            msg = f"{msg} (code: {response_code})"
        super().__init__(msg)
        self.reason = reason
        self.response_code = response_code
        if reason is UpstreamReason.RATE_LIMITED:
            self.code = ErrorCode.RATE_LIMIT
            self.http_status = status.HTTP_429_TOO_MANY_REQUESTS


class FetchError(TriveastError):
    code = ErrorCode.UPSTREAM_UNAVAILABLE
    http_status = status.HTTP_502_BAD_GATEWAY


class InvalidQuote(TriveastError):
    code = ErrorCode.INVALID_SYMBOL
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, symbol: str):
        super().__init__(f"Invalid quote response for {symbol}")
        self.symbol = symbol


class InsufficientFunds(TriveastError):
    code = ErrorCode.INSUFFICIENT_FUNDS
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, cost: float, balance: float):
        super().__init__("Not enough funds")
        self.cost = cost
        self.balance = balance


class InsufficientShares(TriveastError):
    code = ErrorCode.INSUFFICIENT_SHARES
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, symbol: str, requested: int, held: int):
        super().__init__("Not enough shares")
        self.symbol = symbol
        self.requested = requested
        self.held = held


class NotFound(TriveastError):
    code = ErrorCode.NOT_FOUND
    http_status = status.HTTP_404_NOT_FOUND


class Unauthorized(TriveastError):
    code = ErrorCode.UNAUTHORIZED
    http_status = status.HTTP_401_UNAUTHORIZED


def http_error(
    code: ErrorCode, message: str, http_status=status.HTTP_400_BAD_REQUEST, hint: str | None = None
):
    detail = ErrorDetail(code=code, message=message, hint=hint)
    return HTTPException(status_code=http_status, detail=detail.model_dump())


def envelope_from_http_exception(exc: HTTPException) -> ErrorResponse:
    d = exc.detail
    if isinstance(d, dict) and "code" in d and "message" in d:
        return ErrorResponse(error=d)  # already our shape
    # Fallback to INTERNAL_ERROR envelope
    return ErrorResponse(
        error=ErrorDetail(code=ErrorCode.INTERNAL_ERROR, message=str(d), hint=None).model_dump()
    )


def envelope_from_error(exc: TriveastError) -> ErrorResponse:
    return ErrorResponse(error=ErrorDetail(code=exc.code, message=exc.message, hint=exc.hint))


def install_error_handlers(app: FastAPI) -> None:
    """Map domain errors, HTTPException and validation failures onto ErrorResponse."""

    @app.exception_handler(TriveastError)
    async def _domain_error(request: Request, exc: TriveastError):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code.value, exc)
        return JSONResponse(
            status_code=exc.http_status, content=envelope_from_error(exc).model_dump(mode="json")
        )

    @app.exception_handler(HTTPException)
    async def _http_error(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=envelope_from_http_exception(exc).model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = ErrorDetail(
            code=ErrorCode.VALIDATION_ERROR,
            message=first.get("msg", "Invalid request"),
            hint=loc or None,
        )
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(error=detail).model_dump(mode="json"),
        )
