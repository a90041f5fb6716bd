from urllib.parse import urlencode

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
import logging

from app.core.config import settings

logger = logging.getLogger("uvicorn.error")

DEFAULT_VALIDATION_MESSAGE = "Validation failed. Please check your request data."


class CustomHTTPException(Exception):
    """A custom HTTPException that we can use for additional context."""
    def __init__(self, status_code: int, detail: str, error_code: str = None, headers: dict = None):
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code
        self.headers = headers
        super().__init__(detail)  # Initialize the base Exception with the detail message


class AuthenticationRequired(Exception):
    """Raised when a write is attempted without a signed-in user."""
    def __init__(self, next_path: str = "/", detail: str = "Please sign in to continue."):
        self.next_path = next_path
        self.detail = detail
        super().__init__(detail)


def _user_message(errors: list) -> str:
    for error in errors:
        msg = error.get("msg") or ""
        if error.get("type") == "value_error" and msg.startswith("Value error, "):
            return msg[len("Value error, "):]
    return DEFAULT_VALIDATION_MESSAGE


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation errors and return a structured JSON response."""
    logger.error(f"Validation error on {request.url}: {exc.errors()}")

    errors = exc.errors()
    # Sanitize un-serializable objects in ctx
    for error in errors:
        ctx = error.get("ctx")
        if ctx and isinstance(ctx.get("error"), Exception):
            ctx["error"] = str(ctx["error"])

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": errors,
            "message": _user_message(errors),
        },
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Custom HTTP exception handler for better error responses."""
    if isinstance(exc, CustomHTTPException):
        logger.error(f"Custom HTTP error on {request.url}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "error_code": exc.error_code
            },
            headers=exc.headers or {},
        )
    elif isinstance(exc, HTTPException):
        logger.error(f"HTTP error on {request.url}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers or {},
        )

    logger.error(f"Unexpected error on {request.url}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred"},
    )


async def authentication_required_handler(request: Request, exc: AuthenticationRequired) -> RedirectResponse:
    """Send anonymous writers to the sign-in entry point instead of failing."""
    logger.info(f"Unauthenticated request to {request.url.path}, redirecting to sign in")
    location = f"{settings.AUTH_ROUTE}?{urlencode({'next': exc.next_path})}"
    return RedirectResponse(
        url=location,
        status_code=status.HTTP_303_SEE_OTHER,
        headers={"X-Auth-Required": exc.detail},
    )
