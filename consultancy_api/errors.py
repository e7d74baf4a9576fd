import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to generate a response. Please check your API settings and try again."
INTERNAL_ERROR = "Internal server error"


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


class ValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class PermissionDeniedError(HTTPException):
    def __init__(self, detail: str = "Admin only"):
        super().__init__(status_code=403, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)


class DependencyError(HTTPException):
    """A backing store could not be read."""

    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail)


class ProviderError(Exception):
    """A third-party model API call failed."""

    def __init__(self, provider: str, cause: Exception = None):
        self.provider = provider
        self.cause = cause
        super().__init__(f"{provider} request failed: {cause}")


def install_handlers(app: FastAPI):
    """Render every error as {"error": "..."}."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        msg = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=400,
            content={"error": f"{field}: {msg}" if field else msg},
        )

    @app.exception_handler(ProviderError)
    async def provider_error(request: Request, exc: ProviderError):
        logger.error("Provider failure: %s", exc)
        return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})
