"""HTTP rendering of domain and adapter errors."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from discuss.adapter.error import ContentServiceError
from discuss.domain.error import DomainError


# Error code -> HTTP status
STATUS_BY_CODE: dict[str, int] = {
    "INVALID_CONTENT": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "EMPTY_CONTENT": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "MAX_DEPTH_EXCEEDED": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_CURSOR": status.HTTP_400_BAD_REQUEST,
    "TARGET_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PARENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "UNAUTHORIZED": status.HTTP_403_FORBIDDEN,
    "ALREADY_DELETED": status.HTTP_409_CONFLICT,
    "INVALID_TRANSITION": status.HTTP_409_CONFLICT,
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error, 400 for unmapped codes."""
    return STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as ``{"code", "detail"}``."""
    status_code = status_for(exc)
    logfire.warn(
        "Request refused",
        code=exc.code,
        status_code=status_code,
        path=request.url.path,
        error=exc.message,
    )
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code, "detail": exc.message},
    )


async def content_service_error_handler(
    request: Request, exc: ContentServiceError
) -> JSONResponse:
    """Render a content service failure as 502."""
    logfire.error("Content service failure", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"code": "CONTENT_SERVICE_UNAVAILABLE", "detail": str(exc)},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the exception handlers to an app."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(ContentServiceError, content_service_error_handler)
