"""Exception handlers that keep every error body in the {error, message} shape."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopassist.config.logging_config import get_logger
from shopassist.interfaces.api.schemas.common import ErrorResponse

logger = get_logger(__name__)


def error_response(status_code: int, error: str, message: str, details: str | None = None, **extra) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return error_response(400, "Invalid request body", "Please check the request parameters", problems)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return error_response(
            404,
            "Route not found",
            f"The route {request.method} {request.url.path} does not exist",
        )
    detail = str(exc.detail)
    return error_response(exc.status_code, detail, detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(500, "Internal server error", "Something went wrong processing your request")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
