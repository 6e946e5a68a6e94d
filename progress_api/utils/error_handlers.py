"""
Exception handlers and the per-route catch boundary.

Errors are rendered in the format the caller asked for, so an SVG badge that
fails still comes back as an SVG.
"""

import functools

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from progress_api.schemas.responses import OutputFormat
from progress_api.services.formatter import format_error, format_invalid_format
from progress_api.utils.exceptions import APIException, InvalidFormatError, UnhandledFaultError
from progress_api.utils.logger import get_logger

logger = get_logger(__name__, "ERRORS")


def requested_format(request: Request) -> OutputFormat:
    """Format the caller asked for, or JSON when it is absent or unknown."""
    try:
        return OutputFormat.parse(request.query_params.get("format"))
    except InvalidFormatError:
        return OutputFormat.JSON


def catch_faults(func):
    """
    Wrap a route so that any non-API exception becomes an UnhandledFaultError.

    APIExceptions pass through untouched for api_exception_handler.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except APIException:
            raise
        except Exception as e:
            logger.exception(f"Unhandled error in {func.__name__}: {type(e).__name__}: {e}")
            raise UnhandledFaultError() from e
    return wrapper


async def api_exception_handler(request: Request, exc: APIException) -> Response:
    """Global exception handler for API exceptions."""
    if isinstance(exc, InvalidFormatError):
        logger.info(f"Rejected unknown format '{exc.requested}' on {request.url.path}")
        return format_invalid_format()

    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.error_code}: {exc.message}")
    else:
        logger.info(f"{request.url.path} rejected: {exc.error_code}: {exc.message}")
    return format_error(exc.message, exc.status_code, requested_format(request), exc.error_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Routing errors as plain text. A path served only for other methods counts as unknown."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)
