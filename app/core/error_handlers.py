import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.outcomes import INTERNAL_MESSAGE, INVALID_BODY_MESSAGE

logger = logging.getLogger(__name__)


async def _http_error(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"message": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _request_error(_request: Request, exc: RequestValidationError):
    logger.info("Rejected request: %s", exc.errors())
    return JSONResponse(
        {"message": INVALID_BODY_MESSAGE},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def _unhandled_error(request: Request, _exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        {"message": INTERNAL_MESSAGE},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _request_error)
    app.add_exception_handler(Exception, _unhandled_error)


__all__ = ["register_error_handlers"]
