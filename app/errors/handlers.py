from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.status import HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR
from sqlalchemy.exc import IntegrityError, OperationalError
from loguru import logger

def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )

def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred."},
    )

def database_integrity_handler(request: Request, exc: IntegrityError):
    """
    Handle SQLAlchemy integrity constraint violations.

    Duplicate keys surface as 409 so clients can tell them apart from
    malformed input; any other constraint violation is a 400.

    Args:
        request: FastAPI request instance
        exc: IntegrityError from SQLAlchemy

    Returns:
        JSONResponse with a user-friendly error message
    """
    error_msg = str(exc.orig).lower()
    logger.warning(f"Integrity error on {request.url.path}: {error_msg}")

    if "duplicate key" in error_msg or "unique constraint" in error_msg:
        return JSONResponse(
            status_code=HTTP_409_CONFLICT,
            content={"detail": "Record already exists."},
        )

    return JSONResponse(
        status_code=400,
        content={
            "error": "Database error",
            "message": "Data constraint violation",
            "hint": "Please check your data and try again"
        }
    )

def database_operational_handler(request: Request, exc: OperationalError):
    logger.error(f"Database unavailable on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Database is temporarily unavailable."},
    )
