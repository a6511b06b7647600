from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logging

from .exceptions import (
    AlreadyExistsError,
    DuplicateIdError,
    IntegrityError,
    NotAuthorizedError,
    NotFoundError,
    ServiceError,
    UpstreamServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific class first; ServiceError is the fallback.
STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
    (DuplicateIdError, status.HTTP_409_CONFLICT),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (UpstreamServiceError, status.HTTP_502_BAD_GATEWAY),
    (IntegrityError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ServiceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: ServiceError) -> int:
    for error_cls, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(exc: ServiceError) -> dict:
    return {"error": exc.code, "message": str(exc), **exc.details()}


def setup_exception_handlers(app: FastAPI):
    """Render typed service errors as JSON with a matching HTTP status."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc}")
        return JSONResponse(content=error_body(exc), status_code=status_code)
