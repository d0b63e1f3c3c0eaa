"""Exception handlers translating failures into ``{"error": ...}`` responses."""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gem_finder.core.config import settings
from gem_finder.domain.exceptions import (
    AlreadyReported,
    DomainException,
    InvalidCredentials,
    InvalidDataFormat,
    InvalidLocationFormat,
    InvalidRange,
    PermissionException,
    PlaceException,
    PlaceNotFound,
    PlaceNotOwned,
    RequiredFieldMissing,
    UserAlreadyExists,
    UserException,
    ValidationException,
)
from gem_finder.utils.logger import get_logger


logger = get_logger("exception_handlers")


class DomainExceptionHandler:
    """Centralized handler for domain exceptions."""

    # Mapping of domain exceptions to HTTP status codes
    EXCEPTION_STATUS_MAP = {
        # User exceptions
        UserAlreadyExists: status.HTTP_400_BAD_REQUEST,
        InvalidCredentials: status.HTTP_401_UNAUTHORIZED,

        # Permission exceptions
        PlaceNotOwned: status.HTTP_403_FORBIDDEN,

        # Place exceptions
        PlaceNotFound: status.HTTP_404_NOT_FOUND,
        InvalidLocationFormat: status.HTTP_400_BAD_REQUEST,
        AlreadyReported: status.HTTP_400_BAD_REQUEST,

        # Validation exceptions
        InvalidDataFormat: status.HTTP_400_BAD_REQUEST,
        RequiredFieldMissing: status.HTTP_400_BAD_REQUEST,
        InvalidRange: status.HTTP_400_BAD_REQUEST,
    }

    # Base exception type status codes
    BASE_EXCEPTION_STATUS_MAP = {
        UserException: status.HTTP_400_BAD_REQUEST,
        PermissionException: status.HTTP_403_FORBIDDEN,
        PlaceException: status.HTTP_400_BAD_REQUEST,
        ValidationException: status.HTTP_400_BAD_REQUEST,
    }

    @classmethod
    def status_for(cls, exc: DomainException) -> int:
        status_code = cls.EXCEPTION_STATUS_MAP.get(type(exc))
        if status_code is None:
            for base_type, base_status in cls.BASE_EXCEPTION_STATUS_MAP.items():
                if isinstance(exc, base_type):
                    return base_status
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        return status_code

    @classmethod
    async def handle_domain_exception(
        cls, request: Request, exc: DomainException
    ) -> JSONResponse:
        status_code = cls.status_for(exc)
        logger.warning(
            f"{request.method} {request.url.path} → {status_code} {exc.error_code}: {exc.message}"
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.message, "code": exc.error_code},
        )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _describe_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
    field = ".".join(location)
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = _describe_validation_error(errors[0]) if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "details": jsonable_encoder(errors)},
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    content = {"error": "Server error"}
    if settings.is_development:
        content["details"] = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, DomainExceptionHandler.handle_domain_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)
