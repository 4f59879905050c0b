import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from app.domain.exceptions import AppError, NotFound, Conflict, Unprocessable, Unauthorized, InvalidInput, Forbidden, \
    InternalError, StorageUnavailable
from app.core.ctx import REQUEST_ID_CTX

MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger("app.errors")

_STATUS_BY_CLASS: dict[type[AppError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    Conflict: status.HTTP_409_CONFLICT,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    Unprocessable: status.HTTP_422_UNPROCESSABLE_ENTITY,
    StorageUnavailable: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AppError: status.HTTP_400_BAD_REQUEST,
}

_TITLES: dict[type[AppError], str] = {
    NotFound: "Not Found",
    Unauthorized: "Unauthorized",
    Forbidden: "Forbidden",
    Conflict: "Conflict",
    InvalidInput: "Bad Request",
    Unprocessable: "Unprocessable Entity",
    StorageUnavailable: "Internal Server Error",
    InternalError: "Internal Server Error",
    AppError: "Application Error",
}

def _www_authenticate_header(
        scheme: str = "Bearer",
        realm: str | None = "api",
        error: str | None = "invalid_token",
        error_description: str | None = None,
) -> str:
    parts = [scheme]
    attributes = []
    if realm:
        attributes.append(f'realm="{realm}"')
    if error:
        attributes.append(f'error="{error}"')
    if error_description:
        attributes.append(f'error_description="{error_description}"')
    if attributes:
        parts.append(" " + ", ".join(attributes))
    return "".join(parts)


def _status_for(exc: AppError) -> int:
    for cls in type(exc).mro():
        if cls in _STATUS_BY_CLASS:
            return _STATUS_BY_CLASS[cls]
    return status.HTTP_400_BAD_REQUEST


def _title_for(exc: AppError) -> str:
    for cls in type(exc).mro():
        if cls in _TITLES:
            return _TITLES[cls]
    return "Application Error"


def _problem(
    request: Request,
    *,
    http_status: int,
    title: str,
    detail: str | None = None,
    extra: dict | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = {
        "status": http_status,
        "title": title,
        "detail": detail,
        "instance": str(request.url),
    }
    req_id = REQUEST_ID_CTX.get()
    if req_id:
        body["trace_id"] = req_id
    if extra:
        body.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=http_status, content=body, media_type=MEDIA_TYPE, headers=headers or {})


def register_error_handler(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        status_code = _status_for(exc)
        title = _title_for(exc)
        detail = str(exc) or None
        extra = {"context": exc.ctx} if exc.ctx else None

        if status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, detail)
            extra = None

        headers: dict[str, str] | None = None
        if isinstance(exc, Unauthorized):
            headers = {
                "WWW-Authenticate": _www_authenticate_header(
                    scheme="Bearer", realm="api", error="invalid_token", error_description=detail
                )
            }

        return _problem(
            request,
            http_status=status_code,
            title=title,
            detail=detail,
            extra=extra,
            headers=headers
        )

    @app.exception_handler(SQLAlchemyError)
    async def _storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return _problem(
            request,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            title="Internal Server Error",
            detail="Internal server error",
        )

    @app.exception_handler(ValidationError)
    async def _query_validation_handler(request: Request, exc: ValidationError):
        return _problem(
            request,
            http_status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            title="Unprocessable Entity",
            detail="Invalid request parameters",
            extra={"errors": jsonable_encoder(exc.errors(include_url=False, include_context=False))},
        )
