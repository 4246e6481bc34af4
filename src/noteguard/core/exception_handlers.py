"""
Exception handlers.

Turns NoteGuardError subclasses raised anywhere below the routers into
ErrorResponse payloads. Status codes are chosen by ErrorKind.

Usage:
    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .exceptions import ErrorKind, NoteGuardError
from .logging import get_logger
from .schemas.common import ErrorResponse

logger = get_logger("errors")

KIND_STATUS_MAP: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.DECRYPTION_FAILED: 500,
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

# kinds whose messages may mention internals; clients get the class default
_GENERIC_KINDS = frozenset({ErrorKind.DECRYPTION_FAILED, ErrorKind.INTERNAL})


async def noteguard_error_handler(request: Request, exc: NoteGuardError) -> JSONResponse:
    status_code = KIND_STATUS_MAP.get(exc.kind, 500)
    path = request.url.path

    log_extra = {
        "kind": exc.kind.value,
        "status": status_code,
        "method": request.method,
        "exception_type": type(exc).__name__,
    }
    if status_code >= 500:
        logger.error(exc.message, extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    message = exc.default_message if exc.kind in _GENERIC_KINDS else exc.message
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.AUTHENTICATION else None

    response = ErrorResponse(error=exc.kind.value, message=message, path=path)
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the domain error handler with the FastAPI app."""
    app.add_exception_handler(NoteGuardError, noteguard_error_handler)
    logger.debug("Exception handlers registered")
