"""Exception handlers rendering errors as ``{"code", "message"}`` bodies."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jwtauth.adapter.error import AdapterError
from jwtauth.domain.error import DomainError
from jwtauth.util.logging import get_logger

logger = get_logger(__name__)

INVALID_INPUT_CODE = "C001"
SERVICE_UNAVAILABLE_CODE = "S001"


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"code": code, "message": message}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for domain, request validation and adapter errors."""

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError):
        error_code = exc.error_code
        logger.warning(
            f"Domain error on {request.method} {request.url.path}: "
            f"{error_code.code} {type(exc).__name__}"
        )
        return _error_response(error_code.status, error_code.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ):
        fields = sorted(
            {".".join(str(part) for part in error["loc"]) for error in exc.errors()}
        )
        logger.info(f"Invalid input on {request.url.path}: {fields}")
        return _error_response(
            400, INVALID_INPUT_CODE, f"Invalid input: {', '.join(fields)}"
        )

    @app.exception_handler(AdapterError)
    async def handle_adapter_error(request: Request, exc: AdapterError):
        logger.error(
            f"Infrastructure error on {request.method} {request.url.path}: "
            f"{type(exc).__name__}: {exc}"
        )
        return _error_response(
            503, SERVICE_UNAVAILABLE_CODE, "Service temporarily unavailable"
        )
