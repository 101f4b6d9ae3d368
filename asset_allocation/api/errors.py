"""
Exception handlers translating domain errors into HTTP responses.

The body is always the error's ``to_dict()`` rendering, so clients branch on
``type`` and ``retryable`` rather than on status codes alone.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from asset_allocation.core.observability import get_logger
from asset_allocation.domain.shared.exceptions import DomainError, ErrorType

logger = get_logger(__name__)

STATUS_BY_ERROR_TYPE: dict[ErrorType, int] = {
    ErrorType.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorType.PRECONDITION_FAILED: status.HTTP_412_PRECONDITION_FAILED,
    ErrorType.IDENTIFIER_COLLISION: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorType.TRANSACTION_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = STATUS_BY_ERROR_TYPE.get(
        exc.error_type, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    log = logger.warning if status_code >= 500 else logger.info
    log(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        error_type=exc.error_type.value,
        status_code=status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request bodies in the same shape as domain validation errors."""
    violations = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
            "error_code": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "type": ErrorType.VALIDATION.value,
            "message": "Request is malformed",
            "details": {"error_count": len(violations)},
            "retryable": False,
            "violations": violations,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
