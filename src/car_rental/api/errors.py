"""Exception handlers mapping errors to JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from car_rental.domain.errors import CarRentalError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers so every failure carries a message body."""

    @app.exception_handler(CarRentalError)
    async def handle_domain_error(
        request: Request, exc: CarRentalError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code, content={"message": exc.message}
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _describe_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"method": request.method, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error."},
        )


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in {"body", "query"}
        )
        message = error.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    if not problems:
        return "Invalid request."
    return "Invalid request: " + "; ".join(problems)
