"""API error mapping

Use case errors are raised as ClientError and rendered as
``{"error": {"code", "message", "details"?}}``.
"""

import logging
from fastapi import FastAPI, Request, status
from starlette.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RECEIPT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVOICE_CANCELLED": status.HTTP_400_BAD_REQUEST,
    "OVERPAYMENT": status.HTTP_409_CONFLICT,
    "NOTIFICATION_FAILED": status.HTTP_502_BAD_GATEWAY,
    "PERSISTENCE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        """ClientError with the HTTP status registered for the error code"""
        return cls(error, status_code=ERROR_STATUS_CODES.get(error.code, status.HTTP_400_BAD_REQUEST))


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    body = {"code": exc.error.code, "message": exc.error.message}
    if exc.error.details:
        body["details"] = exc.error.details

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} {exc.error.reason}")

    return JSONResponse(status_code=exc.status_code, content={"error": body})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientError, client_error_handler)
