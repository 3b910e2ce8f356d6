"""FastAPI exception handlers for converting CheckoutError to HTTP responses.

Every JSON endpoint fails with ``{"error": message}``; the ErrorCode
decides the status:
- 400 Bad Request: Webhook signature failures
- 404 Not Found: Unknown checkout session
- 422 Unprocessable Entity: Request body validation
- 500 Internal Server Error: Stripe API failures

Usage:
    from planguard_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from planguard.models.errors import CheckoutError, ErrorCode
from planguard_api.models.common import format_validation_errors

logger = logging.getLogger(__name__)

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_REQUEST: HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.SESSION_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_WEBHOOK_SIGNATURE: HTTP_400_BAD_REQUEST,
    ErrorCode.STRIPE_API_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode, defaulting to 400."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def checkout_error_handler(request: Request, exc: CheckoutError) -> JSONResponse:
    """Handle CheckoutError exceptions and convert to JSON response."""
    status_code = get_http_status_for_error(exc.code)
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc.message)

    return JSONResponse(status_code=status_code, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body validation failures in the common error shape."""
    response = format_validation_errors(list(exc.errors()))
    logger.info("%s %s rejected: %d validation error(s)", request.method, request.url.path, len(response.details))
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content=response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(CheckoutError, checkout_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
