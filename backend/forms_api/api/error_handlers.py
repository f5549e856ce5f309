"""Error Handlers: global exception handlers for routes outside the composed pipeline.

Invariants:
    - FormsApiError -> its http_status + {success: false, message}
    - RequestValidationError (plain FastAPI routes) -> 422 + field details
    - Exception (catch-all) -> 500 "Something went wrong", never leaks internal details

Design Decisions:
    - Three-layer handler: domain (FormsApiError), validation (Pydantic), catch-all (Exception)
    - Same envelope as create_route_handler responses: clients parse one shape
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from forms_api.api.request_validation import (
    GENERIC_FAULT_MESSAGE, UNPROCESSABLE_ENTITY, VALIDATION_SUMMARY,
)
from forms_api.api.responder import json_responder
from forms_api.core.errors import FormsApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FormsApiError)
    async def forms_api_error_handler(request: Request, exc: FormsApiError):
        """Handle domain/infrastructure errors raised outside the service layer."""
        logger.error(
            f"FormsApiError: {exc.message}",
            extra={**exc.log_extra(), "path": request.url.path},
        )
        return json_responder.error(exc.http_status, exc.message)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors from signature-validated routes."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return json_responder.error(
            UNPROCESSABLE_ENTITY,
            VALIDATION_SUMMARY,
            _build_validation_details(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return json_responder.error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAULT_MESSAGE,
        )


def _build_validation_details(exc: RequestValidationError) -> list[dict]:
    """Field-level details for a validation error response."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
