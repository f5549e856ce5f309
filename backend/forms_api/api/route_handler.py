"""Route Handler Composer: validation -> controller -> responder, behind a fault barrier.

Invariants:
    - Stage order per request: validate facets, run controller, translate outcome
    - Validation failures are answered inside stage 1; the controller never runs
    - The fault barrier wraps the controller stage only; each fault is logged once
      and answered with 500 "Something went wrong" (no internal detail in the body)
    - Exactly one response per request
    - BaseException (e.g. asyncio.CancelledError) is not caught: transport cancellation wins

Design Decisions:
    - Controllers receive one ValidatedRequest; the route dependency (e.g. a service)
      rides along as `request.context` so any FastAPI dependency can be injected
    - Responder and fault logger are parameters, tests substitute both
"""

import logging
from typing import Any, Awaitable, Callable

from fastapi import Depends, Request, status
from starlette.responses import Response

from forms_api.api.request_validation import (
    GENERIC_FAULT_MESSAGE, RequestSchema, ValidatedRequest, validate_request,
)
from forms_api.api.responder import Responder, json_responder
from forms_api.core.service_response import (
    ServiceException, ServiceFailure, ServiceResponse, ServiceSuccess,
)
from forms_api.infrastructure.observability import log_fault

logger = logging.getLogger(__name__)

Controller = Callable[[ValidatedRequest], Awaitable[ServiceResponse | Response]]
FaultLogger = Callable[[BaseException], None]

_CLASSIFICATIONS = (ServiceSuccess, ServiceFailure, ServiceException)


async def _no_context() -> None:
    return None


def to_http_response(
    result: ServiceResponse | Response, responder: Responder,
) -> Response:
    """Translate a controller result into exactly one HTTP response."""
    if isinstance(result, Response):
        return result
    if not isinstance(result, _CLASSIFICATIONS):
        raise TypeError(
            f"Controller returned {type(result).__name__}, "
            "expected a ServiceResponse or Response",
        )
    if result.is_exception() and result.error is not None:
        error = result.error
        logger.error(
            f"{result.message}: {error!r}",
            exc_info=(type(error), error, error.__traceback__),
            extra={"status_code": result.status_code},
        )
    if result.is_unsuccessful():
        # the fault cause (ServiceException.error) is never echoed
        return responder.error(result.status_code, result.message, result.data)
    return responder.success(result.status_code, result.message, result.data)


def create_route_handler(
    *,
    schema: RequestSchema | None,
    controller: Controller,
    dependency: Callable[..., Any] | None = None,
    responder: Responder = json_responder,
    fault_logger: FaultLogger = log_fault,
):
    """Build a FastAPI endpoint for one route.

    Usage::

        get_form = create_route_handler(
            schema=RequestSchema(params=CustomerFormIdParams),
            controller=get_form_controller,
            dependency=get_customer_form_service,
        )
        router.add_api_route("/{id}", get_form, methods=["GET"])
    """
    context_dependency = dependency or _no_context

    async def route_handler(
        request: Request, context: Any = Depends(context_dependency),
    ) -> Response:
        outcome = await validate_request(schema, request, context, responder)
        if isinstance(outcome, Response):
            return outcome

        try:
            result = await controller(outcome)
            return to_http_response(result, responder)
        except Exception as e:
            fault_logger(e)
            return responder.error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAULT_MESSAGE,
            )

    route_handler.__name__ = getattr(controller, "__name__", "route_handler")
    route_handler.__doc__ = controller.__doc__
    return route_handler
