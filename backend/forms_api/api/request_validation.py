"""Request Validation: parse path params, query and body against a per-route schema.

Invariants:
    - Facets are parsed in fixed order: params -> query -> body
    - The first failing facet stops validation; its message is the only one surfaced
    - Failure message shape: "Validation error in [<Facet>]: <details>", status 422
    - A route without a schema is a configuration fault: 500, controller never runs
    - On success every validated slot holds the parsed model, never the raw wire value

Design Decisions:
    - Pydantic model classes as facet schemas: lax mode coerces query strings ("2" -> 2)
    - ValidatedRequest carries the facet slots; Starlette's Request stays untouched
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Final

from fastapi import Request, status
from pydantic import BaseModel, ValidationError
from starlette.responses import Response

from forms_api.api.responder import Responder, json_responder

logger = logging.getLogger(__name__)

VALIDATION_SUMMARY: Final = "Validation error"
NO_SCHEMA_MESSAGE: Final = "No request schema found for this route"
GENERIC_FAULT_MESSAGE: Final = "Something went wrong"
MALFORMED_JSON_DETAIL: Final = "Malformed JSON"
# Starlette renamed HTTP_422_UNPROCESSABLE_ENTITY; the code itself is stable
UNPROCESSABLE_ENTITY: Final = 422

# (slot name, label used in messages)
FACETS: Final = (("params", "Params"), ("query", "Query"), ("body", "Body"))


@dataclass(frozen=True)
class RequestSchema:
    """Accepted shapes for one route. A missing facet means "no constraint"."""
    params: type[BaseModel] | None = None
    query: type[BaseModel] | None = None
    body: type[BaseModel] | None = None


@dataclass
class ValidatedRequest:
    """Request facets after validation, plus the injected route context."""
    request: Request
    params: Any
    query: Any
    body: Any
    context: Any = None


class FacetValidationError(Exception):
    """One facet did not satisfy its schema."""

    def __init__(self, facet: str, detail: str):
        self.facet = facet
        self.detail = detail
        super().__init__(f"{VALIDATION_SUMMARY} in [{facet}]: {detail}")


class _MalformedBody:
    def __repr__(self) -> str:
        return "<malformed JSON body>"


MALFORMED_BODY: Final = _MalformedBody()


def format_validation_details(error: ValidationError) -> str:
    """Render Pydantic errors as `<msg> at "<loc>"` joined by "; "."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        if location:
            parts.append(f'{item["msg"]} at "{location}"')
        else:
            parts.append(item["msg"])
    return "; ".join(parts)


def read_query(request: Request) -> dict[str, Any]:
    """Query params as a dict; a repeated key maps to the list of its values."""
    query: dict[str, Any] = {}
    for key, value in request.query_params.multi_items():
        if key not in query:
            query[key] = value
        elif isinstance(query[key], list):
            query[key].append(value)
        else:
            query[key] = [query[key], value]
    return query


def decode_body(raw: bytes) -> Any:
    """Decoded JSON body, None when empty, MALFORMED_BODY when undecodable."""
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return MALFORMED_BODY


def _parse_facet(model: type[BaseModel], raw: Any, label: str) -> BaseModel:
    if raw is MALFORMED_BODY:
        raise FacetValidationError(label, MALFORMED_JSON_DETAIL)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise FacetValidationError(label, format_validation_details(e)) from e


async def validate_request(
    schema: RequestSchema | None,
    request: Request,
    context: Any = None,
    responder: Responder = json_responder,
) -> ValidatedRequest | Response:
    """Validate all facets. Returns the validated request, or the error response."""
    if schema is None:
        return responder.error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, NO_SCHEMA_MESSAGE,
        )

    raw_body = await request.body()
    validated = ValidatedRequest(
        request=request,
        params=dict(request.path_params),
        query=read_query(request),
        body=decode_body(raw_body),
        context=context,
    )

    try:
        for slot, label in FACETS:
            model = getattr(schema, slot)
            if model is not None:
                parsed = _parse_facet(model, getattr(validated, slot), label)
                setattr(validated, slot, parsed)
    except FacetValidationError as e:
        logger.info(
            f"Rejected request on {request.url.path}: {e}",
            extra={"path": request.url.path, "method": request.method},
        )
        return responder.error(UNPROCESSABLE_ENTITY, str(e))
    except Exception as e:
        logger.error(
            f"Schema raised while validating {request.url.path}: {e}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return responder.error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAULT_MESSAGE,
        )

    # unvalidated body passes through as the raw bytes
    if validated.body is MALFORMED_BODY:
        validated.body = raw_body
    return validated
