"""HTTP Responder: turns an outcome into the uniform JSON envelope.

Invariants:
    - Envelope is {"success": bool, "message": str, "data"?: payload}
    - "data" is present iff a payload was passed: presence, not truthiness
      (0, [], {}, False and None all serialize)
    - Each call builds a new response object; nothing is sent as a side effect

Design Decisions:
    - Explicit Responder passed to the route composer, no attributes patched onto Response
    - jsonable_encoder for payloads: Pydantic models serialize by alias, UUID/datetime as str
"""

from typing import Any, Protocol

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.responses import Response

from forms_api.core.service_response import UNSET, has_payload


def build_envelope(success: bool, message: str, data: Any = UNSET) -> dict:
    """Build the response body shared by every endpoint."""
    envelope: dict[str, Any] = {"success": success, "message": message}
    if has_payload(data):
        envelope["data"] = jsonable_encoder(data)
    return envelope


class Responder(Protocol):
    """The two primitives the route composer needs from the transport."""
    def success(
        self, status_code: int, message: str, data: Any = UNSET,
    ) -> Response: ...
    def error(
        self, status_code: int, message: str, data: Any = UNSET,
    ) -> Response: ...


class JSONResponder:
    """Default Responder: one JSONResponse per call."""

    def success(
        self, status_code: int, message: str, data: Any = UNSET,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=build_envelope(True, message, data),
        )

    def error(
        self, status_code: int, message: str, data: Any = UNSET,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=build_envelope(False, message, data),
        )


json_responder = JSONResponder()
