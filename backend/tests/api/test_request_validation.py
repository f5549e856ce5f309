"""Request Validation: verifies facet parsing, ordering and message format.

Invariants:
    - params -> query -> body; only the first failing facet is reported
    - 422 message: "Validation error in [<Facet>]: <details>"
    - Controller never runs on validation or configuration errors
    - Validated facets hold coerced values; absent facets pass through raw

Design Decisions:
    - A throwaway FastAPI app per test keeps the pipeline isolated from the real routes
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, ValidationError, model_validator

from forms_api.api.request_validation import (
    RequestSchema, format_validation_details,
)
from forms_api.api.route_handler import create_route_handler
from forms_api.core.service_response import success


class ItemParams(BaseModel):
    id: int


class ItemQuery(BaseModel):
    page: int = 1
    tags: list[str] = []


class ItemBody(BaseModel):
    name: str
    qty: int


class ExplodingBody(BaseModel):
    name: str

    @model_validator(mode="after")
    def explode(self):
        raise RuntimeError("validator bug")


@pytest.fixture
def seen():
    """Requests that reached the controller."""
    return []


@pytest.fixture
async def make_client(seen):
    clients = []

    async def _make(schema):
        async def controller(req):
            seen.append(req)
            return success({"ok": True})

        app = FastAPI()
        app.add_api_route(
            "/items/{id}",
            create_route_handler(schema=schema, controller=controller),
            methods=["POST"],
        )
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


FULL_SCHEMA = RequestSchema(params=ItemParams, query=ItemQuery, body=ItemBody)


async def test_valid_request_reaches_controller_with_coerced_facets(make_client, seen):
    client = await make_client(FULL_SCHEMA)
    res = await client.post("/items/5?page=2", json={"name": "desk", "qty": "3"})

    assert res.status_code == 200
    assert len(seen) == 1
    req = seen[0]
    assert isinstance(req.params, ItemParams) and req.params.id == 5
    assert isinstance(req.query, ItemQuery) and req.query.page == 2
    assert isinstance(req.body, ItemBody) and req.body.qty == 3


async def test_params_failure_is_422_with_params_label(make_client, seen):
    client = await make_client(FULL_SCHEMA)
    res = await client.post("/items/abc", json={"name": "desk", "qty": 1})

    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["message"].startswith("Validation error in [Params]: ")
    assert '"id"' in body["message"]
    assert "data" not in body
    assert seen == []


async def test_params_reported_before_body(make_client, seen):
    client = await make_client(FULL_SCHEMA)
    res = await client.post("/items/abc", json={"qty": "many"})

    message = res.json()["message"]
    assert "[Params]" in message
    assert "[Body]" not in message
    assert seen == []


async def test_query_reported_before_body(make_client):
    client = await make_client(FULL_SCHEMA)
    res = await client.post("/items/1?page=first", json={})

    assert res.status_code == 422
    message = res.json()["message"]
    assert message.startswith("Validation error in [Query]: ")
    assert "[Body]" not in message


async def test_body_missing_required_field(make_client, seen):
    client = await make_client(FULL_SCHEMA)
    res = await client.post("/items/1", json={"name": "desk"})

    assert res.status_code == 422
    assert res.json()["message"] == (
        'Validation error in [Body]: Field required at "qty"'
    )
    assert seen == []


async def test_multiple_body_errors_joined(make_client):
    client = await make_client(FULL_SCHEMA)
    res = await client.post("/items/1", json={})

    message = res.json()["message"]
    assert 'Field required at "name"; Field required at "qty"' in message


async def test_malformed_json_fails_body_facet(make_client, seen):
    client = await make_client(FULL_SCHEMA)
    res = await client.post(
        "/items/1", content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert res.status_code == 422
    assert res.json()["message"] == "Validation error in [Body]: Malformed JSON"
    assert seen == []


async def test_empty_body_fails_body_facet(make_client):
    client = await make_client(FULL_SCHEMA)
    res = await client.post("/items/1")

    assert res.status_code == 422
    assert "[Body]" in res.json()["message"]


async def test_missing_schema_is_500_and_skips_controller(make_client, seen):
    client = await make_client(None)
    res = await client.post("/items/1", json={"name": "desk", "qty": 1})

    assert res.status_code == 500
    assert res.json() == {
        "success": False, "message": "No request schema found for this route",
    }
    assert seen == []


async def test_schema_raising_unexpectedly_is_500_not_422(make_client, seen):
    client = await make_client(RequestSchema(body=ExplodingBody))
    res = await client.post("/items/1", json={"name": "desk"})

    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Something went wrong"}
    assert seen == []


async def test_absent_facets_pass_through_raw(make_client, seen):
    client = await make_client(RequestSchema(params=ItemParams))
    res = await client.post("/items/7?page=2", json={"anything": [1, 2]})

    assert res.status_code == 200
    req = seen[0]
    assert req.params.id == 7
    assert req.query == {"page": "2"}
    assert req.body == {"anything": [1, 2]}


async def test_repeated_query_key_becomes_list(make_client, seen):
    client = await make_client(RequestSchema(query=ItemQuery))
    res = await client.post("/items/1?tags=a&tags=b&tags=c")

    assert res.status_code == 200
    assert seen[0].query.tags == ["a", "b", "c"]


async def test_empty_schema_accepts_everything(make_client, seen):
    client = await make_client(RequestSchema())
    res = await client.post("/items/1")

    assert res.status_code == 200
    assert seen[0].params == {"id": "1"}
    assert seen[0].body is None


def test_format_details_omits_location_for_root_errors():
    with pytest.raises(ValidationError) as info:
        ItemBody.model_validate(None)
    details = format_validation_details(info.value)
    assert " at " not in details
    assert details.startswith("Input should be a valid dictionary")


def test_request_schema_is_immutable():
    schema = RequestSchema(body=ItemBody)
    with pytest.raises(AttributeError):
        schema.body = ItemQuery
