"""
Tests for request logging middleware and request ids
"""

import json

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from pokedex.logging import bind_request_id, clear_request_id, get_request_id
from pokedex.middleware import (
    LoggingContextMiddleware,
    graphql_operation_for,
    graphql_operation_label,
)


def _request(method: str, path: str, query_string: bytes = b"", body: bytes = b"") -> Request:
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string,
        "headers": [],
    }
    return Request(scope, receive)


class TestGraphqlOperationLabel:
    def test_operation_name_wins(self):
        payload = {"query": "query AllPokemons { getAllPokemons { id } }", "operationName": "Page"}

        assert graphql_operation_label(payload) == "Page"

    def test_named_query(self):
        assert graphql_operation_label({"query": "query AllPokemons { getAllPokemons { id } }"}) == (
            "AllPokemons"
        )

    def test_anonymous_and_introspection(self):
        assert graphql_operation_label({"query": "{ getAllPokemons { id } }"}) == "unnamed_operation"
        assert graphql_operation_label({"query": "{ __schema { types { name } } }"}) == (
            "__introspection"
        )

    def test_missing_query(self):
        assert graphql_operation_label({}) is None


@pytest.mark.asyncio
async def test_operation_from_post_body():
    body = json.dumps({"query": "query AllPokemons { getAllPokemons { id } }"}).encode()

    assert await graphql_operation_for(_request("POST", "/graphql", body=body)) == "AllPokemons"


@pytest.mark.asyncio
async def test_operation_from_get_params():
    request = _request("GET", "/graphql", query_string=b"query=%7B+getAllPokemons+%7B+id+%7D+%7D")

    assert await graphql_operation_for(request) == "unnamed_operation"


@pytest.mark.asyncio
async def test_non_graphql_paths_and_bad_bodies_are_ignored():
    assert await graphql_operation_for(_request("GET", "/health")) is None
    assert await graphql_operation_for(_request("POST", "/graphql", body=b"{not json")) is None
    assert await graphql_operation_for(_request("POST", "/graphql", body=b"[1, 2]")) is None


def test_bind_request_id_generates_and_clears():
    request_id = bind_request_id()

    assert get_request_id() == request_id
    assert len(request_id) == 12

    clear_request_id()
    assert get_request_id() is None


@pytest.mark.asyncio
async def test_middleware_tags_response_with_request_id():
    app = FastAPI()
    app.add_middleware(LoggingContextMiddleware)

    @app.get("/ping")
    async def ping():
        return {"request_id": get_request_id()}

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        generated = await client.get("/ping")
        forwarded = await client.get("/ping", headers={"X-Request-ID": "abc123"})

    assert generated.headers["X-Request-ID"] == generated.json()["request_id"]
    assert forwarded.headers["X-Request-ID"] == "abc123"
    assert forwarded.json()["request_id"] == "abc123"
    assert get_request_id() is None
