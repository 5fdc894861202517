"""
Request logging middleware
"""

import json
import re
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import bind_request_id, clear_request_id, get_logger

logger = get_logger(__name__)

GRAPHQL_PATH = "/graphql"
_NAMED_QUERY = re.compile(r"\bquery\s+(\w+)")


def graphql_operation_label(payload: dict) -> str | None:
    """Label a GraphQL payload for logs: its operationName, the named query, or a placeholder."""
    operation_name = payload.get("operationName")
    if isinstance(operation_name, str) and operation_name:
        return operation_name

    document = payload.get("query")
    if not isinstance(document, str) or not document:
        return None
    if "__schema" in document:
        return "__introspection"
    match = _NAMED_QUERY.search(document)
    return match.group(1) if match else "unnamed_operation"


async def graphql_operation_for(request: Request) -> str | None:
    if request.url.path != GRAPHQL_PATH:
        return None
    if request.method == "GET":
        return graphql_operation_label(dict(request.query_params))
    if request.method != "POST":
        return None

    body = await request.body()
    try:
        payload = json.loads(body) if body else None
    except json.JSONDecodeError:
        return None
    return graphql_operation_label(payload) if isinstance(payload, dict) else None


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with a request id and log its start, completion or failure."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = bind_request_id(request.headers.get("x-request-id"))
        operation = await graphql_operation_for(request)
        log = logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            graphql_operation=operation,
        )

        log.info("Request started")
        try:
            response = await call_next(request)
        except Exception as e:
            log.error("Request failed", error=str(e))
            raise
        finally:
            clear_request_id()

        response.headers["X-Request-ID"] = request_id
        log.info("Request completed", status_code=response.status_code)
        return response
