"""
Strawberry schema for the pokemons API, its startup check and SDL export
"""

from pathlib import Path
from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLSchema, get_introspection_query, graphql_sync
from graphql import validate_schema as graphql_core_validate
from strawberry.fastapi import GraphQLRouter

from ..logging import get_logger
from .queries.root import Query

logger = get_logger(__name__)

schema = strawberry.Schema(query=Query)


class SchemaValidationError(Exception):
    """The served schema is structurally invalid or cannot be introspected."""


def validate_schema(graphql_schema: GraphQLSchema | None = None) -> None:
    """Fail fast on a broken schema instead of serving errors per request.

    Checks graphql-core's structural rules, then runs the introspection
    query GraphiQL issues on load.
    """
    if graphql_schema is None:
        graphql_schema = schema._schema

    problems = [str(e) for e in graphql_core_validate(graphql_schema)]
    if not problems:
        introspection = graphql_sync(graphql_schema, get_introspection_query())
        problems = [str(e) for e in introspection.errors or ()]

    if problems:
        logger.error("GraphQL schema validation failed", errors=problems)
        raise SchemaValidationError("; ".join(problems))

    logger.info("GraphQL schema validation successful", query_type=graphql_schema.query_type.name)


def export_schema(output_path: str | Path) -> Path:
    """Write the schema SDL to ``output_path`` and return the path."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(schema.as_str() + "\n", encoding="utf-8")
    logger.info("GraphQL schema exported", path=str(path))
    return path


async def get_context(request: Request) -> dict[str, Any]:
    return {"request": request}


def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    """Mount point for the schema at /graphql, with the GraphiQL IDE on GET."""
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql",
        context_getter=get_context,
    )
