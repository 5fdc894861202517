"""
Tests for application startup: schema validation, router and database check
"""

from unittest.mock import AsyncMock, patch

import pytest
from graphql import GraphQLField, GraphQLObjectType, GraphQLSchema, GraphQLString
from strawberry.fastapi import GraphQLRouter

from pokedex.api import app as app_module
from pokedex.api.app import DatabaseUnavailableError, create_app, lifespan, verify_database
from pokedex.config import settings
from pokedex.graphql.schema import SchemaValidationError, create_graphql_router, validate_schema


@pytest.mark.unit
class TestSchemaStartup:
    def test_router_builds_with_graphiql(self):
        router = create_graphql_router()

        assert isinstance(router, GraphQLRouter)
        assert "/graphql" in {route.path for route in router.routes}

    def test_app_mounts_graphql_and_health(self):
        paths = {route.path for route in create_app().routes}

        assert {"/graphql", "/health"} <= paths

    def test_served_schema_is_valid(self):
        validate_schema()

    def test_empty_query_type_fails_fast(self):
        broken = GraphQLSchema(query=GraphQLObjectType("Query", {}))

        with pytest.raises(SchemaValidationError, match="Query"):
            validate_schema(broken)

    def test_valid_hand_built_schema_passes(self):
        ok = GraphQLSchema(
            query=GraphQLObjectType("Query", {"hello": GraphQLField(GraphQLString)})
        )

        validate_schema(ok)

    def test_create_app_aborts_on_invalid_schema(self):
        with patch.object(
            app_module, "validate_schema", side_effect=SchemaValidationError("bad schema")
        ):
            with pytest.raises(SchemaValidationError, match="bad schema"):
                create_app()


@pytest.mark.unit
class TestVerifyDatabase:
    @pytest.mark.asyncio
    async def test_reachable_database(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")

        with patch.object(
            app_module, "check_database_connection", AsyncMock(return_value=(True, None))
        ):
            assert await verify_database() is True

    @pytest.mark.asyncio
    async def test_unreachable_database_is_logged_outside_production(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "development")

        with (
            patch.object(
                app_module,
                "check_database_connection",
                AsyncMock(return_value=(False, "Database server is unreachable")),
            ),
            patch.object(app_module, "logger") as mock_logger,
        ):
            assert await verify_database() is False

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["error"] == "Database server is unreachable"

    @pytest.mark.asyncio
    async def test_unreachable_database_aborts_production(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "Production")

        with patch.object(
            app_module,
            "check_database_connection",
            AsyncMock(return_value=(False, "Database server is unreachable")),
        ):
            with pytest.raises(DatabaseUnavailableError, match="unreachable"):
                await verify_database()


@pytest.mark.unit
class TestLifespan:
    @pytest.mark.asyncio
    async def test_starts_and_disposes(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "development")

        with (
            patch.object(app_module, "init_database") as mock_init,
            patch.object(
                app_module, "check_database_connection", AsyncMock(return_value=(False, "down"))
            ),
            patch.object(app_module, "dispose_database", AsyncMock()) as mock_dispose,
        ):
            async with lifespan(app_module.app):
                mock_init.assert_called_once()
                mock_dispose.assert_not_awaited()

        mock_dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_production_startup_fails_and_still_disposes(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")

        with (
            patch.object(app_module, "init_database"),
            patch.object(
                app_module, "check_database_connection", AsyncMock(return_value=(False, "down"))
            ),
            patch.object(app_module, "dispose_database", AsyncMock()) as mock_dispose,
        ):
            with pytest.raises(DatabaseUnavailableError):
                async with lifespan(app_module.app):
                    pass

        mock_dispose.assert_awaited_once()
