"""
FastAPI host for the pokemons GraphQL API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database import dispose_database, init_database
from ..database.connection import check_database_connection
from ..graphql.schema import create_graphql_router, validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

configure_logging(debug=settings.debug)
logger = get_logger(__name__)

PRODUCTION_ENVIRONMENTS = ("production", "prod")


class DatabaseUnavailableError(RuntimeError):
    """Raised at startup in production when the database cannot be reached."""


async def verify_database() -> bool:
    """Check connectivity once at startup.

    Outside production an unreachable database is only logged, so the
    server still starts (and GraphiQL stays usable) while it comes up.
    """
    ok, error_message = await check_database_connection()
    if ok:
        logger.info("Database connection check passed")
        return True

    logger.error(
        "Database connection check failed",
        error=error_message,
        environment=settings.environment,
    )
    if settings.environment.lower() in PRODUCTION_ENVIRONMENTS:
        raise DatabaseUnavailableError(error_message)
    return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Pokedex API", version=__version__)
    init_database()
    try:
        await verify_database()
        yield
    finally:
        logger.info("Shutting down Pokedex API")
        await dispose_database()


def create_app() -> FastAPI:
    """Build the app; a schema that fails validation aborts here."""
    validate_schema()

    app = FastAPI(
        title="Pokedex API",
        description="GraphQL access to pokemon records",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        return {"status": "healthy", "version": __version__}

    app.include_router(create_graphql_router())
    logger.info("GraphQL endpoint mounted", endpoint="/graphql")
    return app


app = create_app()
