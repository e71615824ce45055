"""
Main FastAPI application for LedgerQL
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database import Database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        database: An already-built Database to serve from. When omitted, one is
            built from settings at startup and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting LedgerQL API...")
        owns_database = database is None
        app.state.db = database or Database(settings.database_url)

        ok, error = await app.state.db.ping()
        if not ok:
            logger.error("Database connection check failed", error=error)
            if settings.environment.lower() in ("production", "prod"):
                if owns_database:
                    await app.state.db.dispose()
                raise RuntimeError(error)

        try:
            yield
        finally:
            logger.info("Shutting down LedgerQL API...")
            if owns_database:
                await app.state.db.dispose()

    app = FastAPI(
        title="LedgerQL API",
        description="GraphQL API for users, posts and bank transactions",
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
        """Health check endpoint."""
        ok, _ = await app.state.db.ping()
        return {
            "status": "healthy" if ok else "degraded",
            "database": "connected" if ok else "unreachable",
            "version": __version__,
        }

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        app.include_router(create_graphql_router(graphiql=settings.debug), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        # Server should not start with a broken schema
        raise

    return app


# Create the main application instance
app = create_app()
