"""
Topics RW Service - Main Application
====================================

FastAPI application that reads and writes topics in Neo4j.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from shared.config import settings
from shared.database.errors import GraphStoreError
from shared.database.neo4j import Neo4jClient
from shared.logging import bind_context, clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse

from services.topics_rw import __version__
from services.topics_rw.routes import topics
from services.topics_rw.services.topic_store import TopicStore

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name=settings.service_name,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "topics_rw_starting",
        environment=settings.environment.value,
        port=settings.port,
    )

    client = Neo4jClient.from_settings(settings.neo4j)
    try:
        store = TopicStore(client)
        await store.initialise()
        app.state.topic_store = store
        logger.info("topic_constraints_ensured")
    except Exception as e:
        logger.error("startup_failed", error=str(e))
        await client.close()
        raise

    yield

    logger.info("topics_rw_shutting_down")
    await client.close()


# Create FastAPI application
app = FastAPI(
    title="Topics RW Neo4j",
    description="Writes topics to Neo4j and reads them back",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


@app.middleware("http")
async def request_context(request: Request, call_next: Any) -> Any:
    """Bind method and path to every log entry for the request."""
    clear_context()
    bind_context(method=request.method, path=request.url.path)
    return await call_next(request)


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request) -> HealthResponse:
    """
    Service health check.

    Reports whether Neo4j is reachable.
    """
    store: TopicStore = request.app.state.topic_store
    components: dict[str, dict[str, Any]] = {}

    try:
        await store.check()
        components["neo4j"] = {"status": "healthy"}
    except GraphStoreError as e:
        logger.error("neo4j_connectivity_check_failed", error=str(e))
        components["neo4j"] = {"status": "unhealthy", "error": str(e)}

    all_healthy = all(c.get("status") == "healthy" for c in components.values())

    return HealthResponse(
        status="healthy" if all_healthy else "unhealthy",
        service=settings.service_name,
        version=__version__,
        components=components,
    )


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    topics.router,
    prefix="/topics",
    tags=["Topics"],
)


# ============================================================================
# Error Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=str(exc.detail),
            status_code=exc.status_code,
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ).model_dump(),
    )


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.topics_rw.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
