"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from mealprint.config import get_settings
from mealprint.logging_config import LoggingContext, configure_logging, get_logger
from mealprint.routers import blueprints_router, foods_router, units_router

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"Starting Mealprint API (environment={settings.environment}, "
        f"default units={settings.default_unit_system})"
    )
    yield
    logger.info("Shutting down Mealprint API")


app = FastAPI(
    title="Mealprint API",
    description="Serving scaling and unit conversion for weekly meal blueprints",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag log records with a request id and echo it in the response."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(units_router)
app.include_router(blueprints_router)
app.include_router(foods_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "mealprint-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Mealprint API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
