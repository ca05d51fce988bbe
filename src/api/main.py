"""FastAPI application entry point for the adjudication service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.error_handlers import register_error_handlers
from src.api.middleware import LoggingMiddleware
from src.api.routes import (
    cases_router,
    decisions_router,
    health_router,
    judgment_router,
    notifications_router,
    registry_router,
    sessions_router,
    votes_router,
)
from src.api.startup import (
    configure_logging,
    initialize_adjudication,
    validate_configuration_at_startup,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the startup sequence before serving requests."""
    configure_logging()
    config = validate_configuration_at_startup()
    initialize_adjudication(config)
    yield


app = FastAPI(
    title="Adjudication API",
    description="Case registry, judgment sessions, decisions and notifications",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
register_error_handlers(app)

app.include_router(health_router)
app.include_router(cases_router)
app.include_router(sessions_router)
app.include_router(votes_router)
app.include_router(judgment_router)
app.include_router(decisions_router)
app.include_router(notifications_router)
app.include_router(registry_router)
