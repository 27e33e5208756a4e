from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from wordmaster.api.router import api_router
from wordmaster.core.config import settings
from wordmaster.core.database import DATABASE_URL, create_db_and_tables
from wordmaster.domain.exceptions import (
    EntityNotFoundError,
    DomainValidationError,
    StorageError,
)
from wordmaster.core.logging_config import configure_logging
from wordmaster.models.dto.reviews import ReviewAction
from wordmaster.services.scheduler import WORKFLOW_REGISTRY, get_scheduler_orchestrator
from wordmaster.middleware.rate_limit import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: logging, local schema, workflow registration, scheduler start.
    Shutdown: scheduler stop (waits for an in-flight decay sweep).
    """
    configure_logging()
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} starting")

    # PostgreSQL schema is owned by Alembic; local SQLite files are created on the fly
    if DATABASE_URL.startswith("sqlite"):
        create_db_and_tables()

    scheduler = None
    if settings.ENABLE_BACKGROUND_JOBS:
        scheduler = get_scheduler_orchestrator()
        for get_workflow in WORKFLOW_REGISTRY.values():
            await get_workflow().register()
        await scheduler.start()
    else:
        logger.info("Background jobs DISABLED (ENABLE_BACKGROUND_JOBS=false)")

    yield

    if scheduler:
        await scheduler.stop()
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Default limit applies to every route via the middleware
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


# Domain exception → HTTP response mapping
@app.exception_handler(EntityNotFoundError)
async def entity_not_found_handler(request: Request, exc: EntityNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(DomainValidationError)
async def domain_validation_handler(request: Request, exc: DomainValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": f"Storage unavailable during {exc.operation}"},
        headers={"Retry-After": "5"},
    )


_REVIEW_ACTIONS = ", ".join(f"'{action.value}'" for action in ReviewAction)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """422 with a readable hint for unknown review actions."""
    errors = []
    for error in exc.errors():
        enriched = dict(error)
        if error.get("type") == "enum" and error.get("loc", ())[-1:] == ("action_type",):
            enriched["msg"] = f"Invalid action_type '{error.get('input')}'. Expected one of: {_REVIEW_ACTIONS}."
        enriched.pop("ctx", None)  # may hold non-JSON-serializable exception objects
        errors.append(enriched)

    return JSONResponse(status_code=422, content={"detail": errors})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs"
    }


if __name__ == "__main__":
    import uvicorn

    # uvicorn's default log config; configure_logging() filters its access handler at startup
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
