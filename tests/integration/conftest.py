"""
Integration test fixtures for FastAPI TestClient.

Provides:
- Test app without lifespan (no scheduler start)
- Auth override pinned to a per-test user
- get_db override that reuses the test session, so seeded rows and
  request writes share one SQLite connection
"""

import pytest
from contextlib import asynccontextmanager
from typing import Generator
from uuid import UUID

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from fastapi.exceptions import RequestValidationError

from wordmaster.api.router import api_router
from wordmaster.core.auth import require_current_user_id, require_scheduler_or_user
from wordmaster.core.config import settings
from wordmaster.core.database import get_db
from wordmaster.domain.exceptions import (
    EntityNotFoundError,
    DomainValidationError,
    StorageError,
)
from main import validation_exception_handler


# ---------------------------------------------------------------------------
# App Factory (no lifespan - skips schedulers)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def test_lifespan(app: FastAPI):
    """Minimal lifespan that skips scheduler registration."""
    yield


def create_test_app() -> FastAPI:
    """Create FastAPI app for testing without scheduler or rate limiter.

    Registers domain exception handlers to match production behavior (main.py).
    """
    app = FastAPI(
        title="Wordmaster Test API",
        lifespan=test_lifespan,
    )

    # Domain exception → HTTP response mapping (mirrors main.py)
    @app.exception_handler(EntityNotFoundError)
    async def _not_found(request, exc):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DomainValidationError)
    async def _validation(request, exc):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def _storage(request, exc):
        return JSONResponse(
            status_code=503,
            content={"detail": f"Storage unavailable during {exc.operation}"},
            headers={"Retry-After": "5"},
        )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


# ---------------------------------------------------------------------------
# Client Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app(db_session, user_id: UUID) -> FastAPI:
    """Test app with DB and auth dependencies overridden."""
    app = create_test_app()

    def override_get_db() -> Generator:
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    async def override_user_id() -> UUID:
        return user_id

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_current_user_id] = override_user_id
    app.dependency_overrides[require_scheduler_or_user] = override_user_id
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def anonymous_client(db_session) -> Generator[TestClient, None, None]:
    """Client with real auth dependencies (no token configured)."""
    app = create_test_app()

    def override_get_db() -> Generator:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
