"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from scm_driver.interface.dependencies import get_driver_kind, shutdown, startup
from scm_driver.interface.error_handlers import register_error_handlers
from scm_driver.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="SCM Driver",
        version="1.0.0",
        description=(
            "Read-only access to branches, tags, commits and trees of "
            "repositories on any supported git hosting backend."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check: liveness plus the backend this instance fronts ────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str | None]:
        kind = get_driver_kind()
        return {
            "status": "ok" if kind is not None else "starting",
            "driver": kind.value if kind is not None else None,
        }

    return app
