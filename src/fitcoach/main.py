import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import fitcoach.models  # noqa: F401  (registers models with Base.metadata)
from fitcoach.api.routes.calendar import router as calendar_router
from fitcoach.api.routes.metrics import router as metrics_router
from fitcoach.api.routes.notifications import router as notifications_router
from fitcoach.api.routes.plans import router as plans_router
from fitcoach.api.routes.sessions import router as sessions_router
from fitcoach.api.routes.templates import router as templates_router
from fitcoach.api.routes.users import router as users_router
from fitcoach.config import get_settings
from fitcoach.database import Base, engine
from fitcoach.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create tables on startup (dev convenience)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="FitCoach",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(users_router)
    app.include_router(templates_router)
    app.include_router(plans_router)
    app.include_router(sessions_router)
    app.include_router(calendar_router)
    app.include_router(metrics_router)
    app.include_router(notifications_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> StatusResponse:
        return StatusResponse(status="ok")

    return app


app = create_app()
