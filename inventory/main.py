import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from inventory.api.api import api_router
from inventory.core.config import Settings, get_settings
from inventory.core.logging_config import configure_logging, install_request_logging, set_request_logs_enabled
from inventory.services.factory import open_inventory

LOG = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    # Configure logging before app initialization
    configure_logging(settings)
    set_request_logs_enabled(settings.REQUEST_LOGS_ENABLED)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service = await open_inventory(settings)
        app.state.inventory = service
        LOG.info(
            "inventory ready backend=%s cache=%s uploads=%s",
            settings.STORAGE_BACKEND,
            settings.cache_path.resolve(),
            settings.uploads_dir.resolve(),
        )
        if settings.SWEEP_ORPHANS_ON_STARTUP:
            await service.sweep_orphans()
        try:
            yield
        finally:
            await service.repository.close()
            LOG.info("inventory closed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    install_request_logging(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
