"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from nutrition_analytics.api.analytics import router as analytics_router
from nutrition_analytics.api.errors import register_error_handlers
from nutrition_analytics.app_logging import configure_logging
from nutrition_analytics.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Nutrition Analytics")
    app.state.container = container
    app.include_router(analytics_router)
    register_error_handlers(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    logger.info(
        "Analytics API ready: environment=%s periods=%s",
        container.settings.environment,
        ",".join(
            option.value
            for option in container.analytics_service.resolver.list_periods()
        ),
    )
    return app
