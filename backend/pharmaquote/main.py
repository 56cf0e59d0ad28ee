"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, settings as default_settings
from .models import ErrorResponse
from .services.item_collection import ItemCollectionConfig
from .services.render_context import PreviewTotalsAggregator
from .services.settings_source import SettingsSource, build_settings_source
from .store import DraftStore
from .utils import APIError, ErrorCode
from .utils.errors import ERROR_MESSAGES


# Configure logging
logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    # Startup
    config: Settings = app.state.settings
    logger.info("Application starting up...")
    logger.info(f"Settings: host={config.backend_host}, port={config.backend_port}")
    logger.info(f"Settings API: {config.settings_api_url or '(built-in defaults)'}")
    logger.info(f"Store stats: {app.state.store.get_stats()}")

    yield

    # Shutdown
    logger.info("Application shutting down...")
    for quote_id in app.state.store.list_ids():
        app.state.store.remove(quote_id)
    logger.info("Application stopped")


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle API errors with proper response format."""
    error_response = ErrorResponse(
        success=False,
        message=exc.message,
        error_code=exc.error_code.value,
    )
    logger.error(f"APIError: {exc.error_code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies and parameters."""
    error_response = ErrorResponse(
        success=False,
        message=ERROR_MESSAGES[ErrorCode.VALIDATION_ERROR],
        error_code=ErrorCode.VALIDATION_ERROR.value,
        details={"errors": jsonable_encoder(exc.errors())},
    )
    logger.warning(f"Request validation failed: {request.url.path}")
    return JSONResponse(
        status_code=422,
        content=error_response.model_dump(mode="json"),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions."""
    error_response = ErrorResponse(
        success=False,
        message="Internal server error",
        error_code=ErrorCode.INTERNAL_ERROR.value,
    )
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=error_response.model_dump(mode="json"),
    )


def create_app(
    config: Optional[Settings] = None,
    settings_source: Optional[SettingsSource] = None,
    store: Optional[DraftStore] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Application settings (module settings by default)
        settings_source: Organization settings source (built from config by default)
        store: Draft store (a fresh one by default)

    Returns:
        FastAPI application
    """
    config = config or default_settings

    app = FastAPI(
        title="Pharma Quotation Builder",
        description="Quote composition service for pharmaceutical manufacturing orders",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.store = store or DraftStore(draft_ttl=config.draft_ttl, max_drafts=config.max_drafts)
    app.state.settings_source = settings_source or build_settings_source(
        config.settings_api_url,
        timeout=config.settings_api_timeout,
        cache_ttl=config.settings_cache_ttl,
    )
    app.state.totals_aggregator = PreviewTotalsAggregator(
        charges_tax_percent=config.charges_tax_percent,
        advance_payment_ratio=config.advance_payment_ratio,
    )
    app.state.collection_config = ItemCollectionConfig(min_items=config.min_items)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Register API routers
    from .api.routes import catalog, health, numeric, quotes

    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(quotes.router)
    app.include_router(numeric.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        reload=default_settings.backend_debug,
    )
