"""Main FastAPI application entry point.

Initializes:
- FastAPI application
- Feeder configuration context
- ERDDAP client and packet processor
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request

from erddap_feeder.ais.config import FeederConfigError, load_context
from erddap_feeder.ais.processor import PacketProcessor
from erddap_feeder.api import router as api_router
from erddap_feeder.config import Settings, get_settings
from erddap_feeder.erddap.client import ErddapClient

__version__ = "0.1.0"

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_processor(settings: Settings) -> PacketProcessor:
    """Load the feeder configuration and wire the processor to ERDDAP.

    Raises:
        FeederConfigError: If the configuration cannot be used
    """
    context = load_context(settings.config_file)
    client = ErddapClient(context.erddap_url, timeout_s=settings.erddap_timeout_s)
    return PacketProcessor(context, client)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    app_settings: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info(f"Starting {app_settings.app_name}")
    logger.info("=" * 60)
    logger.info(f"Environment: {app_settings.environment}")

    if app.state.processor is None:
        logger.info("Initializing packet processor...")
        try:
            app.state.processor = build_processor(app_settings)
        except FeederConfigError as e:
            logger.error(f"Failed to initialize packet processor: {e}")
            app.state.processor = None

    logger.info(f"{app_settings.app_name} startup complete")

    yield

    logger.info(f"Shutting down {app_settings.app_name}")
    processor = app.state.processor
    if processor is not None and isinstance(processor.submitter, ErddapClient):
        processor.submitter.close()
    logger.info("Shutdown complete")


def create_app(
    app_settings: Optional[Settings] = None,
    processor: Optional[PacketProcessor] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment)
        processor: Ready processor; built from the configuration file at
            startup when omitted

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        description="""
## ERDDAP Feeder

Receives JSON packets from AIS-catcher in HTTP mode and forwards
IMO289 weather messages to an ERDDAP server as row inserts.

### Authentication
No authentication is performed on inbound packets.
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if app_settings.environment != "production" else None,
        redoc_url="/redoc" if app_settings.environment != "production" else None,
    )
    app.state.settings = app_settings
    app.state.processor = processor

    app.include_router(api_router)

    @app.get("/health")
    async def health_check(request: Request) -> dict[str, str | bool]:
        """Health check endpoint for container orchestration."""
        processor_ready = getattr(request.app.state, "processor", None) is not None

        return {
            "status": "healthy" if processor_ready else "degraded",
            "service": "erddap-feeder",
            "environment": app_settings.environment,
            "processor": processor_ready,
        }

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": app_settings.app_name,
            "version": __version__,
            "environment": app_settings.environment,
        }

    return app


app = create_app()
