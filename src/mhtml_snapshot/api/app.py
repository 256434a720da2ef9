"""
FastAPI application for the snapshot decoder service.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from ..version import API_VERSION, DECODER_VERSION
from ..config import settings
from ..logging_config import setup_logging
from .routes import decode, health, version
from .middleware import setup_error_handling_middleware, setup_logging_middleware

# Setup logging on module import
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log service startup and shutdown."""
    logger.info(
        "Starting MHTML Snapshot Decoder API",
        version=API_VERSION,
        decoder_version=DECODER_VERSION,
        max_snapshot_size_mb=settings.max_snapshot_size_mb,
    )
    yield
    logger.info("Shutting down MHTML Snapshot Decoder API")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="MHTML Snapshot Decoder",
        description="Splits MHTML page snapshots into their root document and sub-resources",
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # First added = outermost
    setup_error_handling_middleware(app)
    setup_logging_middleware(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(decode.router, prefix="/api/v1/decode", tags=["Decoding"])

    return app


app = create_app()


def main() -> None:
    """Run the API server with uvicorn (development entry point)."""
    import uvicorn

    uvicorn.run(
        "mhtml_snapshot.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
