from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hyperinvoice.config import get_settings
from hyperinvoice.dependencies.services import (
    get_booking_client_cached,
    get_repository_cached,
)
from hyperinvoice.exception_handlers import register_exception_handlers
from hyperinvoice.health import router as health_router
from hyperinvoice.routers.files import router as files_router
from hyperinvoice.routers.invoice import router as invoice_router


def configure_logging() -> None:
    """Ensure application logs use the INFO level by default."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(logging.INFO)

# Configure logging as soon as the module is loaded
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    # --- Startup Logic ---
    settings = get_settings()

    settings_snapshot = settings.model_dump(
        exclude={"booking_service_token", "aws_access_key_id", "aws_secret_access_key"},
        mode="json",
    )
    logger.info("Application settings on startup: %s", settings_snapshot)

    if settings.persist_invoices:
        get_repository_cached()
    logger.info("Application startup complete.")

    try:
        yield  # The application is now running
    finally:
        # --- Shutdown Logic ---
        if not settings.use_mock_data:
            logger.info("Closing booking service client.")
            await get_booking_client_cached().close()
        logger.info("Application shutdown complete.")


# --- Application Setup ---

settings = get_settings()
app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- Include Routers ---

app.include_router(invoice_router, prefix="/api/invoices")
app.include_router(files_router)
app.include_router(health_router)
