"""
==============================================================================
Product Catalog Service - Application Entry Point
==============================================================================

FastAPI application serving a read-only product catalog with:
- ListProducts, GetProduct and SearchProducts endpoints
- HealthCheck endpoint
- Catalog fed from a local JSON file or a Content API
- Runtime toggle of catalog reloading via SIGUSR1 / SIGUSR2

Usage:
------
    # Development
    uvicorn product_catalog.main:app --reload

    # Production
    uvicorn product_catalog.main:app --host 0.0.0.0 --port 3550

==============================================================================
"""

from __future__ import annotations

import logging
import signal
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_catalog.config import get_settings
from product_catalog.core.exceptions import register_exception_handlers
from product_catalog.api.router import api_router
from product_catalog.catalog.catalog import ProductCatalog, init_catalog
from product_catalog.catalog.feed import build_feed


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Catalog construction on startup
    - Reload toggle signal handlers
    - Middleware configuration
    - Router registration
    - Exception handler setup
    """

    def __init__(self):
        """Initialize the application."""
        self._settings = get_settings()
        self._catalog: ProductCatalog | None = None
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Read-only product catalog with lookup and search",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        self._configure_middleware(app)
        register_exception_handlers(app)
        self._register_routers(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup()
        yield
        self._shutdown()

    def _startup(self) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        self._init_catalog()

        if self._settings.enable_reload_signals:
            self._install_reload_signals()

        logger.info(f"✅ {self._settings.app_name} ready")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(f"📖 API Docs: http://{self._settings.host}:{self._settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")
        logger.info("✅ Shutdown complete")

    def _init_catalog(self) -> None:
        """Create the process-wide catalog; products load on first query."""
        feed = build_feed(self._settings)
        self._catalog = init_catalog(
            feed,
            reload_on_every_access=self._settings.reload_catalog,
            extra_latency=self._settings.extra_latency,
        )
        logger.info(
            f"Catalog feed: {feed!r}, "
            f"reload on every access: {self._settings.reload_catalog}, "
            f"extra latency: {self._settings.extra_latency}s"
        )

    def _install_reload_signals(self) -> None:
        """SIGUSR1 enables catalog reloading, SIGUSR2 disables it."""
        if not hasattr(signal, "SIGUSR1"):
            logger.warning("⚠️ Reload signals are not available on this platform")
            return
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, reload signals not installed")
            return

        def _enable(signum, frame):
            if self._catalog is not None:
                self._catalog.set_reload_on_every_access(True)

        def _disable(signum, frame):
            if self._catalog is not None:
                self._catalog.set_reload_on_every_access(False)

        signal.signal(signal.SIGUSR1, _enable)
        signal.signal(signal.SIGUSR2, _disable)
        logger.info("Reload signals installed (SIGUSR1 = on, SIGUSR2 = off)")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        """Register API routers."""
        app.include_router(api_router)

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(
        "product_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )


if __name__ == "__main__":
    run()
