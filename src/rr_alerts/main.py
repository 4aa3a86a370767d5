"""Main module for the R/R zone alert service."""
import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from rr_alerts.container import Container
from rr_alerts.routers import (alerts_router, cron_router, tickers_router,
                               unsubscribe_router)
from rr_alerts.services.scheduler import run_periodically

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create clients and stores at startup; start the optional scheduler; close on shutdown."""
    container: Container = fastapi_app.state.container
    settings = container.settings()

    # Keep refs for clean shutdown
    fastapi_app.state.providers_to_close = [
        container.price_oracle(),
        container.ticker_source(),
        container.mail_transport(),
        container.kv_store(),
    ]

    stop_event = asyncio.Event()
    scheduler: asyncio.Task | None = None
    if settings.check_interval_seconds > 0:
        missing = settings.missing_batch_settings()
        if missing:
            logger.warning("Scheduler disabled, missing configuration: %s", ", ".join(missing))
        else:
            logger.info("Scheduler: batch every %.0fs", settings.check_interval_seconds)
            scheduler = asyncio.create_task(
                run_periodically(
                    container.batch_runner(), settings.check_interval_seconds, stop_event
                )
            )

    yield

    stop_event.set()
    if scheduler is not None:
        await scheduler

    for provider in fastapi_app.state.providers_to_close:
        try:
            await provider.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app around a (possibly overridden) DI container."""
    fastapi_app = FastAPI(
        title="R/R Zone Alerts",
        description="Log-scale risk/reward zones with cooldown-gated email alerts",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container or Container()

    fastapi_app.include_router(cron_router)
    fastapi_app.include_router(tickers_router)
    fastapi_app.include_router(unsubscribe_router)
    fastapi_app.include_router(alerts_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    uvicorn.run("rr_alerts.main:app", host="127.0.0.1", port=8000)


def run_dev():
    """Run the development server with auto-reload."""
    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
    uvicorn.run("rr_alerts.main:app", host="0.0.0.0", port=8000, reload=True)
