"""In-process periodic trigger for the batch runner."""
import asyncio
import logging

from rr_alerts.providers.core.exceptions import StateStoreError
from rr_alerts.services.batch_runner import BatchRunner

logger = logging.getLogger(__name__)


async def run_periodically(
    runner: BatchRunner,
    interval_seconds: float,
    stop_event: asyncio.Event,
) -> None:
    """Run one batch every interval until stop_event is set.

    The stop event is also handed to each run, so shutdown interrupts a run
    between tickers instead of waiting for the whole slice.
    """
    while not stop_event.is_set():
        try:
            await runner.run(stop_event=stop_event)
        except StateStoreError:
            logger.exception("Scheduled batch failed: state store unavailable")
        except Exception:  # pylint: disable=broad-except
            logger.exception("Scheduled batch failed")
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
        except asyncio.TimeoutError:
            pass
