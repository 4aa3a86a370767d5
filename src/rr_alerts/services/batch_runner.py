"""Cursor-paginated, rate-limit-aware zone-crossing batch.

One invocation walks a bounded slice of the ticker list:

    load tickers + cursor -> plan slice -> for each ticker, in order:
        resolve price -> score -> zone -> compare with stored zone
        -> notify on crossing -> persist state
    -> persist cursor

Ticker processing is strictly sequential: the price oracle enforces a low
request rate and the pacing delay between tickers is the backpressure.
"""
import asyncio
import logging
from dataclasses import dataclass

from rr_alerts.providers.core.exceptions import (InvalidRangeError,
                                                 PriceNotFound, RateLimited)
from rr_alerts.providers.tickers.ticker_source_abc import TickerSourceABC
from rr_alerts.schemas import AlertState, BatchSummary, TickerSpec
from rr_alerts.scoring import DEFAULT_SCHEME, ZoneScheme, score, zone_of
from rr_alerts.services.notifier import CooldownNotifier
from rr_alerts.services.price_resolver import PriceResolver
from rr_alerts.store.alert_state_store import AlertStateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlicePlan:
    """Which ticker indices one run covers and where the next run starts."""

    start: int
    indices: tuple[int, ...]
    next_cursor: int


def plan_slice(total: int, cursor: int, per_run: int, force_all: bool = False) -> SlicePlan:
    """Circular slice of min(per_run, total) tickers starting at cursor.

    force_all covers every ticker from index 0 and leaves the cursor where it was.
    """
    if total <= 0:
        return SlicePlan(start=0, indices=(), next_cursor=0)
    start = cursor % total
    if force_all:
        return SlicePlan(start=start, indices=tuple(range(total)), next_cursor=start)
    size = min(max(per_run, 1), total)
    indices = tuple((start + i) % total for i in range(size))
    return SlicePlan(start=start, indices=indices, next_cursor=(start + size) % total)


@dataclass
class _RunTally:
    processed: int = 0
    sent: int = 0
    skipped: int = 0
    rate_limited: bool = False
    cancelled: bool = False


class BatchRunner:
    """Runs the crossing check; holds no run state between invocations.

    Everything that survives a run (per-ticker AlertState and the cursor) lives
    in the AlertStateStore. An in-process lock keeps a scheduled run and a
    manual trigger in the same process from overlapping; separate processes
    are not coordinated and fall back to last-write-wins.
    """

    def __init__(
        self,
        ticker_source: TickerSourceABC,
        resolver: PriceResolver,
        state_store: AlertStateStore,
        notifier: CooldownNotifier,
        *,
        scheme: ZoneScheme = DEFAULT_SCHEME,
        per_run: int = 4,
        pacing_seconds: float = 0.0,
    ) -> None:
        self._tickers = ticker_source
        self._resolver = resolver
        self._store = state_store
        self._notifier = notifier
        self._scheme = scheme
        self._per_run = per_run
        self._pacing_seconds = pacing_seconds
        self._lock = asyncio.Lock()

    async def run(
        self,
        *,
        force_all: bool = False,
        stop_event: asyncio.Event | None = None,
    ) -> BatchSummary:
        """Process one slice (or every ticker when force_all) and persist the cursor.

        Raises:
            StateStoreError: the store failed; state written so far is kept.
        """
        async with self._lock:
            return await self._run(force_all=force_all, stop_event=stop_event)

    async def _run(self, *, force_all: bool, stop_event: asyncio.Event | None) -> BatchSummary:
        items = await self._tickers.list_tickers()
        total = len(items)
        if not total:
            logger.info("Batch: ticker list is empty")
            return BatchSummary()

        cursor = await self._store.get_cursor()
        plan = plan_slice(total, cursor, self._per_run, force_all)
        logger.info(
            "Batch: processing %d/%d (cursor %d -> %d)%s",
            len(plan.indices), total, plan.start, plan.next_cursor,
            " [all]" if force_all else "",
        )

        tally = _RunTally()
        for position, index in enumerate(plan.indices):
            if stop_event is not None and stop_event.is_set():
                tally.cancelled = True
                logger.info("Batch: cancelled after %d tickers", tally.processed)
                break
            if position and self._pacing_seconds:
                await asyncio.sleep(self._pacing_seconds)
            try:
                await self._process_ticker(items[index], tally)
            except RateLimited as e:
                tally.rate_limited = True
                logger.warning("Batch: %s; stopping early, same window next run", e)
                break
            tally.processed += 1

        next_cursor = self._next_cursor(plan, tally, total, force_all)
        await self._store.set_cursor(next_cursor)
        logger.info(
            "Batch done: processed=%d skipped=%d emails sent=%d rate_limited=%s next_cursor=%d",
            tally.processed, tally.skipped, tally.sent, tally.rate_limited, next_cursor,
        )
        return BatchSummary(
            processed=tally.processed,
            total=total,
            sent=tally.sent,
            skipped=tally.skipped,
            next_cursor=next_cursor,
            rate_limited=tally.rate_limited,
        )

    @staticmethod
    def _next_cursor(plan: SlicePlan, tally: _RunTally, total: int, force_all: bool) -> int:
        if force_all:
            return plan.start
        if tally.rate_limited:
            return plan.start
        if tally.cancelled:
            return (plan.start + tally.processed) % total
        return plan.next_cursor

    async def _process_ticker(self, ticker: TickerSpec, tally: _RunTally) -> None:
        """Examine one ticker. RateLimited and StateStoreError propagate."""
        try:
            observation = await self._resolver.resolve(ticker)
        except PriceNotFound as e:
            tally.skipped += 1
            logger.info("Check %s: %s", ticker.symbol, e)
            return

        try:
            s = score(observation.price, ticker.low, ticker.high)
        except InvalidRangeError as e:
            tally.skipped += 1
            logger.warning("Check %s: cannot score: %s", ticker.symbol, e)
            return
        zone = zone_of(s, self._scheme)
        logger.info(
            "Score %s: price=%.2f score=%.2f zone=%s",
            ticker.symbol, observation.price, s, self._scheme.name(zone),
        )

        prior = await self._store.get(ticker.symbol)
        if prior is None or prior.last_zone is None or prior.zone_scheme != self._scheme.scheme_id:
            # First sighting, or a zone stored under another scheme: seed, never alert.
            prior = AlertState(
                last_zone=zone,
                last_email_at=prior.last_email_at if prior else 0.0,
                zone_scheme=self._scheme.scheme_id,
            )

        if prior.last_zone != zone:
            logger.info(
                "Cross %s: %s -> %s",
                ticker.symbol, self._scheme.name(prior.last_zone), self._scheme.name(zone),
            )
            outcome = await self._notifier.maybe_notify(ticker, prior, zone, observation)
            state = outcome.state
            tally.sent += int(outcome.sent)
        else:
            state = prior.model_copy(
                update={
                    "last_observed_price": observation.price,
                    "last_observed_date": observation.as_of_date,
                }
            )
        await self._store.set(ticker.symbol, state)
