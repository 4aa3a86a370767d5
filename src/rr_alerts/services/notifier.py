"""Cooldown-gated delivery of zone-crossing alerts."""
import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from rr_alerts.providers.core.exceptions import DeliveryFailure
from rr_alerts.providers.mail.transport_abc import (EmailMessage,
                                                    MailTransportABC)
from rr_alerts.schemas import AlertState, PriceObservation, TickerSpec
from rr_alerts.scoring import DEFAULT_SCHEME, ZoneScheme, crossing, price_at_score
from rr_alerts.services.email_template import alert_subject, prepare_alert_body
from rr_alerts.services.subscribers import SubscriberDirectory
from rr_alerts.services.unsubscribe import UnsubscribeSigner

logger = logging.getLogger(__name__)

DAY_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class NotifyOutcome:
    """Whether any email went out, and the state the caller must persist."""

    sent: bool
    state: AlertState
    delivered: int = 0
    attempted: int = 0


class CooldownNotifier:
    """Decides whether a crossing is emailed and builds the resulting state.

    The cooldown is keyed to successful delivery: last_email_at only moves when
    at least one recipient accepted the message, so a crossing whose sends all
    failed stays eligible on the next run. last_zone always moves to the new
    zone. The notifier never writes to the store; the batch runner persists
    the returned state.
    """

    def __init__(
        self,
        subscribers: SubscriberDirectory,
        transport: MailTransportABC,
        signer: UnsubscribeSigner,
        *,
        scheme: ZoneScheme = DEFAULT_SCHEME,
        cooldown_days: int = 7,
        max_concurrent_sends: int = 2,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._subscribers = subscribers
        self._transport = transport
        self._signer = signer
        self._scheme = scheme
        self._cooldown_days = cooldown_days
        self._cooldown_seconds = cooldown_days * DAY_SECONDS
        self._clock = clock
        # Mail APIs throttle bursts; at most this many requests are in flight.
        self._send_slots = asyncio.Semaphore(max(max_concurrent_sends, 1))

    def on_cooldown(self, state: AlertState, now: float) -> bool:
        return now - (state.last_email_at or 0.0) < self._cooldown_seconds

    def _compose(
        self,
        ticker: TickerSpec,
        from_zone: int,
        to_zone: int,
        observation: PriceObservation,
    ) -> Callable[[str], EmailMessage]:
        move = crossing(from_zone, to_zone, self._scheme)
        boundary_price = (
            price_at_score(ticker.low, ticker.high, move.boundary_score)
            if move.boundary_score is not None
            else None
        )
        from_label = self._scheme.name(from_zone)
        to_label = self._scheme.name(to_zone)
        subject = alert_subject(ticker.symbol, move, to_label)

        def build(recipient: str) -> EmailMessage:
            body = prepare_alert_body(
                ticker.symbol,
                move,
                from_label,
                to_label,
                boundary_price,
                observation.price,
                observation.as_of_date,
                self._signer.link(recipient),
                self._cooldown_days,
            )
            return EmailMessage(to=recipient, subject=subject, html=body)

        return build

    async def _deliver(self, message: EmailMessage) -> bool:
        try:
            async with self._send_slots:
                await self._transport.send(message)
        except DeliveryFailure as e:
            logger.warning("Alert delivery failed: %s", e)
            return False
        return True

    async def maybe_notify(
        self,
        ticker: TickerSpec,
        prior: AlertState,
        to_zone: int,
        observation: PriceObservation,
    ) -> NotifyOutcome:
        """Email every active subscriber about a crossing unless on cooldown.

        Args:
            ticker: The ticker and its band (for the boundary price).
            prior: Stored state; prior.last_zone is the zone moved from.
            to_zone: Newly computed zone.
            observation: Latest price and its as-of date.
        """
        now = self._clock()
        state = prior.model_copy(
            update={
                "last_zone": to_zone,
                "last_observed_price": observation.price,
                "last_observed_date": observation.as_of_date,
                "zone_scheme": self._scheme.scheme_id,
            }
        )
        from_zone = prior.last_zone
        if from_zone is None or from_zone == to_zone:
            return NotifyOutcome(sent=False, state=state)

        if self.on_cooldown(prior, now):
            logger.info("%s: on cooldown (%d days), no email", ticker.symbol, self._cooldown_days)
            return NotifyOutcome(sent=False, state=state)
        if not self._transport.enabled:
            logger.warning("%s: mail transport not configured, skipping send", ticker.symbol)
            return NotifyOutcome(sent=False, state=state)

        recipients = await self._subscribers.list_active()
        if not recipients:
            logger.info("%s: no active subscribers, skipping send", ticker.symbol)
            return NotifyOutcome(sent=False, state=state)

        build = self._compose(ticker, from_zone, to_zone, observation)
        results = await asyncio.gather(*(self._deliver(build(r)) for r in recipients))
        delivered = sum(results)
        logger.info("%s: delivered=%d/%d", ticker.symbol, delivered, len(recipients))

        if delivered == 0:
            return NotifyOutcome(sent=False, state=state, attempted=len(recipients))
        return NotifyOutcome(
            sent=True,
            state=state.model_copy(update={"last_email_at": now}),
            delivered=delivered,
            attempted=len(recipients),
        )
