"""Shared fixtures: in-memory store, scripted price oracle and a recording mail transport."""
from collections.abc import Iterable

import pytest

from rr_alerts.providers.core.exceptions import (DeliveryFailure,
                                                 PriceNotFound)
from rr_alerts.providers.mail.transport_abc import (EmailMessage,
                                                    MailTransportABC)
from rr_alerts.providers.prices.price_oracle_abc import PriceOracleABC
from rr_alerts.providers.tickers import StaticTickerSource
from rr_alerts.schemas import PriceObservation
from rr_alerts.scoring import DEFAULT_SCHEME
from rr_alerts.services.batch_runner import BatchRunner
from rr_alerts.services.notifier import CooldownNotifier
from rr_alerts.services.price_resolver import PriceResolver
from rr_alerts.services.subscribers import SubscriberDirectory
from rr_alerts.services.unsubscribe import UnsubscribeSigner
from rr_alerts.store import AlertStateStore, InMemoryStore

NOW = 1_800_000_000.0


class FakeOracle(PriceOracleABC):
    """Returns scripted prices; a scripted exception instance is raised instead."""

    name = "fake"

    def __init__(self, prices: dict[str, float | Exception] | None = None) -> None:
        self.prices: dict[str, float | Exception] = dict(prices or {})
        self.calls: list[str] = []
        self.closed = False

    async def resolve(self, symbol: str) -> PriceObservation:
        self.calls.append(symbol)
        value = self.prices.get(symbol)
        if isinstance(value, Exception):
            raise value
        if value is None:
            raise PriceNotFound(symbol)
        return PriceObservation(
            symbol=symbol, price=value, as_of_date="2026-10-16", source=self.name
        )

    async def close(self) -> None:
        self.closed = True


class RecordingTransport(MailTransportABC):
    """Records every message; recipients listed in fail_for are rejected."""

    def __init__(self, fail_for: Iterable[str] = (), enabled: bool = True) -> None:
        self.sent: list[EmailMessage] = []
        self.fail_for = set(fail_for)
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def send(self, message: EmailMessage) -> str | None:
        if message.to in self.fail_for:
            raise DeliveryFailure(message.to, "rejected")
        self.sent.append(message)
        return f"msg-{len(self.sent)}"


@pytest.fixture
def kv() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def state_store(kv: InMemoryStore) -> AlertStateStore:
    return AlertStateStore(kv)


@pytest.fixture
def subscribers(kv: InMemoryStore) -> SubscriberDirectory:
    return SubscriberDirectory(kv)


@pytest.fixture
def signer() -> UnsubscribeSigner:
    return UnsubscribeSigner("test-secret", "https://alerts.example.com/")


@pytest.fixture
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def clock():
    """Mutable clock: set clock.now to move time."""

    class _Clock:
        now = NOW

        def __call__(self) -> float:
            return self.now

    return _Clock()


@pytest.fixture
def notifier(subscribers, transport, signer, clock) -> CooldownNotifier:
    return CooldownNotifier(
        subscribers, transport, signer, scheme=DEFAULT_SCHEME, cooldown_days=7, clock=clock
    )


@pytest.fixture
def make_runner(oracle, state_store, notifier):
    """Build a BatchRunner over a static ticker list."""

    def _make(tickers, *, per_run: int = 4) -> BatchRunner:
        return BatchRunner(
            StaticTickerSource(tickers),
            PriceResolver(oracle),
            state_store,
            notifier,
            scheme=DEFAULT_SCHEME,
            per_run=per_run,
        )

    return _make


