"""FastAPI dependency injection: app.state.container holds the singletons.

create_app() builds (or receives) the Container and attaches it to app.state;
these getters resolve container providers for Depends().
"""
from typing import Annotated

from fastapi import Depends, Request

from rr_alerts.config import Settings
from rr_alerts.container import Container
from rr_alerts.providers.mail import MailTransportABC
from rr_alerts.providers.tickers import TickerSourceABC
from rr_alerts.services.batch_runner import BatchRunner
from rr_alerts.services.price_resolver import PriceResolver
from rr_alerts.services.subscribers import SubscriberDirectory
from rr_alerts.services.unsubscribe import UnsubscribeSigner
from rr_alerts.store import AlertStateStore


def _container(request: Request) -> Container:
    return request.app.state.container


def get_settings_dep(request: Request) -> Settings:
    return _container(request).settings()


def get_batch_runner(request: Request) -> BatchRunner:
    return _container(request).batch_runner()


def get_ticker_source(request: Request) -> TickerSourceABC:
    return _container(request).ticker_source()


def get_alert_state_store(request: Request) -> AlertStateStore:
    return _container(request).alert_state_store()


def get_price_resolver(request: Request) -> PriceResolver:
    return _container(request).price_resolver()


def get_subscribers(request: Request) -> SubscriberDirectory:
    return _container(request).subscribers()


def get_unsubscribe_signer(request: Request) -> UnsubscribeSigner:
    return _container(request).unsubscribe_signer()


def get_mail_transport(request: Request) -> MailTransportABC:
    return _container(request).mail_transport()


# Type aliases for route injection
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
BatchRunnerDep = Annotated[BatchRunner, Depends(get_batch_runner)]
TickerSourceDep = Annotated[TickerSourceABC, Depends(get_ticker_source)]
AlertStateStoreDep = Annotated[AlertStateStore, Depends(get_alert_state_store)]
PriceResolverDep = Annotated[PriceResolver, Depends(get_price_resolver)]
SubscribersDep = Annotated[SubscriberDirectory, Depends(get_subscribers)]
UnsubscribeSignerDep = Annotated[UnsubscribeSigner, Depends(get_unsubscribe_signer)]
MailTransportDep = Annotated[MailTransportABC, Depends(get_mail_transport)]
