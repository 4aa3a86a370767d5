"""DI container. Built in create_app(); routes resolve providers via deps.py."""
from dependency_injector import containers, providers

from rr_alerts.config import get_settings
from rr_alerts.db.sessions import create_db_engine
from rr_alerts.providers.mail import ResendTransport
from rr_alerts.scoring import DEFAULT_SCHEME
from rr_alerts.services.batch_runner import BatchRunner
from rr_alerts.services.factory import (create_kv_store, create_price_oracle,
                                        create_ticker_source)
from rr_alerts.services.notifier import CooldownNotifier
from rr_alerts.services.price_resolver import PriceResolver
from rr_alerts.services.subscribers import SubscriberDirectory
from rr_alerts.services.unsubscribe import UnsubscribeSigner
from rr_alerts.store import AlertStateStore


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(get_settings)

    engine = providers.Singleton(
        create_db_engine,
        settings.provided.database_url,
        echo=settings.provided.sql_echo,
    )
    kv_store = providers.Singleton(create_kv_store, settings, engine)
    alert_state_store = providers.Singleton(AlertStateStore, kv_store)
    subscribers = providers.Singleton(SubscriberDirectory, kv_store)

    ticker_source = providers.Singleton(create_ticker_source, settings)
    price_oracle = providers.Singleton(create_price_oracle, settings)
    price_resolver = providers.Singleton(PriceResolver, price_oracle)

    mail_transport = providers.Singleton(
        ResendTransport,
        api_key=settings.provided.resend_api_key,
        sender=settings.provided.alert_from,
        max_retries=settings.provided.mail_max_retries,
    )
    unsubscribe_signer = providers.Singleton(
        UnsubscribeSigner,
        secret=settings.provided.unsubscribe_secret,
        base_url=settings.provided.public_base_url,
    )
    notifier = providers.Singleton(
        CooldownNotifier,
        subscribers,
        mail_transport,
        unsubscribe_signer,
        scheme=DEFAULT_SCHEME,
        cooldown_days=settings.provided.cooldown_days,
        max_concurrent_sends=settings.provided.mail_max_concurrency,
    )
    batch_runner = providers.Singleton(
        BatchRunner,
        ticker_source,
        price_resolver,
        alert_state_store,
        notifier,
        scheme=DEFAULT_SCHEME,
        per_run=settings.provided.per_run,
        pacing_seconds=settings.provided.request_pacing_seconds,
    )

