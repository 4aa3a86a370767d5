"""Service layer: price resolution, crossing batch, notification, subscribers."""
from rr_alerts.services.batch_runner import BatchRunner, SlicePlan, plan_slice
from rr_alerts.services.notifier import CooldownNotifier, NotifyOutcome
from rr_alerts.services.price_resolver import PriceResolver
from rr_alerts.services.subscribers import SubscriberDirectory
from rr_alerts.services.unsubscribe import UnsubscribeSigner

__all__ = [
    "BatchRunner",
    "CooldownNotifier",
    "NotifyOutcome",
    "PriceResolver",
    "SlicePlan",
    "SubscriberDirectory",
    "UnsubscribeSigner",
    "plan_slice",
]
