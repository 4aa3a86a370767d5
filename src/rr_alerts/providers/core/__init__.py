"""Core provider abstractions: exception taxonomy, error mapping, helpers."""
from rr_alerts.providers.core.error_mapper import ErrorMapper
from rr_alerts.providers.core.exceptions import (ConfigurationError,
                                                 DeliveryFailure,
                                                 InvalidRangeError,
                                                 PriceNotFound, RateLimited,
                                                 StateStoreError,
                                                 TickerSourceError)
from rr_alerts.providers.core.utils import round2

__all__ = [
    "ConfigurationError",
    "DeliveryFailure",
    "ErrorMapper",
    "InvalidRangeError",
    "PriceNotFound",
    "RateLimited",
    "StateStoreError",
    "TickerSourceError",
    "round2",
]
