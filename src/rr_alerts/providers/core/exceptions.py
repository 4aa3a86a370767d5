"""Exception taxonomy shared by the price, mail and storage layers."""


class InvalidRangeError(ValueError):
    """A band is malformed (low <= 0, high <= low) or a price is not finite."""


class PriceNotFound(LookupError):
    """The price oracle has no usable price for a symbol; the ticker is skipped."""

    def __init__(self, symbol: str, reason: str = "no price data") -> None:
        super().__init__(f"No price for '{symbol}': {reason}")
        self.symbol = symbol
        self.reason = reason


class RateLimited(Exception):
    """The price oracle refused the request because of its rate limit.

    Distinct from PriceNotFound: the batch runner stops the current slice and
    keeps its cursor so the same window is retried on the next run.
    """

    def __init__(self, symbol: str, detail: str = "") -> None:
        message = f"Rate limited while resolving '{symbol}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.symbol = symbol
        self.detail = detail


class DeliveryFailure(Exception):
    """One message could not be delivered to one recipient."""

    def __init__(self, recipient: str, reason: str) -> None:
        super().__init__(f"Delivery to {recipient} failed: {reason}")
        self.recipient = recipient
        self.reason = reason


class StateStoreError(RuntimeError):
    """The key/value store could not be read or written. Fatal to a batch run."""


class ConfigurationError(RuntimeError):
    """Required credentials or connection info are missing."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing configuration: {', '.join(missing)}")
        self.missing = missing


class TickerSourceError(ValueError):
    """The ticker list could be fetched but not interpreted (e.g. missing columns)."""
