"""Data Transfer Objects for Alpha Vantage API responses.

Alpha Vantage answers every request with HTTP 200 and signals rate limits
and errors through top-level keys ("Note", "Information", "Error Message").
The DTOs validate the raw JSON and expose the latest price, so untyped
dicts never leave the provider.
"""
from pydantic import BaseModel, ConfigDict, Field

from rr_alerts.providers.core.utils import positive_finite


class AlphaVantageQueryParams(BaseModel):
    """Params for /query. Merge with 'apikey' at call site."""

    function: str
    symbol: str
    outputsize: str | None = None


class _AlphaVantageEnvelope(BaseModel):
    """Status keys shared by every Alpha Vantage response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    note: str | None = Field(default=None, alias="Note")
    information: str | None = Field(default=None, alias="Information")
    error_message: str | None = Field(default=None, alias="Error Message")

    @property
    def rate_limit_message(self) -> str | None:
        """Throttling/informational text; None when the response is not a refusal."""
        return self.note or self.information


class DailySeriesDTO(_AlphaVantageEnvelope):
    """TIME_SERIES_DAILY response."""

    series: dict[str, dict[str, str]] | None = Field(
        default=None, alias="Time Series (Daily)"
    )

    def latest_close(self) -> tuple[str, float] | None:
        """(date, close) of the most recent bar with a usable close, or None."""
        if not self.series:
            return None
        for date in sorted(self.series, reverse=True):
            close = positive_finite(self.series[date].get("4. close"))
            if close is not None:
                return date, close
        return None


class GlobalQuoteDTO(_AlphaVantageEnvelope):
    """GLOBAL_QUOTE response."""

    quote: dict[str, str] | None = Field(default=None, alias="Global Quote")

    def latest_price(self) -> tuple[str | None, float] | None:
        """(latest trading day or None, price), or None when there is no price."""
        if not self.quote:
            return None
        price = positive_finite(self.quote.get("05. price"))
        if price is None:
            return None
        return self.quote.get("07. latest trading day") or None, price
