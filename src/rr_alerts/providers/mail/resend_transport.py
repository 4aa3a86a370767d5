"""Resend (https://resend.com) mail transport over its REST API."""
import asyncio
import logging

import httpx

from rr_alerts.providers.core.exceptions import DeliveryFailure
from rr_alerts.providers.mail.transport_abc import (EmailMessage,
                                                    MailTransportABC)

logger = logging.getLogger(__name__)

MAX_RETRY_AFTER_SECONDS = 30.0


def _retry_after(response: httpx.Response, default: float) -> float:
    """Seconds to wait before retrying a throttled request."""
    try:
        seconds = float(response.headers.get("Retry-After", default))
    except ValueError:
        seconds = default
    return min(max(seconds, 0.0), MAX_RETRY_AFTER_SECONDS)


class ResendTransport(MailTransportABC):
    """Sends HTML email through POST /emails, one recipient per request.

    HTTP 429 responses are retried up to max_retries times, waiting for the
    server's Retry-After (or retry_backoff seconds when it sends none).
    """

    BASE_URL = "https://api.resend.com"

    def __init__(
        self,
        api_key: str | None,
        sender: str | None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
        max_retries: int = 2,
        retry_backoff: float = 1.0,
    ) -> None:
        """Initialize the Resend transport.

        Args:
            api_key: Resend API key; without it the transport is disabled.
            sender: From address (e.g. "Alerts <alerts@example.com>").
            client: Optional preconfigured client (tests pass a MockTransport client).
            timeout: Request timeout in seconds.
            max_retries: Extra attempts after a 429 before giving up.
            retry_backoff: Wait in seconds when a 429 carries no Retry-After.
        """
        self._api_key = api_key
        self._sender = sender
        self._max_retries = max(max_retries, 0)
        self._retry_backoff = retry_backoff
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = client or httpx.AsyncClient(
            base_url=self.BASE_URL, headers=headers, timeout=timeout
        )

    @property
    def enabled(self) -> bool:
        return bool(self._api_key and self._sender)

    async def _post(self, message: EmailMessage, payload: dict) -> httpx.Response:
        attempt = 0
        while True:
            response = await self._client.post("/emails", json=payload)
            if response.status_code != 429 or attempt >= self._max_retries:
                return response
            attempt += 1
            wait = _retry_after(response, self._retry_backoff)
            logger.info(
                "Resend throttled to=%s, retry %d/%d in %.1fs",
                message.to, attempt, self._max_retries, wait,
            )
            await asyncio.sleep(wait)

    async def send(self, message: EmailMessage) -> str | None:
        if not self.enabled:
            raise DeliveryFailure(message.to, "mail transport is not configured")
        payload = {
            "from": self._sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        try:
            response = await self._post(message, payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeliveryFailure(
                message.to, f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise DeliveryFailure(message.to, str(e) or type(e).__name__) from e
        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None
        logger.info("Resend accepted id=%s to=%s", message_id or "n/a", message.to)
        return message_id

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
