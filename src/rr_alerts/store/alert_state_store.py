"""Per-ticker alert state and the batch cursor on top of a key/value store."""
import logging

from pydantic import ValidationError

from rr_alerts.providers.core.exceptions import StateStoreError
from rr_alerts.schemas import AlertState
from rr_alerts.store.kv_store_abc import KeyValueStoreABC

logger = logging.getLogger(__name__)

ALERT_KEY_PREFIX = "alert:"
CURSOR_KEY = "alert:cursor"


def alert_key(symbol: str) -> str:
    return f"{ALERT_KEY_PREFIX}{symbol}"


class AlertStateStore:
    """Typed access to AlertState records ("alert:<SYMBOL>") and the cursor.

    Unreadable records are treated as absent (the ticker is re-seeded); any
    backend failure surfaces as StateStoreError.
    """

    def __init__(self, kv: KeyValueStoreABC) -> None:
        self._kv = kv

    async def _call(self, op: str, coro):  # noqa: ANN001
        try:
            return await coro
        except StateStoreError:
            raise
        except Exception as e:
            raise StateStoreError(f"{op} failed: {e}") from e

    async def get(self, symbol: str) -> AlertState | None:
        raw = await self._call(f"get {symbol}", self._kv.get(alert_key(symbol)))
        if raw is None:
            return None
        try:
            return AlertState.model_validate(raw)
        except ValidationError:
            logger.warning("Discarding unreadable alert state for %s: %r", symbol, raw)
            return None

    async def set(self, symbol: str, state: AlertState) -> None:
        await self._call(
            f"set {symbol}", self._kv.set(alert_key(symbol), state.model_dump(mode="json"))
        )

    async def get_cursor(self) -> int:
        raw = await self._call("get cursor", self._kv.get(CURSOR_KEY))
        try:
            return max(int(raw or 0), 0)
        except (TypeError, ValueError):
            logger.warning("Resetting unreadable cursor value %r", raw)
            return 0

    async def set_cursor(self, cursor: int) -> None:
        await self._call("set cursor", self._kv.set(CURSOR_KEY, int(cursor)))
