"""Signed, per-recipient unsubscribe links."""
import hashlib
import hmac
from urllib.parse import urlencode

from rr_alerts.providers.core.utils import normalize_email


class UnsubscribeSigner:
    """HMAC-SHA256 tokens binding an unsubscribe link to one address."""

    def __init__(self, secret: str, base_url: str) -> None:
        self._secret = secret.encode("utf-8")
        self._base_url = base_url.rstrip("/")

    def token(self, email: str) -> str:
        digest = hmac.new(
            self._secret, normalize_email(email).encode("utf-8"), hashlib.sha256
        )
        return digest.hexdigest()

    def verify(self, email: str, token: str | None) -> bool:
        """Constant-time comparison of token against the expected HMAC."""
        expected = self.token(email).encode("ascii")
        return hmac.compare_digest(expected, str(token or "").encode("utf-8"))

    def link(self, email: str) -> str:
        e = normalize_email(email)
        return f"{self._base_url}/unsubscribe?{urlencode({'e': e, 't': self.token(e)})}"
