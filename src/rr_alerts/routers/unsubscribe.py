"""Signed unsubscribe links from alert emails."""
from html import escape

from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from rr_alerts.deps import SubscribersDep, UnsubscribeSignerDep
from rr_alerts.providers.core.utils import normalize_email

router = APIRouter(tags=["subscribers"])

_PAGE = """<!doctype html>
<meta name="viewport" content="width=device-width,initial-scale=1" />
<div style="font-family:system-ui,Segoe UI,Arial,sans-serif;max-width:560px;margin:40px auto;padding:24px;border:1px solid #eee;border-radius:12px">
  <h2 style="margin-top:0">You're unsubscribed</h2>
  <p>We'll stop sending R/R alerts to <strong>{email}</strong>.</p>
  <p style="color:#666;font-size:14px">If this was a mistake, you can resubscribe any time by signing up again.</p>
  <p><a href="/" style="text-decoration:none">&larr; Back</a></p>
</div>
"""


@router.get("/unsubscribe", response_class=HTMLResponse)
async def unsubscribe(
    subscribers: SubscribersDep,
    signer: UnsubscribeSignerDep,
    e: str = Query(default="", description="Subscriber email"),
    t: str = Query(default="", description="HMAC token from the alert email"),
) -> HTMLResponse:
    """Verify the token for the address and record the opt-out."""
    email = normalize_email(e)
    if not email or not signer.verify(email, t):
        return HTMLResponse("Invalid or expired unsubscribe link.", status_code=400)
    try:
        await subscribers.unsubscribe(email)
    except ValueError:
        return HTMLResponse("Invalid email.", status_code=400)
    return HTMLResponse(_PAGE.format(email=escape(email)))
