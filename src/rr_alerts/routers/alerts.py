"""Operational alert endpoints."""
import logging

from fastapi import APIRouter

from rr_alerts.deps import MailTransportDep, SettingsDep
from rr_alerts.providers.core import (ConfigurationError, DeliveryFailure,
                                      ErrorMapper)
from rr_alerts.providers.mail import EmailMessage
from rr_alerts.services.email_template import prepare_test_body

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/alerts", tags=["alerts"])

_errors = ErrorMapper(resource_name="Recipient", api_name="Mail API")


@router.post("/test-email")
async def send_test_email(
    transport: MailTransportDep,
    settings: SettingsDep,
) -> dict[str, object]:
    """Send a test message to ALERT_TO to check the mail configuration."""
    if not transport.enabled or not settings.alert_to:
        missing = [
            name
            for name, value in (
                ("RESEND_API_KEY", settings.resend_api_key),
                ("ALERT_FROM", settings.alert_from),
                ("ALERT_TO", settings.alert_to),
            )
            if not value
        ]
        _errors.raise_http(ConfigurationError(missing or ["mail transport"]))
    message = EmailMessage(
        to=settings.alert_to,
        subject="R/R alerts: test email",
        html=prepare_test_body(),
    )
    try:
        message_id = await transport.send(message)
    except DeliveryFailure as e:
        logger.warning("Test email failed: %s", e)
        _errors.raise_http(e)
    return {"ok": True, "id": message_id}
