"""Outbound mail transports."""
from rr_alerts.providers.mail.resend_transport import ResendTransport
from rr_alerts.providers.mail.transport_abc import (EmailMessage,
                                                    MailTransportABC)

__all__ = ["EmailMessage", "MailTransportABC", "ResendTransport"]
