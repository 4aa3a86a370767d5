"""Abstract base class for outbound mail transports."""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    """One message addressed to exactly one recipient."""

    to: str
    subject: str
    html: str


class MailTransportABC(ABC):
    """Sends one message to one recipient per call."""

    @property
    def enabled(self) -> bool:
        """False when credentials are missing; callers then skip sending."""
        return True

    @abstractmethod
    async def send(self, message: EmailMessage) -> str | None:
        """Send a message.

        Returns:
            The transport's message id, if it reports one.

        Raises:
            DeliveryFailure: The message was not accepted for this recipient.
        """

    async def close(self) -> None:
        """Clean up resources. Override in subclasses if cleanup is needed."""
