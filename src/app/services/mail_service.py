"""Mail Service Interface

Defines the contract for delivering e-mail notifications.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html_body: str
    to_name: Optional[str] = None
    reply_to: Optional[str] = None


class TransientMailError(Exception):
    """Delivery failed for a reason that may succeed on retry (timeouts, 5xx, 429)"""


class MailService(ABC):
    """
    Abstract mail service for sending e-mails

    Implementations can deliver via:
    - An HTTP e-mail API
    - Logging only (development)
    - A retrying decorator around another service
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> bool:
        """
        Deliver an e-mail

        Args:
            message: EmailMessage to deliver

        Returns:
            True if delivered, False on permanent failure

        Raises:
            TransientMailError: delivery may succeed if retried
        """
        pass
