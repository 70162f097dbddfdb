"""Mail Service Implementations

Provides concrete implementations for delivering e-mail.
"""

import asyncio
import logging
from typing import Optional
import httpx
from src.app.services.mail_service import EmailMessage, MailService, TransientMailError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {408, 429}


class LoggingMailService(MailService):
    """
    Mail service that logs messages instead of delivering them

    Useful for development and testing, or when no mail API is configured.
    """

    async def send(self, message: EmailMessage) -> bool:
        """
        Log the e-mail

        Returns:
            Always True (logging never fails)
        """
        logger.info(
            f"[EMAIL] To: {message.to}, Subject: {message.subject}, "
            f"Body length: {len(message.html_body)}"
        )
        return True


class HttpMailService(MailService):
    """
    Mail service that posts messages to an HTTP e-mail API

    Sends a JSON payload with a bearer API key. Timeouts, connection errors,
    408, 429 and 5xx responses raise TransientMailError; any other error
    status is a permanent failure.
    """

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str] = None,
        from_address: str = "invoices@localhost",
        timeout: float = 10.0,
    ):
        """
        Initialize HTTP mail service

        Args:
            api_url: URL to POST messages to
            api_key: Bearer token for the mail API
            from_address: Sender address
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.from_address = from_address
        self.timeout = timeout

    def build_payload(self, message: EmailMessage) -> dict:
        payload = {
            "from": self.from_address,
            "to": [f"{message.to_name} <{message.to}>" if message.to_name else message.to],
            "subject": message.subject,
            "html": message.html_body,
        }
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        return payload

    async def send(self, message: EmailMessage) -> bool:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json=self.build_payload(message),
                    headers=headers,
                )
        except (httpx.TimeoutException, httpx.TransportError) as e:
            raise TransientMailError(f"Mail API unreachable: {e}") from e

        if response.status_code >= 500 or response.status_code in RETRYABLE_STATUS_CODES:
            raise TransientMailError(f"Mail API returned {response.status_code}")

        if response.is_error:
            logger.error(
                f"Mail API rejected message to {message.to}: "
                f"{response.status_code} {response.text[:200]}"
            )
            return False

        logger.info(f"E-mail sent to {message.to} via {self.api_url}")
        return True


class RetryingMailService(MailService):
    """
    Mail service that retries another service on transient failures

    Delay grows by backoff_factor after each attempt, capped at max_delay.
    The last TransientMailError is re-raised once retries are exhausted.
    """

    def __init__(
        self,
        service: MailService,
        max_retries: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 10.0,
        backoff_factor: float = 2.0,
    ):
        self.service = service
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor

    async def send(self, message: EmailMessage) -> bool:
        delay = self.initial_delay
        attempt = 0

        while True:
            try:
                return await self.service.send(message)
            except TransientMailError as e:
                if attempt >= self.max_retries:
                    logger.error(
                        f"Giving up on e-mail to {message.to} after {attempt + 1} attempts: {e}"
                    )
                    raise
                attempt += 1
                logger.warning(
                    f"Transient mail failure for {message.to} "
                    f"(attempt {attempt}/{self.max_retries}), retrying in {delay}s: {e}"
                )
                await asyncio.sleep(delay)
                delay = min(delay * self.backoff_factor, self.max_delay)


def create_mail_service(config) -> MailService:
    """
    Factory function to create the configured mail service

    Args:
        config: ApplicationConfig or any object with MAIL_* attributes.
                Without MAIL_API_URL messages are only logged.

    Returns:
        Configured MailService
    """
    api_url = getattr(config, "MAIL_API_URL", None)
    if not api_url:
        return LoggingMailService()

    service = HttpMailService(
        api_url=api_url,
        api_key=getattr(config, "MAIL_API_KEY", None),
        from_address=getattr(config, "MAIL_FROM_ADDRESS", "invoices@localhost"),
        timeout=float(getattr(config, "MAIL_TIMEOUT_SECONDS", 10.0)),
    )
    return RetryingMailService(
        service,
        max_retries=int(getattr(config, "MAIL_MAX_RETRIES", 3)),
        initial_delay=float(getattr(config, "MAIL_INITIAL_DELAY_SECONDS", 1.0)),
        max_delay=float(getattr(config, "MAIL_MAX_DELAY_SECONDS", 10.0)),
        backoff_factor=float(getattr(config, "MAIL_BACKOFF_FACTOR", 2.0)),
    )
