"""Mailgun delivery of TODO emails."""

import logging
import time
from email.utils import formataddr
from typing import Callable, Optional

import requests

from .config import MailgunConfig
from .exceptions import DeliveryError
from .models import OutboundMessage

logger = logging.getLogger(__name__)


class MailgunSender:
    """Sends plain-text messages through the Mailgun HTTP API."""

    def __init__(self, config: MailgunConfig, timeout: float = 10.0):
        """
        Initialize the sender.

        Args:
            config: Mailgun configuration.
            timeout: Per-attempt request timeout in seconds.
        """
        self.config = config
        self.timeout = timeout

    @property
    def messages_url(self) -> str:
        return f"{self.config.api_base.rstrip('/')}/{self.config.domain}/messages"

    @property
    def sender(self) -> str:
        if self.config.person:
            return formataddr((self.config.person, self.config.email))
        return self.config.email

    def send(self, subject: str, body: str, recipient: str) -> str:
        """
        Send one email, single attempt.

        Args:
            subject: Email subject line.
            body: Plain-text body.
            recipient: Recipient email address.

        Returns:
            The Mailgun message id (may be empty).

        Raises:
            DeliveryError: If the request fails, times out or is rejected.
        """
        data = {
            "from": self.sender,
            "to": recipient,
            "subject": subject,
            "text": body,
        }
        try:
            response = requests.post(
                self.messages_url,
                auth=("api", self.config.api_key),
                data=data,
                timeout=self.timeout,
            )
            response.raise_for_status()
            message_id = response.json().get("id", "")
        except (requests.exceptions.RequestException, ValueError, AttributeError) as e:
            logger.error(f"failed to send a TODO to {self.config.person or recipient}: {e}")
            raise DeliveryError(f"Mailgun send failed: {e}") from e

        logger.info(f"Email sent successfully to {recipient}")
        logger.debug(f"Subject: {subject}, id: {message_id}")
        return message_id


def deliver_with_retry(
    sender: MailgunSender,
    message: OutboundMessage,
    backoff_seconds: float = 3.0,
    max_attempts: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Send a message, retrying after a fixed backoff until it goes through.

    Without ``max_attempts`` this never gives up: a manually started run
    keeps trying until the network or the provider recovers.

    Args:
        sender: Mailgun sender.
        message: The composed message.
        backoff_seconds: Fixed delay between attempts.
        max_attempts: Optional cap on the number of attempts.
        sleep: Sleep function, replaceable in tests.

    Returns:
        The number of attempts made.

    Raises:
        DeliveryError: If ``max_attempts`` is set and every attempt failed.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            sender.send(message.subject, message.body, message.recipient)
            return attempt
        except DeliveryError:
            if max_attempts is not None and attempt >= max_attempts:
                logger.error(f"giving up after {attempt} attempt(s)")
                raise
            logger.warning(f"failed to send email, retry in {backoff_seconds:g} seconds...")
            sleep(backoff_seconds)
