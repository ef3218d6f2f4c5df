"""
Adapter: Transactional email.

MailgunEmailSender posts to the Mailgun messages API. When Mailgun is not
configured, or a send fails, mail is handed to LoggingEmailSender which
only records that a message would have been sent.
"""

import logging
import uuid
from typing import Optional

import httpx

from hoardrun.domain.identity.ports import EmailSender

logger = logging.getLogger(__name__)


class LoggingEmailSender(EmailSender):
    """Development sender: keeps messages in memory and logs the envelope."""

    def __init__(self) -> None:
        self.outbox: list[dict] = []

    def send(self, to: str, subject: str, html: str, text: str = "") -> str:
        message_id = f"dev-{uuid.uuid4()}"
        self.outbox.append(
            {"id": message_id, "to": to, "subject": subject, "html": html, "text": text}
        )
        logger.info("Development email queued: id=%s subject=%r", message_id, subject)
        return message_id


class MailgunEmailSender(EmailSender):
    """Sends email through Mailgun, falling back to a development sender.

    Args:
        api_key: Mailgun private API key.
        domain: Sending domain.
        sender: From header.
        base_url: API base, e.g. https://api.mailgun.net/v3.
        client: Optional httpx client (injected in tests).
        fallback: Sender used when Mailgun is unconfigured or failing.
    """

    def __init__(
        self,
        api_key: str,
        domain: str,
        sender: str,
        base_url: str = "https://api.mailgun.net/v3",
        client: Optional[httpx.Client] = None,
        fallback: Optional[EmailSender] = None,
    ) -> None:
        self._api_key = api_key
        self._domain = domain
        self._sender = sender
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)
        self._fallback = fallback or LoggingEmailSender()

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._domain)

    def send(self, to: str, subject: str, html: str, text: str = "") -> str:
        if not self.configured:
            logger.warning("Mailgun not configured, using development email sender")
            return self._fallback.send(to, subject, html, text)

        data = {"from": self._sender, "to": to, "subject": subject, "html": html}
        if text:
            data["text"] = text
        try:
            response = self._client.post(
                f"{self._base_url}/{self._domain}/messages",
                auth=("api", self._api_key),
                data=data,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Mailgun send failed: %s", exc)
            return self._fallback.send(to, subject, html, text)

        message_id = response.json().get("id", "")
        logger.info("Email sent via Mailgun: id=%s", message_id)
        return message_id
