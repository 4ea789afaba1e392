"""
Resend transactional email client.

Thin async wrapper over the Resend REST API (POST /emails). One request per
email, no retries: a failed send surfaces to the caller as
EmailDeliveryException carrying the provider's message.
"""
from typing import List, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import EmailDeliveryException
from app.core.logging import get_logger

logger = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a Resend error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Email provider returned HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or str(body)
    return str(body)


class ResendClient:
    """Sends HTML emails through Resend."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.base_url = (base_url or settings.resend_api_url).rstrip("/")
        self._transport = transport

    async def send(
        self,
        *,
        sender: str,
        to: List[str],
        subject: str,
        html: str,
    ) -> Optional[str]:
        """
        Send one email.

        Returns:
            The provider's message id, if it returned one.

        Raises:
            EmailDeliveryException: missing API key, network failure or non-2xx.
        """
        if not self.api_key:
            raise EmailDeliveryException("RESEND_API_KEY is not configured")

        payload = {"from": sender, "to": to, "subject": subject, "html": html}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=settings.http_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/emails",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as exc:
            logger.error("email_send_failed", to=to, subject=subject, error=str(exc))
            raise EmailDeliveryException(str(exc) or "Failed to send email") from exc

        if response.is_error:
            message = _error_message(response)
            logger.error(
                "email_send_failed",
                to=to,
                subject=subject,
                status_code=response.status_code,
                error=message,
            )
            raise EmailDeliveryException(message)

        try:
            message_id = response.json().get("id")
        except (ValueError, AttributeError):
            # Accepted, but the body carries no usable id
            message_id = None
        logger.info("email_sent", to=to, subject=subject, message_id=message_id)
        return message_id
