"""
Supabase auth (GoTrue) admin API client.

Only the one privileged call the API needs: generating a magic sign-in link
for an email address. Requires the service-role key, so it must never run
client-side.
"""
from typing import Optional

import httpx

from app.core.config import settings
from app.core.exceptions import MagicLinkException
from app.core.logging import get_logger

logger = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    """GoTrue reports errors as msg / message / error_description depending on version."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Auth service returned HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return str(body)


class SupabaseAuthAdmin:
    """Wraps POST /auth/v1/admin/generate_link."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_role_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.service_role_key = service_role_key or settings.supabase_service_role_key
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }

    async def generate_magic_link(self, email: str, redirect_to: str) -> str:
        """
        Ask the auth service for a magic sign-in link.

        Returns:
            The action link to embed in the verification email.

        Raises:
            MagicLinkException: network failure, non-2xx, or no link in the response.
        """
        payload = {"type": "magiclink", "email": email, "redirect_to": redirect_to}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=settings.http_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/auth/v1/admin/generate_link",
                    json=payload,
                    headers=self._headers(),
                )
        except httpx.HTTPError as exc:
            logger.error("magic_link_failed", email=email, error=str(exc))
            raise MagicLinkException(str(exc) or "Failed to generate link") from exc

        if response.is_error:
            message = _error_message(response)
            logger.error(
                "magic_link_failed",
                email=email,
                status_code=response.status_code,
                error=message,
            )
            raise MagicLinkException(message)

        body = response.json()
        # Newer GoTrue nests link fields under "properties"
        link = body.get("action_link") or (body.get("properties") or {}).get("action_link")
        if not link:
            raise MagicLinkException("Auth service response did not include an action link")
        return link
