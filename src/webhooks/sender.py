"""Chat webhook delivery."""

from typing import Any, Optional

import httpx

from src.core.logging import get_logger

logger = get_logger(__name__)


class WebhookSender:
    """Posts notification messages to a Discord-compatible webhook.

    Each call to :meth:`send` issues exactly one POST. Failures are logged
    and re-raised so the caller can record the failed invocation.
    """

    def __init__(
        self,
        webhook_url: Optional[str],
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize webhook sender.

        Args:
            webhook_url: Webhook endpoint; empty or None disables delivery
            timeout: Request timeout in seconds (httpx default when None)
            client: Pre-configured HTTP client (optional)
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def enabled(self) -> bool:
        """Check if a webhook URL is configured."""
        return bool(self.webhook_url)

    async def __aenter__(self) -> "WebhookSender":
        """Enter async context manager."""
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = httpx.AsyncClient(**kwargs)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close HTTP client if this sender created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def send(self, content: str) -> Optional[httpx.Response]:
        """Deliver a message to the webhook.

        Args:
            content: Fully rendered message text

        Returns:
            Webhook response, or None when no webhook is configured

        Raises:
            httpx.HTTPStatusError: Webhook answered with a non-2xx status
            httpx.RequestError: Request could not be completed
        """
        if not self.enabled:
            logger.info("webhook_not_configured")
            return None

        client = await self._ensure_client()

        try:
            response = await client.post(self.webhook_url, json={"content": content})  # type: ignore[arg-type]
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "webhook_post_failed",
                status_code=e.response.status_code,
                response_body=e.response.text[:500],
                error=str(e),
            )
            raise
        except httpx.RequestError as e:
            logger.error(
                "webhook_post_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        logger.info("webhook_post_success", status_code=response.status_code)
        return response
