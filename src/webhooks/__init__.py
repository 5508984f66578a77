"""Chat webhook delivery."""

from src.webhooks.sender import WebhookSender

__all__ = ["WebhookSender"]
